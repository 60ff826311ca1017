"""Unit tests for RegistrarStore catalog operations."""

import pytest

from coursereg.store import (
    OfferingExistsError,
    OfferingNotFoundError,
    RegistrarStore,
)


@pytest.mark.unit
class TestCreateOffering:
    """Tests for create_offering."""

    def test_create_offering(self, store: RegistrarStore) -> None:
        """Created offering is returned with its fields."""
        offering = store.create_offering("MATH101", 3)

        assert offering.code == "MATH101"
        assert offering.credit_hours == 3

    def test_duplicate_code_raises(self, store: RegistrarStore) -> None:
        """OfferingExistsError on duplicate code."""
        store.create_offering("MATH101", 3)

        with pytest.raises(OfferingExistsError) as exc_info:
            store.create_offering("MATH101", 4)

        assert "MATH101" in str(exc_info.value)

    @pytest.mark.parametrize("credit_hours", [0, -3])
    def test_non_positive_credit_hours_rejected(
        self, store: RegistrarStore, credit_hours: int
    ) -> None:
        """ValueError for zero or negative credit hours."""
        with pytest.raises(ValueError):
            store.create_offering("MATH101", credit_hours)

        assert store.list_offerings() == []

    def test_empty_code_rejected(self, store: RegistrarStore) -> None:
        with pytest.raises(ValueError):
            store.create_offering("", 3)


@pytest.mark.unit
class TestListOfferings:
    """Tests for list_offerings."""

    def test_list_offerings_empty(self, store: RegistrarStore) -> None:
        assert store.list_offerings() == []

    def test_list_offerings_ordered_by_code(self, store: RegistrarStore) -> None:
        """Offerings come back ordered by code ascending."""
        store.create_offering("MATH101", 3)
        store.create_offering("ENGL101", 3)
        store.create_offering("HIST101", 4)

        codes = [o.code for o in store.list_offerings()]

        assert codes == ["ENGL101", "HIST101", "MATH101"]


@pytest.mark.unit
class TestGetOffering:
    """Tests for get_offering."""

    def test_get_offering_exists(self, seeded_store: RegistrarStore) -> None:
        offering = seeded_store.get_offering("HIST101")

        assert offering.credit_hours == 4

    def test_get_offering_not_found_raises(self, seeded_store: RegistrarStore) -> None:
        """OfferingNotFoundError for an unknown code."""
        with pytest.raises(OfferingNotFoundError) as exc_info:
            seeded_store.get_offering("NOPE404")

        assert "NOPE404" in str(exc_info.value)
