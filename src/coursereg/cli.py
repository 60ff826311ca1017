"""Command line interface for coursereg."""

from __future__ import annotations

import sys
from dataclasses import replace

import click

from coursereg.config import ConfigError, Settings
from coursereg.logging import setup_logging
from coursereg.registration import (
    LearnerSession,
    RegistrationError,
    RegistrationService,
    Severity,
    sum_credit_hours,
)
from coursereg.store import OfferingExistsError, RegistrarStore, StoreError

_SEVERITY_COLORS = {
    Severity.SUCCESS: "green",
    Severity.WARNING: "yellow",
    Severity.ERROR: "red",
}


def _open(settings: Settings) -> tuple[RegistrarStore, RegistrationService]:
    try:
        store = RegistrarStore(settings.db_path, db_url=settings.db_url)
    except StoreError as e:
        raise click.ClickException(str(e)) from e
    service = RegistrationService(store, store, credit_cap=settings.credit_cap)
    return store, service


@click.group()
@click.version_option()
@click.option("--db-path", default=None, help="SQLite database file (env: COURSEREG_DB_PATH)")
@click.option("--db-url", default=None, help="SQLAlchemy database URL (env: COURSEREG_DB_URL)")
@click.option("--credit-cap", type=int, default=None, help="Credit cap (env: COURSEREG_CREDIT_CAP)")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(
    ctx: click.Context,
    db_path: str | None,
    db_url: str | None,
    credit_cap: int | None,
    verbose: bool,
) -> None:
    """Course registration with a credit-hour cap."""
    try:
        settings = Settings.from_env()
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    if db_path is not None:
        settings = replace(settings, db_path=db_path)
    if db_url is not None:
        settings = replace(settings, db_url=db_url)
    if credit_cap is not None:
        if credit_cap < 0:
            raise click.BadParameter("must be >= 0", param_hint="--credit-cap")
        settings = replace(settings, credit_cap=credit_cap)

    setup_logging(settings, console=verbose, level="DEBUG" if verbose else None)
    ctx.obj = settings


@main.command()
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", type=int, default=8000, show_default=True)
@click.pass_obj
def serve(settings: Settings, host: str, port: int) -> None:
    """Run the REST API."""
    import uvicorn  # noqa: PLC0415

    from coursereg.api import create_app  # noqa: PLC0415

    uvicorn.run(create_app(settings), host=host, port=port)


@main.command("add-course")
@click.argument("code")
@click.argument("credit_hours", type=click.IntRange(min=1))
@click.pass_obj
def add_course(settings: Settings, code: str, credit_hours: int) -> None:
    """Add a course offering to the catalog."""
    store, _ = _open(settings)
    try:
        offering = store.create_offering(code, credit_hours)
    except OfferingExistsError as e:
        raise click.ClickException(str(e)) from e
    finally:
        store.close()
    click.echo(f"Added {offering}")


@main.command()
@click.option("--learner", "learner_id", default=None, help="Mark courses this learner holds")
@click.pass_obj
def courses(settings: Settings, learner_id: str | None) -> None:
    """List course offerings."""
    store, service = _open(settings)
    try:
        offerings = service.list_offerings(learner_id)
    except StoreError as e:
        raise click.ClickException(str(e)) from e
    finally:
        store.close()

    if not offerings:
        click.echo("No courses available.")
        return
    for offering in offerings:
        marker = "*" if offering.is_registered else " "
        click.echo(f"{marker} {offering.display}")


@main.command()
@click.argument("learner_id")
@click.argument("course_codes", nargs=-1, required=True)
@click.pass_obj
def register(settings: Settings, learner_id: str, course_codes: tuple[str, ...]) -> None:
    """Sign in as LEARNER_ID and register for each course in order."""
    store, service = _open(settings)
    session = LearnerSession(service)
    failed = False
    try:
        messages = [session.sign_in(learner_id)]
        if session.signed_in:
            messages.extend(session.register(code) for code in course_codes)
    finally:
        store.close()

    for message in messages:
        click.secho(message.text, fg=_SEVERITY_COLORS[message.severity])
        failed = failed or message.severity is not Severity.SUCCESS

    last_total = next(
        (m.total_credit_hours for m in reversed(messages) if m.total_credit_hours is not None),
        None,
    )
    if last_total is not None:
        click.echo(f"Total credit hours: {last_total}/{settings.credit_cap}")
    if failed:
        sys.exit(1)


@main.command()
@click.argument("learner_id")
@click.pass_obj
def total(settings: Settings, learner_id: str) -> None:
    """Show a learner's total registered credit hours."""
    store, service = _open(settings)
    try:
        registrations = service.list_registrations(learner_id)
    except (RegistrationError, StoreError) as e:
        raise click.ClickException(str(e)) from e
    finally:
        store.close()

    if not registrations:
        click.echo("You are not registered for any courses.")
    for registration in registrations:
        click.echo(f"  {registration}")
    click.echo(f"Total credit hours: {sum_credit_hours(registrations)}/{settings.credit_cap}")
