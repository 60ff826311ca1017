"""Allow ``python -m coursereg``."""

from coursereg.cli import main

if __name__ == "__main__":
    main()
