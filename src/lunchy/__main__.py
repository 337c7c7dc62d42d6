"""Allow running as ``python -m lunchy``."""

from lunchy.cli.app import main

if __name__ == "__main__":
    main()
