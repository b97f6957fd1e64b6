"""Allow ``python -m dumpview``."""

from dumpview.tui.app import main

if __name__ == "__main__":
    main()
