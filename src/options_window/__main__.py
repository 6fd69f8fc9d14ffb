"""Allow running as ``python -m options_window``."""

from options_window.cli import main

if __name__ == "__main__":
    main()
