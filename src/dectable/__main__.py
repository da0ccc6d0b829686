"""Allow ``python -m dectable``."""

from dectable.cli import main

if __name__ == "__main__":
    main()
