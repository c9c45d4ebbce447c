"""Allow ``python -m ragline``."""

from ragline.cli import app

if __name__ == "__main__":
    app()
