"""Allow ``python -m git_author_stats``."""

from .cli import app

if __name__ == "__main__":
    app()
