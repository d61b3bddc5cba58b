"""Entry point for ``python -m schemamold``."""

from .SchemaMold import app

if __name__ == "__main__":
    app()
