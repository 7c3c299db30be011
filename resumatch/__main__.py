"""Allow running the CLI with ``python -m resumatch``."""

from resumatch.cli import app

app()
