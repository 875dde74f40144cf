"""Allow ``python -m skillz``."""

from skillz.cli import app

app(prog_name="skillz")
