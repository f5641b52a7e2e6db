"""Allow ``python -m userprops``."""

from userprops.cli.main import app

app()
