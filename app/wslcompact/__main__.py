"""Allow running wslcompact as ``python -m wslcompact``."""

from wslcompact.cli.main import app

app()
