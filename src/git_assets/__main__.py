"""Allow ``python -m git_assets``."""

from git_assets.cli import app

app(prog_name="git-assets")
