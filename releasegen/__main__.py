"""Allow ``python -m releasegen``."""

from releasegen.main import cli

cli()
