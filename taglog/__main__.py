"""Allow ``python -m taglog``."""

from taglog.cli.main import main

main()
