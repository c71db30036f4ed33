"""Allow ``python -m mountmap``."""

from mountmap.cli import main

main()
