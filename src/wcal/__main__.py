"""Allow ``python -m wcal``."""

from wcal.cli import main

main()
