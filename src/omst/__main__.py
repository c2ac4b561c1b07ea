"""Allow running as ``python -m omst``."""

from .cli import main

main()
