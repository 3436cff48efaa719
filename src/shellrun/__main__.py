"""Allow ``python -m shellrun``."""

from .cli import main

main()
