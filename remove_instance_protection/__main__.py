"""Module entry-point for ``python -m remove_instance_protection``."""
from __future__ import annotations

from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())
