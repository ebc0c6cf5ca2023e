#!/usr/bin/env python3
"""
Create every store table using DATABASE_URL from config.
From backend/: python scripts/init_db.py
"""
from __future__ import annotations

import os
import sys

_script_dir = os.path.dirname(os.path.abspath(__file__))
_backend = os.path.dirname(_script_dir)
if _backend not in sys.path:
    sys.path.insert(0, _backend)

from estore.core.config import get_settings
from estore.db.session import Base, get_engine, init_schema


def main() -> int:
    settings = get_settings()
    init_schema(get_engine())
    for name in Base.metadata.tables:
        print(f"OK: {name}")
    print(f"Schema ready on {settings.database_url}")
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except Exception as e:
        print(f"FAIL: {e}", file=sys.stderr)
        sys.exit(1)
