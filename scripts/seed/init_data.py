"""
Create tables and seed the hub store plus starter categories (async, idempotent)
Run:  python scripts/seed/init_data.py
"""

import os, sys
import asyncio
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..")))

from gelato_ops.core.logging_config import setup_logging
from gelato_ops.db.init_db import init_db


if __name__ == "__main__":
    setup_logging()
    asyncio.run(init_db())
