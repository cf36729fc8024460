"""
Database access for the HTTP layer.

Re-exports the session dependency from core.db so routers and test
overrides refer to the same ``get_db`` object. Initialization happens in
main.py startup, not at import time.
"""

from core.db import db, get_db

__all__ = ["db", "get_db"]
