"""
Consultant directory core library.

Database management, models, repositories, services, blob storage and
logging, shared by the HTTP backend and tests.

Usage:
    # Database
    from core.db import db, get_db
    from core.models import Consultant, DirectoryEntry
    from core.repositories import ConsultantRepository, DirectoryRepository

    # Service
    from core.services import ConsultantDirectoryService

    # Config
    from core.config import get_settings, Settings

    # Logging
    from core.logging import get_logger, configure_logging
"""

__version__ = "1.0.0"

# Submodules are imported directly by callers to keep config and logging
# import order explicit.
