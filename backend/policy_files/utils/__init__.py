# backend/policy_files/utils/__init__.py
from .logging import api_logger, storage_logger, db_logger, service_logger

__all__ = ["api_logger", "storage_logger", "db_logger", "service_logger"]
