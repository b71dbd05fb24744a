"""
Ethereum Signup Core
====================

Core utilities and shared functionality for Ethereum signup modules.
"""

from .config import Config, get_config_value, split_origins
from .database import Database
from .logging_service import LoggingService, db_log

__all__ = ['Config', 'get_config_value', 'split_origins', 'Database', 'LoggingService', 'db_log']
