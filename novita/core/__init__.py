"""
Novita Core
===========

Core utilities and shared functionality for Novita modules.
"""

from .config import Config, get_config_value
from .database import Database
from .logging_service import LoggingService, logger
from .backend import (
    BackendClient, BackendError, BackendUnavailable,
    create_backend_client, is_backend_configured
)

__all__ = [
    'Config', 'get_config_value', 'Database', 'LoggingService', 'logger',
    'BackendClient', 'BackendError', 'BackendUnavailable',
    'create_backend_client', 'is_backend_configured',
]
