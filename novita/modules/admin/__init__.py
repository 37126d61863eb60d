"""
Admin Module
============

Admin mode for the catalog.

Provides:
- Password login (ADMIN_PASSWORD setting) or backend email/password sign-in
- Session status and logout
- Write-credential resolution shared by the product API
"""

from flask import Blueprint

admin_bp = Blueprint(
    'admin',
    __name__,
    url_prefix='/admin'
)

from . import routes
from .auth import admin_required, get_write_credentials

__all__ = ['admin_bp', 'admin_required', 'get_write_credentials']
