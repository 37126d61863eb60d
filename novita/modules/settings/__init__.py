"""
Settings Module
===============

Site configuration for the storefront (name, hero texts, WhatsApp number,
colours) plus admin secrets. Secrets are encrypted at rest.
"""

from flask import Blueprint

settings_bp = Blueprint('settings', __name__, url_prefix='/admin/settings')

# Public storefront configuration
site_config_bp = Blueprint('site_config', __name__, url_prefix='/api/site-config')

from . import routes

__all__ = ['settings_bp', 'site_config_bp']
