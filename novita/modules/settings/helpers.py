"""
Settings Helpers
================

Convenient accessors for the storefront configuration.
These fall back to app config / environment and then to the schema defaults.
"""

import re

from .database import get_setting, SETTINGS_SCHEMA
from ...core.config import get_config_value

HEX_COLOR = re.compile(r'^#[0-9a-fA-F]{6}$')

SITE_KEYS = [s['key'] for s in SETTINGS_SCHEMA['site']['settings']]


def get_whatsapp_number():
    """Digits only, as wa.me expects. Stored setting first, then WHATSAPP_NUMBER."""
    number = get_setting('whatsappNumber') or get_config_value('WHATSAPP_NUMBER', '') or ''
    return re.sub(r'\D', '', number)


def get_site_config():
    """Public storefront configuration with defaults filled in"""
    config = {key: get_setting(key) for key in SITE_KEYS}
    config['whatsappNumber'] = get_whatsapp_number()
    return config


def get_brand_name():
    return get_setting('siteName', 'Novita')


def validate_site_config(data):
    """Error messages for a site-config update payload"""
    errors = []
    for key, value in data.items():
        if key not in SITE_KEYS:
            errors.append(f'Unknown setting: {key}')
            continue
        if value is not None and not isinstance(value, str):
            errors.append(f'{key} must be a string')
            continue
        if key in ('primaryColor', 'secondaryColor') and value and not HEX_COLOR.match(value):
            errors.append(f'{key} must be a #rrggbb colour')
        if key == 'whatsappNumber' and value and not re.sub(r'\D', '', value):
            errors.append('whatsappNumber must contain digits')
    return errors
