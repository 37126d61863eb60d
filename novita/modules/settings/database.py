"""
Settings Database with Encryption
=================================

Stores site configuration with encryption for sensitive values.
Uses Fernet symmetric encryption (AES-128-CBC).
"""

import base64
import hashlib
import logging
import os
from datetime import datetime

from cryptography.fernet import Fernet, InvalidToken

from ...core.config import get_config_value
from ...core.database import Database

logger = logging.getLogger(__name__)


# Standard settings schema
SETTINGS_SCHEMA = {
    'site': {
        'label': 'Storefront',
        'settings': [
            {'key': 'siteName', 'label': 'Site Name', 'type': 'text', 'default': 'Novita', 'is_secret': False},
            {'key': 'siteDescription', 'label': 'Description', 'type': 'text', 'default': 'Seu catálogo esportivo online', 'is_secret': False},
            {'key': 'heroTitle', 'label': 'Hero Title', 'type': 'text', 'default': 'Encontre o produto perfeito', 'is_secret': False},
            {'key': 'heroSubtitle', 'label': 'Hero Subtitle', 'type': 'text', 'default': 'Explore nossa coleção completa de produtos esportivos com design moderno e qualidade garantida', 'is_secret': False},
            {'key': 'heroImage', 'label': 'Hero Image', 'type': 'url', 'default': 'https://images.unsplash.com/photo-1556906781-9a412961c28c?w=1200&h=600&fit=crop', 'is_secret': False},
            {'key': 'whatsappNumber', 'label': 'WhatsApp Number', 'type': 'tel', 'is_secret': False, 'description': 'Country code + number, digits only'},
            {'key': 'primaryColor', 'label': 'Primary Colour', 'type': 'color', 'default': '#2563eb', 'is_secret': False},
            {'key': 'secondaryColor', 'label': 'Secondary Colour', 'type': 'color', 'default': '#0891b2', 'is_secret': False},
        ]
    },
    'admin': {
        'label': 'Admin Mode',
        'settings': [
            {'key': 'ADMIN_PASSWORD', 'label': 'Admin Password', 'type': 'password', 'is_secret': True, 'description': 'Password for admin mode without a backend account'},
        ]
    },
}


def schema_entry(key):
    for category_key, category in SETTINGS_SCHEMA.items():
        for setting in category['settings']:
            if setting['key'] == key:
                return category_key, setting
    return None, None


def get_settings_db_path():
    """Get settings database path"""
    return get_config_value('SETTINGS_DB', os.path.join('databases', 'settings.db'))


def get_encryption_key():
    """
    Derive encryption key from Flask SECRET_KEY.
    Returns a Fernet-compatible key (32 bytes, base64 encoded).
    """
    secret = get_config_value('SECRET_KEY') or os.environ.get('FLASK_SECRET_KEY', 'default-insecure-key')

    # Derive a 32-byte key using SHA256
    key_bytes = hashlib.sha256(secret.encode()).digest()
    return base64.urlsafe_b64encode(key_bytes)


def encrypt_value(value):
    """Encrypt a value using Fernet"""
    if not value:
        return value
    return Fernet(get_encryption_key()).encrypt(value.encode()).decode()


def decrypt_value(encrypted_value):
    """Decrypt a value using Fernet"""
    if not encrypted_value:
        return encrypted_value

    try:
        return Fernet(get_encryption_key()).decrypt(encrypted_value.encode()).decode()
    except InvalidToken:
        # Stored before encryption was enabled, or SECRET_KEY changed
        logger.warning("Could not decrypt a stored secret setting")
        return encrypted_value


def mask_secret(value):
    """Show only the last 4 characters"""
    if not value:
        return value
    if len(value) <= 4:
        return '****'
    return '*' * (len(value) - 4) + value[-4:]


def init_settings_db():
    """Initialize settings database"""
    db_path = get_settings_db_path()

    with Database.connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS settings (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                category TEXT NOT NULL,
                key TEXT NOT NULL UNIQUE,
                value TEXT,
                is_secret BOOLEAN DEFAULT 0,
                description TEXT,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        ''')
        cursor.execute('CREATE INDEX IF NOT EXISTS idx_settings_category ON settings(category)')
        conn.commit()

    return db_path


def get_setting(key, default=None, decrypt=True):
    """
    Get a setting value by key.
    Falls back to app config / environment, then the schema default.
    """
    db_path = get_settings_db_path()
    if os.path.exists(db_path):
        try:
            with Database.connect(db_path) as conn:
                row = conn.execute('SELECT value, is_secret FROM settings WHERE key = ?', (key,)).fetchone()
        except Exception as e:
            logger.error(f"Error getting setting {key}: {e}")
            row = None

        if row and row[0]:
            value, is_secret = row
            if is_secret and decrypt:
                value = decrypt_value(value)
            return value

    value = get_config_value(key)
    if value:
        return value

    _, entry = schema_entry(key)
    if entry and entry.get('default') is not None:
        return entry['default']
    return default


def set_setting(key, value, category='general', is_secret=False, description=None):
    """Set a setting value"""
    try:
        db_path = init_settings_db()

        # Encrypt if secret
        stored_value = encrypt_value(value) if is_secret and value else value

        with Database.connect(db_path) as conn:
            conn.execute('''
                INSERT INTO settings (category, key, value, is_secret, description, updated_at)
                VALUES (?, ?, ?, ?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    category = excluded.category,
                    is_secret = excluded.is_secret,
                    description = COALESCE(excluded.description, settings.description),
                    updated_at = excluded.updated_at
            ''', (category, key, stored_value, is_secret, description, datetime.now().isoformat()))
            conn.commit()
        return True

    except Exception as e:
        logger.error(f"Error setting {key}: {e}")
        return False


def delete_setting(key):
    """Delete a setting"""
    db_path = get_settings_db_path()
    if not os.path.exists(db_path):
        return False

    try:
        with Database.connect(db_path) as conn:
            cursor = conn.execute('DELETE FROM settings WHERE key = ?', (key,))
            conn.commit()
            return cursor.rowcount > 0
    except Exception as e:
        logger.error(f"Error deleting setting {key}: {e}")
        return False


def get_all_settings(category=None, mask_secrets=True):
    """
    Get all stored settings, optionally filtered by category.
    Secrets are masked by default (show only last 4 chars).
    """
    db_path = get_settings_db_path()
    if not os.path.exists(db_path):
        return []

    query = 'SELECT id, category, key, value, is_secret, description, updated_at FROM settings'
    if category:
        query += ' WHERE category = ? ORDER BY key'
        params = (category,)
    else:
        query += ' ORDER BY category, key'
        params = ()

    try:
        with Database.connect(db_path) as conn:
            rows = conn.execute(query, params).fetchall()
    except Exception as e:
        logger.error(f"Error getting all settings: {e}")
        return []

    settings = []
    for setting_id, cat, key, value, is_secret, description, updated_at in rows:
        if is_secret and value:
            value = decrypt_value(value)
            if mask_secrets:
                value = mask_secret(value)

        settings.append({
            'id': setting_id,
            'category': cat,
            'key': key,
            'value': value,
            'is_secret': bool(is_secret),
            'description': description,
            'updated_at': updated_at
        })
    return settings
