import os
from dotenv import load_dotenv

load_dotenv(override=True)

class Config:
    """
    Base configuration for the Novita catalog.
    Projects should provide backend credentials and database paths via environment variables.
    """
    # Flask settings
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY')

    # Get DB_DIR from environment, or use a default if not set
    DB_DIR = os.getenv('DB_DIR', os.path.join(os.getcwd(), 'databases'))

    # Local databases (settings and persistent logs only, products live in the backend)
    SETTINGS_DB = os.getenv('SETTINGS_DB', os.path.join(DB_DIR, "settings.db"))
    LOGS_DB = os.getenv('LOGS_DB', os.path.join(DB_DIR, "app_logs.db"))

    # Hosted backend (PostgREST table API + password-grant auth)
    SUPABASE_URL = os.getenv('SUPABASE_URL') or os.getenv('NEXT_PUBLIC_SUPABASE_URL')
    SUPABASE_ANON_KEY = os.getenv('SUPABASE_ANON_KEY') or os.getenv('NEXT_PUBLIC_SUPABASE_ANON_KEY')
    SUPABASE_SERVICE_ROLE_KEY = os.getenv('SUPABASE_SERVICE_ROLE_KEY')
    BACKEND_TIMEOUT = float(os.getenv('BACKEND_TIMEOUT', '10'))

    # Products table in the backend
    PRODUCTS_TABLE = os.getenv('PRODUCTS_TABLE', 'produtos')

    # Admin mode password (password-only login, no backend session)
    ADMIN_PASSWORD = os.getenv('ADMIN_PASSWORD')

    # Storefront contact number used for WhatsApp checkout links
    WHATSAPP_NUMBER = os.getenv('WHATSAPP_NUMBER', '5518981100463')

    # Origins allowed to read the public catalog endpoints.
    # Flask-CORS reads app.config["CORS_ORIGINS"] for every @cross_origin() route.
    CORS_ORIGINS = [o.strip() for o in os.getenv('CORS_ORIGINS', '*').split(',') if o.strip()]


def get_config_value(key, default=None):
    """Get configuration value: Flask app config first, then Config, then env var.

    A key present in app.config wins even when empty, so an app can switch
    a setting off explicitly.
    """
    try:
        from flask import current_app
        if key in current_app.config:
            val = current_app.config[key]
            return val if val not in (None, '') else default
    except RuntimeError:
        pass
    val = getattr(Config, key, None)
    if val:
        return val
    return os.getenv(key, default)
