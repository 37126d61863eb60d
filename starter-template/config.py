import os
from dotenv import load_dotenv

load_dotenv()

IS_PRODUCTION = (
    os.getenv('ENVIRONMENT') == 'production' or
    os.getenv('FLASK_ENV') == 'production' or
    os.getenv('PRODUCTION') == '1'
)

DB_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'databases')


class Config:
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY', 'dev-secret-key-change-in-production')

    # Local databases (settings + logs)
    DB_DIR = DB_DIR
    SETTINGS_DB = os.path.join(DB_DIR, 'settings.db')
    LOGS_DB = os.path.join(DB_DIR, 'app_logs.db')

    # Hosted backend (leave empty to run on the sample catalogue)
    SUPABASE_URL = os.getenv('SUPABASE_URL', '')
    SUPABASE_ANON_KEY = os.getenv('SUPABASE_ANON_KEY', '')
    SUPABASE_SERVICE_ROLE_KEY = os.getenv('SUPABASE_SERVICE_ROLE_KEY', '')

    # Admin mode
    ADMIN_PASSWORD = os.getenv('ADMIN_PASSWORD', '')

    # WhatsApp checkout
    WHATSAPP_NUMBER = os.getenv('WHATSAPP_NUMBER', '5518981100463')
