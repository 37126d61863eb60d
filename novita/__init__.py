"""
Novita - Sporting Goods Catalog
===============================

A Flask extension serving a sporting-goods storefront catalog:
- Product CRUD passed through to a hosted backend table
- In-memory sample catalogue when the backend is unavailable
- Storefront filtering and WhatsApp checkout links
- Admin mode and site configuration

Usage:
    from flask import Flask
    from novita import Novita

    app = Flask(__name__)
    Novita(app)

Or register single modules:
    from novita.modules.products import products_bp
    app.register_blueprint(products_bp)
"""

import logging
import os
import secrets

from flask import jsonify, request

from .core.config import Config

__version__ = '0.1.0'

logger = logging.getLogger(__name__)

# Config keys copied onto app.config when the host app has not set them
CONFIG_KEYS = [
    'SUPABASE_URL', 'SUPABASE_ANON_KEY', 'SUPABASE_SERVICE_ROLE_KEY',
    'BACKEND_TIMEOUT', 'PRODUCTS_TABLE', 'ADMIN_PASSWORD', 'WHATSAPP_NUMBER',
    'CORS_ORIGINS',
]

DEFAULT_FEATURES = {
    'admin': True,
    'settings': True,
    'products': True,
    'catalog': True,
    'ops': True,
}


class Novita:
    """Flask extension wiring the catalog modules into an app"""

    def __init__(self, app=None, config=None):
        self._config = config or {}
        self._registered = []
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        self._apply_config(app)
        self._setup_database_dir(app)
        self._register_blueprints(app)
        self._register_error_handlers(app)
        app.extensions['novita'] = self
        logger.info(f"Novita initialised with modules: {', '.join(self._registered)}")

    @property
    def features(self):
        features = dict(DEFAULT_FEATURES)
        features.update(self._config.get('features', {}))
        return features

    def get_registered_modules(self):
        return list(self._registered)

    def _apply_config(self, app):
        for key, value in self._config.get('settings', {}).items():
            app.config[key] = value

        for key in CONFIG_KEYS:
            app.config.setdefault(key, getattr(Config, key))

        db_dir = app.config.setdefault('DB_DIR', Config.DB_DIR)
        app.config.setdefault('SETTINGS_DB', os.getenv('SETTINGS_DB') or os.path.join(db_dir, 'settings.db'))
        app.config.setdefault('LOGS_DB', os.getenv('LOGS_DB') or os.path.join(db_dir, 'app_logs.db'))

        if not app.config.get('SECRET_KEY'):
            if Config.SECRET_KEY:
                app.config['SECRET_KEY'] = Config.SECRET_KEY
            else:
                logger.warning("FLASK_SECRET_KEY not set, using a random key (sessions reset on restart)")
                app.config['SECRET_KEY'] = secrets.token_hex(32)

    def _setup_database_dir(self, app):
        os.makedirs(app.config['DB_DIR'], exist_ok=True)

    def _register_blueprints(self, app):
        features = self.features

        if features.get('admin'):
            from .modules.admin import admin_bp
            app.register_blueprint(admin_bp)
            self._registered.append('admin')

        if features.get('settings'):
            from .modules.settings import settings_bp, site_config_bp
            app.register_blueprint(settings_bp)
            app.register_blueprint(site_config_bp)
            self._registered.append('settings')

        if features.get('products'):
            from .modules.products import products_bp
            app.register_blueprint(products_bp)
            self._registered.append('products')

        if features.get('catalog'):
            from .modules.catalog import catalog_bp
            app.register_blueprint(catalog_bp)
            self._registered.append('catalog')

        if features.get('ops'):
            from .modules.ops import ops_health_bp, ops_backend_bp, ops_admin_bp
            app.register_blueprint(ops_health_bp)
            app.register_blueprint(ops_backend_bp)
            app.register_blueprint(ops_admin_bp)
            self._registered.append('ops')

    def _register_error_handlers(self, app):
        def api_error(e):
            # JSON errors for API paths only, the host app keeps its own pages
            if not request.path.startswith('/api/'):
                return e
            return jsonify({'error': e.description}), e.code

        def internal_error(e):
            from .core import LoggingService
            LoggingService.log_error_with_traceback('app', getattr(e, 'original_exception', None) or e)
            if not request.path.startswith('/api/'):
                return 'Internal Server Error', 500
            return jsonify({'error': 'Internal server error'}), 500

        app.register_error_handler(404, api_error)
        app.register_error_handler(405, api_error)
        app.register_error_handler(500, internal_error)


__all__ = ['Novita', '__version__']
