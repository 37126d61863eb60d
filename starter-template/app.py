"""
Novita Starter Template
=======================

A ready-to-run Flask application serving the catalog API.

Run with:
    python app.py

Visit:
    http://localhost:5000/api/catalog      - Storefront catalog
    http://localhost:5000/api/site-config  - Site configuration
    http://localhost:5000/health           - Health check
"""

import os
from flask import Flask, jsonify
from novita import Novita

from config import Config

# Create Flask app
app = Flask(__name__)
app.config['SECRET_KEY'] = Config.SECRET_KEY
app.config['DB_DIR'] = Config.DB_DIR
app.config['SETTINGS_DB'] = Config.SETTINGS_DB
app.config['LOGS_DB'] = Config.LOGS_DB
app.config['SUPABASE_URL'] = Config.SUPABASE_URL
app.config['SUPABASE_ANON_KEY'] = Config.SUPABASE_ANON_KEY
app.config['SUPABASE_SERVICE_ROLE_KEY'] = Config.SUPABASE_SERVICE_ROLE_KEY
app.config['ADMIN_PASSWORD'] = Config.ADMIN_PASSWORD
app.config['WHATSAPP_NUMBER'] = Config.WHATSAPP_NUMBER

# Session security
app.config['SESSION_COOKIE_SECURE'] = not app.debug
app.config['SESSION_COOKIE_HTTPONLY'] = True
app.config['SESSION_COOKIE_SAMESITE'] = 'Lax'

# Ensure database directory exists
os.makedirs(Config.DB_DIR, exist_ok=True)

# Initialize Novita - this registers all modules automatically
novita = Novita(app)


@app.route('/')
def index():
    """Entry points"""
    return jsonify({
        'catalog': '/api/catalog',
        'products': '/api/products',
        'site_config': '/api/site-config',
        'admin_login': '/admin/login',
        'health': '/health',
    })


if __name__ == '__main__':
    print("\n" + "=" * 60)
    print("Novita Starter Template")
    print("=" * 60)
    print("Catalog:         http://localhost:5000/api/catalog")
    print("Products API:    http://localhost:5000/api/products")
    print("Admin Login:     POST http://localhost:5000/admin/login")
    print("=" * 60 + "\n")

    app.run(host='0.0.0.0', port=5000, debug=True)
