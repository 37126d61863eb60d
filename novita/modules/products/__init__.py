"""
Products API Module
===================

JSON CRUD for catalog products, passed through to the hosted backend table.
Falls back to an in-memory sample catalogue when the backend is not configured.

Provides:
- GET/POST /api/products
- GET/PUT/DELETE /api/products/<id>
"""

from flask import Blueprint

products_bp = Blueprint(
    'products',
    __name__,
    url_prefix='/api/products'
)

from . import routes
from .fallback import fallback_products
from .service import load_products, find_product

__all__ = ['products_bp', 'fallback_products', 'load_products', 'find_product']
