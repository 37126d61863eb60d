"""
Catalog Public API Module
=========================

Public, read-only storefront API with CORS enabled.

Provides:
- /api/catalog - products filtered by category, brand and search term
- /api/catalog/<id>/whatsapp - WhatsApp checkout link for a product colour
- /api/catalog/whatsapp - generic store contact link
"""

from flask import Blueprint

catalog_bp = Blueprint(
    'catalog',
    __name__,
    url_prefix='/api/catalog'
)

from . import routes

__all__ = ['catalog_bp']
