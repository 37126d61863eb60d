"""
Public catalog endpoints for the storefront.

GET /api/catalog?category=tenis&brand=Nike&q=air

Returns the product list (backend, or sample data when the backend is
unavailable) filtered the way the storefront filters, with the brand and
category options needed to build the filter bar.
"""

import logging
from flask import jsonify, request
from flask_cors import cross_origin

from . import catalog_bp
from .filters import filter_products, unique_brands, category_options
from .whatsapp import pick_color, product_message, contact_message, build_link
from ..products import load_products, find_product
from ..settings.helpers import get_whatsapp_number, get_brand_name

logger = logging.getLogger(__name__)


@catalog_bp.route('', methods=['GET'])
@cross_origin()
def catalog():
    """
    Query params:
        category: category slug, or 'all'
        brand: exact brand name, or 'all'
        q: search term

    Returns JSON:
        { "success": true, "products": [...], "count": N, "brands": [...], "categories": [...] }
    """
    products, source = load_products()
    filtered = filter_products(
        products,
        category=request.args.get('category'),
        brand=request.args.get('brand'),
        search=request.args.get('q'),
    )

    return jsonify({
        'success': True,
        'source': source,
        'products': filtered,
        'count': len(filtered),
        'brands': unique_brands(products),
        'categories': category_options(),
    })


@catalog_bp.route('/whatsapp', methods=['GET'])
@cross_origin()
def store_contact_link():
    """Generic 'talk to the store' link"""
    message = contact_message(get_brand_name())
    return jsonify({'success': True, 'message': message, 'url': build_link(get_whatsapp_number(), message)})


@catalog_bp.route('/<product_id>/whatsapp', methods=['GET'])
@cross_origin()
def product_checkout_link(product_id):
    """WhatsApp checkout link for a product, optionally in a chosen colour"""
    try:
        product = find_product(product_id)
    except Exception as e:
        logger.error(f"Error loading product {product_id} for checkout: {e}")
        return jsonify({'success': False, 'error': 'Internal error'}), 500

    if not product:
        return jsonify({'success': False, 'error': 'Product not found'}), 404

    color = pick_color(product, request.args.get('color'))
    message = product_message(product, color)
    return jsonify({
        'success': True,
        'product_id': product['id'],
        'color': color,
        'message': message,
        'url': build_link(get_whatsapp_number(), message),
    })
