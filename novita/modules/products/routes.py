"""
Products API Routes
===================

Thin pass-through CRUD over the backend products table.

Writes need credentials: an `Authorization: Bearer <token>` header or an
admin session. Backend permission errors map to 403, anything else the
backend reports maps to 500. Without a configured backend every operation
runs against the in-memory fallback catalogue.
"""

from flask import request, jsonify

from . import products_bp
from .fallback import fallback_products
from .models import (
    ProductValidationError, build_product, build_update, validate_new_product,
    to_row, from_row
)
from .service import load_products, find_product, products_table
from ..admin.auth import get_write_credentials
from ...core import LoggingService, BackendError, create_backend_client

SOURCE = 'products'


def _respond(payload, status, method, details=None):
    LoggingService.log_api_call(SOURCE, request.path, method, status, details)
    return jsonify(payload), status


def _json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else None


def _backend_write_error(e, action, method):
    LoggingService.error(SOURCE, f'Error {action} product in backend', e.to_dict())
    if e.is_permission_denied:
        return _respond({
            'error': 'Unauthorized. Check your database permissions.',
            'details': e.message
        }, 403, method)
    return _respond({
        'error': f'Error {action} product. Check your database connection.',
        'details': e.message
    }, 500, method)


def _unauthorized(verb, method):
    LoggingService.log_security_event(f'Missing credentials to {verb} a product', {'path': request.path})
    return _respond({'error': f'Unauthorized. Sign in to {verb} products.'}, 401, method)


@products_bp.route('', methods=['GET'])
def list_products():
    """List all products"""
    products, source = load_products()
    return _respond(products, 200, 'GET', {'source': source, 'count': len(products)})


@products_bp.route('', methods=['POST'])
def create_product():
    """Create a product"""
    try:
        authorized, token = get_write_credentials()
        if not authorized:
            return _unauthorized('add', 'POST')

        data = _json_body()
        if data is None:
            return _respond({'error': 'Invalid JSON body'}, 400, 'POST')

        missing = validate_new_product(data)
        if missing:
            return _respond({'error': f"Required fields: {', '.join(missing)}"}, 400, 'POST')

        try:
            product = build_product(data)
        except ProductValidationError as e:
            return _respond({'error': str(e)}, 400, 'POST')

        client = create_backend_client(token)
        if client is None:
            created = fallback_products.create(product)
            return _respond(created, 201, 'POST', {'source': 'fallback', 'id': created['id']})

        try:
            row = client.insert(products_table(), to_row(product))
        except BackendError as e:
            return _backend_write_error(e, 'creating', 'POST')

        created = from_row(row)
        return _respond(created, 201, 'POST', {'source': 'backend', 'id': created.get('id')})

    except Exception as e:
        LoggingService.log_error_with_traceback(SOURCE, e)
        return _respond({'error': 'Internal server error'}, 500, 'POST')


@products_bp.route('/<product_id>', methods=['GET'])
def get_product(product_id):
    """Get a single product"""
    try:
        product = find_product(product_id)
    except Exception as e:
        LoggingService.log_error_with_traceback(SOURCE, e)
        return _respond({'error': 'Internal server error'}, 500, 'GET')

    if not product:
        return _respond({'error': 'Product not found'}, 404, 'GET')
    return _respond(product, 200, 'GET')


@products_bp.route('/<product_id>', methods=['PUT'])
def update_product(product_id):
    """Update a product (partial)"""
    try:
        authorized, token = get_write_credentials()
        if not authorized:
            return _unauthorized('edit', 'PUT')

        data = _json_body()
        if data is None:
            return _respond({'error': 'Invalid JSON body'}, 400, 'PUT')

        try:
            changes = build_update(data)
        except ProductValidationError as e:
            return _respond({'error': str(e)}, 400, 'PUT')

        client = create_backend_client(token)
        if client is None:
            updated = fallback_products.update(product_id, changes)
            if updated is None:
                return _respond({'error': 'Product not found'}, 404, 'PUT')
            return _respond(updated, 200, 'PUT', {'source': 'fallback'})

        try:
            rows = client.update(products_table(), product_id, to_row(changes))
        except BackendError as e:
            return _backend_write_error(e, 'updating', 'PUT')

        if not rows:
            return _respond({'error': 'Product not found'}, 404, 'PUT')
        return _respond(from_row(rows[0]), 200, 'PUT', {'source': 'backend'})

    except Exception as e:
        LoggingService.log_error_with_traceback(SOURCE, e)
        return _respond({'error': 'Internal server error'}, 500, 'PUT')


@products_bp.route('/<product_id>', methods=['DELETE'])
def delete_product(product_id):
    """Delete a product"""
    try:
        authorized, token = get_write_credentials()
        if not authorized:
            return _unauthorized('delete', 'DELETE')

        client = create_backend_client(token)
        if client is None:
            removed = fallback_products.delete(product_id)
            if removed is None:
                return _respond({'error': 'Product not found'}, 404, 'DELETE')
            return _respond({'message': 'Product deleted'}, 200, 'DELETE', {'source': 'fallback', 'name': removed['name']})

        try:
            client.delete(products_table(), product_id)
        except BackendError as e:
            return _backend_write_error(e, 'deleting', 'DELETE')

        return _respond({'message': 'Product deleted'}, 200, 'DELETE', {'source': 'backend'})

    except Exception as e:
        LoggingService.log_error_with_traceback(SOURCE, e)
        return _respond({'error': 'Internal server error'}, 500, 'DELETE')
