"""
Read path shared by the product API and the storefront catalog:
backend when configured and healthy, sample data otherwise.
"""

import logging

from .fallback import fallback_products
from .models import from_row
from ...core import LoggingService, BackendError, create_backend_client, get_config_value

logger = logging.getLogger(__name__)


def products_table():
    return get_config_value('PRODUCTS_TABLE', 'produtos')


def load_products():
    """All products, newest first. Returns (products, source)."""
    try:
        client = create_backend_client()
        if client is None:
            logger.warning("Backend not configured, using fallback products")
            return fallback_products.all(), 'fallback'

        rows = client.fetch_all(products_table())
        logger.info(f"{len(rows)} products found in the backend")
        return [from_row(row) for row in rows], 'backend'

    except BackendError as e:
        LoggingService.error('products', 'Error fetching products, using fallback', e.to_dict())
        return fallback_products.all(), 'fallback'
    except Exception as e:
        LoggingService.log_error_with_traceback('products', e, {'fallback': True})
        return fallback_products.all(), 'fallback'


def find_product(product_id):
    """
    One product or None. Any backend error (including "no rows") counts as
    not found; unexpected errors propagate.
    """
    client = create_backend_client()
    if client is None:
        return fallback_products.get(product_id)

    try:
        row = client.fetch_one(products_table(), product_id)
    except BackendError as e:
        LoggingService.warning('products', f'Product {product_id} not fetched from backend', e.to_dict())
        return None
    return from_row(row)
