"""
Product shape and the API <-> backend column mapping.

The backend table keeps the storefront's original Portuguese column names;
the JSON API speaks English field names.
"""

import math
from datetime import datetime, timezone

REQUIRED_FIELDS = ['name', 'brand', 'price', 'image_url']

DEFAULT_STOCK = 100
DEFAULT_CATEGORY = 'tenis'

CATEGORY_NAMES = {
    'tenis': 'Tênis',
    'camiseta-time': 'Camisetas de Time',
    'society': 'Society',
    'chuteira': 'Chuteiras',
    'bolsa': 'Bolsas',
}

# API field -> backend column
COLUMN_MAP = {
    'id': 'id',
    'name': 'nome',
    'brand': 'marca',
    'price': 'preco',
    'description': 'descricao',
    'image_url': 'imagem_url',
    'stock': 'estoque',
    'categories': 'categorias',
    'colors': 'cores',
    'created_at': 'created_at',
    'updated_at': 'updated_at',
}
FIELD_MAP = {column: field for field, column in COLUMN_MAP.items()}


class ProductValidationError(ValueError):
    """Raised when a payload cannot be turned into a product"""


def now_iso():
    return datetime.now(timezone.utc).isoformat()


def category_name(slug):
    if slug is None:
        return ''
    slug = str(slug)
    return CATEGORY_NAMES.get(slug, slug)


def parse_price(value):
    """Float price; anything unparsable or non-finite becomes 0"""
    try:
        price = float(value)
    except (TypeError, ValueError):
        return 0.0
    return price if math.isfinite(price) else 0.0


def parse_stock(value):
    """Integer stock; missing, zero-ish or unparsable becomes the default"""
    try:
        stock = float(value)
    except (TypeError, ValueError):
        return DEFAULT_STOCK
    if not math.isfinite(stock):
        return DEFAULT_STOCK
    return int(stock) or DEFAULT_STOCK


def parse_categories(value, default=DEFAULT_CATEGORY):
    """List of category slugs; a scalar is wrapped and empty entries dropped"""
    if isinstance(value, (list, tuple)):
        return [str(c) for c in value if c is not None and c != '']
    if value is None or value == '':
        return [default] if default else []
    return [str(value)]


def parse_text(value):
    return '' if value is None else str(value)


def parse_colors(value):
    """Normalize colour variants to [{id, name, hex, image}]"""
    if value is None:
        return []
    if not isinstance(value, list):
        raise ProductValidationError('colors must be a list')

    colors = []
    for index, color in enumerate(value, start=1):
        if not isinstance(color, dict) or not str(color.get('name', '')).strip():
            raise ProductValidationError('Each colour needs a name')
        colors.append({
            'id': str(color.get('id') or index),
            'name': str(color['name']).strip(),
            'hex': color.get('hex') or '#000000',
            'image': color.get('image') or '',
        })
    return colors


def validate_new_product(payload):
    """Names of required fields that are missing (falsy counts as missing)"""
    return [field for field in REQUIRED_FIELDS if not payload.get(field)]


def build_product(payload):
    """Normalized product dict for an insert"""
    return {
        'name': parse_text(payload['name']),
        'brand': parse_text(payload['brand']),
        'price': parse_price(payload['price']),
        'description': parse_text(payload.get('description')),
        'image_url': parse_text(payload['image_url']),
        'stock': parse_stock(payload.get('stock')),
        'categories': parse_categories(payload.get('categories')),
        'colors': parse_colors(payload.get('colors')),
    }


def build_update(payload):
    """Only the fields present in the payload, coerced, plus updated_at"""
    changes = {}
    if 'name' in payload:
        changes['name'] = parse_text(payload['name'])
    if 'brand' in payload:
        changes['brand'] = parse_text(payload['brand'])
    if 'price' in payload:
        changes['price'] = parse_price(payload['price'])
    if 'description' in payload:
        changes['description'] = parse_text(payload['description'])
    if 'image_url' in payload:
        changes['image_url'] = parse_text(payload['image_url'])
    if 'stock' in payload:
        changes['stock'] = parse_stock(payload['stock'])
    if 'categories' in payload:
        changes['categories'] = parse_categories(payload['categories'], default=None)
    if 'colors' in payload:
        colors = parse_colors(payload['colors'])
        if not colors:
            raise ProductValidationError('A product must keep at least one colour')
        changes['colors'] = colors

    changes['updated_at'] = now_iso()
    return changes


def to_row(product):
    """API dict -> backend row. An empty colour list is left out so tables
    without the `cores` column still accept plain products."""
    return {
        COLUMN_MAP[k]: v for k, v in product.items()
        if k in COLUMN_MAP and not (k == 'colors' and not v)
    }


def from_row(row):
    """Backend row -> API dict"""
    product = {field: row.get(column) for column, field in FIELD_MAP.items() if column in row}
    if product.get('id') is not None:
        product['id'] = str(product['id'])
    product.setdefault('colors', [])
    if product['colors'] is None:
        product['colors'] = []
    return product
