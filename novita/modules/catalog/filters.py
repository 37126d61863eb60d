from ..products.models import CATEGORY_NAMES, category_name

ALL = 'all'


def _categories(product):
    """Category slugs as strings; rows written elsewhere may hold nulls"""
    return [str(c) for c in product.get('categories') or [] if c is not None]


def unique_brands(products):
    return sorted({str(p['brand']) for p in products if p.get('brand')})


def category_options():
    return [{'slug': slug, 'name': name} for slug, name in CATEGORY_NAMES.items()]


def filter_products(products, category=None, brand=None, search=None):
    """
    Storefront filtering. Empty or 'all' disables a filter; the search term
    matches name, brand or a category display name, case-insensitively.
    """
    filtered = products

    if category and category != ALL:
        filtered = [p for p in filtered if category in _categories(p)]

    if brand and brand != ALL:
        filtered = [p for p in filtered if str(p.get('brand')) == brand]

    term = (search or '').strip().lower()
    if term:
        def matches(product):
            names = [str(product.get('name') or ''), str(product.get('brand') or '')]
            names += [category_name(c) for c in _categories(product)]
            return any(term in n.lower() for n in names)
        filtered = [p for p in filtered if matches(p)]

    return filtered
