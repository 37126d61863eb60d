"""
WhatsApp checkout links (wa.me deep links with a prefilled message).
"""

from urllib.parse import quote

from ..products.models import category_name

WA_BASE = 'https://wa.me'


def pick_color(product, color_id=None):
    colors = product.get('colors') or []
    if color_id:
        for color in colors:
            if str(color.get('id')) == str(color_id):
                return color
    return colors[0] if colors else None


def product_message(product, color=None):
    first = next((c for c in product.get('categories') or [] if c), None)
    category = category_name(first).lower() if first else 'produto'
    message = f"Olá! Gostaria de saber mais sobre {category} *{product.get('name')}* da {product.get('brand')}"
    if color:
        message += f", na cor {color.get('name')}"
    return message + '.'


def contact_message(brand_name):
    return f'Olá! Gostaria de mais informações sobre os produtos da {brand_name}.'


def build_link(number, message):
    return f"{WA_BASE}/{number}?text={quote(message, safe='')}"
