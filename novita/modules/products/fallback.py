"""
In-memory sample catalogue served when the backend is unconfigured or failing.
"""

import copy
import threading

from .models import now_iso

_IMG = 'https://images.unsplash.com/photo-{}?w=400&h=400&fit=crop'


def _color(cid, name, hex_code, photo):
    return {'id': cid, 'name': name, 'hex': hex_code, 'image': _IMG.format(photo)}


SAMPLE_PRODUCTS = [
    {
        'id': '1',
        'name': 'Nike Air Max 90',
        'brand': 'Nike',
        'price': 299.99,
        'description': 'Tênis Nike Air Max 90 com tecnologia de amortecimento',
        'image_url': _IMG.format('1542291026-7eec264c27ff'),
        'stock': 100,
        'categories': ['tenis'],
        'colors': [
            _color('1-1', 'Preto/Branco', '#000000', '1542291026-7eec264c27ff'),
            _color('1-2', 'Branco/Azul', '#ffffff', '1549298916-b41d501d3772'),
            _color('1-3', 'Vermelho', '#dc2626', '1600185365483-26d7a4cc7519'),
        ],
    },
    {
        'id': '2',
        'name': 'Adidas Ultraboost',
        'brand': 'Adidas',
        'price': 399.99,
        'description': 'Tênis Adidas Ultraboost com tecnologia Boost',
        'image_url': _IMG.format('1595950653106-6c9ebd614d3a'),
        'stock': 100,
        'categories': ['tenis'],
        'colors': [
            _color('2-1', 'Preto', '#000000', '1608231387042-66d1773070a5'),
            _color('2-2', 'Branco', '#ffffff', '1606107557195-0e29a4b5b4aa'),
        ],
    },
    {
        'id': '3',
        'name': 'Camisa Brasil 2024',
        'brand': 'Nike',
        'price': 249.90,
        'description': 'Camisa oficial da seleção brasileira',
        'image_url': _IMG.format('1551698618-1dfe5d97d256'),
        'stock': 100,
        'categories': ['camiseta-time'],
        'colors': [
            _color('3-1', 'Amarelo', '#FFD700', '1551698618-1dfe5d97d256'),
            _color('3-2', 'Azul', '#0066CC', '1571019613454-1cb2f99b2d8b'),
        ],
    },
    {
        'id': '4',
        'name': 'Camisa Society Premium',
        'brand': 'Nike',
        'price': 129.90,
        'description': 'Camisa leve para futebol society',
        'image_url': _IMG.format('1503342217505-b0a15ec3261c'),
        'stock': 100,
        'categories': ['society'],
        'colors': [
            _color('4-1', 'Preto', '#000000', '1503342217505-b0a15ec3261c'),
            _color('4-2', 'Branco', '#ffffff', '1489987707025-afc232f7ea0f'),
        ],
    },
    {
        'id': '5',
        'name': 'Predator Edge',
        'brand': 'Adidas',
        'price': 599.90,
        'description': 'Chuteira de campo Adidas Predator',
        'image_url': _IMG.format('1511886929837-354d827aae26'),
        'stock': 100,
        'categories': ['chuteira'],
        'colors': [
            _color('5-1', 'Preto/Vermelho', '#000000', '1511886929837-354d827aae26'),
        ],
    },
    {
        'id': '6',
        'name': 'Mochila Brasília',
        'brand': 'Nike',
        'price': 179.90,
        'description': 'Mochila esportiva Nike Brasília',
        'image_url': _IMG.format('1553062407-98eeb64c6a62'),
        'stock': 100,
        'categories': ['bolsa'],
        'colors': [
            _color('6-1', 'Preto', '#000000', '1553062407-98eeb64c6a62'),
            _color('6-2', 'Azul', '#0066CC', '1581605669-fcdf81165afa'),
        ],
    },
]


class FallbackStore:
    """Process-wide product list used when the backend cannot be used"""

    def __init__(self, seed=None):
        self._seed = seed if seed is not None else SAMPLE_PRODUCTS
        self._lock = threading.Lock()
        self._products = []
        self.reset()

    def reset(self):
        stamp = now_iso()
        with self._lock:
            self._products = []
            for product in self._seed:
                item = copy.deepcopy(product)
                item.setdefault('created_at', stamp)
                item.setdefault('updated_at', stamp)
                self._products.append(item)

    def __len__(self):
        return len(self._products)

    def all(self):
        with self._lock:
            return copy.deepcopy(self._products)

    def get(self, product_id):
        with self._lock:
            product = self._find(product_id)
            return copy.deepcopy(product) if product else None

    def create(self, product):
        with self._lock:
            taken = {p['id'] for p in self._products}
            next_id = len(self._products) + 1
            while str(next_id) in taken:
                next_id += 1

            stamp = now_iso()
            item = {'id': str(next_id), **copy.deepcopy(product), 'created_at': stamp, 'updated_at': stamp}
            self._products.append(item)
            return copy.deepcopy(item)

    def update(self, product_id, changes):
        with self._lock:
            product = self._find(product_id)
            if product is None:
                return None
            product.update(copy.deepcopy(changes))
            product['id'] = str(product_id)
            product['updated_at'] = changes.get('updated_at') or now_iso()
            return copy.deepcopy(product)

    def delete(self, product_id):
        with self._lock:
            product = self._find(product_id)
            if product is None:
                return None
            self._products.remove(product)
            return product

    def _find(self, product_id):
        return next((p for p in self._products if p['id'] == str(product_id)), None)


# Shared store for the running process
fallback_products = FallbackStore()
