"""
Novita Modules
==============

Flask blueprint modules for the catalog storefront and its admin mode.
"""

__all__ = ['admin', 'catalog', 'ops', 'products', 'settings']
