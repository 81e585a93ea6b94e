"""Admin bot handlers"""
from .admin_handlers import AdminHandler
from .category_management import CategoryManagementHandler
from .product_management import ProductManagementHandler

__all__ = [
    'AdminHandler',
    'CategoryManagementHandler',
    'ProductManagementHandler',
]
