# catalog_admin/services/category_repository.py
import logging
from typing import List
from ..models.category import Category
from .category_service import CategoryService

class CategoryRepository:
    """Last fetched category list, refreshed from the store on demand"""

    def __init__(self, service: CategoryService):
        self.service = service
        self.categories: List[Category] = []
        self.logger = logging.getLogger(__name__)

    async def refresh(self) -> List[Category]:
        """Refetch the whole list; overlapping refreshes keep whichever resolves last"""
        categories = await self.service.get_categories()
        self.categories = categories
        self.logger.debug(f"Category list refreshed ({len(categories)} rows)")
        return categories
