# catalog_admin/services/category_service.py
import logging
from typing import List, Dict, Optional, Any
from ..database.store import RemoteStore
from ..models.base import RecordId
from ..models.category import Category

TABLE = 'categories'
WRITABLE_FIELDS = ('name', 'description')

class CategoryService:
    """Category CRUD over the remote store"""

    def __init__(self, store: RemoteStore):
        self.store = store
        self.logger = logging.getLogger(__name__)

    async def get_categories(self) -> List[Category]:
        """All categories ordered by name"""
        try:
            result = await self.store.select(TABLE, '*', order='name', ascending=True)
        except Exception as e:
            self.logger.error(f"Error fetching categories: {e}")
            raise
        return [Category.model_validate(row) for row in result.rows]

    async def get_category(self, category_id: RecordId) -> Category:
        """Exactly one category; NotFoundError otherwise"""
        try:
            result = await self.store.select(TABLE, '*', filters={'id': category_id}, single=True)
        except Exception as e:
            self.logger.error(f"Error fetching category {category_id}: {e}")
            raise
        return Category.model_validate(result.rows)

    async def create_category(self, category_data: Dict[str, Any]) -> Category:
        """Insert a category and return it with its store-assigned id"""
        try:
            rows = await self.store.insert(TABLE, [self._writable(category_data)])
        except Exception as e:
            self.logger.error(f"Error creating category: {e}")
            raise
        return Category.model_validate(rows[0])

    async def update_category(self, category_id: RecordId, update_data: Dict[str, Any]) -> Optional[Category]:
        """Patch a category; None when the store returned no row"""
        try:
            rows = await self.store.update(
                TABLE, self._writable(update_data), {'id': category_id}, returning='*'
            )
        except Exception as e:
            self.logger.error(f"Error updating category {category_id}: {e}")
            raise
        return Category.model_validate(rows[0]) if rows else None

    async def delete_category(self, category_id: RecordId) -> bool:
        """Delete a category; a missing id is not reported"""
        try:
            await self.store.delete(TABLE, {'id': category_id})
        except Exception as e:
            self.logger.error(f"Error deleting category {category_id}: {e}")
            raise
        return True

    @staticmethod
    def _writable(data: Dict[str, Any]) -> Dict[str, Any]:
        return {key: value for key, value in data.items() if key in WRITABLE_FIELDS}
