# catalog_admin/services/product_service.py
import logging
import uuid
from typing import Dict, Optional, Any
from ..config import Config
from ..database.exceptions import NotFoundError, StoreError, UploadError
from ..database.store import RemoteStore
from ..models.base import RecordId
from ..models.product import Product, ProductPage, ImageFile
from ..utils.files import resolve_image_type, MAX_IMAGE_SIZE

TABLE = 'products'
PRODUCT_COLUMNS = '*, category:categories(id, name)'
DEFAULT_PAGE_SIZE = 12

class ProductService:
    """Product CRUD, pagination and image upload over the remote store"""

    def __init__(self, store: RemoteStore, image_bucket: Optional[str] = None):
        self.store = store
        self.image_bucket = image_bucket or Config.IMAGE_BUCKET
        self.logger = logging.getLogger(__name__)

    async def get_products_by_page(self, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> ProductPage:
        """One page of products ordered by title, with totals"""
        start = (page - 1) * page_size
        end = start + page_size - 1
        try:
            result = await self.store.select(
                TABLE, PRODUCT_COLUMNS,
                order='title', ascending=True,
                range_=(start, end), count=True
            )
        except Exception as e:
            self.logger.error(f"Error fetching products page {page}: {e}")
            raise

        if result.count is None:
            self.logger.error(f"No total row count returned for products page {page}")
            raise StoreError("The store did not return a total row count")

        items = [Product.model_validate(row) for row in result.rows]
        return ProductPage.build(items, result.count, page_size)

    async def get_product(self, product_id: RecordId) -> Product:
        """One product joined with its category"""
        try:
            result = await self.store.select(
                TABLE, PRODUCT_COLUMNS, filters={'id': product_id}, single=True
            )
        except Exception as e:
            self.logger.error(f"Error fetching product {product_id}: {e}")
            raise
        return Product.model_validate(result.rows)

    async def create_product(self, product_data: Dict[str, Any]) -> Product:
        """Insert a product and return it joined with its category"""
        try:
            rows = await self.store.insert(
                TABLE, [self._writable(product_data)], returning=PRODUCT_COLUMNS
            )
        except Exception as e:
            self.logger.error(f"Error creating product: {e}")
            raise
        return Product.model_validate(rows[0])

    async def update_product(self, product_id: RecordId, product_data: Dict[str, Any]) -> Product:
        """Patch a product and return it joined with its category"""
        try:
            rows = await self.store.update(
                TABLE, self._writable(product_data), {'id': product_id},
                returning=PRODUCT_COLUMNS
            )
        except Exception as e:
            self.logger.error(f"Error updating product {product_id}: {e}")
            raise
        if not rows:
            raise NotFoundError(f"Product {product_id} not found")
        return Product.model_validate(rows[0])

    async def delete_product(self, product_id: RecordId) -> bool:
        """Delete a product; a missing id is not reported"""
        try:
            await self.store.delete(TABLE, {'id': product_id})
        except Exception as e:
            self.logger.error(f"Error deleting product {product_id}: {e}")
            raise
        return True

    async def upload_image(self, file: Optional[ImageFile]) -> Optional[str]:
        """Upload an image under a fresh unique name and return that name"""
        if file is None:
            return None

        content_type = resolve_image_type(file.content, file.content_type)
        if content_type is None:
            raise UploadError(f"Unsupported image type: {file.name}")
        if len(file.content) > MAX_IMAGE_SIZE:
            raise UploadError(f"Image is too large: {file.name}")

        file_name = f"{uuid.uuid4()}.{file.extension}"
        try:
            await self.store.upload_blob(self.image_bucket, file_name, file.content, content_type)
        except Exception as e:
            self.logger.error(f"Error uploading image {file.name}: {e}")
            raise
        return file_name

    async def set_product_image(self, product_id: RecordId, file: ImageFile) -> Product:
        """Upload an image and store its key on the product"""
        image_url = await self.upload_image(file)
        return await self.update_product(product_id, {'image_url': image_url})

    @staticmethod
    def _writable(data: Dict[str, Any]) -> Dict[str, Any]:
        # The joined category is a read-only projection
        return {key: value for key, value in data.items() if key not in ('id', 'category')}
