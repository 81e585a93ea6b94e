import math
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, ConfigDict
from .base import RecordId, TimeStampedModel
from .category import CategoryRef

class Product(TimeStampedModel):
    """Product model; columns beyond these pass through untouched"""
    id: RecordId
    title: str
    category_id: Optional[RecordId] = None
    price: Optional[Decimal] = None
    stock: Optional[int] = None
    description: Optional[str] = None
    image_url: Optional[str] = None

    # Populated by the join at read time, never written
    category: Optional[CategoryRef] = None

    model_config = ConfigDict(from_attributes=True, extra='allow')

class ProductPage(BaseModel):
    """One page of products plus the totals needed for navigation"""
    items: List[Product]
    total: int
    total_pages: int

    @classmethod
    def build(cls, items: List[Product], total: int, page_size: int) -> 'ProductPage':
        return cls(items=items, total=total, total_pages=math.ceil(total / page_size))

class ImageFile(BaseModel):
    """Binary file to be uploaded, with its original name"""
    name: str
    content: bytes
    content_type: Optional[str] = None

    @property
    def extension(self) -> str:
        return self.name.rsplit('.', 1)[-1]
