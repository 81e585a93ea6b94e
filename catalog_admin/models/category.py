from typing import Optional
from pydantic import BaseModel
from .base import RecordId, TimeStampedModel

class Category(TimeStampedModel):
    """Category model for product categorization"""
    id: RecordId
    name: str
    description: Optional[str] = None

    def to_form(self) -> dict:
        return {'name': self.name, 'description': self.description or ''}

class CategoryRef(BaseModel):
    """Read-only `{id, name}` projection joined onto products"""
    id: RecordId
    name: str
