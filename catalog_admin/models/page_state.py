from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict
from .base import RecordId
from .category import Category

class PageStatus(str, Enum):
    LOADING = "loading"
    ERROR = "error"
    LIST = "list"
    EDITING = "editing"

class NotificationKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"

class Notification(BaseModel):
    """Transient message shown after an operation completes"""
    kind: NotificationKind
    text: str

    model_config = ConfigDict(frozen=True)

class CategoryForm(BaseModel):
    """Values typed into the category edit form"""
    name: str = ''
    description: str = ''

    model_config = ConfigDict(frozen=True)

class CategoriesPageState(BaseModel):
    """Snapshot of the admin categories page"""
    status: PageStatus = PageStatus.LOADING
    categories: List[Category] = []
    error: Optional[str] = None
    form: CategoryForm = CategoryForm()
    editing_id: Optional[RecordId] = None
    submitting: bool = False
    pending_delete_id: Optional[RecordId] = None
    notification: Optional[Notification] = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_editing(self) -> bool:
        return self.status == PageStatus.EDITING
