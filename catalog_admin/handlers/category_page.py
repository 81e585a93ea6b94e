# catalog_admin/handlers/category_page.py
"""State transitions and controller for the admin categories page.

The transition functions are pure: each takes a `CategoriesPageState` and
returns a new one. `CategoriesPageController` runs the remote calls between
transitions and is the only place where errors become notifications.
"""
from typing import Awaitable, Callable, List, Optional
from ..database.exceptions import ValidationError
from ..models.base import RecordId
from ..models.category import Category
from ..models.page_state import (
    CategoriesPageState, CategoryForm, Notification, NotificationKind, PageStatus
)
from ..services.category_repository import CategoryRepository
from ..services.category_service import CategoryService

FORM_FIELDS = ('name', 'description')

def initial_state() -> CategoriesPageState:
    return CategoriesPageState()

def loaded(state: CategoriesPageState, categories: List[Category]) -> CategoriesPageState:
    status = PageStatus.LIST if state.status in (PageStatus.LOADING, PageStatus.ERROR) else state.status
    return state.model_copy(update={'status': status, 'categories': list(categories), 'error': None})

def load_failed(state: CategoriesPageState, message: str) -> CategoriesPageState:
    return state.model_copy(update={'status': PageStatus.ERROR, 'error': message})

def open_new(state: CategoriesPageState) -> CategoriesPageState:
    return state.model_copy(update={
        'status': PageStatus.EDITING,
        'form': CategoryForm(),
        'editing_id': None,
        'notification': None,
    })

def open_edit(state: CategoriesPageState, category: Category) -> CategoriesPageState:
    return state.model_copy(update={
        'status': PageStatus.EDITING,
        'form': CategoryForm(**category.to_form()),
        'editing_id': category.id,
        'notification': None,
    })

def close_form(state: CategoriesPageState) -> CategoriesPageState:
    return state.model_copy(update={
        'status': PageStatus.LIST,
        'form': CategoryForm(),
        'editing_id': None,
        'submitting': False,
    })

def change_field(state: CategoriesPageState, field: str, value: str) -> CategoriesPageState:
    if field not in FORM_FIELDS:
        raise ValueError(f"Unknown form field: {field}")
    form = state.form.model_copy(update={field: value})
    return state.model_copy(update={'form': form})

def validate_form(form: CategoryForm):
    if not form.name.strip():
        raise ValidationError("Category name is required")

def submit_started(state: CategoriesPageState) -> CategoriesPageState:
    return state.model_copy(update={'submitting': True, 'notification': None})

def submit_succeeded(state: CategoriesPageState, text: str) -> CategoriesPageState:
    state = close_form(state)
    return notify(state, NotificationKind.SUCCESS, text)

def submit_failed(state: CategoriesPageState, message: str) -> CategoriesPageState:
    # The form stays open with whatever was typed
    state = state.model_copy(update={'submitting': False})
    return notify(state, NotificationKind.ERROR, message)

def request_delete(state: CategoriesPageState, category_id: RecordId) -> CategoriesPageState:
    return state.model_copy(update={'pending_delete_id': category_id, 'notification': None})

def cancel_delete(state: CategoriesPageState) -> CategoriesPageState:
    return state.model_copy(update={'pending_delete_id': None})

def delete_succeeded(state: CategoriesPageState, text: str) -> CategoriesPageState:
    return notify(cancel_delete(state), NotificationKind.SUCCESS, text)

def delete_failed(state: CategoriesPageState, message: str) -> CategoriesPageState:
    return notify(cancel_delete(state), NotificationKind.ERROR, message)

def notify(state: CategoriesPageState, kind: NotificationKind, text: str) -> CategoriesPageState:
    return state.model_copy(update={'notification': Notification(kind=kind, text=text)})


class CategoriesPageController:
    """Drives the categories page state through category service calls"""

    def __init__(self, service: CategoryService, repository: Optional[CategoryRepository] = None,
                 state: Optional[CategoriesPageState] = None):
        self.service = service
        self.repository = repository or CategoryRepository(service)
        self.state = state or initial_state()

    async def mount(self) -> CategoriesPageState:
        self.state = initial_state()
        return await self.refresh()

    async def refresh(self) -> CategoriesPageState:
        try:
            categories = await self.repository.refresh()
        except Exception as e:
            if self.state.status == PageStatus.LOADING:
                self.state = load_failed(self.state, str(e))
            else:
                # Keep the rows already on screen
                self.state = notify(self.state, NotificationKind.ERROR,
                                    f"Error loading categories: {e}")
            return self.state
        self.state = loaded(self.state, categories)
        return self.state

    def new(self) -> CategoriesPageState:
        self.state = open_new(self.state)
        return self.state

    def edit(self, category_id: RecordId) -> CategoriesPageState:
        category = next((c for c in self.state.categories if c.id == category_id), None)
        if category is None:
            self.state = notify(self.state, NotificationKind.ERROR,
                                f"Category {category_id} not found")
        else:
            self.state = open_edit(self.state, category)
        return self.state

    def cancel(self) -> CategoriesPageState:
        self.state = close_form(self.state)
        return self.state

    def change(self, field: str, value: str) -> CategoriesPageState:
        self.state = change_field(self.state, field, value)
        return self.state

    async def submit(self, on_pending: Optional[Callable[[CategoriesPageState], Awaitable[None]]] = None) -> CategoriesPageState:
        if not self.state.is_editing or self.state.submitting:
            return self.state

        form = self.state.form
        try:
            validate_form(form)
        except ValidationError as e:
            self.state = submit_failed(self.state, str(e))
            return self.state

        editing_id = self.state.editing_id
        self.state = submit_started(self.state)
        try:
            if on_pending:
                await on_pending(self.state)
            if editing_id is not None:
                await self.service.update_category(editing_id, form.model_dump())
            else:
                await self.service.create_category(form.model_dump())
        except Exception as e:
            action = 'updating' if editing_id is not None else 'creating'
            self.state = submit_failed(self.state, f"Error {action} category: {e}")
            return self.state

        action = 'updated' if editing_id is not None else 'created'
        self.state = submit_succeeded(self.state, f"Category {action} successfully!")
        return await self.refresh()

    def request_delete(self, category_id: RecordId) -> CategoriesPageState:
        self.state = request_delete(self.state, category_id)
        return self.state

    def cancel_delete(self) -> CategoriesPageState:
        self.state = cancel_delete(self.state)
        return self.state

    async def confirm_delete(self) -> CategoriesPageState:
        category_id = self.state.pending_delete_id
        if category_id is None:
            return self.state

        try:
            await self.service.delete_category(category_id)
        except Exception as e:
            self.state = delete_failed(self.state, f"Error deleting category: {e}")
            return self.state

        self.state = delete_succeeded(self.state, "Category deleted successfully!")
        return await self.refresh()
