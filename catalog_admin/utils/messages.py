from typing import Optional
from ..models.page_state import CategoriesPageState, Notification, NotificationKind, PageStatus
from ..models.product import Product, ProductPage
from .formatters import format_price, format_datetime

class Messages:
    LOADING = "⏳ Loading..."
    ACCESS_DENIED = "⛔️ You do not have access to this section."
    CANCELLED = "❌ Operation cancelled."

    @staticmethod
    def format_notification(notification: Optional[Notification]) -> str:
        if notification is None:
            return ""
        emoji = "✅" if notification.kind == NotificationKind.SUCCESS else "❌"
        return f"{emoji} {notification.text}\n\n"

    @classmethod
    def categories_page(cls, state: CategoriesPageState) -> str:
        """Text of the categories table, the edit form or the load error"""
        if state.status == PageStatus.LOADING:
            return cls.LOADING
        if state.status == PageStatus.ERROR:
            return f"❌ Error loading categories: {state.error}"
        if state.status == PageStatus.EDITING:
            return cls.category_form(state)

        text = cls.format_notification(state.notification) + "🗂 Manage categories\n\n"
        if not state.categories:
            return text + "No categories yet."
        lines = [
            f"{index}. {category.name}" + (f" - {category.description}" if category.description else "")
            for index, category in enumerate(state.categories, start=1)
        ]
        return text + "\n".join(lines)

    @classmethod
    def category_form(cls, state: CategoriesPageState) -> str:
        title = "✏️ Edit category" if state.editing_id is not None else "➕ New category"
        return (
            cls.format_notification(state.notification) +
            f"{title}\n\n"
            f"🏷 Name: {state.form.name or '-'}\n"
            f"📝 Description: {state.form.description or '-'}"
        )

    @staticmethod
    def delete_category_prompt(state: CategoriesPageState) -> str:
        category = next((c for c in state.categories if c.id == state.pending_delete_id), None)
        name = category.name if category else f"#{state.pending_delete_id}"
        return f"⚠️ Are you sure you want to delete the category \"{name}\"?"

    @staticmethod
    def products_page(page: ProductPage, current: int, notice: str = "") -> str:
        text = notice + "🛍 Products\n"
        if not page.items:
            return text + f"\nNo products on this page. ({page.total} in total)"
        return text + f"Page {current} of {page.total_pages} ({page.total} products)"

    @staticmethod
    def format_product(product: Product) -> str:
        """Product details"""
        category = product.category.name if product.category else "-"
        return (
            f"🏷 {product.title}\n"
            f"📝 {product.description or '-'}\n"
            f"💰 Price: {format_price(product.price)}\n"
            f"🔄 Stock: {product.stock if product.stock is not None else '-'}\n"
            f"🗂 Category: {category}\n"
            f"🖼 Image: {product.image_url or '-'}\n"
            f"🕒 Created: {format_datetime(product.created_at)}"
        )
