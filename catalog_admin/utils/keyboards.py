from typing import List
from telegram import InlineKeyboardButton, InlineKeyboardMarkup
from ..models.base import RecordId
from ..models.category import Category
from ..models.page_state import CategoriesPageState
from ..models.product import Product, ProductPage
from .formatters import truncate

class Keyboards:
    @staticmethod
    def admin_menu() -> InlineKeyboardMarkup:
        """Admin menu keyboard"""
        keyboard = [
            [InlineKeyboardButton("🗂 Categories", callback_data="manage_categories")],
            [InlineKeyboardButton("🛍 Products", callback_data="manage_products")],
        ]
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def cancel_keyboard(callback_data: str = "cancel") -> InlineKeyboardMarkup:
        return InlineKeyboardMarkup([[InlineKeyboardButton("🔙 Cancel", callback_data=callback_data)]])

    @staticmethod
    def categories_list(state: CategoriesPageState) -> InlineKeyboardMarkup:
        """One row per category with its edit and delete actions"""
        keyboard = [[InlineKeyboardButton("➕ New category", callback_data="add_category")]]
        for category in state.categories:
            keyboard.append([
                InlineKeyboardButton(f"✏️ {truncate(category.name, 24)}", callback_data=f"edit_category_{category.id}"),
                InlineKeyboardButton("🗑", callback_data=f"delete_category_{category.id}"),
            ])
        keyboard.append([InlineKeyboardButton("🔙 Back", callback_data="admin_menu")])
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def category_form(state: CategoriesPageState) -> InlineKeyboardMarkup:
        """Edit form actions; save is disabled while a submit is pending"""
        if state.submitting:
            save = InlineKeyboardButton("⏳ Saving...", callback_data="cat_form_busy")
        else:
            save = InlineKeyboardButton("💾 Save", callback_data="cat_form_save")
        keyboard = [
            [
                InlineKeyboardButton("🏷 Name", callback_data="cat_form_name"),
                InlineKeyboardButton("📝 Description", callback_data="cat_form_description")
            ],
            [save, InlineKeyboardButton("❌ Cancel", callback_data="cat_form_cancel")]
        ]
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def confirm_delete(prefix: str, item_id: RecordId, back: str) -> InlineKeyboardMarkup:
        keyboard = [[
            InlineKeyboardButton("✅ Confirm delete", callback_data=f"confirm_delete_{prefix}_{item_id}"),
            InlineKeyboardButton("❌ Cancel", callback_data=back)
        ]]
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def products_page(page: ProductPage, current: int) -> InlineKeyboardMarkup:
        """Products of one page with previous/next navigation"""
        keyboard = [[InlineKeyboardButton("➕ New product", callback_data="add_product")]]
        for product in page.items:
            keyboard.append([InlineKeyboardButton(
                truncate(product.title), callback_data=f"view_product_{product.id}"
            )])

        nav_buttons = []
        if current > 1:
            nav_buttons.append(InlineKeyboardButton("◀️", callback_data=f"products_page_{current - 1}"))
        if current < page.total_pages:
            nav_buttons.append(InlineKeyboardButton("▶️", callback_data=f"products_page_{current + 1}"))
        if nav_buttons:
            keyboard.append(nav_buttons)

        keyboard.append([InlineKeyboardButton("🔙 Back", callback_data="admin_menu")])
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def product_menu(product: Product, current_page: int) -> InlineKeyboardMarkup:
        keyboard = [
            [InlineKeyboardButton("🖼 Set image", callback_data=f"product_image_{product.id}")],
            [InlineKeyboardButton("🗑 Delete", callback_data=f"delete_product_{product.id}")],
            [InlineKeyboardButton("🔙 Back", callback_data=f"products_page_{current_page}")]
        ]
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def category_picker(categories: List[Category]) -> InlineKeyboardMarkup:
        keyboard = [
            [InlineKeyboardButton(category.name, callback_data=f"product_category_{category.id}")]
            for category in categories
        ]
        keyboard.append([InlineKeyboardButton("🔙 Cancel", callback_data="cancel")])
        return InlineKeyboardMarkup(keyboard)
