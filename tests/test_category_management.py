"""
Categories conversation: what the admin sees at each step.
"""

import re
from unittest.mock import AsyncMock, MagicMock

import pytest
from telegram.ext import ConversationHandler

from catalog_admin.config import Config
from catalog_admin.constants import (
    CATEGORY_FORM, CATEGORY_LIST, CONFIRM_DELETE_CATEGORY, WAITING_CATEGORY_NAME
)
from catalog_admin.database.exceptions import StoreError
from catalog_admin.handlers.base_handler import ID_PATTERN
from catalog_admin.handlers.category_management import CategoryManagementHandler

ADMIN_ID = 42


def callback_update(data, user_id=ADMIN_ID):
    update = MagicMock()
    update.effective_user.id = user_id
    update.callback_query.data = data
    update.callback_query.answer = AsyncMock()
    update.callback_query.edit_message_text = AsyncMock()
    return update


def message_update(text, user_id=ADMIN_ID):
    update = MagicMock()
    update.effective_user.id = user_id
    update.callback_query = None
    update.message.text = text
    update.message.reply_text = AsyncMock()
    return update


def last_render(update):
    """Text and keyboard of the last message shown"""
    target = update.callback_query.edit_message_text if update.callback_query else update.message.reply_text
    args, kwargs = target.call_args
    return args[0], kwargs.get("reply_markup")


def callbacks(markup):
    return [[button.callback_data for button in row] for row in markup.inline_keyboard]


@pytest.fixture(autouse=True)
def admins(monkeypatch):
    monkeypatch.setattr(Config, "ADMIN_IDS", [ADMIN_ID])


@pytest.fixture
def context():
    ctx = MagicMock()
    ctx.user_data = {}
    return ctx


@pytest.fixture
def handler(store):
    store.seed("categories", {"id": 2, "name": "B"}, {"id": 1, "name": "A"})
    return CategoryManagementHandler(store)


class TestCategoryConversation:

    @pytest.mark.asyncio
    async def test_non_admin_is_refused(self, handler, context):
        update = callback_update("manage_categories", user_id=7)
        assert await handler.show_categories(update, context) == ConversationHandler.END
        update.callback_query.edit_message_text.assert_awaited_once_with("⛔️ You do not have access to this section.")

    @pytest.mark.asyncio
    async def test_list_renders_rows_in_order_with_actions(self, handler, context):
        update = callback_update("manage_categories")
        assert await handler.show_categories(update, context) == CATEGORY_LIST

        text, markup = last_render(update)
        assert text.index("A") < text.index("B")
        rows = callbacks(markup)
        assert rows[1] == ["edit_category_1", "delete_category_1"]
        assert rows[2] == ["edit_category_2", "delete_category_2"]
        assert len(rows) == 4

    @pytest.mark.asyncio
    async def test_load_error_is_shown(self, handler, context, store):
        store.fail("select", StoreError("network error"))
        update = callback_update("manage_categories")
        assert await handler.show_categories(update, context) == ConversationHandler.END
        text, _ = last_render(update)
        assert text == "❌ Error loading categories: network error"

    @pytest.mark.asyncio
    async def test_new_category_flow(self, handler, context, store):
        await handler.show_categories(callback_update("manage_categories"), context)
        assert await handler.start_add_category(callback_update("add_category"), context) == CATEGORY_FORM
        assert await handler.ask_category_field(callback_update("cat_form_name"), context) == WAITING_CATEGORY_NAME

        typed = message_update("Games")
        assert await handler.handle_category_name(typed, context) == CATEGORY_FORM
        text, _ = last_render(typed)
        assert "Name: Games" in text

        save = callback_update("cat_form_save")
        assert await handler.save_category(save, context) == CATEGORY_LIST

        text, markup = last_render(save)
        assert text.startswith("✅ Category created successfully!")
        assert "Games" in text
        assert len(callbacks(markup)) == 5

    @pytest.mark.asyncio
    async def test_saving_indicator_shown_while_pending(self, handler, context):
        await handler.show_categories(callback_update("manage_categories"), context)
        await handler.start_add_category(callback_update("add_category"), context)
        await handler.handle_category_name(message_update("Games"), context)

        save = callback_update("cat_form_save")
        await handler.save_category(save, context)

        pending_markup = save.callback_query.edit_message_text.call_args_list[0].kwargs["reply_markup"]
        assert "cat_form_busy" in sum(callbacks(pending_markup), [])

    @pytest.mark.asyncio
    async def test_update_failure_keeps_form(self, handler, context, store):
        await handler.show_categories(callback_update("manage_categories"), context)
        await handler.start_edit_category(callback_update("edit_category_1"), context)
        await handler.handle_category_name(message_update("Alpha"), context)
        store.fail("update", StoreError("network error"))

        save = callback_update("cat_form_save")
        assert await handler.save_category(save, context) == CATEGORY_FORM

        text, markup = last_render(save)
        assert "network error" in text
        assert "Name: Alpha" in text
        assert "cat_form_save" in sum(callbacks(markup), [])

    @pytest.mark.asyncio
    async def test_empty_name_not_sent(self, handler, context, store):
        await handler.show_categories(callback_update("manage_categories"), context)
        await handler.start_add_category(callback_update("add_category"), context)

        save = callback_update("cat_form_save")
        assert await handler.save_category(save, context) == CATEGORY_FORM
        assert not [c for c in store.calls if c[0] == "insert"]
        text, _ = last_render(save)
        assert "Category name is required" in text

    @pytest.mark.asyncio
    async def test_delete_with_confirmation(self, handler, context, store):
        await handler.show_categories(callback_update("manage_categories"), context)

        ask = callback_update("delete_category_2")
        assert await handler.handle_delete_category(ask, context) == CONFIRM_DELETE_CATEGORY
        text, markup = last_render(ask)
        assert '"B"' in text
        assert callbacks(markup) == [["confirm_delete_category_2", "cancel_delete_category"]]

        confirm = callback_update("confirm_delete_category_2")
        assert await handler.handle_delete_confirmation(confirm, context) == CATEGORY_LIST
        text, markup = last_render(confirm)
        assert text.startswith("✅ Category deleted successfully!")
        assert "delete_category_2" not in sum(callbacks(markup), [])

    @pytest.mark.asyncio
    async def test_cancelled_delete_calls_nothing(self, handler, context, store):
        await handler.show_categories(callback_update("manage_categories"), context)
        await handler.handle_delete_category(callback_update("delete_category_2"), context)

        cancel = callback_update("cancel_delete_category")
        assert await handler.handle_delete_confirmation(cancel, context) == CATEGORY_LIST
        assert not [c for c in store.calls if c[0] == "delete"]

    def test_conversation_handler_builds(self, handler):
        conversation = handler.conversation_handler()
        assert CATEGORY_FORM in conversation.states

    @pytest.mark.asyncio
    async def test_string_keyed_categories(self, store, context):
        key = "8c0e2f4a-1b7d-4e52-9a3c-6f1d2b9e7a10"
        store.seed("categories", {"id": key, "name": "Games"})
        handler = CategoryManagementHandler(store)

        await handler.show_categories(callback_update("manage_categories"), context)
        edit = callback_update(f"edit_category_{key}")
        assert re.fullmatch(rf"edit_category_{ID_PATTERN}", edit.callback_query.data)
        assert await handler.start_edit_category(edit, context) == CATEGORY_FORM
        assert handler._controller(context).state.editing_id == key

        await handler.cancel_form(callback_update("cat_form_cancel"), context)
        await handler.handle_delete_category(callback_update(f"delete_category_{key}"), context)
        confirm = callback_update(f"confirm_delete_category_{key}")
        assert await handler.handle_delete_confirmation(confirm, context) == CATEGORY_LIST
        assert ("delete", "categories", {"id": key}) in store.calls
        assert store.tables["categories"] == []
