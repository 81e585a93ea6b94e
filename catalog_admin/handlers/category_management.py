# catalog_admin/handlers/category_management.py
from telegram import Update
from telegram.error import BadRequest
from telegram.ext import (
    ContextTypes, ConversationHandler, CommandHandler,
    MessageHandler, CallbackQueryHandler, filters
)
from .base_handler import BaseHandler, ID_PATTERN
from .category_page import CategoriesPageController
from ..models.page_state import CategoriesPageState, PageStatus
from ..constants import (
    CATEGORY_LIST, CATEGORY_FORM, WAITING_CATEGORY_NAME,
    WAITING_CATEGORY_DESCRIPTION, CONFIRM_DELETE_CATEGORY, CATEGORIES_PAGE
)

class CategoryManagementHandler(BaseHandler):
    """Admin categories page rendered as a chat conversation"""

    def _controller(self, context: ContextTypes.DEFAULT_TYPE) -> CategoriesPageController:
        controller = context.user_data.get(CATEGORIES_PAGE)
        if controller is None:
            controller = CategoriesPageController(self.category_service)
            context.user_data[CATEGORIES_PAGE] = controller
        return controller

    async def _render(self, update: Update, state: CategoriesPageState):
        """Show the page for the given state in place of the last message"""
        if state.status == PageStatus.EDITING:
            reply_markup = self.keyboards.category_form(state)
        elif state.status == PageStatus.LIST:
            reply_markup = self.keyboards.categories_list(state)
        else:
            reply_markup = self.keyboards.cancel_keyboard("admin_menu")

        text = self.messages.categories_page(state)
        if update.callback_query:
            try:
                await update.callback_query.edit_message_text(text, reply_markup=reply_markup)
            except BadRequest as e:
                # Re-rendering an unchanged page
                if "not modified" not in str(e):
                    raise
        else:
            await update.message.reply_text(text, reply_markup=reply_markup)

    @staticmethod
    def _next_state(state: CategoriesPageState) -> int:
        if state.status == PageStatus.EDITING:
            return CATEGORY_FORM
        if state.status == PageStatus.LIST:
            return CATEGORY_LIST
        return ConversationHandler.END

    async def show_categories(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        """Load and show the categories table"""
        query = update.callback_query
        await query.answer()

        if not await self.is_admin(update.effective_user.id):
            await query.edit_message_text(self.messages.ACCESS_DENIED)
            return ConversationHandler.END

        controller = self._controller(context)
        await query.edit_message_text(self.messages.LOADING)
        state = await controller.mount()
        await self._render(update, state)
        return self._next_state(state)

    async def start_add_category(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        """Open an empty form"""
        await update.callback_query.answer()
        state = self._controller(context).new()
        await self._render(update, state)
        return CATEGORY_FORM

    async def start_edit_category(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        """Open the form filled from the chosen row"""
        await update.callback_query.answer()
        state = self._controller(context).edit(self._callback_id(update))
        await self._render(update, state)
        return self._next_state(state)

    async def ask_category_field(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        """Prompt for a new name or description"""
        query = update.callback_query
        await query.answer()

        if query.data == "cat_form_name":
            await query.edit_message_text(
                "🏷 Enter the category name:",
                reply_markup=self.keyboards.cancel_keyboard("cat_form_back")
            )
            return WAITING_CATEGORY_NAME

        await query.edit_message_text(
            "📝 Enter the category description:\n"
            "(send /skip to leave it empty)",
            reply_markup=self.keyboards.cancel_keyboard("cat_form_back")
        )
        return WAITING_CATEGORY_DESCRIPTION

    async def handle_category_name(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        state = self._controller(context).change('name', update.message.text.strip())
        await self._render(update, state)
        return CATEGORY_FORM

    async def handle_category_description(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        text = update.message.text
        value = "" if text == "/skip" else text.strip()
        state = self._controller(context).change('description', value)
        await self._render(update, state)
        return CATEGORY_FORM

    async def back_to_form(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        await update.callback_query.answer()
        await self._render(update, self._controller(context).state)
        return CATEGORY_FORM

    async def save_category(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        """Create or update from the form, then refresh the table"""
        query = update.callback_query
        await query.answer()

        async def show_pending(state: CategoriesPageState):
            await self._render(update, state)

        state = await self._controller(context).submit(on_pending=show_pending)
        await self._render(update, state)
        return self._next_state(state)

    async def busy(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        await update.callback_query.answer("⏳ Saving...")
        return CATEGORY_FORM

    async def cancel_form(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        await update.callback_query.answer()
        state = self._controller(context).cancel()
        await self._render(update, state)
        return CATEGORY_LIST

    async def handle_delete_category(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        """Ask for confirmation before deleting"""
        query = update.callback_query
        await query.answer()

        category_id = self._callback_id(update)
        state = self._controller(context).request_delete(category_id)
        await query.edit_message_text(
            self.messages.delete_category_prompt(state),
            reply_markup=self.keyboards.confirm_delete('category', category_id, "cancel_delete_category")
        )
        return CONFIRM_DELETE_CATEGORY

    async def handle_delete_confirmation(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        query = update.callback_query
        await query.answer()

        controller = self._controller(context)
        if query.data == "cancel_delete_category":
            state = controller.cancel_delete()
        else:
            state = await controller.confirm_delete()

        await self._render(update, state)
        return self._next_state(state)

    async def back_to_admin_menu(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        query = update.callback_query
        await query.answer()
        context.user_data.pop(CATEGORIES_PAGE, None)
        await query.edit_message_text("🔧 Admin panel:", reply_markup=self.keyboards.admin_menu())
        return ConversationHandler.END

    def conversation_handler(self) -> ConversationHandler:
        """Conversation handler for category management"""
        return ConversationHandler(
            entry_points=[
                CallbackQueryHandler(self.show_categories, pattern='^manage_categories$')
            ],
            states={
                CATEGORY_LIST: [
                    CallbackQueryHandler(self.start_add_category, pattern='^add_category$'),
                    CallbackQueryHandler(self.start_edit_category, pattern=rf'^edit_category_{ID_PATTERN}$'),
                    CallbackQueryHandler(self.handle_delete_category, pattern=rf'^delete_category_{ID_PATTERN}$'),
                    CallbackQueryHandler(self.show_categories, pattern='^manage_categories$'),
                ],
                CATEGORY_FORM: [
                    CallbackQueryHandler(self.ask_category_field, pattern='^cat_form_(name|description)$'),
                    CallbackQueryHandler(self.save_category, pattern='^cat_form_save$'),
                    CallbackQueryHandler(self.busy, pattern='^cat_form_busy$'),
                    CallbackQueryHandler(self.cancel_form, pattern='^cat_form_cancel$'),
                ],
                WAITING_CATEGORY_NAME: [
                    MessageHandler(filters.TEXT & ~filters.COMMAND, self.handle_category_name),
                    CallbackQueryHandler(self.back_to_form, pattern='^cat_form_back$'),
                ],
                WAITING_CATEGORY_DESCRIPTION: [
                    MessageHandler(filters.TEXT & ~filters.COMMAND, self.handle_category_description),
                    CommandHandler('skip', self.handle_category_description),
                    CallbackQueryHandler(self.back_to_form, pattern='^cat_form_back$'),
                ],
                CONFIRM_DELETE_CATEGORY: [
                    CallbackQueryHandler(
                        self.handle_delete_confirmation,
                        pattern=rf'^(confirm_delete_category_{ID_PATTERN}|cancel_delete_category)$'
                    )
                ]
            },
            fallbacks=[
                CommandHandler('cancel', self.cancel_conversation),
                CallbackQueryHandler(self.back_to_admin_menu, pattern='^admin_menu$'),
            ]
        )
