# catalog_admin/handlers/admin_handlers.py
from telegram import Update
from telegram.ext import ContextTypes
from .base_handler import BaseHandler

class AdminHandler(BaseHandler):
    """Admin panel entry points"""

    async def admin_panel(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        """Show the admin panel"""
        user_id = update.effective_user.id

        if not await self.is_admin(user_id):
            await update.message.reply_text(self.messages.ACCESS_DENIED)
            return

        await update.message.reply_text(
            "🔧 Admin panel:\n\n"
            "Choose a section from the menu below:",
            reply_markup=self.keyboards.admin_menu()
        )

    async def admin_menu(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        """Back to the admin panel from an inline keyboard"""
        query = update.callback_query
        await query.answer()

        if not await self.is_admin(update.effective_user.id):
            await query.edit_message_text(self.messages.ACCESS_DENIED)
            return

        context.user_data.clear()
        await query.edit_message_text("🔧 Admin panel:", reply_markup=self.keyboards.admin_menu())
