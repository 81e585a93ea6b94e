# catalog_admin/handlers/base_handler.py
from telegram import Update
from telegram.ext import ContextTypes, ConversationHandler
from ..config import Config
from ..database.store import RemoteStore
from ..models.base import RecordId
from ..services.category_service import CategoryService
from ..services.product_service import ProductService
from ..utils.keyboards import Keyboards
from ..utils.messages import Messages

# Record ids as they appear at the end of callback data: digits or UUIDs
ID_PATTERN = r'[0-9A-Za-z-]+'

class BaseHandler:
    """Base class for the admin handlers"""
    def __init__(self, store: RemoteStore):
        self.store = store
        self.category_service = CategoryService(store)
        self.product_service = ProductService(store)
        self.keyboards = Keyboards()
        self.messages = Messages()

    @staticmethod
    def _callback_id(update: Update) -> RecordId:
        """Trailing id of the callback data, as an int when it is numeric"""
        raw = update.callback_query.data.rsplit('_', 1)[1]
        return int(raw) if raw.isdigit() else raw

    @staticmethod
    async def cancel_conversation(update: Update, context: ContextTypes.DEFAULT_TYPE):
        """Cancel the conversation"""
        context.user_data.clear()
        if update.callback_query:
            await update.callback_query.answer()
            await update.callback_query.edit_message_text(Messages.CANCELLED)
        else:
            await update.message.reply_text(Messages.CANCELLED)
        return ConversationHandler.END

    async def is_admin(self, user_id: int) -> bool:
        """Check admin access"""
        return user_id in Config.ADMIN_IDS
