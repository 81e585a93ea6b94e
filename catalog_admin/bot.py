# catalog_admin/bot.py
import logging
from telegram.ext import (
    Application,
    CommandHandler,
    CallbackQueryHandler,
)
from .config import Config
from .database.store import RemoteStore
from .handlers import (
    AdminHandler,
    CategoryManagementHandler,
    ProductManagementHandler,
)

class CatalogAdminBot:
    def __init__(self):
        """Set up the bot"""
        Config.validate()
        self.logger = logging.getLogger(__name__)
        self.store = RemoteStore(Config.SUPABASE_URL, Config.SUPABASE_KEY, Config.STORE_TIMEOUT)
        self.application = (
            Application.builder()
            .token(Config.TELEGRAM_TOKEN)
            .post_init(self._on_startup)
            .post_shutdown(self._on_shutdown)
            .build()
        )
        self.setup_handlers()

    def setup_handlers(self):
        """Register the bot handlers"""
        admin = AdminHandler(self.store)
        categories = CategoryManagementHandler(self.store)
        products = ProductManagementHandler(self.store)

        self.application.add_handler(CommandHandler("admin", admin.admin_panel))
        self.application.add_handler(CommandHandler("start", admin.admin_panel))

        # Category management
        self.application.add_handler(categories.conversation_handler())

        # Product management
        self.application.add_handler(products.conversation_handler())

        self.application.add_handler(CallbackQueryHandler(admin.admin_menu, pattern='^admin_menu$'))

    async def _on_startup(self, application: Application):
        await self.store.connect()
        self.logger.info("Bot started")

    async def _on_shutdown(self, application: Application):
        await self.store.close()
        self.logger.info("Bot stopped")

    def run(self):
        """Start polling until interrupted"""
        self.logger.info("Starting bot...")
        self.application.run_polling()
