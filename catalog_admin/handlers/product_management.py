# catalog_admin/handlers/product_management.py
from decimal import Decimal, InvalidOperation
from telegram import Update
from telegram.ext import (
    ContextTypes, ConversationHandler, CommandHandler,
    MessageHandler, CallbackQueryHandler, filters
)
from .base_handler import BaseHandler, ID_PATTERN
from ..config import Config
from ..models.product import ImageFile
from ..constants import (
    PRODUCT_LIST, CONFIRM_DELETE_PRODUCT, WAITING_PRODUCT_IMAGE,
    WAITING_PRODUCT_TITLE, WAITING_PRODUCT_PRICE, WAITING_PRODUCT_CATEGORY,
    PRODUCTS_PAGE
)

class ProductManagementHandler(BaseHandler):
    """Paginated product browser with create, image and delete actions"""

    async def _show_page(self, update: Update, context: ContextTypes.DEFAULT_TYPE,
                         page_number: int, notice: str = ""):
        """Fetch and show one page of products"""
        try:
            page = await self.product_service.get_products_by_page(page_number, Config.PRODUCTS_PAGE_SIZE)
        except Exception as e:
            text = f"{notice}❌ Error loading products: {e}"
            reply_markup = self.keyboards.cancel_keyboard("admin_menu")
        else:
            context.user_data[PRODUCTS_PAGE] = page_number
            text = self.messages.products_page(page, page_number, notice)
            reply_markup = self.keyboards.products_page(page, page_number)

        if update.callback_query:
            await update.callback_query.edit_message_text(text, reply_markup=reply_markup)
        else:
            await update.message.reply_text(text, reply_markup=reply_markup)
        return PRODUCT_LIST

    async def show_products(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        """Show the first page, or the page named in the callback"""
        query = update.callback_query
        await query.answer()

        if not await self.is_admin(update.effective_user.id):
            await query.edit_message_text(self.messages.ACCESS_DENIED)
            return ConversationHandler.END

        page_number = self._callback_id(update) if query.data.startswith("products_page_") else 1
        return await self._show_page(update, context, page_number)

    async def view_product(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        """Show product details"""
        query = update.callback_query
        await query.answer()

        product_id = self._callback_id(update)
        current_page = context.user_data.get(PRODUCTS_PAGE, 1)
        try:
            product = await self.product_service.get_product(product_id)
        except Exception as e:
            return await self._show_page(update, context, current_page, f"❌ {e}\n\n")

        await query.edit_message_text(
            self.messages.format_product(product),
            reply_markup=self.keyboards.product_menu(product, current_page)
        )
        return PRODUCT_LIST

    async def handle_delete_product(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        """Ask for confirmation before deleting"""
        query = update.callback_query
        await query.answer()

        product_id = self._callback_id(update)
        await query.edit_message_text(
            "⚠️ Are you sure you want to delete this product?",
            reply_markup=self.keyboards.confirm_delete('product', product_id, f"view_product_{product_id}")
        )
        return CONFIRM_DELETE_PRODUCT

    async def handle_delete_confirmation(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        query = update.callback_query
        await query.answer()

        product_id = self._callback_id(update)
        current_page = context.user_data.get(PRODUCTS_PAGE, 1)
        try:
            await self.product_service.delete_product(product_id)
        except Exception as e:
            notice = f"❌ Error deleting product: {e}\n\n"
        else:
            notice = "✅ Product deleted successfully!\n\n"
        return await self._show_page(update, context, current_page, notice)

    async def start_set_image(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        query = update.callback_query
        await query.answer()

        product_id = self._callback_id(update)
        context.user_data['image_product_id'] = product_id
        await query.edit_message_text(
            "🖼 Send the product image as a photo or an image file:",
            reply_markup=self.keyboards.cancel_keyboard(f"view_product_{product_id}")
        )
        return WAITING_PRODUCT_IMAGE

    async def handle_product_image(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        """Upload the received image and store its key on the product"""
        message = update.message
        product_id = context.user_data.get('image_product_id')

        if message.photo:
            tg_file = await message.photo[-1].get_file()
            name = tg_file.file_path.rsplit('/', 1)[-1] if tg_file.file_path else "photo.jpg"
            content_type = "image/jpeg"
        else:
            tg_file = await message.document.get_file()
            name = message.document.file_name or "image"
            content_type = message.document.mime_type

        content = bytes(await tg_file.download_as_bytearray())
        image = ImageFile(name=name, content=content, content_type=content_type)

        try:
            product = await self.product_service.set_product_image(product_id, image)
        except Exception as e:
            await message.reply_text(
                f"❌ Error uploading image: {e}\n"
                "Please send another image or /cancel."
            )
            return WAITING_PRODUCT_IMAGE

        context.user_data.pop('image_product_id', None)
        await message.reply_text(
            "✅ Image saved.\n\n" + self.messages.format_product(product),
            reply_markup=self.keyboards.product_menu(product, context.user_data.get(PRODUCTS_PAGE, 1))
        )
        return PRODUCT_LIST

    async def start_add_product(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        query = update.callback_query
        await query.answer()

        context.user_data['new_product'] = {}
        await query.edit_message_text(
            "🏷 Enter the product title:",
            reply_markup=self.keyboards.cancel_keyboard()
        )
        return WAITING_PRODUCT_TITLE

    async def handle_product_title(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        title = update.message.text.strip()
        if not title:
            await update.message.reply_text("❌ The title cannot be empty. Enter the product title:")
            return WAITING_PRODUCT_TITLE

        context.user_data['new_product']['title'] = title
        await update.message.reply_text(
            "💰 Enter the product price:",
            reply_markup=self.keyboards.cancel_keyboard()
        )
        return WAITING_PRODUCT_PRICE

    async def handle_product_price(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        try:
            price = Decimal(update.message.text.strip())
            if price <= 0:
                raise ValueError("The price must be greater than zero")
        except (InvalidOperation, ValueError) as e:
            reason = str(e) if isinstance(e, ValueError) and str(e) else "Invalid number"
            await update.message.reply_text(
                f"❌ Error: {reason}\n"
                "Please enter a valid price:"
            )
            return WAITING_PRODUCT_PRICE

        context.user_data['new_product']['price'] = price
        try:
            categories = await self.category_service.get_categories()
        except Exception as e:
            await update.message.reply_text(f"❌ Error loading categories: {e}")
            context.user_data.pop('new_product', None)
            return ConversationHandler.END

        await update.message.reply_text(
            "🗂 Choose the product category:",
            reply_markup=self.keyboards.category_picker(categories)
        )
        return WAITING_PRODUCT_CATEGORY

    async def handle_category_selection(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        """Create the product once its category is chosen"""
        query = update.callback_query
        await query.answer()

        product_data = context.user_data.pop('new_product', {})
        product_data['category_id'] = self._callback_id(update)
        try:
            product = await self.product_service.create_product(product_data)
        except Exception as e:
            notice = f"❌ Error creating product: {e}\n\n"
            return await self._show_page(update, context, context.user_data.get(PRODUCTS_PAGE, 1), notice)

        await query.edit_message_text(
            "✅ Product created successfully!\n\n" + self.messages.format_product(product),
            reply_markup=self.keyboards.product_menu(product, context.user_data.get(PRODUCTS_PAGE, 1))
        )
        return PRODUCT_LIST

    async def back_to_admin_menu(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        query = update.callback_query
        await query.answer()
        context.user_data.clear()
        await query.edit_message_text("🔧 Admin panel:", reply_markup=self.keyboards.admin_menu())
        return ConversationHandler.END

    def conversation_handler(self) -> ConversationHandler:
        """Conversation handler for product management"""
        browse = [
            CallbackQueryHandler(self.show_products, pattern=r'^products_page_\d+$'),
            CallbackQueryHandler(self.view_product, pattern=rf'^view_product_{ID_PATTERN}$'),
        ]
        return ConversationHandler(
            entry_points=[
                CallbackQueryHandler(self.show_products, pattern=r'^(manage_products|products_page_\d+)$')
            ],
            states={
                PRODUCT_LIST: browse + [
                    CallbackQueryHandler(self.start_add_product, pattern='^add_product$'),
                    CallbackQueryHandler(self.start_set_image, pattern=rf'^product_image_{ID_PATTERN}$'),
                    CallbackQueryHandler(self.handle_delete_product, pattern=rf'^delete_product_{ID_PATTERN}$'),
                ],
                CONFIRM_DELETE_PRODUCT: browse + [
                    CallbackQueryHandler(self.handle_delete_confirmation, pattern=rf'^confirm_delete_product_{ID_PATTERN}$'),
                ],
                WAITING_PRODUCT_IMAGE: browse + [
                    MessageHandler(filters.PHOTO | filters.Document.IMAGE, self.handle_product_image),
                ],
                WAITING_PRODUCT_TITLE: [
                    MessageHandler(filters.TEXT & ~filters.COMMAND, self.handle_product_title),
                ],
                WAITING_PRODUCT_PRICE: [
                    MessageHandler(filters.TEXT & ~filters.COMMAND, self.handle_product_price),
                ],
                WAITING_PRODUCT_CATEGORY: [
                    CallbackQueryHandler(self.handle_category_selection, pattern=rf'^product_category_{ID_PATTERN}$'),
                ],
            },
            fallbacks=[
                CommandHandler('cancel', self.cancel_conversation),
                CallbackQueryHandler(self.cancel_conversation, pattern='^cancel$'),
                CallbackQueryHandler(self.back_to_admin_menu, pattern='^admin_menu$'),
            ]
        )
