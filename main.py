# main.py
import logging
from catalog_admin.bot import CatalogAdminBot
from catalog_admin.config import setup_logging

def main():
    # Setup logging
    setup_logging()
    logger = logging.getLogger(__name__)

    try:
        bot = CatalogAdminBot()
        bot.run()
    except Exception as e:
        logger.error(f"Error starting bot: {e}", exc_info=True)
        raise

if __name__ == "__main__":
    main()
