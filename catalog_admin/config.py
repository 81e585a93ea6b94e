# catalog_admin/config.py
import os
import logging
from pathlib import Path
from dotenv import load_dotenv
from typing import List

# Load environment variables
load_dotenv()

# Base directory of the project
BASE_DIR = Path(__file__).resolve().parent.parent

class Config:
    """Configuration settings for the bot"""

    # Bot settings
    TELEGRAM_TOKEN: str = os.getenv("TELEGRAM_TOKEN", "")

    # Remote store settings
    SUPABASE_URL: str = os.getenv("SUPABASE_URL", "").rstrip("/")
    SUPABASE_KEY: str = os.getenv("SUPABASE_KEY", "")
    IMAGE_BUCKET: str = os.getenv("IMAGE_BUCKET", "product-images")
    STORE_TIMEOUT: float = float(os.getenv("STORE_TIMEOUT", "30"))

    # Admin settings
    ADMIN_IDS: List[int] = [
        int(id_) for id_ in os.getenv("ADMIN_IDS", "").split(",")
        if id_.strip().isdigit()
    ]

    # Other settings
    PRODUCTS_PAGE_SIZE: int = int(os.getenv("PRODUCTS_PAGE_SIZE", "12"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Paths
    LOG_DIR = BASE_DIR / "logs"

    REQUIRED = ("TELEGRAM_TOKEN", "SUPABASE_URL", "SUPABASE_KEY")

    @classmethod
    def validate(cls):
        """Fail fast on missing required settings"""
        for name in cls.REQUIRED:
            if not getattr(cls, name):
                raise ValueError(f"No {name} set in environment")

def setup_logging():
    """Configure logging settings"""
    log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    Config.LOG_DIR.mkdir(exist_ok=True)
    log_file = Config.LOG_DIR / "bot.log"

    logging.basicConfig(
        level=getattr(logging, Config.LOG_LEVEL),
        format=log_format,
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler()
        ]
    )
