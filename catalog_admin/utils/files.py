# catalog_admin/utils/files.py
from typing import Optional

# Image types accepted for product pictures
ALLOWED_IMAGE_TYPES = {'image/jpeg', 'image/png', 'image/gif', 'image/webp'}

MAX_IMAGE_SIZE = 10 * 1024 * 1024  # 10MB


def detect_mime_type(content: bytes) -> str:
    """Sniff the MIME type of raw file content"""
    # libmagic is loaded on first use only
    import magic
    return magic.from_buffer(content, mime=True)


def resolve_image_type(content: bytes, declared: Optional[str] = None) -> Optional[str]:
    """Declared or sniffed type when it is an accepted image type, else None"""
    mime_type = declared or detect_mime_type(content)
    return mime_type if mime_type in ALLOWED_IMAGE_TYPES else None
