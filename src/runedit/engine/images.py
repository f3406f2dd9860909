"""Icon image decoding and encoding"""

import base64
import binascii
import logging
from io import BytesIO
from typing import Optional

from PIL import Image, UnidentifiedImageError


logger = logging.getLogger(__name__)

# Formats an icon may be stored in
ICON_FORMATS = ("PNG", "JPEG", "GIF", "BMP", "ICO", "WEBP")


def sniff_mime_type(data: bytes) -> Optional[str]:
    """MIME type of a decodable icon image, or None if the bytes aren't one"""
    try:
        with Image.open(BytesIO(data)) as img:
            fmt = img.format
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as e:
        logger.debug("Rejected icon data: %s", e)
        return None

    if fmt not in ICON_FORMATS:
        return None
    return Image.MIME.get(fmt)


def encode_icon(data: bytes) -> Optional[str]:
    """Base64 encode icon bytes for storage, None if not an image"""
    if sniff_mime_type(data) is None:
        return None
    return base64.b64encode(data).decode("ascii")


def icon_url(encoded: str) -> str:
    """Data URL for a stored icon; empty string when there is no icon"""
    if not encoded:
        return ""
    try:
        data = base64.b64decode(encoded, validate=True)
    except binascii.Error:
        return ""
    mime = sniff_mime_type(data) or "application/octet-stream"
    return f"data:{mime};base64,{encoded}"
