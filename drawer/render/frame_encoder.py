"""Still-image encoding for canvas export."""

import io
from pathlib import Path
from typing import Optional

from PIL import Image

from ..config import settings

SUPPORTED_FORMATS = ("PNG", "JPEG")


class FrameEncoder:
    """Encodes PIL images to PNG or JPEG bytes."""

    def __init__(self, format: Optional[str] = None, quality: Optional[int] = None):
        self.format = (format or settings.export_format).upper()
        if self.format not in SUPPORTED_FORMATS:
            raise ValueError(f"Unsupported export format: {self.format}")
        self.quality = quality or settings.jpeg_quality

    @staticmethod
    def format_for_path(path: str) -> str:
        """Pick a format from a file extension, defaulting to PNG."""
        suffix = Path(path).suffix.lower()
        if suffix in (".jpg", ".jpeg"):
            return "JPEG"
        return "PNG"

    def encode(self, image: Image.Image) -> bytes:
        """Encode a PIL image to bytes."""
        buffer = io.BytesIO()
        if self.format == "JPEG":
            image.convert("RGB").save(buffer, format="JPEG", quality=self.quality, optimize=False)
        else:
            image.save(buffer, format="PNG")
        return buffer.getvalue()

    def save(self, image: Image.Image, path: str) -> None:
        """Encode and write to path, creating parent directories."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(self.encode(image))
