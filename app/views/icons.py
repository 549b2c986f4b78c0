"""Menu bar icon generation for Day Tally.

Draws a small calendar page with the day number on it. Icons are cached
per day and size.

Usage:
    from app.views.icons import IconGenerator

    icons = IconGenerator()
    path = icons.create_calendar_icon(15)
"""
import tempfile
from pathlib import Path
from typing import Dict, Optional

from PIL import Image, ImageDraw, ImageFont

from config import COLORS, STORAGE, UI, get_logger

logger = get_logger(__name__)


class IconGenerator:
    """Generates and caches icons for the menu bar application."""

    def __init__(self, temp_dir: Optional[Path] = None):
        self._temp_dir = temp_dir or Path(tempfile.gettempdir()) / STORAGE.ICON_TEMP_DIR
        self._temp_dir.mkdir(parents=True, exist_ok=True)
        self._cache: Dict[str, str] = {}
        logger.debug(f"IconGenerator initialized, temp dir: {self._temp_dir}")

    def create_calendar_icon(self, day: int, size: Optional[int] = None) -> str:
        """Create a calendar page icon showing ``day``.

        Args:
            day: Day of the month printed on the page.
            size: Icon size in pixels (default from UI config).

        Returns:
            Path to the generated PNG file.
        """
        size = size or UI.STATUS_ICON_SIZE
        cache_key = f"calendar_{day}_{size}"

        if cache_key in self._cache:
            return self._cache[cache_key]

        img = Image.new('RGBA', (size, size), (0, 0, 0, 0))
        draw = ImageDraw.Draw(img)

        # Page with an orange header band
        pad = 1
        header = max(3, size // 4)
        draw.rectangle([pad, pad, size - pad - 1, size - pad - 1],
                       fill=COLORS.PAGE_RGBA, outline=COLORS.OUTLINE_RGBA)
        draw.rectangle([pad, pad, size - pad - 1, pad + header], fill=COLORS.HEADER_RGBA)

        text = str(day)
        font = ImageFont.load_default()
        left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
        x = (size - (right - left)) / 2 - left
        y = pad + header + (size - pad - header - (bottom - top)) / 2 - top
        draw.text((x, y), text, fill=COLORS.TEXT_RGBA, font=font)

        icon_path = self._temp_dir / f'{cache_key}.png'
        img.save(icon_path, 'PNG')

        self._cache[cache_key] = str(icon_path)
        return str(icon_path)

    def clear_cache(self) -> None:
        """Forget cached icons and delete their files."""
        for path in self._cache.values():
            Path(path).unlink(missing_ok=True)
        self._cache.clear()
