"""Home screen drawing.

Reads the controller each frame and draws the background, the tile grid
with the selection and launch flash, and the clock. Never changes
controller state.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import pygame

from ..config.models import AppEntry, LauncherSettings
from ..system.paths import expand_tilde
from .controller import LaunchController

logger = logging.getLogger(__name__)

Rect = Tuple[int, int, int, int]

# Colors
BG_COLOR = (15, 20, 30)
CARD_BG = (40, 50, 65)
SELECTED_CARD_BG = (70, 110, 160)
TEXT_COLOR = (255, 255, 255)
FLASH_COLOR = (255, 255, 255)

TILE_SCALE = 0.75
TILE_GAP = 40
TILE_RADIUS = 12
ICON_PADDING = 0.10
FLASH_MAX_ALPHA = 200
CLOCK_MARGIN = 20
CLOCK_FONT_SIZE = 100
LABEL_FONT_SIZE = 42


def cover_crop(img_w: int, img_h: int, screen_w: int, screen_h: int) -> Rect:
    """Source rectangle that fills the screen without distortion.

    The image is scaled to cover the screen and the overflow is cropped
    equally from both sides of the longer dimension.

    Returns:
        (x, y, w, h) in image pixels
    """
    if img_w <= 0 or img_h <= 0 or screen_w <= 0 or screen_h <= 0:
        return 0, 0, max(img_w, 0), max(img_h, 0)

    screen_aspect = screen_w / screen_h
    img_aspect = img_w / img_h

    if img_aspect > screen_aspect:
        crop_w = round(img_h * screen_aspect)
        return (img_w - crop_w) // 2, 0, crop_w, img_h

    crop_h = round(img_w / screen_aspect)
    return 0, (img_h - crop_h) // 2, img_w, crop_h


def tile_rects(
    screen_w: int, screen_h: int, rows: int, cols: int, gap: int = TILE_GAP
) -> List[Rect]:
    """Screen rectangles of every grid cell, row by row, centered.

    Returns:
        One (x, y, w, h) per cell, ``rows * cols`` in total
    """
    tile_w = int(screen_w / cols * TILE_SCALE)
    tile_h = int(screen_h / rows * TILE_SCALE)

    total_w = tile_w * cols + gap * (cols - 1)
    total_h = tile_h * rows + gap * (rows - 1)
    offset_x = (screen_w - total_w) // 2
    offset_y = (screen_h - total_h) // 2

    rects = []
    for row in range(rows):
        for col in range(cols):
            x = offset_x + col * (tile_w + gap)
            y = offset_y + row * (tile_h + gap)
            rects.append((x, y, tile_w, tile_h))
    return rects


def icon_rect(tile: Rect) -> Rect:
    """Icon area inside a tile, padded by a fraction of the tile width."""
    x, y, w, h = tile
    pad = int(w * ICON_PADDING)
    return x + pad, y + pad, max(w - 2 * pad, 0), max(h - 2 * pad, 0)


class ImageCache:
    """Loads images once per path. Failed paths are remembered as None."""

    def __init__(self):
        """Initialize image cache."""
        self._images: Dict[str, Optional[pygame.Surface]] = {}

    def get(self, path: str) -> Optional[pygame.Surface]:
        """Load (or return the cached) image for ``path``.

        Args:
            path: Image path, may start with ~

        Returns:
            Surface, or None if the path is empty or cannot be loaded
        """
        if not path:
            return None

        if path not in self._images:
            resolved = Path(expand_tilde(path))
            try:
                image = pygame.image.load(str(resolved))
                if pygame.display.get_surface() is not None:
                    image = image.convert_alpha()
                self._images[path] = image
            except (pygame.error, OSError) as e:
                logger.warning(f"Cannot load image {resolved}: {e}")
                self._images[path] = None

        return self._images[path]


class HomeScreenRenderer:
    """Draws the launcher for one frame."""

    def __init__(self, settings: LauncherSettings, images: Optional[ImageCache] = None):
        """Initialize renderer.

        Args:
            settings: Launcher settings (grid size, background, clock)
            images: Image cache (a fresh one by default)
        """
        self.settings = settings
        self.images = images or ImageCache()
        self._background: Optional[pygame.Surface] = None
        self._background_size: Optional[Tuple[int, int]] = None
        self._clock_font: Optional[pygame.font.Font] = None
        self._label_font: Optional[pygame.font.Font] = None

    def _fonts(self) -> Tuple[pygame.font.Font, pygame.font.Font]:
        if self._clock_font is None:
            self._clock_font = pygame.font.Font(None, CLOCK_FONT_SIZE)
            self._label_font = pygame.font.Font(None, LABEL_FONT_SIZE)
        return self._clock_font, self._label_font

    def _scaled_background(self, size: Tuple[int, int]) -> Optional[pygame.Surface]:
        if self._background is not None and self._background_size == size:
            return self._background

        image = self.images.get(self.settings.background)
        if image is None:
            return None

        crop = cover_crop(image.get_width(), image.get_height(), *size)
        self._background = pygame.transform.smoothscale(image.subsurface(crop), size)
        self._background_size = size
        return self._background

    def draw(
        self,
        screen: pygame.Surface,
        controller: LaunchController,
        now: Optional[datetime] = None,
    ) -> None:
        """Draw one frame onto ``screen``.

        Args:
            screen: Target surface
            controller: Source of selection and flash state
            now: Wall-clock time for the clock (defaults to now)
        """
        size = screen.get_size()

        background = self._scaled_background(size)
        if background is not None:
            screen.blit(background, (0, 0))
        else:
            screen.fill(BG_COLOR)

        tint = pygame.Surface(size, pygame.SRCALPHA)
        tint.fill((0, 0, 0, self.settings.tint_alpha))
        screen.blit(tint, (0, 0))

        self._draw_tiles(screen, controller)
        self._draw_clock(screen, now or datetime.now())

    def _draw_tiles(self, screen: pygame.Surface, controller: LaunchController) -> None:
        grid = controller.grid
        rects = tile_rects(*screen.get_size(), grid.rows, grid.cols)
        selected = controller.selected_index()
        flash = controller.animation_progress()

        entries: Sequence[AppEntry] = controller.entries
        for idx, rect in enumerate(rects):
            if not grid.contains(idx):
                continue

            tile = pygame.Rect(rect)
            color = SELECTED_CARD_BG if idx == selected else CARD_BG
            pygame.draw.rect(screen, color, tile, border_radius=TILE_RADIUS)

            if flash is not None and flash[0] == idx:
                overlay = pygame.Surface(tile.size, pygame.SRCALPHA)
                pygame.draw.rect(
                    overlay,
                    (*FLASH_COLOR, int(FLASH_MAX_ALPHA * flash[1])),
                    overlay.get_rect(),
                    border_radius=TILE_RADIUS,
                )
                screen.blit(overlay, tile.topleft)

            self._draw_icon(screen, entries[idx], rect)

    def _draw_icon(self, screen: pygame.Surface, entry: AppEntry, tile: Rect) -> None:
        x, y, w, h = icon_rect(tile)
        icon = self.images.get(entry.icon_path)

        if icon is None:
            # No icon: show the name instead
            _, label_font = self._fonts()
            label = label_font.render(entry.identifier, True, TEXT_COLOR)
            screen.blit(label, label.get_rect(center=(x + w // 2, y + h // 2)))
            return

        screen.blit(pygame.transform.smoothscale(icon, (w, h)), (x, y))

    def _draw_clock(self, screen: pygame.Surface, now: datetime) -> None:
        clock_font, _ = self._fonts()
        text = clock_font.render(now.strftime(self.settings.clock_format), True, TEXT_COLOR)
        rect = text.get_rect(right=screen.get_width() - CLOCK_MARGIN, top=CLOCK_MARGIN)
        screen.blit(text, rect)
