"""Off-screen RGBA canvas that stands in for a layered overlay window."""

from __future__ import annotations

import threading
from typing import Callable

from PIL import Image

DrawFn = Callable[[Image.Image, tuple[int, int]], bool]
PresentFn = Callable[[Image.Image, tuple[int, int], int], None]


def unpack_argb(color: int) -> tuple[int, int, int, int]:
    """Split a 32-bit 0xAARRGGBB value into (alpha, red, green, blue)."""
    if not 0 <= color <= 0xFFFFFFFF:
        raise ValueError(f"colour out of range: {color:#x}")
    return (color >> 24) & 0xFF, (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF


def _cdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


class PlayerCanvas:
    """A drawing surface with a size, a screen position and a global alpha.

    Finished frames are handed to ``on_present`` together with the canvas
    position and alpha; that callback is where a real display would blit them.
    """

    def __init__(
        self,
        size: tuple[int, int] = (0, 0),
        position: tuple[int, int] = (0, 0),
        on_present: PresentFn | None = None,
    ) -> None:
        self._lock = threading.RLock()
        self._size = (int(size[0]), int(size[1]))
        self._position = (int(position[0]), int(position[1]))
        self._alpha = 0
        self._buffer: Image.Image | None = None
        self._on_present = on_present

    @property
    def size(self) -> tuple[int, int]:
        with self._lock:
            return self._size

    @property
    def position(self) -> tuple[int, int]:
        with self._lock:
            return self._position

    @property
    def alpha(self) -> int:
        with self._lock:
            return self._alpha

    @property
    def buffer(self) -> Image.Image | None:
        with self._lock:
            return self._buffer

    def set_rect(self, left: int, top: int, right: int, bottom: int) -> bool:
        with self._lock:
            self._size = (right - left, bottom - top)
            self._position = (left, top)
            return True

    def set_size(self, width: int, height: int) -> bool:
        with self._lock:
            self._size = (width, height)
            return True

    def set_position(self, x: int, y: int) -> bool:
        with self._lock:
            self._position = (x, y)
            return True

    def show(self) -> bool:
        """Make the canvas fully opaque and present it."""
        with self._lock:
            self._alpha = 0xFF
            self._present()
            return self._alpha != 0

    def hide(self) -> bool:
        """Make the canvas fully transparent and present it."""
        with self._lock:
            self._alpha = 0
            self._present()
            return self._alpha == 0

    def is_visible(self) -> bool:
        with self._lock:
            return self._alpha != 0

    def ensure_buffer(self) -> bool:
        """Make sure the back buffer covers the current size."""
        with self._lock:
            width, height = self._size
            if self._buffer is not None:
                buf_w, buf_h = self._buffer.size
                if buf_w >= width and buf_h >= height:
                    return True
            return self._make_buffer(width, height)

    def _make_buffer(self, width: int, height: int) -> bool:
        if width <= 0 or height <= 0:
            return False
        self._buffer = Image.new("RGBA", (width, height), (0, 0, 0, 0))
        return True

    def safe_draw(self, draw: DrawFn | None) -> bool:
        """Run ``draw(buffer, size)`` under the lock while visible; present if it drew."""
        if draw is None:
            return False
        with self._lock:
            if self._buffer is None or self._alpha == 0:
                return False
            if draw(self._buffer, self._size):
                return self._present()
            return False

    def clear(self, color: int = 0) -> None:
        """Fill the whole buffer with a 0xAARRGGBB colour and present it."""
        self._clear(color, update=True)

    def _clear(self, color: int, update: bool) -> None:
        a, r, g, b = unpack_argb(color)
        with self._lock:
            if self._buffer is None:
                return
            self._buffer.paste((r, g, b, a), (0, 0, *self._buffer.size))
            if update:
                self._present()

    def sync_to_parent(
        self,
        window_rect: tuple[int, int, int, int],
        client_size: tuple[int, int],
        is_popup: bool,
        screen_size: tuple[int, int],
        caption_height: int,
    ) -> bool:
        """Centre the canvas over a parent window given its geometry."""
        left, top, right, bottom = window_rect
        width, height = client_size
        screen_w, screen_h = screen_size
        full_screen = (
            is_popup
            and left <= 0
            and top <= 0
            and right >= screen_w
            and bottom >= screen_h
        )
        with self._lock:
            self._size = (width, height)
            x = _cdiv(left + right, 2) - _cdiv(width, 2)
            y = _cdiv(top + bottom, 2) - _cdiv(height, 2)
            if not full_screen:
                y += _cdiv(caption_height + 1, 2)
            self._position = (x, y)
            return True

    def _present(self) -> bool:
        """Hand the visible part of the buffer to the presenter."""
        if self._buffer is None:
            return False
        if self._on_present is not None:
            width, height = self._size
            frame = self._buffer.crop((0, 0, max(width, 0), max(height, 0)))
            self._on_present(frame, self._position, self._alpha)
        return True