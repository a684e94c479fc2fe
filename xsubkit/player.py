"""Time-driven renderer of image subtitles onto a player canvas."""

from __future__ import annotations

import os
import threading
from time import monotonic, sleep
from typing import Callable

from PIL import Image

from .canvas import PlayerCanvas, PresentFn
from .format import Align, Placement, Point, SubEntry
from .imagesub import ImageSub, load_imagesub
from .layout import DefaultOverride, fade_alpha, place, scale_factors

_TICK = 0.001


def _blend(
    target: Image.Image,
    source: Image.Image,
    placement: Placement,
    box: tuple[int, int, int, int],
    alpha: int,
) -> bool:
    """Draw a region of ``source`` scaled into ``box`` with constant alpha."""
    x, y, width, height = box
    if width <= 0 or height <= 0 or placement.width <= 0 or placement.height <= 0:
        return False
    right = placement.x + placement.width
    bottom = placement.y + placement.height
    if placement.x < 0 or placement.y < 0 or right > source.width or bottom > source.height:
        return False
    tile = source.crop((placement.x, placement.y, right, bottom)).convert("RGBA")
    if tile.size != (width, height):
        tile = tile.resize((width, height))
    if alpha < 255:
        tile.putalpha(tile.getchannel("A").point(lambda v: v * alpha // 255))
    layer = Image.new("RGBA", target.size, (0, 0, 0, 0))
    layer.paste(tile, (x, y))
    target.alpha_composite(layer)
    return True


class ImageSubPlayer(PlayerCanvas):
    """Renders the entries of a loaded ImageSub active at a given time."""

    def __init__(
        self,
        size: tuple[int, int] = (0, 0),
        position: tuple[int, int] = (0, 0),
        on_present: PresentFn | None = None,
    ) -> None:
        super().__init__(size=size, position=position, on_present=on_present)
        self._current: ImageSub | None = None
        self._last_entry: SubEntry | None = None
        self._playing = False
        self._override = DefaultOverride()
        self._default_point = Point()

    @property
    def default_point(self) -> Point:
        with self._lock:
            return self._default_point

    @property
    def default_override(self) -> DefaultOverride:
        with self._lock:
            o = self._override
            return DefaultOverride(o.align, o.mix, o.vertical, o.horizontal)

    def load(self, source: ImageSub | str | os.PathLike[str]) -> bool:
        """Load a subtitle object or file; return whether it is usable.

        A file that decodes but holds nothing to show is not kept loaded.
        """
        if isinstance(source, ImageSub):
            with self._lock:
                self._last_entry = None
                self._current = source
                return source.is_valid()
        sub = load_imagesub(source)
        with self._lock:
            self._last_entry = None
            if sub.is_valid():
                self._current = sub
                return True
            self._current = None
            return False

    def unload(self) -> None:
        with self._lock:
            self._current = None

    def current(self) -> ImageSub | None:
        with self._lock:
            return self._current

    def is_loaded(self) -> bool:
        with self._lock:
            return self._current is not None

    def is_playing(self) -> bool:
        with self._lock:
            return self._playing

    def last_entry(self) -> SubEntry | None:
        with self._lock:
            return self._last_entry

    def update(self, time: float) -> None:
        """Redraw the canvas for the given subtitle time."""
        with self._lock:
            buffer = self._buffer
            sub = self._current
            if buffer is None or sub is None or not sub.is_valid() or sub.image is None:
                return
            canvas_w, canvas_h = self._size
            if canvas_w <= 0 or canvas_h <= 0:
                return
            try:
                scale_x, scale_y = scale_factors(self._size, sub.width, sub.height)
            except ValueError:
                return

            buffer.paste((0, 0, 0, 0), (0, 0, *buffer.size))
            count = 0
            for entry in sub.entries:
                if not entry.is_active(time):
                    continue
                self._last_entry = entry
                for placement in entry.placements:
                    point = self._override.apply(placement.point, self._default_point)
                    box = place(placement, point, self._size, scale_x, scale_y)
                    alpha = fade_alpha(entry, placement, time)
                    if _blend(buffer, sub.image, placement, box, alpha):
                        count += 1

            if count == 0 and self._last_entry is not None:
                self._last_entry = None
                self._present()
            elif count > 0:
                self._present()

    def _stop_if_playing(self) -> None:
        with self._lock:
            playing = self._playing
        if playing:
            self.stop()

    def _keep_running(self) -> bool:
        with self._lock:
            if self._current is None:
                self._playing = False
            return self._playing

    def _launch(self, run: Callable[[], None], as_thread: bool) -> threading.Thread | None:
        with self._lock:
            self._playing = True
        if as_thread:
            thread = threading.Thread(target=run, daemon=True)
            thread.start()
            return thread
        run()
        return None

    def play(self, start: float = 0.0, as_thread: bool = True) -> threading.Thread | None:
        """Play from ``start`` seconds using a monotonic clock; clear when done."""
        self._stop_if_playing()

        def run() -> None:
            begin = monotonic()
            while self._keep_running():
                self.update(monotonic() - begin + start)
                sleep(_TICK)
            self.clear()

        return self._launch(run, as_thread)

    def play_with_clock(
        self, get_time: Callable[[], float] | None, as_thread: bool = True
    ) -> threading.Thread | None:
        """Play with times supplied by ``get_time`` on each frame."""
        if get_time is None:
            return None
        self._stop_if_playing()

        def run() -> None:
            while self._keep_running():
                self.update(get_time())
                sleep(_TICK)

        return self._launch(run, as_thread)

    def stop(self, await_for_last: bool = False) -> None:
        """Stop playback, optionally waiting until nothing is on screen."""
        with self._lock:
            if not self._playing:
                return
        if await_for_last:
            while True:
                with self._lock:
                    if self._last_entry is None:
                        break
                sleep(_TICK)
        with self._lock:
            self._playing = False

    def set_default_point(self, point: Point) -> None:
        with self._lock:
            self._default_point = point

    def set_default_align(self, align: Align) -> None:
        with self._lock:
            p = self._default_point
            self._default_point = Point(Align(align), p.vertical, p.horizontal)

    def set_default_vertical(self, vertical: int) -> None:
        with self._lock:
            p = self._default_point
            self._default_point = Point(p.align, vertical, p.horizontal)

    def set_default_horizontal(self, horizontal: int) -> None:
        with self._lock:
            p = self._default_point
            self._default_point = Point(p.align, p.vertical, horizontal)

    def use_default_point(self, mix_mode: bool = False) -> None:
        with self._lock:
            self._override = DefaultOverride(
                align=True, mix=mix_mode, vertical=True, horizontal=True
            )

    def use_default_align(self, mix_mode: bool = False) -> None:
        with self._lock:
            if mix_mode:
                self._override.mix = True
            self._override.align = True

    def use_default_vertical(self) -> None:
        with self._lock:
            self._override.vertical = True

    def use_default_horizontal(self) -> None:
        with self._lock:
            self._override.horizontal = True

    def unuse_default_point(self) -> None:
        with self._lock:
            self._override = DefaultOverride()

    def unuse_default_align(self) -> None:
        with self._lock:
            self._override.align = False

    def unuse_default_vertical(self) -> None:
        with self._lock:
            self._override.vertical = False

    def unuse_default_horizontal(self) -> None:
        with self._lock:
            self._override.horizontal = False