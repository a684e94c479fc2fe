"""Scaling, anchoring and fading of subtitle placements on a canvas."""

from __future__ import annotations

from dataclasses import dataclass

from .format import Align, Placement, Point, SubEntry


@dataclass
class DefaultOverride:
    """Which parts of a player-wide default point replace an entry's own point.

    With ``mix`` set, an overridden anchor is the union of the entry's and the
    default's flags instead of the default's flags alone.
    """

    align: bool = False
    mix: bool = False
    vertical: bool = False
    horizontal: bool = False

    def apply(self, point: Point, default: Point) -> Point:
        """Return ``point`` with the enabled fields taken from ``default``."""
        align = point.align
        if self.align:
            align = Align(point.align | default.align) if self.mix else default.align
        return Point(
            align=align,
            vertical=default.vertical if self.vertical else point.vertical,
            horizontal=default.horizontal if self.horizontal else point.horizontal,
        )


def scale_factors(
    canvas_size: tuple[int, int], sub_width: float, sub_height: float
) -> tuple[float, float]:
    """Horizontal and vertical scale that fits the subtitle canvas into the target.

    The subtitle's aspect ratio is kept: the shorter side of the target decides.
    """
    width, height = float(canvas_size[0]), float(canvas_size[1])
    if width <= 0 or height <= 0:
        raise ValueError(f"canvas size must be positive: {canvas_size!r}")
    if sub_width <= 0 or sub_height <= 0:
        raise ValueError(f"subtitle size must be positive: {(sub_width, sub_height)!r}")
    sub_ratio = sub_width / sub_height
    if width / height != sub_ratio:
        if width <= height:
            height = width / sub_ratio
        else:
            width = height * sub_ratio
    return width / sub_width, height / sub_height


def _round(value: float) -> int:
    return int(value + 0.5)


def place(
    placement: Placement,
    point: Point,
    canvas_size: tuple[int, int],
    scale_x: float,
    scale_y: float,
) -> tuple[int, int, int, int]:
    """Destination ``(x, y, width, height)`` of a placement on the canvas.

    ``point`` supplies the anchor flags; the offsets are the placement's own.
    The height follows the scaled width so the region keeps its aspect ratio.
    """
    canvas_w, canvas_h = canvas_size
    width = _round(placement.width * scale_x)
    if placement.width and placement.height:
        height = _round(width / (placement.width / placement.height))
    else:
        height = 0

    scaled_w = placement.width * scale_x
    scaled_h = placement.height * scale_y
    offset_x = placement.point.horizontal * scale_x
    offset_y = placement.point.vertical * scale_y

    if point.align & Align.RIGHT:
        x = _round(canvas_w - scaled_w - offset_x)
    elif point.align & Align.CENTER:
        x = _round((canvas_w - scaled_w) / 2.0 + offset_x)
    else:
        x = _round(offset_x)

    if point.align & Align.BOTTOM:
        y = _round(canvas_h - scaled_h - offset_y)
    elif point.align & Align.MIDDLE:
        y = _round((canvas_h - scaled_h) / 2.0 + offset_y)
    else:
        y = _round(offset_y)

    return x, y, width, height


def fade_alpha(entry: SubEntry, placement: Placement, time: float) -> int:
    """Constant alpha (0-255) of a placement at ``time`` within its entry."""
    fadein_end = entry.start + placement.fadein
    fadeout_start = entry.end - placement.fadeout
    alpha = 255.0
    if placement.fadein > 0 and time <= fadein_end:
        alpha = (time - entry.start) / placement.fadein * 255.0
    elif placement.fadeout > 0 and time >= fadeout_start:
        alpha = (entry.end - time) / placement.fadeout * 255.0
    return max(0, min(255, int(alpha)))