"""Binary layout of xsub image-subtitle files."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntFlag
from typing import Iterable

MAGIC = b"xsub"
IMAGE_TYPE = b"\x01\x00\x00\x00"

_HEADER = struct.Struct("<4s4sHHI")
_POINT = struct.Struct("<BHH")
_PLACEMENT = struct.Struct("<BHHffiiii")
_ENTRY_HEAD = struct.Struct("<ffH")

HEADER_SIZE = _HEADER.size
POINT_SIZE = _POINT.size
PLACEMENT_SIZE = _PLACEMENT.size
ENTRY_HEADER_SIZE = _ENTRY_HEAD.size


class XsubFormatError(ValueError):
    """Raised when xsub data is malformed."""


class Align(IntFlag):
    """Anchoring flags for a placed subtitle image."""

    NONE = 0
    LEFT = 1 << 0
    RIGHT = 1 << 1
    TOP = 1 << 2
    BOTTOM = 1 << 3
    CENTER = 1 << 4
    MIDDLE = 1 << 5


def _pack(layout: struct.Struct, *values: object) -> bytes:
    try:
        return layout.pack(*values)
    except struct.error as exc:
        raise ValueError(f"value out of range: {exc}") from exc


@dataclass(frozen=True)
class Point:
    """Anchor and offsets of a placement on the canvas."""

    align: Align = Align.NONE
    vertical: int = 0
    horizontal: int = 0

    def pack(self) -> bytes:
        return _pack(_POINT, int(self.align), self.vertical, self.horizontal)


def parse_point(data: bytes) -> Point:
    """Decode a packed point."""
    if len(data) < POINT_SIZE:
        raise XsubFormatError("truncated point")
    align, vertical, horizontal = _POINT.unpack_from(data)
    return Point(Align(align), vertical, horizontal)


@dataclass(frozen=True)
class XsubHeader:
    """Fixed file header: canvas size and length of the entry block."""

    width: int
    height: int
    size: int
    magic: bytes = MAGIC
    type: bytes = IMAGE_TYPE

    def pack(self) -> bytes:
        return _pack(_HEADER, self.magic, self.type, self.width, self.height, self.size)


def parse_header(data: bytes) -> XsubHeader:
    """Decode and validate a file header."""
    if len(data) < HEADER_SIZE:
        raise XsubFormatError("truncated header")
    magic, kind, width, height, size = _HEADER.unpack_from(data)
    if magic != MAGIC:
        raise XsubFormatError(f"bad magic {magic!r}")
    if kind != IMAGE_TYPE:
        raise XsubFormatError(f"unsupported subtitle type {kind!r}")
    return XsubHeader(width=width, height=height, size=size, magic=magic, type=kind)


@dataclass(frozen=True)
class Placement:
    """One image region drawn while its subtitle entry is active."""

    point: Point
    fadein: float
    fadeout: float
    x: int
    y: int
    width: int
    height: int

    def pack(self) -> bytes:
        return _pack(
            _PLACEMENT,
            int(self.point.align),
            self.point.vertical,
            self.point.horizontal,
            self.fadein,
            self.fadeout,
            self.x,
            self.y,
            self.width,
            self.height,
        )


def _parse_placement(data: bytes, offset: int) -> Placement:
    align, vertical, horizontal, fadein, fadeout, x, y, width, height = (
        _PLACEMENT.unpack_from(data, offset)
    )
    return Placement(
        Point(Align(align), vertical, horizontal), fadein, fadeout, x, y, width, height
    )


@dataclass
class SubEntry:
    """A time span together with the placements shown during it."""

    start: float
    end: float
    placements: list[Placement] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.placements)

    def pack(self) -> bytes:
        head = _pack(_ENTRY_HEAD, self.start, self.end, self.count)
        return head + b"".join(p.pack() for p in self.placements)

    def is_active(self, time: float) -> bool:
        """True when time lies within [start, end]."""
        return not (time < self.start or time > self.end)


def parse_entries(data: bytes) -> list[SubEntry]:
    """Decode a whole entry block."""
    entries: list[SubEntry] = []
    offset = 0
    total = len(data)
    while offset < total:
        if offset + ENTRY_HEADER_SIZE > total:
            raise XsubFormatError("truncated entry header")
        start, end, count = _ENTRY_HEAD.unpack_from(data, offset)
        offset += ENTRY_HEADER_SIZE
        if offset + count * PLACEMENT_SIZE > total:
            raise XsubFormatError("truncated entry placements")
        placements = [
            _parse_placement(data, offset + n * PLACEMENT_SIZE) for n in range(count)
        ]
        offset += count * PLACEMENT_SIZE
        entries.append(SubEntry(start, end, placements))
    return entries


def pack_entries(entries: Iterable[SubEntry]) -> bytes:
    """Encode entries into an entry block."""
    return b"".join(entry.pack() for entry in entries)