"""Image subtitles: entry table plus the atlas image they cut from."""

from __future__ import annotations

import io
import math
import os
from dataclasses import dataclass, field
from typing import BinaryIO

from PIL import Image

from .format import (
    HEADER_SIZE,
    SubEntry,
    XsubFormatError,
    XsubHeader,
    pack_entries,
    parse_entries,
    parse_header,
)


@dataclass
class ImageSub:
    """Subtitle entries and the source image their placements refer to."""

    entries: list[SubEntry] = field(default_factory=list)
    image: Image.Image | None = None
    width: float = 0.0
    height: float = 0.0
    header: XsubHeader | None = None

    @property
    def aspect_ratio(self) -> float:
        if self.height:
            return self.width / self.height
        return math.nan

    def add(self, entry: SubEntry) -> None:
        self.entries.append(entry)

    def is_empty(self) -> bool:
        return not self.entries

    def is_valid(self) -> bool:
        return self.image is not None and bool(self.entries)


def read_imagesub(stream: BinaryIO) -> ImageSub:
    """Read an xsub file from a binary stream."""
    header = parse_header(stream.read(HEADER_SIZE))
    raw = stream.read(header.size)
    if len(raw) != header.size:
        raise XsubFormatError("truncated entry block")
    entries = parse_entries(raw)
    image_data = stream.read()
    try:
        with Image.open(io.BytesIO(image_data)) as img:
            img.load()
            image = img.convert("RGBA")
    except (OSError, ValueError) as exc:
        raise XsubFormatError(f"cannot decode subtitle image: {exc}") from exc
    return ImageSub(
        entries=entries,
        image=image,
        width=float(header.width),
        height=float(header.height),
        header=header,
    )


def load_imagesub(path: str | os.PathLike[str]) -> ImageSub:
    """Read an xsub file from disk."""
    if not os.fspath(path):
        raise ValueError("empty path")
    with open(path, "rb") as handle:
        return read_imagesub(handle)


def write_imagesub(sub: ImageSub, stream: BinaryIO) -> None:
    """Write an xsub file: header, entry block, then the image as PNG."""
    if sub.image is None:
        raise ValueError("subtitle has no image")
    raw = pack_entries(sub.entries)
    header = XsubHeader(
        width=int(round(sub.width)), height=int(round(sub.height)), size=len(raw)
    )
    stream.write(header.pack())
    stream.write(raw)
    sub.image.save(stream, format="PNG")