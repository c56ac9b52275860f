"""Reading and writing binary (P6) PPM images with 8-bit components."""

from __future__ import annotations

from dataclasses import dataclass
from os import PathLike
from typing import BinaryIO, Union

import numpy as np

MAX_COMPONENT = 255
CREATOR = "flowerblur"

_WHITESPACE = frozenset(b" \t\n\r\v\f")
_DIGITS = frozenset(b"0123456789")


class PPMError(ValueError):
    """Raised when a PPM stream is malformed or unsupported."""


@dataclass(eq=False)
class PPMImage:
    """An RGB image with 8-bit channels, stored as a (height, width, 3) array."""

    pixels: np.ndarray

    def __post_init__(self) -> None:
        pixels = np.asarray(self.pixels)
        if pixels.ndim != 3 or pixels.shape[2] != 3:
            raise ValueError(
                f"pixel array must have shape (height, width, 3), got {pixels.shape}"
            )
        self.pixels = np.ascontiguousarray(pixels, dtype=np.uint8)

    @classmethod
    def blank(cls, width: int, height: int) -> "PPMImage":
        """Return an all-black image of the given size."""
        if width < 0 or height < 0:
            raise ValueError("image dimensions must not be negative")
        return cls(np.zeros((height, width, 3), dtype=np.uint8))

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PPMImage):
            return NotImplemented
        return bool(np.array_equal(self.pixels, other.pixels))


class _HeaderReader:
    """Byte-at-a-time reader with one byte of push-back, so that no pixel data is over-read."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self._pending = b""

    def getc(self) -> bytes:
        if self._pending:
            byte, self._pending = self._pending, b""
            return byte
        return self._stream.read(1)

    def ungetc(self, byte: bytes) -> None:
        self._pending = byte

    def skip_comments(self) -> None:
        byte = self.getc()
        while byte == b"#":
            self.skip_line()
            byte = self.getc()
        self.ungetc(byte)

    def skip_line(self) -> None:
        while True:
            byte = self.getc()
            if not byte:
                raise PPMError("unexpected end of header")
            if byte == b"\n":
                return

    def read_int(self) -> int | None:
        byte = self.getc()
        while byte and byte[0] in _WHITESPACE:
            byte = self.getc()
        sign = b""
        if byte in (b"+", b"-"):
            sign = byte
            byte = self.getc()
        digits = bytearray()
        while byte and byte[0] in _DIGITS:
            digits += byte
            byte = self.getc()
        self.ungetc(byte)
        if not digits:
            return None
        return int((sign + bytes(digits)).decode("ascii"))


def read_ppm(stream: BinaryIO) -> PPMImage:
    """Read one P6 image from a binary stream, leaving the stream just past it."""
    magic = stream.readline(15)
    if not magic:
        raise PPMError("empty input")
    if magic[:2] != b"P6":
        raise PPMError("Invalid image format (must be 'P6')")

    reader = _HeaderReader(stream)
    reader.skip_comments()

    width = reader.read_int()
    height = reader.read_int() if width is not None else None
    if width is None or height is None:
        raise PPMError("Invalid image size")
    if width < 0 or height < 0:
        raise PPMError(f"Invalid image size {width}x{height}")

    max_value = reader.read_int()
    if max_value is None:
        raise PPMError("Invalid rgb component")
    if max_value != MAX_COMPONENT:
        raise PPMError("image does not have 8-bits components")

    reader.skip_line()

    expected = width * height * 3
    data = stream.read(expected) if expected else b""
    if len(data) != expected:
        raise PPMError("Error loading image: truncated pixel data")
    pixels = np.frombuffer(data, dtype=np.uint8).reshape(height, width, 3).copy()
    return PPMImage(pixels)


def load_ppm(path: Union[str, PathLike]) -> PPMImage:
    """Read a P6 image from a file."""
    with open(path, "rb") as stream:
        return read_ppm(stream)


def write_ppm(stream: BinaryIO, image: PPMImage) -> None:
    """Write an image to a binary stream in P6 format."""
    header = (
        f"P6\n# Created by {CREATOR}\n{image.width} {image.height}\n{MAX_COMPONENT}\n"
    )
    stream.write(header.encode("ascii"))
    stream.write(image.pixels.tobytes())


def save_ppm(path: Union[str, PathLike], image: PPMImage) -> None:
    """Write an image to a file in P6 format."""
    with open(path, "wb") as stream:
        write_ppm(stream, image)


def invert_colors(image: PPMImage) -> PPMImage:
    """Return the colour negative of an image."""
    return PPMImage(MAX_COMPONENT - image.pixels)