"""Box blurs over floating-point RGB images and the band-pass difference step.

An "accurate" image is a ``(height, width, 3)`` floating-point array holding
one value per colour channel.
"""

from __future__ import annotations

import numpy as np

from flowerblur.ppm import MAX_COMPONENT, PPMImage

DEFAULT_ITERATIONS = 5


def _as_channels(accurate: np.ndarray, dtype: type) -> np.ndarray:
    data = np.asarray(accurate, dtype=dtype)
    if data.ndim != 3 or data.shape[2] != 3:
        raise ValueError(
            f"accurate image must have shape (height, width, 3), got {data.shape}"
        )
    return data


def _check_size(size: int) -> None:
    if size < 0:
        raise ValueError(f"blur size must not be negative, got {size}")


def _window_counts(length: int, size: int) -> np.ndarray:
    """Number of in-bounds positions in the window around each index."""
    index = np.arange(length)
    return np.minimum(index + size, length - 1) - np.maximum(index - size, 0) + 1


def to_accurate(image: PPMImage) -> np.ndarray:
    """Convert an 8-bit image to double-precision channel values."""
    return image.pixels.astype(np.float64)


def to_ppm(accurate: np.ndarray) -> PPMImage:
    """Convert channel values back to 8 bits, truncating toward zero."""
    data = _as_channels(accurate, np.float64)
    clipped = np.clip(np.trunc(data), 0, MAX_COMPONENT)
    return PPMImage(clipped.astype(np.uint8))


def blur_reference(accurate: np.ndarray, size: int) -> np.ndarray:
    """Mean over the (2*size+1)^2 window around each pixel, clipped at the edges.

    Sums are accumulated in double precision, column offset outermost and row
    offset innermost.
    """
    _check_size(size)
    data = _as_channels(accurate, np.float64)
    height, width, _ = data.shape
    if height == 0 or width == 0:
        return data.copy()

    padded = np.pad(data, ((size, size), (size, size), (0, 0)))
    total = np.zeros_like(data)
    span = 2 * size + 1
    for dx in range(span):
        for dy in range(span):
            total += padded[dy:dy + height, dx:dx + width]

    counts = _window_counts(height, size)[:, None] * _window_counts(width, size)[None, :]
    return total / counts[:, :, None]


def _running_mean(data: np.ndarray, size: int, axis: int) -> np.ndarray:
    """Sliding-window mean along one axis, kept as a single-precision running sum."""
    moved = np.moveaxis(data, axis, 0)
    length = moved.shape[0]
    if length == 0 or moved.size == 0:
        return data.copy()

    rest = moved.shape[1:]
    padded = np.pad(moved, [(size, size)] + [(0, 0)] * len(rest))
    initial = np.cumsum(padded[:2 * size + 1], axis=0, dtype=np.float32)[-1]

    # Interleave "drop the leaving value" and "add the entering value" so that a
    # sequential cumulative sum reproduces the running sum step for step.
    steps = np.empty((2 * (length - 1),) + rest, dtype=np.float32)
    steps[0::2] = -padded[:length - 1]
    steps[1::2] = padded[2 * size + 1:2 * size + length]
    sequence = np.concatenate([initial[None], steps])
    sums = np.cumsum(sequence, axis=0, dtype=np.float32)[0::2]

    counts = _window_counts(length, size).astype(np.float32)
    means = sums / counts.reshape((length,) + (1,) * len(rest))
    return np.moveaxis(means, 0, axis)


def blur_separable(accurate: np.ndarray, size: int) -> np.ndarray:
    """The same box blur as a horizontal then a vertical pass in single precision."""
    _check_size(size)
    data = _as_channels(accurate, np.float32)
    horizontal = _running_mean(data, size, axis=1)
    vertical = _running_mean(horizontal, size, axis=0)
    return np.ascontiguousarray(vertical, dtype=np.float32)


def blur_repeated(
    accurate: np.ndarray,
    size: int,
    iterations: int = DEFAULT_ITERATIONS,
    precise: bool = True,
) -> np.ndarray:
    """Apply the box blur several times.

    With ``precise`` the double-precision reference blur is used, otherwise the
    single-precision separable one.
    """
    _check_size(size)
    if iterations < 0:
        raise ValueError(f"iterations must not be negative, got {iterations}")
    if precise:
        result = _as_channels(accurate, np.float64).copy()
        step = blur_reference
    else:
        result = _as_channels(accurate, np.float32).copy()
        step = blur_separable
    for _ in range(iterations):
        result = step(result, size)
    return result


def image_difference(small: np.ndarray, large: np.ndarray) -> PPMImage:
    """Subtract the less blurred image from the more blurred one into 8 bits.

    Differences above 255 saturate, those below -1 wrap around by 257, those
    strictly between -1 and 0 become 0, and the rest are floored.
    """
    small_data = np.asarray(small)
    large_data = np.asarray(large)
    if small_data.shape != large_data.shape:
        raise ValueError(
            f"images differ in shape: {small_data.shape} and {large_data.shape}"
        )
    dtype = np.result_type(small_data.dtype, large_data.dtype, np.float32)
    small_data = _as_channels(small_data, dtype)
    large_data = _as_channels(large_data, dtype)

    value = large_data - small_data
    wrapped = (257.0 + value.astype(np.float64)).astype(dtype)

    result = np.where(
        value > MAX_COMPONENT,
        MAX_COMPONENT,
        np.where(
            value < -1.0,
            np.where(wrapped > MAX_COMPONENT, MAX_COMPONENT, np.floor(wrapped)),
            np.where((value > -1.0) & (value < 0.0), 0, np.floor(value)),
        ),
    )
    return PPMImage(np.mod(result.astype(np.int64), 256).astype(np.uint8))