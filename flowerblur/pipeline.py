"""The multi-scale blur pipeline: blur at several sizes and emit band-pass images."""

from __future__ import annotations

import argparse
import sys
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Sequence

import numpy as np

from flowerblur.blur import blur_repeated, image_difference, to_accurate
from flowerblur.ppm import PPMError, PPMImage, load_ppm, read_ppm, save_ppm, write_ppm

LEVEL_SIZES = (2, 3, 5, 8)
INPUT_FILE = "flower.ppm"
OUTPUT_NAMES = ("flower_tiny", "flower_small", "flower_medium")
WORKERS = 4


def blur_levels(
    image: PPMImage, sizes: Iterable[int] = LEVEL_SIZES, precise: bool = False
) -> list[np.ndarray]:
    """Blur the image once per size, each with the default number of iterations.

    The levels are independent and are computed concurrently; the result keeps
    the order of ``sizes``.
    """
    sizes = list(sizes)
    if any(size < 0 for size in sizes):
        raise ValueError("blur sizes must not be negative")
    accurate = to_accurate(image)
    if not sizes:
        return []
    with ThreadPoolExecutor(max_workers=min(WORKERS, len(sizes))) as pool:
        return list(
            pool.map(lambda size: blur_repeated(accurate, size, precise=precise), sizes)
        )


def process(image: PPMImage, precise: bool = False) -> tuple[PPMImage, PPMImage, PPMImage]:
    """Return the tiny, small and medium band-pass images of ``image``.

    Each is the difference between two neighbouring blur levels.
    """
    levels = blur_levels(image, LEVEL_SIZES, precise=precise)
    pairs = list(zip(levels, levels[1:]))
    with ThreadPoolExecutor(max_workers=len(pairs)) as pool:
        results = list(pool.map(lambda pair: image_difference(*pair), pairs))
    tiny, small, medium = results
    return tiny, small, medium


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="flowerblur",
        description=(
            "Blur an image at several sizes and write the differences between "
            "neighbouring levels. Without arguments the image is read from "
            "standard input and the three results are written to standard output."
        ),
    )
    parser.add_argument(
        "mode",
        nargs="?",
        help=f"any value: read {INPUT_FILE} and write the results to files instead",
    )
    parser.add_argument(
        "--reference",
        action="store_true",
        help="use the double-precision reference blur and write *_correct.ppm files",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the pipeline; return the process exit status."""
    args = _parse_args(argv)
    use_files = args.mode is not None
    try:
        if use_files:
            image = load_ppm(INPUT_FILE)
        else:
            image = read_ppm(sys.stdin.buffer)
    except (OSError, PPMError) as error:
        print(f"flowerblur: {error}", file=sys.stderr)
        return 1

    results = process(image, precise=args.reference)

    try:
        if use_files:
            suffix = "_correct" if args.reference else ""
            for name, result in zip(OUTPUT_NAMES, results):
                save_ppm(f"{name}{suffix}.ppm", result)
        else:
            out = sys.stdout.buffer
            for result in results:
                write_ppm(out, result)
            out.flush()
    except OSError as error:
        print(f"flowerblur: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())