"""Compare produced band-pass images with the reference ones and report the differences."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from flowerblur.ppm import MAX_COMPONENT, PPMError, PPMImage, load_ppm, read_ppm, save_ppm

MAX_SINGLE_ERRORS = 2000
MAX_MULTI_ERRORS = 201
IMAGE_NAMES = ("flower_tiny", "flower_small", "flower_medium")


@dataclass(frozen=True)
class DiffReport:
    """Counts of channel values that match, are off by one, or are off by more."""

    correct: int
    single_errors: int
    multi_errors: int

    @property
    def total(self) -> int:
        return self.correct + self.single_errors + self.multi_errors

    def passed(self, max_single: int = MAX_SINGLE_ERRORS, max_multi: int = MAX_MULTI_ERRORS) -> bool:
        """Whether both error counts stay within their limits."""
        return self.single_errors <= max_single and self.multi_errors <= max_multi


def _channel_differences(result: PPMImage, correct: PPMImage) -> np.ndarray:
    """Signed per-channel differences, flattened to (pixels, 3).

    Only the number of pixels has to agree, not the width and height.
    """
    if result.width * result.height != correct.width * correct.height:
        raise ValueError(
            f"images differ in pixel count: {result.width}x{result.height} "
            f"and {correct.width}x{correct.height}"
        )
    produced = result.pixels.reshape(-1, 3).astype(np.int16)
    expected = correct.pixels.reshape(-1, 3).astype(np.int16)
    return produced - expected


def compare_images(result: PPMImage, correct: PPMImage) -> DiffReport:
    """Count matching, off-by-one and worse channel values of ``result`` against ``correct``."""
    diff = _channel_differences(result, correct)
    total = int(diff.size)
    matching = int(np.count_nonzero(diff == 0))
    single = int(np.count_nonzero(np.abs(diff) == 1))
    return DiffReport(correct=matching, single_errors=single, multi_errors=total - matching - single)


def error_image(result: PPMImage, correct: PPMImage) -> PPMImage:
    """An image shaped like ``correct``: red where any channel differs, black elsewhere."""
    diff = _channel_differences(result, correct)
    differs = np.any(diff != 0, axis=1)
    out = np.zeros((correct.height * correct.width, 3), dtype=np.uint8)
    out[differs, 0] = MAX_COMPONENT
    return PPMImage(out.reshape(correct.height, correct.width, 3))


def _print_report(report: DiffReport) -> None:
    print(f"Correct pixels: {report.correct}")
    print(f"Pixels, single errors: {report.single_errors}")
    if report.single_errors > MAX_SINGLE_ERRORS:
        print("Too many single errors!")
    print(f"Pixels, multiple errors: {report.multi_errors}")


def _check_files() -> int:
    images = {}
    for name in IMAGE_NAMES:
        images[name] = (load_ppm(f"{name}.ppm"), load_ppm(f"{name}_correct.ppm"))
    for name, (result, correct) in images.items():
        print(f"{name}.ppm:")
        try:
            report = compare_images(result, correct)
        except ValueError as error:
            print(error)
            save_ppm(f"{name}_errors.ppm", correct)
            continue
        _print_report(report)
        save_ppm(f"{name}_errors.ppm", error_image(result, correct))
    return 0


def _read_three(path: str) -> list[PPMImage]:
    with open(path, "rb") as stream:
        return [read_ppm(stream) for _ in IMAGE_NAMES]


def _check_streams(result_path: str, correct_path: str) -> int:
    results = _read_three(result_path)
    expected = _read_three(correct_path)
    for result, correct in zip(results, expected):
        try:
            report = compare_images(result, correct)
        except ValueError:
            return 1
        if not report.passed():
            return 1
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Check the produced images; return the process exit status."""
    parser = argparse.ArgumentParser(
        prog="flowerblur-check",
        description=(
            "Without arguments, compare flower_*.ppm with flower_*_correct.ppm, print the "
            "error counts and write flower_*_errors.ppm. With RESULT and CORRECT, read "
            "three concatenated images from each file and exit with status 1 if any "
            "comparison exceeds the error limits."
        ),
    )
    parser.add_argument("files", nargs="*", metavar="FILE", help="RESULT CORRECT")
    args = parser.parse_args(argv)
    if len(args.files) not in (0, 2):
        parser.error("expected no files or exactly two: RESULT CORRECT")
    try:
        if args.files:
            return _check_streams(*args.files)
        return _check_files()
    except (OSError, PPMError) as error:
        print(f"flowerblur-check: {error}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())