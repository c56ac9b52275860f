# flowerblur

`flowerblur` reads a binary (P6) PPM image with 8-bit components and blurs it
with box filters of four radii: 2, 3, 5 and 8. Each blur is the mean over the
square window around a pixel, clipped at the image edges, and is applied five
times. Each blurred level is then subtracted from the next larger one, giving
three band-pass images called *tiny*, *small* and *medium*. A checker compares
such images with reference results and counts how many channel values are off,
and by how much.

## Installation

```
pip install .
```

The only runtime dependency is numpy. To install the test tools as well:

```
pip install ".[test]"
```

## Command line

### Processing an image

```
flowerblur < flower.ppm > out.ppm
```

With no arguments, one PPM image is read from standard input and the three
result images are written to standard output one after another, in the order
tiny, small, medium.

```
flowerblur 1
```

With any positional argument, `flower.ppm` is read from the current directory
and `flower_tiny.ppm`, `flower_small.ppm` and `flower_medium.ppm` are written.

By default the blur runs in single precision with a running-sum horizontal and
vertical pass. `--reference` switches to the double-precision direct windowed
mean; in file mode the outputs are then named `flower_tiny_correct.ppm`,
`flower_small_correct.ppm` and `flower_medium_correct.ppm`:

```
flowerblur 1 --reference
```

The command exits with status 1 and a message on standard error if the input
cannot be read or is not a valid P6 image, or an output cannot be written.

### Checking results

```
flowerblur-check
```

This compares `flower_tiny.ppm`, `flower_small.ppm` and `flower_medium.ppm`
with `flower_tiny_correct.ppm`, `flower_small_correct.ppm` and
`flower_medium_correct.ppm`. For each image it prints:

- the number of channel values that are correct,
- the number that are off by exactly one (with `Too many single errors!` when
  there are more than 2000),
- the number that are off by more than one.

It also writes an error map for each image, such as `flower_tiny_errors.ppm`,
in which pixels with any differing channel are red and all others black. If
the two images hold different numbers of pixels, the message is printed and
the reference image is written unchanged as the error map.

```
flowerblur-check results.ppm answers.ppm
```

This is the streaming form. Each of the two files holds three concatenated PPM
images. Nothing is printed; the command exits with status 1 when, for any pair,
the pixel counts differ, more than 2000 values are off by one, or more than 201
values are off by more than one, and with status 0 otherwise.

## Library use

```python
from flowerblur.ppm import load_ppm, save_ppm
from flowerblur.pipeline import process
from flowerblur.checker import compare_images

image = load_ppm("flower.ppm")
tiny, small, medium = process(image, precise=True)
save_ppm("flower_tiny.ppm", tiny)

report = compare_images(tiny, load_ppm("flower_tiny_correct.ppm"))
print(report.correct, report.single_errors, report.multi_errors)
print(report.passed(2000, 201))
```

### `flowerblur.ppm`

- `PPMImage` wraps a `(height, width, 3)` `uint8` array in `pixels`, with
  `width` and `height` properties; `PPMImage.blank(width, height)` gives an
  all-black image. Two images are equal when their pixels are.
- `read_ppm(stream)` reads one image from a binary stream and leaves the
  stream just past it, so concatenated images can be read in turn.
  `load_ppm(path)` reads from a file.
- `write_ppm(stream, image)` and `save_ppm(path, image)` write P6 with a
  `# Created by flowerblur` comment and a maximum value of 255.
- `invert_colors(image)` returns the colour negative.
- Malformed input raises `PPMError` (a `ValueError`): a missing `P6` magic, a
  bad size, a maximum value other than 255, or truncated pixel data.

### `flowerblur.blur`

Blur functions work on "accurate" images: `(height, width, 3)` floating-point
arrays.

- `to_accurate(image)` converts to `float64`; `to_ppm(accurate)` converts back,
  truncating toward zero and clipping to 0–255.
- `blur_reference(accurate, size)` is the direct windowed mean in double
  precision.
- `blur_separable(accurate, size)` is the same blur as a horizontal then a
  vertical running-sum pass in single precision.
- `blur_repeated(accurate, size, iterations=5, precise=True)` applies one of
  the two several times.
- `image_difference(small, large)` subtracts `small` from `large` into an 8-bit
  `PPMImage`: differences above 255 saturate, those below −1 wrap around by
  257, those strictly between −1 and 0 become 0, and the rest are floored.

### `flowerblur.pipeline`

- `blur_levels(image, sizes=(2, 3, 5, 8), precise=False)` returns one
  repeatedly blurred array per size, computed in a thread pool.
- `process(image, precise=False)` returns the tiny, small and medium images.
- `main(argv=None)` is the `flowerblur` command.

### `flowerblur.checker`

- `compare_images(result, correct)` returns a `DiffReport` with `correct`,
  `single_errors`, `multi_errors` and `total`; only the pixel counts of the two
  images need to agree, otherwise `ValueError` is raised.
- `DiffReport.passed(max_single=2000, max_multi=201)` tells whether both error
  counts are within their limits.
- `error_image(result, correct)` returns the red/black error map.
- `main(argv=None)` is the `flowerblur-check` command.

## Limitations

All computation runs on the CPU through numpy; there is no GPU backend. Only
binary P6 images with a maximum value of 255 are supported, and the input and
output file names used in file mode are fixed.