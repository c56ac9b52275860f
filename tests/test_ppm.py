import io

import numpy as np
import pytest

from flowerblur.ppm import (
    PPMError,
    PPMImage,
    invert_colors,
    load_ppm,
    read_ppm,
    save_ppm,
    write_ppm,
)


def _sample(width=4, height=3, seed=0):
    rng = np.random.default_rng(seed)
    return PPMImage(rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8))


def _encode(image):
    buffer = io.BytesIO()
    write_ppm(buffer, image)
    return buffer.getvalue()


def test_blank_image_is_black_with_given_size():
    image = PPMImage.blank(5, 2)
    assert image.width == 5
    assert image.height == 2
    assert image.pixels.shape == (2, 5, 3)
    assert not image.pixels.any()


def test_blank_rejects_negative_size():
    with pytest.raises(ValueError):
        PPMImage.blank(-1, 3)


def test_constructor_rejects_wrong_shape():
    with pytest.raises(ValueError):
        PPMImage(np.zeros((2, 2), dtype=np.uint8))


def test_written_header_layout():
    image = PPMImage(np.array([[[1, 2, 3], [4, 5, 6]]], dtype=np.uint8))
    data = _encode(image)
    assert data == b"P6\n# Created by flowerblur\n2 1\n255\n" + bytes([1, 2, 3, 4, 5, 6])


def test_stream_round_trip():
    image = _sample()
    restored = read_ppm(io.BytesIO(_encode(image)))
    assert restored == image
    assert restored.width == image.width
    assert restored.height == image.height


def test_several_images_read_from_one_stream():
    images = [_sample(3, 2, 1), _sample(5, 4, 2), _sample(1, 1, 3)]
    buffer = io.BytesIO()
    for image in images:
        write_ppm(buffer, image)
    buffer.seek(0)
    restored = [read_ppm(buffer) for _ in images]
    assert restored == images
    assert buffer.read() == b""


def test_comments_before_size_are_skipped():
    raw = b"P6\n# one\n# two\n1 1\n255\n" + bytes([9, 8, 7])
    image = read_ppm(io.BytesIO(raw))
    assert image.pixels.tolist() == [[[9, 8, 7]]]


def test_whitespace_between_header_fields():
    raw = b"P6\n2\n1 255 \n" + bytes([10, 20, 30, 40, 50, 60])
    image = read_ppm(io.BytesIO(raw))
    assert (image.width, image.height) == (2, 1)
    assert image.pixels.reshape(-1).tolist() == [10, 20, 30, 40, 50, 60]


def test_rejects_other_magic():
    with pytest.raises(PPMError):
        read_ppm(io.BytesIO(b"P3\n1 1\n255\n0 0 0\n"))


def test_rejects_empty_input():
    with pytest.raises(PPMError):
        read_ppm(io.BytesIO(b""))


def test_rejects_missing_size():
    with pytest.raises(PPMError):
        read_ppm(io.BytesIO(b"P6\nabc\n255\n"))


def test_rejects_missing_max_value():
    with pytest.raises(PPMError):
        read_ppm(io.BytesIO(b"P6\n1 1\nxyz\n"))


def test_rejects_16_bit_components():
    with pytest.raises(PPMError):
        read_ppm(io.BytesIO(b"P6\n1 1\n65535\n" + bytes(6)))


def test_rejects_truncated_pixel_data():
    with pytest.raises(PPMError):
        read_ppm(io.BytesIO(b"P6\n2 2\n255\n" + bytes(5)))


def test_file_round_trip(tmp_path):
    image = _sample(7, 5, 4)
    path = tmp_path / "image.ppm"
    save_ppm(path, image)
    assert load_ppm(path) == image
    assert path.read_bytes() == _encode(image)


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_ppm(tmp_path / "missing.ppm")


def test_invert_colors_complements_each_channel():
    image = _sample(6, 4, 5)
    inverted = invert_colors(image)
    total = image.pixels.astype(int) + inverted.pixels.astype(int)
    assert (total == 255).all()


def test_invert_colors_twice_is_identity():
    image = _sample(3, 3, 6)
    assert invert_colors(invert_colors(image)) == image


def test_invert_colors_leaves_input_unchanged():
    image = _sample(2, 2, 7)
    before = image.pixels.copy()
    invert_colors(image)
    assert np.array_equal(image.pixels, before)


def test_invert_black_is_white():
    inverted = invert_colors(PPMImage.blank(2, 2))
    assert (inverted.pixels == 255).all()