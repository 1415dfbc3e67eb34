"""Tests for the file and directory pipelines."""

import logging

import numpy as np
import pytest
from PIL import Image
from blockpix.batch import (
    ErrorPolicy,
    ProcessOptions,
    output_path_for,
    process_directory,
    process_image,
)
from blockpix.errors import ImageLoadError, InvalidScaleFactor, NotDivisible
from blockpix.utils.loader import load_image
from blockpix.utils.pixelate import OutputMode


def _write(path, w, h, colour=(40, 80, 120, 255)):
    Image.new("RGBA", (w, h), colour).save(path)
    return path


@pytest.mark.parametrize("scale", [0, 1, 9, 16])
def test_options_reject_scale(scale):
    with pytest.raises(InvalidScaleFactor):
        ProcessOptions(scale_factor=scale)


@pytest.mark.parametrize("scale", [2, 8])
def test_options_accept_scale_bounds(scale):
    assert ProcessOptions(scale_factor=scale).scale_factor == scale


def test_output_path_for(tmp_path):
    src = tmp_path / "cat.png"
    assert output_path_for(src, overwrite=False) == tmp_path / "pixelated_cat.png"
    assert output_path_for(src, overwrite=True) == src


def test_process_image_shrink(tmp_path):
    src = _write(tmp_path / "a.png", 8, 4)
    out = process_image(src, ProcessOptions(scale_factor=2))
    assert out == tmp_path / "pixelated_a.png"
    arr = load_image(out)
    assert arr.shape == (2, 4, 4)
    assert tuple(arr[0, 0]) == (40, 80, 120, 255)


def test_process_image_keep_dimensions_crop_overwrite(tmp_path):
    src = _write(tmp_path / "b.png", 9, 7)
    options = ProcessOptions(
        scale_factor=4,
        mode=OutputMode.KEEP_DIMENSIONS,
        allow_crop=True,
        centre=True,
        overwrite=True,
    )
    out = process_image(src, options)
    assert out == src
    assert load_image(src).shape == (4, 8, 4)


def test_fail_fast_raises(tmp_path):
    src = _write(tmp_path / "c.png", 5, 4)
    with pytest.raises(NotDivisible):
        process_image(src, ProcessOptions(scale_factor=2), ErrorPolicy.FAIL_FAST)
    assert not (tmp_path / "pixelated_c.png").exists()


def test_skip_logs_and_returns_none(tmp_path, caplog):
    src = _write(tmp_path / "c.png", 5, 4)
    with caplog.at_level(logging.ERROR, logger="blockpix"):
        assert process_image(src, ProcessOptions(scale_factor=2), ErrorPolicy.SKIP) is None
    assert "skipping" in caplog.text
    assert not (tmp_path / "pixelated_c.png").exists()


def test_fail_fast_on_undecodable(tmp_path):
    src = tmp_path / "junk.png"
    src.write_bytes(b"\x00\x01\x02")
    with pytest.raises(ImageLoadError):
        process_image(src, ProcessOptions(scale_factor=2))


@pytest.mark.parametrize("jobs", [1, 3])
def test_process_directory(tmp_path, jobs):
    _write(tmp_path / "ok1.png", 8, 8)
    _write(tmp_path / "ok2.png", 16, 4)
    _write(tmp_path / "odd.png", 7, 7)
    (tmp_path / "readme.txt").write_text("hello")
    (tmp_path / "sub").mkdir()

    result = process_directory(tmp_path, ProcessOptions(scale_factor=4), jobs=jobs)

    assert result.written == [tmp_path / "pixelated_ok1.png", tmp_path / "pixelated_ok2.png"]
    assert result.skipped == [tmp_path / "odd.png", tmp_path / "readme.txt"]
    assert load_image(tmp_path / "pixelated_ok2.png").shape == (1, 4, 4)
    assert not (tmp_path / "pixelated_pixelated_ok1.png").exists()


def test_process_directory_averages(tmp_path):
    arr = np.zeros((2, 2, 4), dtype=np.uint8)
    arr[0, 0] = (255, 0, 0, 255)
    arr[0, 1] = (255, 0, 0, 255)
    arr[1, 0] = (1, 0, 0, 255)
    arr[1, 1] = (0, 0, 0, 255)
    Image.fromarray(arr).save(tmp_path / "tiny.png")

    result = process_directory(tmp_path, ProcessOptions(scale_factor=2))
    assert tuple(load_image(result.written[0])[0, 0]) == (127, 0, 0, 255)


def test_process_directory_rejects_file(tmp_path):
    src = _write(tmp_path / "a.png", 2, 2)
    with pytest.raises(NotADirectoryError):
        process_directory(src, ProcessOptions(scale_factor=2))


def test_process_image_jfif(tmp_path):
    src = tmp_path / "a.jfif"
    Image.new("RGB", (4, 4), (200, 100, 50)).save(src, format="JPEG")
    out = process_image(src, ProcessOptions(scale_factor=2))
    assert out == tmp_path / "pixelated_a.jfif"
    assert load_image(out).shape == (2, 2, 4)


def test_crop_logged_with_applied_rect(tmp_path, caplog):
    src = _write(tmp_path / "d.png", 9, 7)
    options = ProcessOptions(scale_factor=4, allow_crop=True, centre=True)
    with caplog.at_level(logging.WARNING, logger="blockpix"):
        process_image(src, options)
    assert "from 9x7 to 8x4 at (0, 1)" in caplog.text


@pytest.mark.parametrize("jobs", [1, 2])
def test_process_directory_skips_oversized(tmp_path, monkeypatch, jobs):
    _write(tmp_path / "big.png", 64, 64)
    _write(tmp_path / "small.png", 4, 4)
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)

    result = process_directory(tmp_path, ProcessOptions(scale_factor=2), jobs=jobs)

    assert result.skipped == [tmp_path / "big.png"]
    assert result.written == [tmp_path / "pixelated_small.png"]


def test_fail_fast_on_oversized(tmp_path, monkeypatch):
    src = _write(tmp_path / "big.png", 64, 64)
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
    with pytest.raises(ImageLoadError):
        process_image(src, ProcessOptions(scale_factor=2))
