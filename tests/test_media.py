"""Tests for data URI handling."""

import pytest

from math_mentor.media import (
    DEFAULT_MEDIA_TYPE,
    MAX_IMAGE_BASE64_BYTES,
    build_image_block,
    exceeds_size_limit,
    split_data_uri,
)


def test_split_png_data_uri():
    assert split_data_uri("data:image/png;base64,AAAA") == ("image/png", "AAAA")


def test_split_normalizes_jpg_alias():
    assert split_data_uri("data:image/jpg;base64,/9j/") == ("image/jpeg", "/9j/")


@pytest.mark.parametrize("media_type", ["image/heic", "application/octet-stream"])
def test_unsupported_media_type_falls_back_to_jpeg(media_type):
    media, data = split_data_uri(f"data:{media_type};base64,QUJD")
    assert media == DEFAULT_MEDIA_TYPE
    assert data == "QUJD"


def test_missing_media_type_falls_back_to_jpeg():
    assert split_data_uri("data:;base64,QUJD") == (DEFAULT_MEDIA_TYPE, "QUJD")


def test_raw_base64_passes_through():
    assert split_data_uri("/9j/4AAQ+abc=") == (DEFAULT_MEDIA_TYPE, "/9j/4AAQ+abc=")


def test_build_image_block():
    block = build_image_block("AAAA", "image/png")
    assert block == {
        "type": "image",
        "source": {"type": "base64", "media_type": "image/png", "data": "AAAA"},
    }


def test_exceeds_size_limit():
    assert not exceeds_size_limit("A" * MAX_IMAGE_BASE64_BYTES)
    assert exceeds_size_limit("A" * (MAX_IMAGE_BASE64_BYTES + 1))
