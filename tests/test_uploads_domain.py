"""Tests for upload domain helpers."""

import pytest

from foodlog.domain.uploads import ImageUpload, format_file_size


@pytest.mark.parametrize(
    ("size", "expected"),
    [
        (0, "0 Bytes"),
        (512, "512 Bytes"),
        (1024, "1 KB"),
        (1536, "1.5 KB"),
        (10 * 1024 * 1024, "10 MB"),
        (3 * 1024**3, "3 GB"),
    ],
)
def test_format_file_size(size: int, expected: str) -> None:
    assert format_file_size(size) == expected


def test_image_upload_metadata_uses_byte_length() -> None:
    upload = ImageUpload(filename="meal.jpg", content_type="image/jpeg", content=b"abc")

    assert upload.size == 3
    assert upload.metadata() == {"name": "meal.jpg", "size": 3, "type": "image/jpeg"}
