"""Helpers for turning uploaded data URIs into vision API input."""

from __future__ import annotations

import re
from typing import Any

DEFAULT_MEDIA_TYPE = "image/jpeg"

# Media types accepted by the Anthropic image content block
SUPPORTED_MEDIA_TYPES = frozenset(
    {"image/jpeg", "image/png", "image/gif", "image/webp"}
)

_DATA_URI_PATTERN = re.compile(r"^data:(?P<type>[\w.+-]+/[\w.+-]+)?(?:;[^,]*)?,", re.DOTALL)


def split_data_uri(payload: str) -> tuple[str, str]:
    """Strip the ``data:<type>;base64,`` framing from an uploaded image.

    Returns ``(media_type, base64_data)``. A payload without framing is
    treated as raw base64 data. Unsupported or missing media types fall
    back to JPEG.
    """
    match = _DATA_URI_PATTERN.match(payload)
    if match is None:
        return DEFAULT_MEDIA_TYPE, payload.strip()

    media_type = (match.group("type") or "").lower()
    if media_type == "image/jpg":
        media_type = "image/jpeg"
    if media_type not in SUPPORTED_MEDIA_TYPES:
        media_type = DEFAULT_MEDIA_TYPE
    return media_type, payload[match.end():].strip()


def build_image_block(image_data: str, media_type: str = DEFAULT_MEDIA_TYPE) -> dict[str, Any]:
    """Build an Anthropic ``image`` content block from raw base64 data."""
    return {
        "type": "image",
        "source": {
            "type": "base64",
            "media_type": media_type,
            "data": image_data,
        },
    }


# The API rejects images whose base64 data is larger than this
MAX_IMAGE_BASE64_BYTES = 5 * 1024 * 1024


def exceeds_size_limit(image_data: str) -> bool:
    return len(image_data) > MAX_IMAGE_BASE64_BYTES
