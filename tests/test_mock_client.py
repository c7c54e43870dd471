"""Tests for mock client (DEV_MODE tutor)."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from math_mentor.mock_client import (
    MOCK_ANALYSIS,
    MOCK_HINT,
    request_full_analysis,
    request_hint,
)
from math_mentor.prompts import ANALYSIS_EMPTY_FALLBACK, HINT_EMPTY_FALLBACK


@pytest.fixture(autouse=True)
def _no_delay():
    with patch("math_mentor.mock_client.SIMULATED_LATENCY", 0):
        yield


@pytest.mark.asyncio
async def test_hint():
    assert await request_hint("AAAA") == MOCK_HINT


@pytest.mark.asyncio
async def test_analysis():
    assert await request_full_analysis("AAAA", "image/png") == MOCK_ANALYSIS


@pytest.mark.asyncio
async def test_empty_image_falls_back():
    assert await request_hint("") == HINT_EMPTY_FALLBACK
    assert await request_full_analysis("") == ANALYSIS_EMPTY_FALLBACK


def test_mock_texts_carry_dev_banner():
    assert MOCK_HINT.startswith("[DEV MODE")
    assert MOCK_ANALYSIS.startswith("[DEV MODE")
