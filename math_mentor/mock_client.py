"""Mock tutor client for dev mode — no API key required.

Returns canned hint and review texts after a short pause so the loading
states in the UI can be exercised. The fallback behaviour for an empty
image matches the real client.
"""

from __future__ import annotations

import asyncio

from math_mentor.media import DEFAULT_MEDIA_TYPE
from math_mentor.prompts import ANALYSIS_EMPTY_FALLBACK, HINT_EMPTY_FALLBACK

# Seconds to wait before answering, roughly how long a real call feels
SIMULATED_LATENCY = 1.5

_DEV_BANNER = "[DEV MODE - mock tutor, no API key needed]\n\n"

MOCK_HINT = (
    f"{_DEV_BANNER}"
    "Good start! Take another look at the line where you **expand the "
    "brackets**. Check the sign of every term after the minus in front of "
    "the bracket."
)

MOCK_ANALYSIS = (
    f"{_DEV_BANNER}"
    "**1. Checking the solution**\n\n"
    "The first two steps are correct: you moved the terms with *x* to the "
    "left side and the numbers to the right.\n\n"
    "**2. Mistakes**\n\n"
    "- **Step 3:** when a minus stands in front of a bracket, every sign "
    "inside the bracket changes. You wrote `-(x - 4) = -x - 4`, but the "
    "rule gives `-(x - 4) = -x + 4`.\n\n"
    "**3. Correct solution**\n\n"
    "1. `3x - (x - 4) = 10`\n"
    "2. `3x - x + 4 = 10`\n"
    "3. `2x = 6`\n"
    "4. **x = 3**\n"
)


async def request_hint(image_data: str, media_type: str = DEFAULT_MEDIA_TYPE) -> str:
    """Mock replacement for tutor_client.request_hint."""
    await asyncio.sleep(SIMULATED_LATENCY)
    if not image_data:
        return HINT_EMPTY_FALLBACK
    return MOCK_HINT


async def request_full_analysis(image_data: str, media_type: str = DEFAULT_MEDIA_TYPE) -> str:
    """Mock replacement for tutor_client.request_full_analysis."""
    await asyncio.sleep(SIMULATED_LATENCY)
    if not image_data:
        return ANALYSIS_EMPTY_FALLBACK
    return MOCK_ANALYSIS
