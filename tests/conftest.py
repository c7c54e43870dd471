"""Shared test fixtures."""

import pytest

from math_mentor.session import TutoringSession

# A 1x1 transparent PNG
PNG_BASE64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)


@pytest.fixture
def png_data_uri():
    return f"data:image/png;base64,{PNG_BASE64}"


@pytest.fixture
def jpeg_data_uri():
    return "data:image/jpeg;base64,/9j/4AAQSkZJRgABAQAAAQABAAD/2wBDAAgGBgcGBQgHBwcJCQgKDBQNDAsLDBkSEw8UHRofHh0aHBwgJC4nICIsIxwcKDcpLDAxNDQ0Hyc5PTgyPC4zNDL/"


@pytest.fixture
def session():
    return TutoringSession("test-1")


@pytest.fixture
def uploaded_session(session, jpeg_data_uri):
    """A session with the photo attached, ready for a hint."""
    session.upload(jpeg_data_uri)
    return session


@pytest.fixture
def hinted_session(uploaded_session):
    """A session where the hint has already arrived."""
    pending = uploaded_session.begin_hint()
    uploaded_session.resolve(pending, "Check step 3")
    return uploaded_session
