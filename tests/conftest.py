"""Test configuration for pytest."""

from __future__ import annotations

import os
from types import SimpleNamespace
from typing import Any, List

import pytest

from pixshop.encoding import ImageAsset

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "ai: real API tests that may cost money")
    config.addinivalue_line("markers", "slow: tests expected to run longer than ~1 second")


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    run_ai = os.getenv("RUN_AI_TESTS") == "1"
    skip_marker = pytest.mark.skip(reason="Set RUN_AI_TESTS=1 to run AI integration tests.")

    if run_ai:
        return

    for item in items:
        if "ai" in item.keywords:
            item.add_marker(skip_marker)


def make_envelope(
    *,
    parts: List[Any] | None = None,
    finish_reason: str | None = None,
    block_reason: str | None = None,
    block_message: str | None = None,
    text: str | None = None,
) -> SimpleNamespace:
    """Build an object shaped like ``GenerateContentResponse``."""

    feedback = None
    if block_reason is not None:
        feedback = SimpleNamespace(block_reason=block_reason, block_reason_message=block_message)
    candidates = []
    if parts is not None or finish_reason is not None:
        candidates.append(
            SimpleNamespace(content=SimpleNamespace(parts=parts or []), finish_reason=finish_reason)
        )
    return SimpleNamespace(prompt_feedback=feedback, candidates=candidates, text=text)


def image_part(data: bytes = PNG_BYTES, mime_type: str = "image/png") -> SimpleNamespace:
    return SimpleNamespace(inline_data=SimpleNamespace(data=data, mime_type=mime_type), text=None)


def text_part(text: str) -> SimpleNamespace:
    return SimpleNamespace(inline_data=None, text=text)


class FakeClient:
    """Records ``models.generate_content`` calls and replays canned responses."""

    def __init__(self, response: Any = None, error: Exception | None = None) -> None:
        self.calls: List[dict] = []
        self._response = response
        self._error = error
        self.models = self

    def generate_content(self, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        if self._error is not None:
            raise self._error
        return self._response


@pytest.fixture
def png_asset() -> ImageAsset:
    return ImageAsset(data=PNG_BYTES, mime_type="image/png", name="photo.png")
