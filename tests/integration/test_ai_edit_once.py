"""Integration tests hitting the real Gemini API."""

from __future__ import annotations

from pathlib import Path

import pytest

from pixshop.encoding import ImageAsset
from pixshop.gemini_config import create_client, load_settings
from pixshop.image_service import apply_filter, identify_items


FIXTURE_DIR = Path(__file__).resolve().parents[1] / "fixtures" / "images"


@pytest.mark.ai
@pytest.mark.slow
def test_filter_returns_an_image() -> None:
    settings = load_settings()
    client = create_client(settings)
    image = ImageAsset.from_path(FIXTURE_DIR / "target.png")

    payload = apply_filter(
        client,
        image,
        "Apply a soft vintage film look.",
        model_name=settings.image_model,
    )

    assert payload.mime_type.startswith("image/")
    assert payload.data


@pytest.mark.ai
@pytest.mark.slow
def test_identification_returns_labels() -> None:
    settings = load_settings()
    client = create_client(settings)
    image = ImageAsset.from_path(FIXTURE_DIR / "reference.png")

    items = identify_items(client, image, model_name=settings.text_model)

    assert all(isinstance(item, str) and item for item in items)
