"""Settings and request configurations for the Gemini-backed editor."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv
from google import genai
from google.genai import types as genai_types

from pixshop.errors import ConfigurationError

DEFAULT_IMAGE_MODEL: str = "gemini-2.5-flash-image-preview"
DEFAULT_TEXT_MODEL: str = "gemini-2.5-flash"

CLOTHING_ITEMS_SCHEMA = genai_types.Schema(
    type=genai_types.Type.OBJECT,
    properties={
        "clothing_items": genai_types.Schema(
            type=genai_types.Type.ARRAY,
            items=genai_types.Schema(
                type=genai_types.Type.STRING,
                description='The name of a single piece of clothing, e.g., "t-shirt".',
            ),
        ),
    },
    required=["clothing_items"],
)


@dataclass(slots=True, frozen=True)
class StudioSettings:
    """Models and credentials used for one editing session."""

    api_key: str
    image_model: str = DEFAULT_IMAGE_MODEL
    text_model: str = DEFAULT_TEXT_MODEL


def load_api_key() -> str:
    """Fetch the Gemini API key from the environment (via .env)."""

    load_dotenv()
    api_key = os.getenv("GEMINI_API_KEY")
    if not api_key:
        raise ConfigurationError(
            "GEMINI_API_KEY was not found. Set it in your .env file before running."
        )
    return api_key


def load_settings(api_key: Optional[str] = None) -> StudioSettings:
    """Build settings from ``.env`` / the environment, overriding the key if given."""

    load_dotenv()
    return StudioSettings(
        api_key=api_key or load_api_key(),
        image_model=os.getenv("PIXSHOP_IMAGE_MODEL") or DEFAULT_IMAGE_MODEL,
        text_model=os.getenv("PIXSHOP_TEXT_MODEL") or DEFAULT_TEXT_MODEL,
    )


def create_client(settings: StudioSettings) -> genai.Client:
    """Create the single client shared by every operation of a session."""

    return genai.Client(api_key=settings.api_key)


def build_image_generation_config() -> genai_types.GenerateContentConfig:
    return genai_types.GenerateContentConfig(
        response_modalities=["IMAGE", "TEXT"],
        candidate_count=1,
    )


def build_identification_config() -> genai_types.GenerateContentConfig:
    return genai_types.GenerateContentConfig(
        response_mime_type="application/json",
        response_schema=CLOTHING_ITEMS_SCHEMA,
    )
