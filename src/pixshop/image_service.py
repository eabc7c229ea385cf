"""Editing operations backed by the Gemini image model.

Each operation encodes its image(s), builds the instruction text, sends a
single request through the injected ``client`` and interprets the reply::

    settings = load_settings()
    client = create_client(settings)
    payload = apply_filter(client, ImageAsset.from_path("photo.jpg"), "Make it look like a 70s print")
    payload.to_data_url()
"""

from __future__ import annotations

import logging
from typing import Any, List, Sequence

from google.genai import types as genai_types

from pixshop.encoding import Hotspot, ImagePayload, ImageSource, encode_image
from pixshop.errors import EmptySelectionError
from pixshop.gemini_config import (
    DEFAULT_IMAGE_MODEL,
    DEFAULT_TEXT_MODEL,
    build_identification_config,
    build_image_generation_config,
)
from pixshop.prompts import Operation, build_prompt
from pixshop.responses import interpret_identification, interpret_response

logger = logging.getLogger(__name__)


def build_user_content(*, images: Sequence[ImageSource], prompt_text: str) -> genai_types.Content:
    """Assemble a single ``user`` content block: images first, then the prompt."""

    parts: List[genai_types.Part] = [encode_image(image).to_part() for image in images]
    parts.append(genai_types.Part(text=prompt_text))
    return genai_types.Content(role="user", parts=parts)


def request_generation(
    client: Any,
    *,
    model_name: str,
    user_content: genai_types.Content,
    config: genai_types.GenerateContentConfig,
) -> Any:
    """Send one request and return the raw response envelope."""

    response = client.models.generate_content(
        model=model_name,
        contents=[user_content],
        config=config,
    )
    logger.debug("Received response from %s.", model_name)
    return response


def _generate_image(
    client: Any,
    *,
    images: Sequence[ImageSource],
    prompt_text: str,
    context: str,
    model_name: str,
) -> ImagePayload:
    user_content = build_user_content(images=images, prompt_text=prompt_text)
    logger.info("Sending %d image(s) and %s prompt to %s", len(images), context, model_name)
    response = request_generation(
        client,
        model_name=model_name,
        user_content=user_content,
        config=build_image_generation_config(),
    )
    return interpret_response(response, context)


def edit_image(
    client: Any,
    image: ImageSource,
    instruction: str,
    hotspot: Hotspot,
    *,
    model_name: str = DEFAULT_IMAGE_MODEL,
) -> ImagePayload:
    """Perform a localized edit focused on ``hotspot``."""

    logger.info("Starting generative edit at: (%d, %d)", hotspot.x, hotspot.y)
    prompt_text = build_prompt(Operation.EDIT, instruction=instruction, hotspot=hotspot)
    return _generate_image(
        client, images=[image], prompt_text=prompt_text, context="edit", model_name=model_name
    )


def apply_filter(
    client: Any,
    image: ImageSource,
    instruction: str,
    *,
    model_name: str = DEFAULT_IMAGE_MODEL,
) -> ImagePayload:
    logger.info("Starting filter generation: %s", instruction)
    prompt_text = build_prompt(Operation.FILTER, instruction=instruction)
    return _generate_image(
        client, images=[image], prompt_text=prompt_text, context="filter", model_name=model_name
    )


def adjust_image(
    client: Any,
    image: ImageSource,
    instruction: str,
    *,
    model_name: str = DEFAULT_IMAGE_MODEL,
) -> ImagePayload:
    logger.info("Starting global adjustment generation: %s", instruction)
    prompt_text = build_prompt(Operation.ADJUST, instruction=instruction)
    return _generate_image(
        client, images=[image], prompt_text=prompt_text, context="adjustment", model_name=model_name
    )


def swap_clothing(
    client: Any,
    person_image: ImageSource,
    source_image: ImageSource,
    items: Sequence[str],
    *,
    model_name: str = DEFAULT_IMAGE_MODEL,
) -> ImagePayload:
    """Dress the person in ``person_image`` with ``items`` taken from ``source_image``."""

    if not items:
        raise EmptySelectionError()

    logger.info("Starting clothing swap with items: %s", ", ".join(items))
    prompt_text = build_prompt(Operation.SWAP, items=items)
    return _generate_image(
        client,
        images=[person_image, source_image],
        prompt_text=prompt_text,
        context="swap",
        model_name=model_name,
    )


def identify_items(
    client: Any,
    image: ImageSource,
    *,
    model_name: str = DEFAULT_TEXT_MODEL,
) -> List[str]:
    """Return the clothing labels visible in ``image``; an empty list on any failure."""

    logger.info("Identifying clothing items in image...")
    try:
        user_content = build_user_content(
            images=[image], prompt_text=build_prompt(Operation.IDENTIFY)
        )
        response = request_generation(
            client,
            model_name=model_name,
            user_content=user_content,
            config=build_identification_config(),
        )
        return interpret_identification(response)
    except Exception:  # noqa: BLE001 - identification degrades to "no items found".
        logger.exception("Failed to identify clothing items")
        return []
