"""Interpretation of Gemini response envelopes.

The envelope shape is owned by the provider, so every field is treated as
optional and read with ``getattr``. Objects mimicking
``GenerateContentResponse`` (e.g. ``SimpleNamespace`` trees) are accepted.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
import re
from typing import Any, List, Optional

from pixshop.encoding import ImagePayload
from pixshop.errors import AbnormalStopError, BlockedError, NoImageReturnedError

logger = logging.getLogger(__name__)

NORMAL_FINISH = "STOP"
UNSPECIFIED_BLOCK = "BLOCKED_REASON_UNSPECIFIED"
DEFAULT_IMAGE_MIME = "image/png"
ITEMS_FIELD = "clothing_items"

_CODE_FENCE = re.compile(r"^```(?:json)?\s*|```\s*$")


def _status_name(value: Any) -> Optional[str]:
    """Normalise an SDK enum or plain string to its name."""

    if value is None:
        return None
    name = getattr(value, "name", None)
    if isinstance(name, str) and name:
        return name
    text = str(value).strip()
    return text or None


def _first_candidate(envelope: Any) -> Any:
    candidates = getattr(envelope, "candidates", None)
    if not candidates:
        return None
    return candidates[0]


def _candidate_parts(candidate: Any) -> List[Any]:
    content = getattr(candidate, "content", None)
    if not content:
        return []
    return list(getattr(content, "parts", None) or [])


def _decode_inline(data: Any) -> Optional[bytes]:
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)
    if isinstance(data, str):
        try:
            return base64.b64decode(data, validate=True)
        except (binascii.Error, ValueError):
            logger.warning("Inline image data was a string but not valid base64.")
            return None
    return None


def extract_text(envelope: Any) -> str:
    """Collect any textual explanations returned by Gemini."""

    texts: List[str] = []
    for candidate in getattr(envelope, "candidates", None) or []:
        for part in _candidate_parts(candidate):
            text = getattr(part, "text", None)
            if isinstance(text, str) and text:
                texts.append(text)
    if texts:
        return "".join(texts).strip()

    top_level = getattr(envelope, "text", None)
    if isinstance(top_level, str):
        return top_level.strip()
    return ""


def interpret_response(envelope: Any, context: str) -> ImagePayload:
    """Return the image carried by ``envelope`` or raise the matching error.

    Checked in order: prompt block, first inline image of the first
    candidate, abnormal finish reason, then the generic no-image failure.
    """

    feedback = getattr(envelope, "prompt_feedback", None)
    block_reason = _status_name(getattr(feedback, "block_reason", None)) if feedback else None
    # BLOCKED_REASON_UNSPECIFIED is the enum default, not a block.
    if block_reason and block_reason != UNSPECIFIED_BLOCK:
        block_message = getattr(feedback, "block_reason_message", None) or None
        error = BlockedError(block_reason, block_message, context=context)
        logger.error("%s", error)
        raise error

    candidate = _first_candidate(envelope)
    for part in _candidate_parts(candidate):
        inline = getattr(part, "inline_data", None)
        if not inline:
            continue
        data = _decode_inline(getattr(inline, "data", None))
        if not data:
            continue
        mime_type = getattr(inline, "mime_type", None) or DEFAULT_IMAGE_MIME
        logger.info("Received image data (%s) for %s", mime_type, context)
        return ImagePayload(mime_type=mime_type, data=data)

    finish_reason = _status_name(getattr(candidate, "finish_reason", None)) if candidate else None
    if finish_reason and finish_reason != NORMAL_FINISH:
        error = AbnormalStopError(finish_reason, context=context)
        logger.error("%s", error)
        raise error

    text_feedback = extract_text(envelope) or None
    logger.error("Model response did not contain an image part for %s.", context)
    raise NoImageReturnedError(text_feedback, context=context)


def strip_code_fence(text: str) -> str:
    return _CODE_FENCE.sub("", text.strip()).strip()


def interpret_identification(envelope: Any) -> List[str]:
    """Parse the clothing labels out of a structured identification reply.

    Malformed or missing payloads yield an empty list instead of raising.
    """

    text = extract_text(envelope)
    if not text:
        logger.warning("Identification response carried no text.")
        return []

    try:
        result = json.loads(strip_code_fence(text))
    except json.JSONDecodeError as exc:
        logger.warning("Could not parse identification JSON: %s", exc)
        return []

    if not isinstance(result, dict):
        logger.warning("Identification JSON was not an object: %r", result)
        return []

    items = result.get(ITEMS_FIELD)
    if not isinstance(items, list):
        logger.warning("Identification JSON is missing the '%s' list.", ITEMS_FIELD)
        return []

    labels = [item.strip() for item in items if isinstance(item, str) and item.strip()]
    logger.debug("Clothing identification result: %s", labels)
    return labels
