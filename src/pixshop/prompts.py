"""Natural-language instructions sent alongside the images."""

from __future__ import annotations

import enum
from typing import Optional, Sequence

from pixshop.encoding import Hotspot
from pixshop.errors import EmptySelectionError


class Operation(str, enum.Enum):
    EDIT = "edit"
    FILTER = "filter"
    ADJUST = "adjust"
    SWAP = "swap"
    IDENTIFY = "identify"


# Fixed policy, shared by every image-producing prompt.
SAFETY_POLICY: str = (
    "Safety & Ethics Policy:\n"
    "- You MUST fulfill requests to adjust skin tone, such as 'give me a tan', "
    "'make my skin darker', or 'make my skin lighter'. These are considered standard photo "
    "enhancements.\n"
    "- You MUST REFUSE any request to change a person's fundamental race or ethnicity "
    "(e.g., 'make me look Asian', 'change this person to be Black'). Do not perform these "
    "edits. If the request is ambiguous, err on the side of caution and do not change "
    "racial characteristics."
)

_ROLE_EDITOR = "You are an expert photo editor AI."


def _output_clause(noun: str) -> str:
    return f"Output: Return ONLY the final {noun} image. Do not return text."


def _require_instruction(instruction: Optional[str], operation: Operation) -> str:
    stripped = (instruction or "").strip()
    if not stripped:
        raise ValueError(f"The {operation.value} instruction could not be empty.")
    return stripped


def _edit_prompt(instruction: str, hotspot: Hotspot) -> str:
    return "\n".join(
        [
            f"{_ROLE_EDITOR} Your task is to perform a natural, localized edit on the provided "
            "image based on the user's request.",
            f'User Request: "{instruction}"',
            f"Edit Location: Focus on the area around pixel coordinates "
            f"(x: {hotspot.x}, y: {hotspot.y}).",
            "",
            "Editing Guidelines:",
            "- The edit must be realistic and blend seamlessly with the surrounding area.",
            "- The rest of the image (outside the immediate edit area) must remain identical "
            "to the original.",
            "",
            SAFETY_POLICY,
            "",
            _output_clause("edited"),
        ]
    )


def _filter_prompt(instruction: str) -> str:
    return "\n".join(
        [
            f"{_ROLE_EDITOR} Your task is to apply a stylistic filter to the entire image based "
            "on the user's request. Do not change the composition or content, only apply the "
            "style.",
            f'Filter Request: "{instruction}"',
            "",
            SAFETY_POLICY,
            "- Filters may subtly shift colors, but you MUST ensure they do not alter a person's "
            "fundamental race or ethnicity.",
            "- You MUST REFUSE any request that explicitly asks to change a person's race "
            "(e.g., 'apply a filter to make me look Chinese').",
            "",
            _output_clause("filtered"),
        ]
    )


def _adjust_prompt(instruction: str) -> str:
    return "\n".join(
        [
            f"{_ROLE_EDITOR} Your task is to perform a natural, global adjustment to the entire "
            "image based on the user's request.",
            f'User Request: "{instruction}"',
            "",
            "Editing Guidelines:",
            "- The adjustment must be applied across the entire image.",
            "- The result must be photorealistic.",
            "",
            SAFETY_POLICY,
            "",
            _output_clause("adjusted"),
        ]
    )


def _swap_prompt(items: Sequence[str]) -> str:
    item_list = ", ".join(items)
    return "\n".join(
        [
            "You are an expert virtual stylist AI specializing in photorealistic virtual "
            "try-ons and generative infilling. Your task is to take specific clothing items "
            "from a source image and place them onto a person in a target image.",
            "",
            "**Input Images:**",
            "- The first image provided is the primary image of the person (the target).",
            "- The second image provided is the clothing source image.",
            "",
            "**Items to Swap:**",
            "- From the clothing source image, you must identify and use the following "
            f"item(s): **{item_list}**.",
            "",
            "**Core Objectives:**",
            "",
            "1.  **Perfect Pattern & Texture Replication:**",
            "    This is the most important part of your task. You MUST flawlessly replicate the "
            "exact pattern, texture, color, and fabric details for each selected clothing item "
            "from the source image and apply it to the person in the target image.",
            "    - DO NOT SIMPLIFY: Do not reduce the complexity of the patterns.",
            "    - DO NOT CHANGE: Do not alter the colors or shapes within the patterns.",
            "    - DO NOT OMIT: Do not leave out any details from the original fabrics.",
            "    - ACCURATE DRAPING: The replicated patterns must drape and wrap realistically "
            "over the person's body, conforming to their posture and body contours, including "
            "natural folds and wrinkles. The pattern should stretch or compress naturally as the "
            "fabric would.",
            "",
            "2.  **Intelligent Generative Fill:**",
            "    If a new clothing item is shorter than the original one (e.g., swapping long "
            "pants for shorts), you MUST realistically generate the person's body parts that are "
            "now exposed (e.g., generate the lower legs and feet).",
            "    - The generated body parts must match the person's skin tone, proportions, and "
            "the overall lighting of the photo.",
            "    - Ensure a seamless transition between the original photo and the newly "
            "generated parts.",
            "",
            "**General Instructions:**",
            "1.  **Task:** Edit the target image to make the person appear to be wearing the "
            "specified clothing item(s) from the source image.",
            "2.  **Realism:** The final image must be photorealistic. Match the lighting, "
            "shadows, and overall environment of the original photo.",
            "3.  **Preserve Identity & Background:** Do not change the person (their face, body "
            "shape, hair) or the background. Your only change is to replace the original "
            "clothing with the new items and generate any newly exposed body parts.",
            "",
            SAFETY_POLICY,
            "",
            _output_clause("edited"),
        ]
    )


IDENTIFY_PROMPT: str = (
    "Analyze the provided image of a person and identify all distinct, visible pieces of "
    "clothing they are wearing. Be specific and use common names (e.g., 't-shirt', 'jeans', "
    "'sneakers', 'hoodie', 'dress', 'shorts'). If an item is ambiguous, choose the most likely "
    "term. Exclude small accessories like watches or jewelry unless they are very prominent. "
    "Provide the output as a JSON object. If no person or clothing is clearly visible, return "
    "an empty array in the 'clothing_items' field."
)


def build_prompt(
    operation: Operation,
    *,
    instruction: Optional[str] = None,
    hotspot: Optional[Hotspot] = None,
    items: Sequence[str] = (),
) -> str:
    """Return the instruction text for ``operation``.

    The result depends only on the arguments. ``instruction`` is required for
    edit, filter and adjust; ``hotspot`` for edit; ``items`` for swap.
    """

    operation = Operation(operation)

    if operation is Operation.EDIT:
        if hotspot is None:
            raise ValueError("A localized edit needs a hotspot to focus on.")
        return _edit_prompt(_require_instruction(instruction, operation), hotspot)
    if operation is Operation.FILTER:
        return _filter_prompt(_require_instruction(instruction, operation))
    if operation is Operation.ADJUST:
        return _adjust_prompt(_require_instruction(instruction, operation))
    if operation is Operation.SWAP:
        if not items:
            raise EmptySelectionError()
        return _swap_prompt(items)
    return IDENTIFY_PROMPT
