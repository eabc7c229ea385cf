"""Unit tests for prompt construction."""

from __future__ import annotations

import pytest

from pixshop.encoding import Hotspot
from pixshop.errors import EmptySelectionError
from pixshop.prompts import SAFETY_POLICY, Operation, build_prompt


def test_edit_prompt_embeds_request_and_hotspot() -> None:
    prompt = build_prompt(Operation.EDIT, instruction="remove the cup", hotspot=Hotspot(12, 34))

    assert 'User Request: "remove the cup"' in prompt
    assert "(x: 12, y: 34)" in prompt
    assert "must remain identical to the original" in prompt


@pytest.mark.parametrize(
    ("operation", "kwargs"),
    [
        (Operation.EDIT, {"instruction": "tan", "hotspot": Hotspot(1, 2)}),
        (Operation.FILTER, {"instruction": "noir"}),
        (Operation.ADJUST, {"instruction": "brighter"}),
        (Operation.SWAP, {"items": ["shirt"]}),
    ],
)
def test_safety_policy_in_every_image_prompt(operation: Operation, kwargs: dict) -> None:
    assert SAFETY_POLICY in build_prompt(operation, **kwargs)


def test_identify_prompt_has_no_policy_and_asks_for_json() -> None:
    prompt = build_prompt(Operation.IDENTIFY)

    assert SAFETY_POLICY not in prompt
    assert "clothing_items" in prompt


def test_prompts_are_deterministic() -> None:
    first = build_prompt("filter", instruction="Make it look like a 70s print")
    second = build_prompt(Operation.FILTER, instruction="Make it look like a 70s print")

    assert first == second


def test_swap_prompt_lists_items_and_generative_fill() -> None:
    prompt = build_prompt(Operation.SWAP, items=["shorts", "sneakers"])

    assert "shorts, sneakers" in prompt
    assert "replicate the exact pattern" in prompt
    assert "skin tone, proportions, and the overall lighting" in prompt


@pytest.mark.parametrize("operation", [Operation.FILTER, Operation.ADJUST])
def test_blank_instruction_is_rejected(operation: Operation) -> None:
    with pytest.raises(ValueError):
        build_prompt(operation, instruction="   ")


def test_edit_requires_hotspot() -> None:
    with pytest.raises(ValueError):
        build_prompt(Operation.EDIT, instruction="remove the cup")


def test_swap_requires_items() -> None:
    with pytest.raises(EmptySelectionError):
        build_prompt(Operation.SWAP, items=[])


def test_swap_prompt_keeps_full_try_on_guidance() -> None:
    prompt = build_prompt(Operation.SWAP, items=["shorts"])

    assert "**Core Objectives:**" in prompt
    assert "This is the most important part of your task." in prompt
    assert "apply it to the person in the target image" in prompt
    assert "The pattern should stretch or compress naturally as the fabric would." in prompt
    assert "(e.g., generate the lower legs and feet)" in prompt
    assert "**Task:** Edit the target image to make the person appear to be wearing" in prompt


def test_filter_prompt_refuses_race_change_filters() -> None:
    prompt = build_prompt(Operation.FILTER, instruction="noir")

    assert "You MUST REFUSE any request that explicitly asks to change a person's race" in prompt
    assert "'apply a filter to make me look Chinese'" in prompt
