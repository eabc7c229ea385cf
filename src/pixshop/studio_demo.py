"""Run one Pixshop operation against local images.

This module wires together a minimal workflow to:

1. Load your Gemini API key from a ``.env`` file.
2. Select source images from ``data/raw``.
3. Send the edit, filter, adjustment, swap or identification request.
4. Persist the returned image under ``data/processed``.

Update the configuration block just below to experiment with prompts and
input imagery.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional

from pixshop.encoding import Hotspot, ImageAsset
from pixshop.gemini_config import StudioSettings, create_client, load_settings
from pixshop.image_service import (
    adjust_image,
    apply_filter,
    edit_image,
    identify_items,
    swap_clothing,
)
from pixshop.prompts import Operation
from pixshop.shared import resolve_image_paths, save_image

# ---------------------------------------------------------------------------
# Configuration section – tweak these values before each run.

# One of: edit, filter, adjust, swap, identify.
OPERATION: str = "swap"

# Photo to edit (the person for swaps), relative to RAW_IMAGE_DIR.
TARGET_IMAGE_NAME: str = "person.jpg"

# Outfit photo, only used for swap and identify.
CLOTHING_IMAGE_NAME: str = "outfit.jpg"

# Instruction for edit, filter and adjust.
INSTRUCTION: str = "Give the scene warm, golden-hour lighting."

# Focus point for localized edits.
HOTSPOT: Hotspot = Hotspot(x=320, y=240)

# Items to take from the outfit photo. Leave empty to use every identified item.
SWAP_ITEMS: List[str] = []

OUTPUT_BASE_NAME: str = "pixshop"

# ---------------------------------------------------------------------------
# Derived paths.

PROJECT_ROOT: Path = Path(__file__).resolve().parents[2]
RAW_IMAGE_DIR: Path = PROJECT_ROOT / "data" / "raw"
PROCESSED_IMAGE_DIR: Path = PROJECT_ROOT / "data" / "processed"


@dataclass(slots=True)
class DemoRun:
    """Container describing the assets and settings for one run."""

    operation: Operation
    target_path: Optional[Path]
    clothing_path: Optional[Path]
    settings: StudioSettings


def prepare_run(settings: Optional[StudioSettings] = None) -> DemoRun:
    operation = Operation(OPERATION)
    target_path: Optional[Path] = None
    clothing_path: Optional[Path] = None

    if operation is Operation.IDENTIFY:
        (clothing_path,) = resolve_image_paths(RAW_IMAGE_DIR, [CLOTHING_IMAGE_NAME])
    elif operation is Operation.SWAP:
        target_path, clothing_path = resolve_image_paths(
            RAW_IMAGE_DIR, [TARGET_IMAGE_NAME, CLOTHING_IMAGE_NAME]
        )
    else:
        (target_path,) = resolve_image_paths(RAW_IMAGE_DIR, [TARGET_IMAGE_NAME])

    return DemoRun(
        operation=operation,
        target_path=target_path,
        clothing_path=clothing_path,
        settings=settings or load_settings(),
    )


def run_operation(run: DemoRun, client: Any) -> Optional[Path]:
    """Execute the configured operation and return the saved image, if any."""

    if run.operation is Operation.IDENTIFY:
        clothing = ImageAsset.from_path(run.clothing_path)
        items = identify_items(client, clothing, model_name=run.settings.text_model)
        print("👕 Identified clothing items:")
        for item in items or ["<none>"]:
            print(f"  - {item}")
        return None

    target = ImageAsset.from_path(run.target_path)
    image_model = run.settings.image_model

    if run.operation is Operation.EDIT:
        payload = edit_image(client, target, INSTRUCTION, HOTSPOT, model_name=image_model)
    elif run.operation is Operation.FILTER:
        payload = apply_filter(client, target, INSTRUCTION, model_name=image_model)
    elif run.operation is Operation.ADJUST:
        payload = adjust_image(client, target, INSTRUCTION, model_name=image_model)
    else:
        clothing = ImageAsset.from_path(run.clothing_path)
        items = SWAP_ITEMS or identify_items(client, clothing, model_name=run.settings.text_model)
        print("🧥 Items to swap:")
        for item in items or ["<none>"]:
            print(f"  - {item}")
        payload = swap_clothing(client, target, clothing, items, model_name=image_model)

    return save_image(payload, PROCESSED_IMAGE_DIR, f"{OUTPUT_BASE_NAME}-{run.operation.value}")


def main() -> None:
    """CLI entry-point used when running this module directly."""

    try:
        run = prepare_run()
        print(f"🎛️ Operation: {run.operation.value}")
        if run.target_path is not None:
            print("🎯 Target image:")
            print(f"  - {run.target_path.relative_to(PROJECT_ROOT)}")
        if run.clothing_path is not None:
            print("📚 Clothing image:")
            print(f"  - {run.clothing_path.relative_to(PROJECT_ROOT)}")

        output_path = run_operation(run, create_client(run.settings))
        if output_path is not None:
            print("✅ Gemini returned the following image:")
            print(f"  - {output_path.relative_to(PROJECT_ROOT)}")
    except Exception as exc:  # noqa: BLE001 - surface helpful message to newcomers.
        print(f"❌ {exc}")


if __name__ == "__main__":
    main()
