from __future__ import annotations

import mimetypes
import os
from datetime import UTC, datetime
from pathlib import Path
from typing import Iterable, List

from pixshop.encoding import ImagePayload

# ---------------------------------------------------------------------------
# Input resolution helpers


def resolve_image_paths(image_dir: Path, image_names: Iterable[str]) -> List[Path]:
    if not image_dir.exists():
        raise FileNotFoundError(f"Image directory '{image_dir}' does not exist.")

    resolved: List[Path] = []
    for name in image_names:
        if not name:
            raise ValueError("An image name is empty. Set it to a filename inside the image directory.")
        candidate = image_dir / name
        if not candidate.exists():
            available = ", ".join(path.name for path in image_dir.iterdir() if path.is_file()) or "<none>"
            raise FileNotFoundError(
                f"Image '{name}' was not found in '{image_dir}'. Available files: {available}"
            )
        resolved.append(candidate)

    if not resolved:
        raise ValueError("No input images were configured.")

    return resolved


# ---------------------------------------------------------------------------
# Output helpers


def save_image(payload: ImagePayload, output_dir: Path, base_name: str) -> Path:
    """Persist a returned image under ``output_dir`` with a timestamped name."""

    output_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now(UTC).strftime("%Y%m%d_%H%M%S")

    stem = os.path.splitext(os.path.basename(base_name))[0] or "pixshop"
    ext = mimetypes.guess_extension(payload.mime_type) or ".png"

    target_path = output_dir / f"{stem}_{timestamp}{ext}"
    target_path.write_bytes(payload.data)
    return target_path
