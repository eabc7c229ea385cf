"""Unit tests for the configuration-block demo runner."""

from __future__ import annotations

from pathlib import Path

import pytest

from conftest import PNG_BYTES, FakeClient, image_part, make_envelope
from pixshop import studio_demo
from pixshop.gemini_config import StudioSettings
from pixshop.prompts import Operation

SETTINGS = StudioSettings(api_key="test-key", image_model="image-m", text_model="text-m")


@pytest.fixture
def demo_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    raw = tmp_path / "raw"
    raw.mkdir()
    monkeypatch.setattr(studio_demo, "RAW_IMAGE_DIR", raw)
    monkeypatch.setattr(studio_demo, "PROCESSED_IMAGE_DIR", tmp_path / "processed")
    return raw


def test_identify_only_needs_the_clothing_image(demo_dirs: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (demo_dirs / "outfit.jpg").write_bytes(PNG_BYTES)
    monkeypatch.setattr(studio_demo, "OPERATION", "identify")

    run = studio_demo.prepare_run(SETTINGS)

    assert run.operation is Operation.IDENTIFY
    assert run.target_path is None
    assert run.clothing_path == demo_dirs / "outfit.jpg"


def test_identify_run_prints_labels(
    demo_dirs: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    (demo_dirs / "outfit.jpg").write_bytes(PNG_BYTES)
    monkeypatch.setattr(studio_demo, "OPERATION", "identify")
    client = FakeClient(make_envelope(text='{"clothing_items": ["hoodie"]}'))

    output = studio_demo.run_operation(studio_demo.prepare_run(SETTINGS), client)

    assert output is None
    assert client.calls[0]["model"] == "text-m"
    assert "hoodie" in capsys.readouterr().out


def test_swap_run_saves_returned_image(demo_dirs: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (demo_dirs / "person.jpg").write_bytes(PNG_BYTES)
    (demo_dirs / "outfit.jpg").write_bytes(b"outfit")
    monkeypatch.setattr(studio_demo, "OPERATION", "swap")
    monkeypatch.setattr(studio_demo, "SWAP_ITEMS", ["shorts"])
    client = FakeClient(make_envelope(parts=[image_part()], finish_reason="STOP"))

    run = studio_demo.prepare_run(SETTINGS)
    output = studio_demo.run_operation(run, client)

    assert len(client.calls) == 1
    assert client.calls[0]["model"] == "image-m"
    assert output is not None
    assert output.parent == demo_dirs.parent / "processed"
    assert output.name.startswith("pixshop-swap_")
    assert output.read_bytes() == PNG_BYTES


def test_filter_run_requires_target_image(demo_dirs: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(studio_demo, "OPERATION", "filter")

    with pytest.raises(FileNotFoundError, match="person.jpg"):
        studio_demo.prepare_run(SETTINGS)
