"""Image assets and their conversion to Gemini inline-data parts.

Every image travels to the model as a data URL round trip: the raw bytes
are base64 encoded into ``data:<mime>;base64,<payload>`` and parsed back
into a media type / payload pair. A source that cannot be read, or whose
data URL cannot be parsed, raises :class:`~pixshop.errors.EncodingError`.
"""

from __future__ import annotations

import base64
import binascii
import mimetypes
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple, Union

from google.genai import types as genai_types

from pixshop.errors import EncodingError

_MIME_PATTERN = re.compile(r":(.*?);")


@dataclass(slots=True, frozen=True)
class ImageAsset:
    """Raw image bytes paired with their declared media type."""

    data: bytes
    mime_type: str
    name: str = ""

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "ImageAsset":
        path = Path(path)
        mime_type, _ = mimetypes.guess_type(path.as_posix())
        if not mime_type:
            raise EncodingError(
                f"Could not infer a MIME type for '{path.name}'. Rename it with a known extension."
            )
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise EncodingError(f"Could not read image '{path}': {exc}") from exc
        return cls(data=data, mime_type=mime_type, name=path.name)

    @classmethod
    def from_data_url(cls, data_url: str, name: str = "") -> "ImageAsset":
        mime_type, payload = parse_data_url(data_url)
        try:
            data = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise EncodingError("Data URL payload is not valid base64.") from exc
        return cls(data=data, mime_type=mime_type, name=name)


@dataclass(slots=True, frozen=True)
class Hotspot:
    """Pixel coordinates the localized edit should focus on."""

    x: int
    y: int


@dataclass(slots=True, frozen=True)
class EncodedPart:
    mime_type: str
    data: str

    def to_part(self) -> genai_types.Part:
        return genai_types.Part(
            inline_data=genai_types.Blob(
                mime_type=self.mime_type,
                data=base64.b64decode(self.data),
            )
        )


@dataclass(slots=True, frozen=True)
class ImagePayload:
    """An image returned by the model."""

    mime_type: str
    data: bytes

    @property
    def base64_data(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    def to_data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.base64_data}"


ImageSource = Union[ImageAsset, Path, str]


def to_data_url(data: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def parse_data_url(data_url: str) -> Tuple[str, str]:
    """Split a data URL into its media type and base64 payload."""

    header, sep, payload = data_url.partition(",")
    if not sep:
        raise EncodingError("Invalid data URL")
    match = _MIME_PATTERN.search(header)
    if not match or not match.group(1):
        raise EncodingError("Could not parse MIME type from data URL")
    return match.group(1), payload


def _as_asset(source: ImageSource) -> ImageAsset:
    if isinstance(source, ImageAsset):
        return source
    if isinstance(source, str) and source.startswith("data:"):
        return ImageAsset.from_data_url(source)
    if isinstance(source, (str, Path)):
        return ImageAsset.from_path(source)
    raise EncodingError(f"Unsupported image source type: {type(source).__name__}")


def encode_image(source: ImageSource) -> EncodedPart:
    """Read ``source`` and return its base64 payload paired with its media type."""

    asset = _as_asset(source)
    if not asset.mime_type:
        raise EncodingError(f"Image '{asset.name or '<unnamed>'}' has no media type.")
    mime_type, payload = parse_data_url(to_data_url(asset.data, asset.mime_type))
    return EncodedPart(mime_type=mime_type, data=payload)
