"""Exceptions raised by the Pixshop request adapter."""

from __future__ import annotations

from typing import Optional


class PixshopError(RuntimeError):
    """Base class for every failure surfaced by Pixshop."""


class ConfigurationError(PixshopError):
    """Raised when required settings (the API key) are missing."""


class EncodingError(PixshopError, ValueError):
    """The image source could not be read or its data URL is malformed."""


class EmptySelectionError(PixshopError, ValueError):
    """A clothing swap was requested without any selected items."""

    def __init__(self, message: str = "No clothing items were selected to swap.") -> None:
        super().__init__(message)


class ImageGenerationError(PixshopError):
    """The model answered but did not produce a usable image."""

    def __init__(self, message: str, *, context: str) -> None:
        super().__init__(message)
        self.context = context


class BlockedError(ImageGenerationError):
    def __init__(self, reason: str, message: Optional[str] = None, *, context: str) -> None:
        self.reason = reason
        self.block_message = message
        text = f"Request was blocked. Reason: {reason}."
        if message:
            text = f"{text} {message}"
        super().__init__(text, context=context)


class AbnormalStopError(ImageGenerationError):
    def __init__(self, status: str, *, context: str) -> None:
        self.status = status
        super().__init__(
            f"Image generation for {context} stopped unexpectedly. Reason: {status}. "
            "This often relates to safety settings.",
            context=context,
        )


class NoImageReturnedError(ImageGenerationError):
    """Well-formed response without an image, often a soft safety refusal."""

    def __init__(self, text_feedback: Optional[str] = None, *, context: str) -> None:
        self.text_feedback = text_feedback
        message = f"The AI model did not return an image for the {context}. "
        if text_feedback:
            message += f'The model responded with text: "{text_feedback}"'
        else:
            message += (
                "This can happen due to safety filters or if the request is too complex. "
                "Please try rephrasing your prompt to be more direct."
            )
        super().__init__(message, context=context)
