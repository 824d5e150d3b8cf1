"""The block of study text every AI feature works against."""

from __future__ import annotations

from studiq.core.logging import get_logger

logger = get_logger(__name__)

IMAGE_PLACEHOLDER = "\n[Attached Image Content...]"


class StudyContextStore:
    """Mutable study text; an empty (or whitespace-only) value gates AI features off."""

    def __init__(self, text: str = "") -> None:
        self._text = text

    @property
    def text(self) -> str:
        return self._text

    @property
    def is_empty(self) -> bool:
        return not self._text.strip()

    def replace(self, text: str) -> str:
        self._text = text or ""
        return self._text

    def append(self, text: str) -> str:
        self._text += text or ""
        return self._text

    def clear(self) -> None:
        self._text = ""

    def attach_image(self, data: bytes, *, filename: str | None = None) -> str:
        """Record an uploaded image as a placeholder line in the context.

        Image contents are not extracted; only the placeholder is appended.
        """
        if not data:
            return self._text
        logger.info(
            "Attached image %s (%d bytes) to study context", filename or "-", len(data)
        )
        return self.append(IMAGE_PLACEHOLDER)
