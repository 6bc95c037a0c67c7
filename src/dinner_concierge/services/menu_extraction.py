"""Menu extraction from photographs using LLM vision."""

import base64
import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from dinner_concierge.domain.errors import ConfigurationError, ExtractionError
from dinner_concierge.domain.menu import FullMenu, MenuCategory

logger = logging.getLogger(__name__)

MENU_PROMPT = (
    "Analyze this menu image. Extract the menu items into categories: "
    "soup, appetizer, main, and aLaCarte. For the 'main' category, include all "
    "main courses. Assign a unique short ID to each item. Include prices as "
    "numbers if visible. Be precise with prices and names."
)

_ITEM_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "id": {"type": "string"},
        "name": {"type": "string"},
        "price": {"anyOf": [{"type": "number", "minimum": 0}, {"type": "null"}]},
    },
    "required": ["id", "name", "price"],
    "additionalProperties": False,
}

_CATEGORY_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "title": {"type": "string"},
        "items": {"type": "array", "items": _ITEM_SCHEMA},
        "required": {"type": "boolean"},
        "multiSelect": {"type": "boolean"},
    },
    "required": ["title", "items", "required", "multiSelect"],
    "additionalProperties": False,
}

MENU_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "soup": _CATEGORY_SCHEMA,
        "appetizer": _CATEGORY_SCHEMA,
        "main": _CATEGORY_SCHEMA,
        "aLaCarte": _CATEGORY_SCHEMA,
    },
    "required": ["soup", "appetizer", "main", "aLaCarte"],
    "additionalProperties": False,
}


class MenuVisionClient(Protocol):
    """Interface for LLM vision extraction."""

    async def extract(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_url: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object] | None:
        """Return structured extraction data, or None when nothing came back."""


@dataclass
class MenuExtractionService:
    """Service that turns a menu photo into a catalog."""

    client: MenuVisionClient | None
    model: str
    reasoning_effort: str | None
    store: bool

    @property
    def is_configured(self) -> bool:
        return self.client is not None

    async def extract(self, image_bytes: bytes) -> FullMenu | None:
        """Extract a menu from an image.

        Returns None when no client is configured or the service produced no
        output.

        Raises:
            ExtractionError: the call failed or its output was not a menu.
        """
        try:
            client = self._require_client()
        except ConfigurationError as exc:
            logger.warning("Skipping menu extraction: %s", exc)
            return None
        try:
            raw = await client.extract(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                image_data_url=_to_data_url(image_bytes),
                schema=MENU_SCHEMA,
                prompt=MENU_PROMPT,
            )
        except Exception as exc:
            raise ExtractionError(f"Menu extraction failed: {exc}") from exc
        if not raw:
            return None
        try:
            menu = FullMenu.model_validate(raw)
        except ValidationError as exc:
            raise ExtractionError("Menu extraction returned an invalid menu") from exc
        return normalize_category_flags(menu)

    def _require_client(self) -> MenuVisionClient:
        if self.client is None:
            raise ConfigurationError("OpenAI API key is not configured")
        return self.client


def normalize_category_flags(menu: FullMenu) -> FullMenu:
    """Force the selection policy of each category.

    Soup, appetizer and main are single-choice and required; a la carte is
    optional multi-select. Only item content comes from the extraction.
    """
    return menu.model_copy(
        update={
            "soup": _with_flags(menu.soup, required=True, multi_select=False),
            "appetizer": _with_flags(menu.appetizer, required=True, multi_select=False),
            "main": _with_flags(menu.main, required=True, multi_select=False),
            "a_la_carte": _with_flags(
                menu.a_la_carte, required=False, multi_select=True
            ),
        }
    )


def _with_flags(
    category: MenuCategory, *, required: bool, multi_select: bool
) -> MenuCategory:
    return category.model_copy(
        update={"required": required, "multi_select": multi_select}
    )


def _to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    if image_bytes[:6] in {b"GIF87a", b"GIF89a"}:
        return "image/gif"
    return "image/jpeg"
