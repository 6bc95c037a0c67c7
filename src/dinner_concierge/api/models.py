"""Pydantic models for request bodies."""

from pydantic import BaseModel


class ChoiceRequest(BaseModel):
    """Selects a dish for a single-choice category; null clears it."""

    item_id: str | None = None


class NotesRequest(BaseModel):
    """Free-text notes for the kitchen."""

    notes: str = ""
