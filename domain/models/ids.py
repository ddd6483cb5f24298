"""Identifier generation for stored entities."""

import uuid


def new_id() -> str:
    """Return a fresh globally unique entity id."""
    return str(uuid.uuid4())
