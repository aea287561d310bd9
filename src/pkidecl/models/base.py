# pkidecl/models/base.py

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


def to_kebab(field_name: str) -> str:
    """Source documents spell field names in kebab-case (``subject-entity``)."""
    return field_name.replace("_", "-")


class DocumentModel(BaseModel):
    """
    Base class for every record decoded from a source document.

    Records are immutable once decoded and reject unknown fields, so a typo in the
    source document surfaces as a decode error rather than being silently ignored.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_kebab,
        populate_by_name=True,
    )
