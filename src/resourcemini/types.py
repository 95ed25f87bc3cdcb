from __future__ import annotations

from typing import Optional

from opentelemetry.util.types import Attributes, AttributeValue

__all__ = ["AttributeValue", "Attributes", "merge_attributes"]


def merge_attributes(*mappings: Optional[Attributes]) -> dict:
    """Return a new dict holding every mapping in order, later ones winning on collision.

    The merge is shallow: structured values are replaced, never combined.
    """
    merged = {}
    for mapping in mappings:
        if mapping:
            merged.update(mapping)
    return merged
