"""
Metadata attachment and lookup.

This module contains:
- The metadata store (keyed fragment storage, MRO-aware lookups)
- Declarative registration (describe(Model).model(...).element(...))
- The validation source (pydantic constraints as validation fragments)
"""

from model_ui.metadata.declare import ModelDescriptor, describe
from model_ui.metadata.store import (
    MetadataKey,
    MetadataStore,
    PropertyFragments,
    get_store,
)
from model_ui.metadata.validation import (
    base_type_of,
    constraint_fragments,
    validation_fragments,
)

__all__ = [
    "describe",
    "ModelDescriptor",
    "MetadataKey",
    "MetadataStore",
    "PropertyFragments",
    "get_store",
    "base_type_of",
    "constraint_fragments",
    "validation_fragments",
]
