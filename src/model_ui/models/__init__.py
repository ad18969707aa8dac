"""
Data models for model-ui.

This module contains Pydantic models for:
- Annotation fragments (class-level bundles, placements, modifiers)
- Validation fragments
- Field tree output
- JSON Schema output
"""

from model_ui.models.metadata import (
    Fragment,
    UIChildMetadata,
    UIClassBundle,
    UIElementMetadata,
    UIHandlerMetadata,
    UIHiddenMetadata,
    UILayoutMetadata,
    UILayoutPropMetadata,
    UIListModelMetadata,
    UIListPropMetadata,
    UIModelMetadata,
    UIOrderMetadata,
    UIPageMetadata,
    UIPropMetadata,
    UIStepsMetadata,
)
from model_ui.models.validation import (
    TypeDescriptor,
    ValidationFragment,
)
from model_ui.models.field_definition import (
    FieldDefinition,
    ListItemDefinition,
)
from model_ui.models.schema_output import (
    FormFieldSchema,
    GeneratedFormSchema,
)

__all__ = [
    # Class-level fragments
    "Fragment",
    "UIModelMetadata",
    "UIListModelMetadata",
    "UIHandlerMetadata",
    "UILayoutMetadata",
    "UIStepsMetadata",
    "UIClassBundle",
    # Placements
    "UIPropMetadata",
    "UIElementMetadata",
    "UIChildMetadata",
    "UIListPropMetadata",
    # Modifiers
    "UIHiddenMetadata",
    "UIOrderMetadata",
    "UILayoutPropMetadata",
    "UIPageMetadata",
    # Validation
    "TypeDescriptor",
    "ValidationFragment",
    # Output
    "FieldDefinition",
    "ListItemDefinition",
    "FormFieldSchema",
    "GeneratedFormSchema",
]
