"""
Type & validation translator.

Maps semantic base types to UI input categories and back, turns validation
fragments into node attributes or type markers, and formats field values
for display.
"""

from typing import Any

from model_ui.config import ModelUIConfig, get_config
from model_ui.constants import (
    FROM_VIEW_TYPES,
    TO_VIEW_TYPES,
    VALID_VALIDATION_KEYS,
    VALIDATABLE_BY_ATTRIBUTE,
    VALIDATABLE_BY_TYPE,
    BaseType,
    InputType,
    ValidationKey,
)
from model_ui.errors import InvalidAttributeKey
from model_ui.formatting import escape_html, format_by_type
from model_ui.models.validation import ValidationFragment

_STRING_INPUTS = frozenset(
    key for key, base in FROM_VIEW_TYPES.items() if base == BaseType.STRING.value
)


def translate(key: str, to_view: bool = True) -> str:
    """
    Map a base type to an input category, or an input category to a base type.

    Unknown keys are returned unchanged.
    """
    mapping = TO_VIEW_TYPES if to_view else FROM_VIEW_TYPES
    return mapping.get(key, key)


class Translator:
    """
    Translates validation metadata into node props.

    Usage:
        translator = Translator()
        translator.translate("number")                         # "number"
        translator.to_attribute_value("required", fragment)    # True
        translator.type_marker(ValidationFragment(key="date"))  # ("date", "yyyy-MM-dd")
    """

    def __init__(self, date_format: str | None = None, config: ModelUIConfig | None = None):
        self.config = config or get_config()
        self.date_format = date_format or self.config.date_format

    def translate(self, key: str, to_view: bool = True) -> str:
        return translate(key, to_view)

    def is_validatable_by_attribute(self, key: str) -> bool:
        return key in VALIDATABLE_BY_ATTRIBUTE

    def is_validatable_by_type(self, key: str) -> bool:
        return key in VALIDATABLE_BY_TYPE

    def to_attribute_value(self, key: str, fragment: ValidationFragment) -> Any:
        """
        Get the attribute value a validation fragment contributes to a node.

        Args:
            key: The validation key.
            fragment: The validation fragment carrying the configured value.

        Returns:
            ``True`` for ``required``, the pattern for ``pattern``, the
            configured value otherwise.

        Raises:
            InvalidAttributeKey: If the key is not an attribute key.
        """
        if not self.is_validatable_by_attribute(key):
            raise InvalidAttributeKey(key, VALID_VALIDATION_KEYS)
        if key == ValidationKey.REQUIRED.value:
            return True
        if key == ValidationKey.PATTERN.value:
            return fragment.pattern if fragment.pattern is not None else fragment.value
        return fragment.value

    def type_marker(self, fragment: ValidationFragment) -> tuple[str, str | None]:
        """
        Get the input type a type-implying fragment sets, with its format.

        Raises:
            InvalidAttributeKey: If the key does not imply a type.
        """
        if not self.is_validatable_by_type(fragment.key):
            raise InvalidAttributeKey(fragment.key, VALID_VALIDATION_KEYS)
        if fragment.key == ValidationKey.DATE.value:
            return InputType.DATE.value, fragment.format or self.date_format
        return fragment.key, None

    def format_value(self, type_: str | None, value: Any, fmt: str | None = None) -> Any:
        """Format a field value for display according to its resolved type."""
        if type_ == InputType.DATE.value:
            return format_by_type(type_, value, fmt or self.date_format)
        if type_ in _STRING_INPUTS and isinstance(value, str) and self.config.escape_html:
            return escape_html(value)
        return value
