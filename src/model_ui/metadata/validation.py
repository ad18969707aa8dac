"""
Validation source.

Reads the constraints pydantic already knows about a model field and
reports them as validation fragments: a TypeDescriptor for the base type,
then one ValidationFragment per constraint.
"""

import datetime
import inspect
import logging
import types
from decimal import Decimal
from typing import Annotated, Any, Union, get_args, get_origin

from pydantic import AnyUrl, BaseModel, EmailStr, SecretStr
from pydantic.fields import FieldInfo

from model_ui.constants import BaseType, ValidationKey
from model_ui.models.validation import TypeDescriptor, ValidationFragment

logger = logging.getLogger(__name__)


def unwrap_annotation(annotation: Any) -> Any:
    """Strip Annotated and Optional wrappers from an annotation."""
    while True:
        origin = get_origin(annotation)
        if origin is Annotated:
            annotation = get_args(annotation)[0]
            continue
        if origin in (Union, types.UnionType):
            args = [arg for arg in get_args(annotation) if arg is not type(None)]
            if len(args) == 1:
                annotation = args[0]
                continue
        return annotation


def is_model_type(annotation: Any) -> bool:
    """Check if an annotation is a pydantic model."""
    try:
        return inspect.isclass(annotation) and issubclass(annotation, BaseModel)
    except TypeError:
        return False


def base_type_of(annotation: Any) -> str:
    """Map a Python annotation to its semantic base type."""
    annotation = unwrap_annotation(annotation)
    if annotation is bool:
        return BaseType.BOOLEAN.value
    if annotation in (int, float, Decimal):
        return BaseType.NUMBER.value
    if annotation in (datetime.date, datetime.datetime, datetime.time):
        return BaseType.DATE.value
    return BaseType.STRING.value


def _type_marker_of(annotation: Any) -> ValidationFragment | None:
    annotation = unwrap_annotation(annotation)
    if annotation is EmailStr:
        return ValidationFragment(key=ValidationKey.EMAIL.value)
    if annotation is SecretStr:
        return ValidationFragment(key=ValidationKey.PASSWORD.value)
    if inspect.isclass(annotation) and issubclass(annotation, AnyUrl):
        return ValidationFragment(key=ValidationKey.URL.value)
    return None


def _inclusive(bound: Any, step: int) -> Any:
    # Strict integer bounds become inclusive ones. Other strict bounds have no
    # inclusive equivalent and yield None.
    if isinstance(bound, int) and not isinstance(bound, bool):
        return bound + step
    return None


def constraint_fragments(field_info: FieldInfo) -> list[ValidationFragment]:
    """Extract validation fragments from a pydantic field's constraints."""
    fragments: list[ValidationFragment] = []

    if field_info.is_required():
        fragments.append(ValidationFragment(key=ValidationKey.REQUIRED.value, value=True))

    marker = _type_marker_of(field_info.annotation)
    if marker is not None:
        fragments.append(marker)

    for item in field_info.metadata:
        min_length = getattr(item, "min_length", None)
        if min_length is not None:
            fragments.append(ValidationFragment(key=ValidationKey.MIN_LENGTH.value, value=min_length))
        max_length = getattr(item, "max_length", None)
        if max_length is not None:
            fragments.append(ValidationFragment(key=ValidationKey.MAX_LENGTH.value, value=max_length))

        minimum = getattr(item, "ge", None)
        if minimum is None and getattr(item, "gt", None) is not None:
            minimum = _inclusive(item.gt, 1)
            if minimum is None:
                logger.debug("Dropping exclusive lower bound %r of a non-integer field", item.gt)
        if minimum is not None:
            fragments.append(ValidationFragment(key=ValidationKey.MIN.value, value=minimum))

        maximum = getattr(item, "le", None)
        if maximum is None and getattr(item, "lt", None) is not None:
            maximum = _inclusive(item.lt, -1)
            if maximum is None:
                logger.debug("Dropping exclusive upper bound %r of a non-integer field", item.lt)
        if maximum is not None:
            fragments.append(ValidationFragment(key=ValidationKey.MAX.value, value=maximum))

        multiple_of = getattr(item, "multiple_of", None)
        if multiple_of is not None:
            fragments.append(ValidationFragment(key=ValidationKey.STEP.value, value=multiple_of))

        pattern = getattr(item, "pattern", None)
        if pattern is not None:
            pattern = getattr(pattern, "pattern", pattern)
            fragments.append(
                ValidationFragment(key=ValidationKey.PATTERN.value, value=pattern, pattern=pattern)
            )

    return fragments


def validation_fragments(
    model_type: type,
    name: str,
    declared: list[ValidationFragment] | None = None,
) -> list[TypeDescriptor | ValidationFragment]:
    """
    Build the full validation list of one property.

    Args:
        model_type: The model class declaring the property.
        name: Property name.
        declared: Fragments declared explicitly for the property. They are
            appended, replacing extracted fragments that share their key.

    Returns:
        ``[TypeDescriptor, *ValidationFragment]``
    """
    fields: dict[str, FieldInfo] = getattr(model_type, "model_fields", {})
    field_info = fields.get(name)

    if field_info is None:
        descriptor = TypeDescriptor()
        fragments: list[ValidationFragment] = []
    else:
        descriptor = TypeDescriptor(name=base_type_of(field_info.annotation))
        fragments = constraint_fragments(field_info)

    for fragment in declared or []:
        if fragment.key == "type":
            descriptor = TypeDescriptor(name=str(fragment.value))
            continue
        fragments = [f for f in fragments if f.key != fragment.key]
        fragments.append(fragment)

    return [descriptor, *fragments]
