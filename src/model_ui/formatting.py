"""
Value formatting helpers.

Conversion of model values to their display form (model -> view) and of
submitted input values back to model values (view -> model). Date format
strings use the ``yyyy MM dd HH hh mm ss a`` token set.
"""

import datetime
import logging
import re
import time
from typing import Any

from dateutil import parser as date_parser

from model_ui.constants import FROM_VIEW_TYPES, HTML5_DATE_FORMAT, BaseType, InputType
from model_ui.errors import ValueParseError

logger = logging.getLogger(__name__)

_DATE_TOKENS = re.compile(r"yyyy|yy|MM|dd|HH|hh|mm|ss|a")

_STRFTIME = {
    "yyyy": "%Y",
    "yy": "%y",
    "MM": "%m",
    "dd": "%d",
    "HH": "%H",
    "hh": "%I",
    "mm": "%M",
    "ss": "%S",
    "a": "%p",
}

_TRUE_STRINGS = {"true", "on", "1", "yes"}
_FALSE_STRINGS = {"false", "off", "0", "no", ""}


def to_strftime(fmt: str) -> str:
    """Convert a ``yyyy-MM-dd`` style format string to strftime directives."""
    return _DATE_TOKENS.sub(lambda m: _STRFTIME[m.group(0)], fmt.replace("%", "%%"))


def _to_datetime(value: Any) -> datetime.date | datetime.time:
    if isinstance(value, (datetime.date, datetime.time)):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        # epoch milliseconds
        return datetime.datetime.fromtimestamp(value / 1000)
    if isinstance(value, str):
        return date_parser.parse(value)
    raise TypeError(f"Cannot interpret {value!r} as a date")


def format_date(value: Any, fmt: str = HTML5_DATE_FORMAT) -> str:
    """
    Format a date-like value.

    Args:
        value: A date, datetime or time, epoch milliseconds, or a date string.
        fmt: Format string in the ``yyyy-MM-dd`` token set.

    Returns:
        The formatted date string.
    """
    return _to_datetime(value).strftime(to_strftime(fmt))


def format_by_type(type_: str | None, value: Any, fmt: str | None = None) -> Any:
    """
    Format a value for display according to its resolved input type.

    Values of a date field that are empty or cannot be read as a date are
    returned unchanged.
    """
    if type_ != InputType.DATE.value or value is None or value == "":
        return value
    try:
        return format_date(value, fmt or HTML5_DATE_FORMAT)
    except (ValueError, TypeError, OverflowError, OSError):
        logger.debug("Leaving unreadable date value %r unformatted", value)
        return value


def escape_html(value: str | None) -> str | None:
    """Escape ``&``, ``<`` and ``>``."""
    if not value:
        return value
    return value.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def revert_html(value: str | None) -> str | None:
    """Undo escape_html."""
    if not value:
        return value
    return value.replace("&lt;", "<").replace("&gt;", ">").replace("&amp;", "&")


def parse_to_number(value: Any) -> int | float | None:
    """
    Parse a value to a number.

    Returns:
        The number, or None when the value is not numeric.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if not isinstance(value, str):
        return None
    for convert in (int, float):
        try:
            return convert(value.strip())
        except ValueError:
            continue
    return None


def _parse_boolean(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    return None


def _parse_date(value: Any, fmt: str | None) -> datetime.date | datetime.time:
    if isinstance(value, str) and fmt:
        return datetime.datetime.strptime(value, to_strftime(fmt))
    return _to_datetime(value)


def parse_value_by_type(type_: str, value: Any, field_props: dict[str, Any] | None = None) -> Any:
    """
    Parse a submitted input value back into a model value.

    Args:
        type_: Input type of the field (``number``, ``date``, ``text``...).
        value: The raw submitted value.
        field_props: Props of the field's node. ``format`` is used for dates.

    Returns:
        A number, a datetime, a bool or an HTML-escaped string.

    Raises:
        ValueParseError: If the value cannot be parsed as the given type.
    """
    field_props = field_props or {}

    base_type = FROM_VIEW_TYPES.get(type_, type_)
    try:
        if base_type in (BaseType.NUMBER.value, BaseType.BIGINT.value):
            result = parse_to_number(value)
        elif base_type == BaseType.DATE.value:
            result = _parse_date(value, field_props.get("format"))
        elif base_type == BaseType.BOOLEAN.value:
            result = _parse_boolean(value)
        elif isinstance(value, str):
            result = escape_html(value)
        else:
            result = value
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueParseError(f"Failed to parse value {value!r} as {type_}: {e}") from e

    if result is None and value is not None:
        raise ValueParseError(f"Failed to parse value {value!r} as {type_}")
    return result


def generate_ui_model_id(model: Any, pk: str | None = None) -> str:
    """
    Generate the renderer id of a model instance.

    Args:
        model: The model instance.
        pk: Name of the model's primary-key property.

    Returns:
        ``"<TypeName>-<pk value>"``, or ``"<TypeName>-<epoch ms>"`` when no
        primary-key value is available.
    """
    value = getattr(model, pk, None) if pk else None
    if value is None:
        value = int(time.time() * 1000)
    return f"{type(model).__name__}-{value}"
