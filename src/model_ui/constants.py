"""
Constants for model-ui.

Metadata keys, input categories, validation keys and defaults shared by
the metadata store, the translator and the field tree builder.
"""

from enum import Enum

# Root of every namespaced metadata key
REFLECT = "model_ui"

# Default date format (HTML5 date input value format)
HTML5_DATE_FORMAT = "yyyy-MM-dd"

# Context/prop keys the builder reads or writes
INHERIT_PROPS = "inheritProps"
CHILD_OF = "childOf"
PATH = "path"
NAME = "name"
TYPE = "type"
FORMAT = "format"
VALUE = "value"
HIDDEN = "hidden"
OPERATION = "operation"
HANDLERS = "handlers"
MAPPER = "mapper"
RENDER = "render"


class Concern(str, Enum):
    """Which part of a model type a metadata fragment describes."""

    CLASS = "class"
    PROPERTY = "property"


class ClassConcern(str, Enum):
    """Class-level fragment keys, in bundle merge order."""

    MODEL = "model"
    LIST_MODEL = "list-model"
    HANDLERS = "handlers"
    LAYOUT = "layout"
    STEPS = "steps"


class Placement(str, Enum):
    """Property placement keys. A property carries exactly one."""

    PROP = "prop"
    ELEMENT = "element"
    CHILD = "child"
    LIST_PROP = "list-prop"


class Modifier(str, Enum):
    """Property modifier keys. They augment the node of their placement."""

    HIDDEN = "hidden"
    ORDER = "order"
    LAYOUT_PROP = "layout-prop"
    PAGE = "page"


class CrudOperation(str, Enum):
    """Operations a form can be rendered for."""

    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


class BaseType(str, Enum):
    """Semantic base types reported by the validation source."""

    STRING = "string"
    NUMBER = "number"
    BIGINT = "bigint"
    BOOLEAN = "boolean"
    DATE = "date"


class InputType(str, Enum):
    """UI input categories (HTML5 input types)."""

    TEXT = "text"
    NUMBER = "number"
    RANGE = "range"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    DATE = "date"
    DATETIME_LOCAL = "datetime-local"
    TIME = "time"
    EMAIL = "email"
    URL = "url"
    PASSWORD = "password"
    TEL = "tel"
    COLOR = "color"
    HIDDEN = "hidden"


class ValidationKey(str, Enum):
    """Validation fragment keys understood by the translator."""

    REQUIRED = "required"
    MIN = "min"
    MAX = "max"
    STEP = "step"
    MIN_LENGTH = "minlength"
    MAX_LENGTH = "maxlength"
    PATTERN = "pattern"
    EQUALS = "equals"
    DIFF = "different"
    LESS_THAN = "lessThan"
    LESS_THAN_OR_EQUAL = "lessThanOrEqual"
    GREATER_THAN = "greaterThan"
    GREATER_THAN_OR_EQUAL = "greaterThanOrEqual"
    EMAIL = "email"
    URL = "url"
    DATE = "date"
    PASSWORD = "password"


# Keys rendered as attributes on the node
VALIDATABLE_BY_ATTRIBUTE = frozenset({
    ValidationKey.REQUIRED.value,
    ValidationKey.MIN.value,
    ValidationKey.MAX.value,
    ValidationKey.STEP.value,
    ValidationKey.MIN_LENGTH.value,
    ValidationKey.MAX_LENGTH.value,
    ValidationKey.PATTERN.value,
    ValidationKey.EQUALS.value,
    ValidationKey.DIFF.value,
    ValidationKey.LESS_THAN.value,
    ValidationKey.LESS_THAN_OR_EQUAL.value,
    ValidationKey.GREATER_THAN.value,
    ValidationKey.GREATER_THAN_OR_EQUAL.value,
})

# Keys that set the node's input type
VALIDATABLE_BY_TYPE = frozenset({
    ValidationKey.EMAIL.value,
    ValidationKey.URL.value,
    ValidationKey.DATE.value,
    ValidationKey.PASSWORD.value,
})

VALID_VALIDATION_KEYS = tuple(sorted(VALIDATABLE_BY_ATTRIBUTE | VALIDATABLE_BY_TYPE))

# Semantic base type -> UI input category
TO_VIEW_TYPES = {
    BaseType.STRING.value: InputType.TEXT.value,
    BaseType.NUMBER.value: InputType.NUMBER.value,
    BaseType.BIGINT.value: InputType.NUMBER.value,
    BaseType.BOOLEAN.value: InputType.CHECKBOX.value,
    BaseType.DATE.value: InputType.DATE.value,
}

# UI input category -> semantic base type
FROM_VIEW_TYPES = {
    InputType.TEXT.value: BaseType.STRING.value,
    InputType.EMAIL.value: BaseType.STRING.value,
    InputType.COLOR.value: BaseType.STRING.value,
    InputType.PASSWORD.value: BaseType.STRING.value,
    InputType.TEL.value: BaseType.STRING.value,
    InputType.URL.value: BaseType.STRING.value,
    InputType.NUMBER.value: BaseType.NUMBER.value,
    InputType.RANGE.value: BaseType.NUMBER.value,
    InputType.CHECKBOX.value: BaseType.BOOLEAN.value,
    InputType.RADIO.value: BaseType.BOOLEAN.value,
    InputType.DATE.value: BaseType.DATE.value,
    InputType.DATETIME_LOCAL.value: BaseType.DATE.value,
    InputType.TIME.value: BaseType.DATE.value,
}
