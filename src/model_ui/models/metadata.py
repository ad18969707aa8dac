"""
Annotation fragment models.

Plain-data records attached to model types at definition time and read
by the field tree builder. Each record knows the metadata key it is
stored under.
"""

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from model_ui.constants import ClassConcern, CrudOperation, Modifier, Placement


class Fragment(BaseModel):
    """Base for all annotation fragments. Fragments are immutable."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    key: ClassVar[str]


# Class-level fragments


class UIModelMetadata(Fragment):
    """Tag and static props of the component wrapping a model."""

    key: ClassVar[str] = ClassConcern.MODEL.value

    tag: str | None = Field(default=None, description="Component/element tag for the model")
    props: dict[str, Any] = Field(default_factory=dict, description="Static props for the tag")
    rendered_by: str | None = Field(default=None, description="Rendering engine flavour")
    pk: str | None = Field(default=None, description="Primary key property name")


class UIListModelMetadata(Fragment):
    """Tag and default props used for items when the model is listed."""

    key: ClassVar[str] = ClassConcern.LIST_MODEL.value

    tag: str = Field(..., description="List item tag")
    props: dict[str, Any] = Field(default_factory=dict, description="List item default props")


class UIHandlerMetadata(Fragment):
    """Event handlers passed to the model's component."""

    key: ClassVar[str] = ClassConcern.HANDLERS.value

    handlers: dict[str, Any] = Field(default_factory=dict, description="Event name to handler")


class UILayoutMetadata(Fragment):
    """Grid layout of the model's component."""

    key: ClassVar[str] = ClassConcern.LAYOUT.value

    tag: str | None = Field(default=None, description="Optional layout tag override")
    cols: int = Field(default=1, ge=1, description="Grid columns")
    rows: int = Field(default=1, ge=1, description="Grid rows")
    breakpoint: str | None = Field(default=None, description="Responsive breakpoint")
    props: dict[str, Any] = Field(default_factory=dict)

    def layout_props(self) -> dict[str, Any]:
        props = {"cols": self.cols, "rows": self.rows}
        if self.breakpoint is not None:
            props["breakpoint"] = self.breakpoint
        return props


class UIStepsMetadata(Fragment):
    """Stepped/paged rendering of the model's component."""

    key: ClassVar[str] = ClassConcern.STEPS.value

    tag: str | None = Field(default=None, description="Optional stepped tag override")
    pages: int | list[dict[str, Any]] = Field(..., description="Page count or page descriptors")
    paginated: bool = Field(default=True)
    props: dict[str, Any] = Field(default_factory=dict)


# Property placements


class UIPropMetadata(Fragment):
    """Pass the raw property value to the parent component as a prop."""

    key: ClassVar[str] = Placement.PROP.value

    name: str | None = Field(default=None, description="Prop name, defaults to the property name")
    stringify: bool = Field(default=False, description="Serialize the value to a string")


class UIElementMetadata(Fragment):
    """Render the property as a validated leaf field."""

    key: ClassVar[str] = Placement.ELEMENT.value

    tag: str = Field(..., description="Component/element tag for the field")
    props: dict[str, Any] = Field(default_factory=dict, description="Static props for the field")
    serialize: bool = Field(default=False)


class UIChildMetadata(Fragment):
    """Render the property as a nested model subtree."""

    key: ClassVar[str] = Placement.CHILD.value

    tag: str | None = Field(default=None, description="Tag overriding the submodel's own tag")
    props: dict[str, Any] = Field(default_factory=dict, description="Props merged over the submodel's")
    model: type[BaseModel] | None = Field(default=None, description="Submodel type, when not inferable")


class UIListPropMetadata(Fragment):
    """Render the property as a collection through an item template."""

    key: ClassVar[str] = Placement.LIST_PROP.value

    name: str | None = Field(default=None, description="External field name the collection maps to")
    props: dict[str, Any] = Field(default_factory=dict)


# Property modifiers


class UIHiddenMetadata(Fragment):
    """Operations on which the property's node is removed."""

    key: ClassVar[str] = Modifier.HIDDEN.value

    operations: tuple[str, ...] = Field(
        default_factory=lambda: tuple(op.value for op in CrudOperation),
    )

    @field_validator("operations", mode="before")
    @classmethod
    def _normalize(cls, value: Any) -> tuple[str, ...]:
        if not value:
            return tuple(op.value for op in CrudOperation)
        return tuple(op.value if isinstance(op, CrudOperation) else str(op) for op in value)


class UIOrderMetadata(Fragment):
    """Sort priority among siblings. Lower comes first."""

    key: ClassVar[str] = Modifier.ORDER.value

    order: int


class UILayoutPropMetadata(Fragment):
    """Grid position of the property's node."""

    key: ClassVar[str] = Modifier.LAYOUT_PROP.value

    col: int | str = 1
    row: int | str = 1


class UIPageMetadata(Fragment):
    """Page of a stepped model the property's node belongs to."""

    key: ClassVar[str] = Modifier.PAGE.value

    page: int = Field(..., ge=1)


class UIClassBundle(BaseModel):
    """Merged class-level fragments of one model type."""

    tag: str | None = None
    props: dict[str, Any] = Field(default_factory=dict)
    item: UIListModelMetadata | None = None
    handlers: dict[str, Any] = Field(default_factory=dict)
    rendered_by: str | None = None
    pk: str | None = None

