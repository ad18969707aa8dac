"""
Declarative attachment of UI metadata to model types.

Metadata is attached once, right after the model class is defined,
through a chain of registration calls:

    class Person(BaseModel):
        id: int | None = None
        name: str = Field(min_length=5)
        email: EmailStr

    (describe(Person)
        .model("person-form", pk="id")
        .element("id", "text-field")
        .element("name", "text-field", {"label": "Name"})
        .element("email", "text-field")
        .hidden("id", CrudOperation.CREATE)
        .validate("name", "different", "email"))
"""

from typing import Any, Self

from pydantic import BaseModel

from model_ui.constants import CrudOperation
from model_ui.metadata.store import MetadataStore, get_store
from model_ui.models.metadata import (
    UIChildMetadata,
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
from model_ui.models.validation import ValidationFragment


class ModelDescriptor:
    """Chainable registration of one model type's UI metadata."""

    def __init__(self, model_type: type[BaseModel], store: MetadataStore | None = None):
        self.model_type = model_type
        self.store = store or get_store()

    # Class level

    def model(
        self,
        tag: str | None = None,
        props: dict[str, Any] | None = None,
        *,
        rendered_by: str | None = None,
        pk: str | None = None,
    ) -> Self:
        """Declare the component wrapping the model."""
        self.store.set_class(
            self.model_type,
            UIModelMetadata(tag=tag, props=props or {}, rendered_by=rendered_by, pk=pk),
        )
        return self

    def list_model(self, tag: str, props: dict[str, Any] | None = None) -> Self:
        """Declare the item template used when the model is listed."""
        self.store.set_class(self.model_type, UIListModelMetadata(tag=tag, props=props or {}))
        return self

    def handlers(self, handlers: dict[str, Any] | None = None, **named: Any) -> Self:
        """Declare event handlers for the model's component."""
        self.store.set_class(
            self.model_type,
            UIHandlerMetadata(handlers={**(handlers or {}), **named}),
        )
        return self

    def layout(
        self,
        cols: int = 1,
        rows: int = 1,
        breakpoint: str | None = None,
        *,
        tag: str | None = None,
        props: dict[str, Any] | None = None,
    ) -> Self:
        """Declare a grid layout for the model's component."""
        self.store.set_class(
            self.model_type,
            UILayoutMetadata(tag=tag, cols=cols, rows=rows, breakpoint=breakpoint, props=props or {}),
        )
        return self

    def steps(
        self,
        pages: int | list[dict[str, Any]],
        paginated: bool = True,
        *,
        tag: str | None = None,
        props: dict[str, Any] | None = None,
    ) -> Self:
        """Declare a stepped (paged) rendering of the model."""
        self.store.set_class(
            self.model_type,
            UIStepsMetadata(tag=tag, pages=pages, paginated=paginated, props=props or {}),
        )
        return self

    # Placements

    def prop(self, name: str, attr: str | None = None, stringify: bool = False) -> Self:
        """Pass the property value to the model's component as a prop."""
        self.store.set_property(self.model_type, name, UIPropMetadata(name=attr, stringify=stringify))
        return self

    def element(
        self,
        name: str,
        tag: str,
        props: dict[str, Any] | None = None,
        serialize: bool = False,
    ) -> Self:
        """Render the property as a leaf field."""
        self.store.set_property(
            self.model_type,
            name,
            UIElementMetadata(tag=tag, props=props or {}, serialize=serialize),
        )
        return self

    def child(
        self,
        name: str,
        tag: str | None = None,
        props: dict[str, Any] | None = None,
        model: type[BaseModel] | None = None,
    ) -> Self:
        """Render the property as a nested model."""
        self.store.set_property(
            self.model_type,
            name,
            UIChildMetadata(tag=tag, props=props or {}, model=model),
        )
        return self

    def list_prop(self, name: str, attr: str | None = None, props: dict[str, Any] | None = None) -> Self:
        """Render the property as a collection through the list item template."""
        self.store.set_property(
            self.model_type,
            name,
            UIListPropMetadata(name=attr, props=props or {}),
        )
        return self

    # Modifiers

    def hidden(self, name: str, *operations: CrudOperation | str) -> Self:
        """Hide the property's node on the given operations (all, when none given)."""
        self.store.set_property(self.model_type, name, UIHiddenMetadata(operations=operations))
        return self

    def order(self, name: str, order: int) -> Self:
        self.store.set_property(self.model_type, name, UIOrderMetadata(order=order))
        return self

    def layout_prop(self, name: str, col: int | str = 1, row: int | str = 1) -> Self:
        self.store.set_property(self.model_type, name, UILayoutPropMetadata(col=col, row=row))
        return self

    def page(self, name: str, page: int) -> Self:
        self.store.set_property(self.model_type, name, UIPageMetadata(page=page))
        return self

    # Validation

    def validate(
        self,
        name: str,
        key: str,
        value: Any = None,
        *,
        pattern: str | None = None,
        format: str | None = None,
        message: str | None = None,
    ) -> Self:
        """
        Declare a validation fragment for a property.

        Fragments declared here complement what pydantic reports for the
        field and replace reported fragments with the same key. The key
        ``type`` overrides the base type (e.g. ``validate("id", "type", "bigint")``).
        """
        self.store.add_validation(
            self.model_type,
            name,
            ValidationFragment(key=key, value=value, pattern=pattern, format=format, message=message),
        )
        return self


def describe(model_type: type[BaseModel], store: MetadataStore | None = None) -> ModelDescriptor:
    """Start declaring the UI metadata of a model type."""
    return ModelDescriptor(model_type, store)
