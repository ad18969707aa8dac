"""
JSON Schema output models.

These models are what the ``json-schema`` rendering engine produces from a
field tree. They can be used by client-side form libraries like
react-jsonschema-form.
"""

from typing import Any

from pydantic import BaseModel, Field

from model_ui.config import get_config


class FormFieldSchema(BaseModel):
    """Schema for a single form field, or a nested group of fields."""

    name: str = Field(..., description="Field name/key")
    type: str = Field(..., description="JSON Schema type: string, number, boolean, object")
    title: str = Field(..., description="Human-readable label")
    description: str | None = Field(default=None, description="Help text")
    format: str | None = Field(default=None, description="Format: email, uri, date, password, etc.")
    default: Any | None = Field(default=None, description="Current value")

    # Validation
    required: bool = Field(default=False, description="Whether field is required")
    min_length: int | None = Field(default=None, description="Minimum string length")
    max_length: int | None = Field(default=None, description="Maximum string length")
    minimum: float | None = Field(default=None, description="Minimum numeric value")
    maximum: float | None = Field(default=None, description="Maximum numeric value")
    multiple_of: float | None = Field(default=None, description="Numeric step")
    pattern: str | None = Field(default=None, description="Regex pattern")
    enum_values: list[Any] | None = Field(default=None, description="Allowed values for select")

    # UI
    ui_widget: str | None = Field(default=None, description="UI widget type")
    ui_component: str | None = Field(default=None, description="Tag of the source node")
    placeholder: str | None = Field(default=None, description="Placeholder text")
    page: int | None = Field(default=None, description="Page of a stepped form")

    # Nested model
    fields: list["FormFieldSchema"] | None = Field(default=None, description="Fields of a nested model")

    def to_json_property(self) -> dict[str, Any]:
        """Export as a JSON Schema property."""
        if self.fields is not None:
            prop = _object_schema(self.title, self.description, self.fields)
            if self.default is not None:
                prop["default"] = self.default
            return prop

        prop: dict[str, Any] = {
            "type": self.type,
            "title": self.title,
        }
        if self.description:
            prop["description"] = self.description
        if self.format:
            prop["format"] = self.format
        if self.default is not None:
            prop["default"] = self.default
        if self.min_length is not None:
            prop["minLength"] = self.min_length
        if self.max_length is not None:
            prop["maxLength"] = self.max_length
        if self.minimum is not None:
            prop["minimum"] = self.minimum
        if self.maximum is not None:
            prop["maximum"] = self.maximum
        if self.multiple_of is not None:
            prop["multipleOf"] = self.multiple_of
        if self.pattern:
            prop["pattern"] = self.pattern
        if self.enum_values:
            prop["enum"] = self.enum_values
        return prop

    def to_ui_property(self) -> dict[str, Any]:
        """Export as a UI Schema entry."""
        field_ui: dict[str, Any] = {}
        if self.ui_widget:
            field_ui["ui:widget"] = self.ui_widget
        if self.ui_component:
            field_ui["ui:component"] = self.ui_component
        if self.placeholder:
            field_ui["ui:placeholder"] = self.placeholder
        if self.page is not None:
            field_ui["ui:page"] = self.page
        for field in self.fields or []:
            nested = field.to_ui_property()
            if nested:
                field_ui[field.name] = nested
        return field_ui


def _object_schema(
    title: str,
    description: str | None,
    fields: list[FormFieldSchema],
) -> dict[str, Any]:
    return {
        "type": "object",
        "title": title,
        "description": description,
        "properties": {field.name: field.to_json_property() for field in fields},
        "required": [field.name for field in fields if field.required],
    }


class GeneratedFormSchema(BaseModel):
    """
    Complete form schema produced from a field tree.

    Nested models are kept as fields of type ``object`` with their own
    ``fields``.
    """

    form_id: str = Field(..., description="Form identifier")
    title: str = Field(..., description="Form title")
    description: str | None = Field(default=None, description="Form description")
    fields: list[FormFieldSchema] = Field(..., description="List of form fields")
    submit_button_text: str = Field(default="Submit", description="Submit button text")
    component: str | None = Field(default=None, description="Tag of the root node")
    pages: int | None = Field(default=None, description="Page count of a stepped form")

    def to_json_schema(self) -> dict[str, Any]:
        """Export as JSON Schema dict."""
        schema = _object_schema(self.title, self.description, self.fields)
        return {"$schema": get_config().json_schema_version, **schema}

    def to_ui_schema(self) -> dict[str, Any]:
        """Export as UI Schema dict."""
        ui_schema: dict[str, Any] = {}
        for field in self.fields:
            field_ui = field.to_ui_property()
            if field_ui:
                ui_schema[field.name] = field_ui
        if self.pages:
            ui_schema["ui:pages"] = self.pages
        return ui_schema

    def to_form_config(self) -> dict[str, Any]:
        """Export complete form configuration for client libraries."""
        return {
            "formId": self.form_id,
            "schema": self.to_json_schema(),
            "uiSchema": self.to_ui_schema(),
            "submitButtonText": self.submit_button_text,
        }
