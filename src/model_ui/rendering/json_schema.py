"""
JSON Schema rendering engine.

Converts a field tree into a GeneratedFormSchema, exportable as JSON
Schema + UI Schema for client-side form libraries like
react-jsonschema-form.
"""

import json
import logging
from typing import Any

from pydantic import BaseModel

from model_ui.constants import CHILD_OF, NAME, PATH, TYPE, VALUE, BaseType, InputType
from model_ui.models.field_definition import FieldDefinition
from model_ui.models.schema_output import FormFieldSchema, GeneratedFormSchema
from model_ui.rendering.engine import RenderingEngine
from model_ui.tracing import trace_render
from model_ui.translator import translate

logger = logging.getLogger(__name__)

# Base type -> JSON Schema type
JSON_TYPES = {
    BaseType.STRING.value: "string",
    BaseType.NUMBER.value: "number",
    BaseType.BIGINT.value: "integer",
    BaseType.BOOLEAN.value: "boolean",
    BaseType.DATE.value: "string",
}

# Input type -> JSON Schema format
JSON_FORMATS = {
    InputType.EMAIL.value: "email",
    InputType.URL.value: "uri",
    InputType.DATE.value: "date",
    InputType.DATETIME_LOCAL.value: "date-time",
    InputType.TIME.value: "time",
    InputType.PASSWORD.value: "password",
}


def _title(name: str) -> str:
    return name.replace("_", " ").title()


def _number(value: Any) -> int | float | None:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    return None


def _element_field(node: FieldDefinition) -> FormFieldSchema:
    props = node.props
    name = props.get(NAME) or props[PATH].rsplit(".", 1)[-1]
    input_type = props.get(TYPE)
    value = props.get(VALUE)

    return FormFieldSchema(
        name=name,
        type=JSON_TYPES.get(translate(input_type, to_view=False), "string"),
        title=props.get("label") or _title(name),
        description=props.get("description"),
        format=JSON_FORMATS.get(input_type),
        default=None if input_type == InputType.PASSWORD.value else value,
        required=bool(props.get("required")),
        min_length=props.get("minlength"),
        max_length=props.get("maxlength"),
        minimum=_number(props.get("min")),
        maximum=_number(props.get("max")),
        multiple_of=_number(props.get("step")),
        pattern=props.get("pattern"),
        enum_values=props.get("options"),
        ui_widget=props.get("widget") or input_type,
        ui_component=node.tag,
        placeholder=props.get("placeholder"),
        page=props.get("page"),
    )


def _group_field(node: FieldDefinition) -> FormFieldSchema:
    name = node.props[CHILD_OF].rsplit(".", 1)[-1]
    return FormFieldSchema(
        name=name,
        type="object",
        title=node.props.get("label") or node.props.get("title") or _title(name),
        description=node.props.get("description"),
        ui_component=node.tag,
        page=node.props.get("page"),
        fields=_fields_of(node),
    )


def _fields_of(node: FieldDefinition) -> list[FormFieldSchema]:
    fields = []
    for child in node.children or []:
        if PATH in child.props:
            fields.append(_element_field(child))
        else:
            fields.append(_group_field(child))
    return fields


def to_form_schema(tree: FieldDefinition, model_name: str) -> GeneratedFormSchema:
    """
    Convert a field tree into a form schema.

    Args:
        tree: Root FieldDefinition of a model.
        model_name: Type name of the model, used for the id and default title.

    Returns:
        GeneratedFormSchema with nested models as ``object`` fields.
    """
    props = tree.props
    pages = props.get("pages")
    if isinstance(pages, list):
        pages = len(pages)

    return GeneratedFormSchema(
        form_id=tree.renderer_id or model_name,
        title=props.get("title") or model_name,
        description=props.get("description"),
        fields=_fields_of(tree),
        submit_button_text=props.get("submitButtonText") or "Submit",
        component=tree.tag,
        pages=pages,
    )


class JSONSchemaEngine(RenderingEngine):
    """Rendering engine producing JSON Schema + UI Schema form configurations."""

    flavour = "json-schema"

    async def initialize(self, *args: Any, **kwargs: Any) -> None:
        logger.debug("Using %s for the %s engine", self.builder.config.json_schema_version, self.flavour)

    @trace_render
    def render(
        self,
        model: BaseModel,
        context_props: dict[str, Any] | None = None,
        generate_id: bool = True,
    ) -> GeneratedFormSchema:
        tree = self.to_field_definition(model, context_props, generate_id)
        return to_form_schema(tree, type(model).__name__)

    def render_json(self, model: BaseModel, context_props: dict[str, Any] | None = None) -> str:
        """Render a model's complete form configuration as a JSON string."""
        schema = self.render(model, context_props)
        return json.dumps(
            schema.to_form_config(),
            indent=self.builder.config.indent_json_output,
            default=str,
        )
