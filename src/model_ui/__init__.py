"""
model-ui: Compile annotated data models into UI form trees.

Attach UI metadata to pydantic models once, then build a renderer-agnostic
tree of typed, validated and ordered field nodes from any instance.

Simple Usage:
    from pydantic import BaseModel, EmailStr, Field
    from model_ui import FieldTreeBuilder, describe

    class Person(BaseModel):
        id: int | None = None
        name: str = Field(min_length=5)
        email: EmailStr

    (describe(Person)
        .model("person-form", pk="id")
        .element("id", "text-field")
        .element("name", "text-field")
        .element("email", "text-field")
        .hidden("id", "create"))

    tree = FieldTreeBuilder().build(person, {"operation": "create"})

Rendering Engines:
    from model_ui import RenderingEngineRegistry, FieldTreeEngine, JSONSchemaEngine

    registry = RenderingEngineRegistry()
    registry.register(FieldTreeEngine)
    registry.register(JSONSchemaEngine)

    schema = registry.get("json-schema").render(person)
    json_schema = schema.to_json_schema()
    ui_schema = schema.to_ui_schema()

Tracing:
    from model_ui.tracing import setup_tracing

    # Enable console tracing
    setup_tracing(console=True, verbose=True)

    # Or write to file
    setup_tracing(file_path="traces.jsonl")

    # Re-apply MODEL_UI_* settings after update_config
    configure()
"""

from model_ui.builder import FieldTreeBuilder
from model_ui.config import ModelUIConfig, get_config, update_config
from model_ui.constants import CrudOperation
from model_ui.errors import (
    ChildNotAModel,
    ConflictingPlacement,
    CyclicModelReference,
    DuplicateFlavour,
    InvalidAttributeKey,
    MisplacedModifier,
    MissingUIDefinition,
    ModelUIError,
    RegistryError,
    RenderingError,
    UnknownFlavour,
    ValueParseError,
)
from model_ui.metadata import MetadataStore, describe, get_store
from model_ui.models import (
    FieldDefinition,
    FormFieldSchema,
    GeneratedFormSchema,
    ListItemDefinition,
)
from model_ui.rendering import (
    FieldTreeEngine,
    JSONSchemaEngine,
    Renderable,
    RenderingEngine,
    RenderingEngineRegistry,
    get_registry,
)
from model_ui.tracing import (
    configure,
    disable_tracing,
    enable_tracing,
    setup_tracing,
)
from model_ui.translator import Translator

__version__ = "0.1.0"

# Apply logging level and tracing settings from the environment
configure()

__all__ = [
    # Main entry points
    "describe",
    "FieldTreeBuilder",
    "RenderingEngineRegistry",
    "get_registry",
    "Renderable",
    # Metadata
    "MetadataStore",
    "get_store",
    "CrudOperation",
    "Translator",
    # Models
    "FieldDefinition",
    "ListItemDefinition",
    "FormFieldSchema",
    "GeneratedFormSchema",
    # Rendering engines
    "RenderingEngine",
    "FieldTreeEngine",
    "JSONSchemaEngine",
    # Errors
    "ModelUIError",
    "RenderingError",
    "MissingUIDefinition",
    "ConflictingPlacement",
    "ChildNotAModel",
    "InvalidAttributeKey",
    "MisplacedModifier",
    "CyclicModelReference",
    "ValueParseError",
    "RegistryError",
    "UnknownFlavour",
    "DuplicateFlavour",
    # Config
    "ModelUIConfig",
    "get_config",
    "update_config",
    # Tracing
    "configure",
    "setup_tracing",
    "disable_tracing",
    "enable_tracing",
]
