"""
Rendering engines.

This module contains:
- The RenderingEngine base class
- The flavour registry and the process default registry
- The Renderable mixin for self-rendering models
- Reference engines: "tree" (the field tree itself) and "json-schema"
"""

from model_ui.rendering.engine import RenderingEngine
from model_ui.rendering.json_schema import JSONSchemaEngine, to_form_schema
from model_ui.rendering.registry import RenderingEngineRegistry, get_registry
from model_ui.rendering.renderable import Renderable
from model_ui.rendering.tree import FieldTreeEngine

__all__ = [
    "RenderingEngine",
    "RenderingEngineRegistry",
    "get_registry",
    "Renderable",
    "FieldTreeEngine",
    "JSONSchemaEngine",
    "to_form_schema",
]
