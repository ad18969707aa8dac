"""
Field tree rendering engine.

Returns the FieldDefinition tree itself, for consumers that render it
on their own.
"""

import logging
from typing import Any

from pydantic import BaseModel

from model_ui.models.field_definition import FieldDefinition
from model_ui.rendering.engine import RenderingEngine
from model_ui.tracing import trace_render

logger = logging.getLogger(__name__)


class FieldTreeEngine(RenderingEngine):
    """Rendering engine whose output is the field tree."""

    flavour = "tree"

    async def initialize(self, *args: Any, **kwargs: Any) -> None:
        logger.debug("Nothing to prepare for the %s engine", self.flavour)

    @trace_render
    def render(
        self,
        model: BaseModel,
        context_props: dict[str, Any] | None = None,
        generate_id: bool = True,
    ) -> FieldDefinition:
        return self.to_field_definition(model, context_props, generate_id)
