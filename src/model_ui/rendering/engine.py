"""
Rendering engine base class.

A rendering engine (flavour) turns the field tree of a model into its own
native representation. Engines are initialized asynchronously: booting
schedules initialization and returns immediately, and the ``initialized``
flag tells callers when it has completed.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar

from pydantic import BaseModel

from model_ui.builder import FieldTreeBuilder
from model_ui.models.field_definition import FieldDefinition

logger = logging.getLogger(__name__)


class RenderingEngine(ABC):
    """
    Base class for rendering engines.

    Subclasses set ``flavour`` and implement ``initialize`` and ``render``.
    """

    flavour: ClassVar[str]

    def __init__(self, builder: FieldTreeBuilder | None = None):
        self.builder = builder or FieldTreeBuilder()
        self.initialized = False
        self._init_task: asyncio.Task | None = None
        logger.info("%s rendering engine loaded", self.flavour)

    @abstractmethod
    async def initialize(self, *args: Any, **kwargs: Any) -> None:
        """Prepare the engine for rendering."""

    @abstractmethod
    def render(self, model: BaseModel, context_props: dict[str, Any] | None = None, *args: Any, **kwargs: Any) -> Any:
        """Render a model instance into the engine's native representation."""

    def to_field_definition(
        self,
        model: BaseModel,
        context_props: dict[str, Any] | None = None,
        generate_id: bool = True,
    ) -> FieldDefinition:
        """Build the field tree of a model with this engine's builder."""
        return self.builder.build(model, context_props, generate_id)

    async def _run_initialize(self) -> None:
        await self.initialize()
        self.initialized = True
        logger.debug("%s rendering engine initialized", self.flavour)

    def _log_failed_initialize(self, task: asyncio.Task) -> None:
        if not task.cancelled() and task.exception() is not None:
            logger.error(
                "%s rendering engine failed to initialize",
                self.flavour,
                exc_info=task.exception(),
            )

    def boot(self) -> None:
        """
        Start initializing the engine without waiting for it.

        Inside a running event loop initialization is scheduled as a task.
        Without one it runs to completion on a fresh loop. A scheduled
        initialization that fails is logged.
        """
        if self.initialized or self._init_task is not None:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(self._run_initialize())
            return
        self._init_task = loop.create_task(self._run_initialize())
        self._init_task.add_done_callback(self._log_failed_initialize)

    async def wait_initialized(self) -> None:
        """Wait until initialization has completed, starting it if needed."""
        if self.initialized:
            return
        if self._init_task is None:
            self._init_task = asyncio.ensure_future(self._run_initialize())
        await self._init_task
