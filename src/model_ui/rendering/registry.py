"""
Rendering engine registry.

Maps flavour names to rendering engines. Engines may be registered as
instances or as classes; classes are instantiated and booted the first
time they are requested.
"""

import logging
import threading
from typing import Any

from pydantic import BaseModel

from model_ui.builder import FieldTreeBuilder
from model_ui.config import ModelUIConfig, get_config
from model_ui.errors import DuplicateFlavour, UnknownFlavour
from model_ui.rendering.engine import RenderingEngine

logger = logging.getLogger(__name__)


class RenderingEngineRegistry:
    """
    Registry of rendering engines by flavour.

    Usage:
        registry = RenderingEngineRegistry()
        registry.register(FieldTreeEngine)
        registry.register(JSONSchemaEngine)

        registry.get("tree").render(person)
        registry.render_model(person, {"operation": "update"})
    """

    def __init__(self, builder: FieldTreeBuilder | None = None, config: ModelUIConfig | None = None):
        """
        Initialize the registry.

        Args:
            builder: Builder handed to engines registered as classes.
            config: Settings. If None, uses the global configuration.
        """
        self.config = config or get_config()
        self.builder = builder or FieldTreeBuilder(config=self.config)
        self._engines: dict[str, RenderingEngine | type[RenderingEngine]] = {}
        self._current: str | None = None
        self._lock = threading.RLock()

    @property
    def flavours(self) -> list[str]:
        return list(self._engines)

    def register(self, engine: RenderingEngine | type[RenderingEngine]) -> None:
        """
        Register a rendering engine.

        The last registered engine becomes the default.

        Raises:
            DuplicateFlavour: If an engine is already registered under the flavour.
        """
        flavour = engine.flavour
        with self._lock:
            if flavour in self._engines:
                raise DuplicateFlavour(flavour)
            self._engines[flavour] = engine
            self._current = flavour
        logger.debug("Registered %s rendering engine", flavour)

    def _default_flavour(self) -> str | None:
        if self.config.default_flavour in self._engines:
            return self.config.default_flavour
        return self._current

    def get(self, flavour: str | None = None) -> RenderingEngine:
        """
        Get a rendering engine, booting it on first use.

        Args:
            flavour: Engine flavour. If None, the default engine is returned.

        Raises:
            UnknownFlavour: If no engine is registered under the flavour.
        """
        with self._lock:
            if flavour is None:
                flavour = self._default_flavour()
            entry = self._engines.get(flavour) if flavour is not None else None
            if entry is None:
                raise UnknownFlavour(flavour)
            if isinstance(entry, RenderingEngine):
                return entry

            engine = entry(self.builder)
            self._engines[flavour] = engine

        # Booting may run initialization to completion, so not under the lock
        engine.boot()
        return engine

    def render_model(self, model: BaseModel, *args: Any, **kwargs: Any) -> Any:
        """Render a model with the engine its class metadata declares, or the default one."""
        flavour = self.builder.store.rendered_by(type(model))
        return self.get(flavour).render(model, *args, **kwargs)


_default_registry = RenderingEngineRegistry()


def get_registry() -> RenderingEngineRegistry:
    """Get the process default rendering engine registry."""
    return _default_registry
