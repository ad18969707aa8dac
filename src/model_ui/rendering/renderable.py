"""
Self-rendering models.

Mix ``Renderable`` into a pydantic model to render its instances directly
with the engine their class metadata declares (or the registry default).

Usage:
    class Person(Renderable, BaseModel):
        name: str

    person.render({"operation": "update"})
    person.render(registry=my_registry)
"""

from typing import Any

from model_ui.rendering.registry import RenderingEngineRegistry, get_registry


class Renderable:
    """Mixin giving model instances a ``render`` method."""

    def render(self, *args: Any, registry: RenderingEngineRegistry | None = None, **kwargs: Any) -> Any:
        """
        Render this instance.

        Args:
            *args: Passed to the engine's ``render`` after the instance
                (typically the context props).
            registry: Registry to render with. If None, uses the process
                default registry.
            **kwargs: Passed to the engine's ``render``.

        Returns:
            The engine's native representation of the instance.
        """
        return (registry or get_registry()).render_model(self, *args, **kwargs)
