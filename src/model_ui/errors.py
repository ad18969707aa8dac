"""
Error types for model-ui.

Every error here describes a defect in model metadata or registry usage.
None of them are retried or recovered internally: they abort the current
build or lookup and surface to the caller.
"""

from collections.abc import Iterable


class ModelUIError(Exception):
    """Base class for all model-ui errors."""


class RenderingError(ModelUIError):
    """Raised when a model cannot be compiled into a field tree."""


class MissingUIDefinition(RenderingError):
    """The model type carries no class-level UI metadata."""

    def __init__(self, model_type: type):
        self.model_type = model_type
        super().__init__(
            f"No ui definitions set for model {model_type.__name__}. "
            f"Did you call describe({model_type.__name__}).model(...)?"
        )


class ConflictingPlacement(RenderingError):
    """A property carries more than one placement annotation."""

    def __init__(self, model_type: type, property_name: str, kinds: Iterable[str]):
        self.model_type = model_type
        self.property_name = property_name
        self.kinds = tuple(kinds)
        super().__init__(
            f"Property '{property_name}' of {model_type.__name__} has conflicting "
            f"placements ({', '.join(self.kinds)}). Only one of prop, element, "
            f"child or list-prop is allowed."
        )


class ChildNotAModel(RenderingError):
    """A child placement was used on a property whose type is not a model."""

    def __init__(self, model_type: type, property_name: str, declared: object):
        self.model_type = model_type
        self.property_name = property_name
        self.declared = declared
        super().__init__(
            f"Property '{property_name}' of {model_type.__name__} is placed as a "
            f"child but its type {declared!r} is not a model"
        )


class InvalidAttributeKey(RenderingError, ValueError):
    """A validation fragment key is neither an attribute nor a type marker."""

    def __init__(self, key: str, allowed: Iterable[str]):
        self.key = key
        self.allowed = tuple(allowed)
        super().__init__(
            f'Invalid attribute key "{key}". Expected one of: {", ".join(self.allowed)}.'
        )


class MisplacedModifier(RenderingError):
    """Modifiers were attached to a property that renders no node."""

    def __init__(self, model_type: type, property_name: str, modifiers: Iterable[str], reason: str):
        self.model_type = model_type
        self.property_name = property_name
        self.modifiers = tuple(modifiers)
        super().__init__(
            f"Property '{property_name}' of {model_type.__name__} carries "
            f"{', '.join(self.modifiers)} but {reason}"
        )


class CyclicModelReference(RenderingError):
    """Nested child placements form a cycle between model types."""

    def __init__(self, chain: Iterable[type]):
        self.chain = tuple(chain)
        super().__init__(
            "Cyclic model reference: " + " -> ".join(t.__name__ for t in self.chain)
        )


class ValueParseError(ModelUIError, ValueError):
    """A view value could not be parsed back into its model type."""


class RegistryError(ModelUIError):
    """Raised for rendering engine registry misuse."""


class UnknownFlavour(RegistryError, LookupError):
    """No rendering engine is registered under the requested flavour."""

    def __init__(self, flavour: str | None):
        self.flavour = flavour
        if flavour is None:
            message = "No rendering engine registered to use as default"
        else:
            message = f"Rendering engine under {flavour} does not exist"
        super().__init__(message)


class DuplicateFlavour(RegistryError):
    """A rendering engine is already registered under this flavour."""

    def __init__(self, flavour: str):
        self.flavour = flavour
        super().__init__(f"Rendering engine under {flavour} already exists")
