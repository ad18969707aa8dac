"""
Metadata store.

Keyed storage of the annotation fragments attached to model types. The
declarative layer writes to it once, at model definition time; the field
tree builder only reads from it.

Lookups walk the model's MRO, so subclasses inherit the fragments of
their bases and override them key by key.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, NamedTuple

from model_ui.constants import REFLECT, ClassConcern, Concern, Modifier, Placement
from model_ui.metadata.validation import unwrap_annotation, validation_fragments
from model_ui.models.metadata import (
    Fragment,
    UIClassBundle,
    UIHandlerMetadata,
    UILayoutMetadata,
    UIListModelMetadata,
    UIModelMetadata,
    UIStepsMetadata,
)
from model_ui.models.validation import TypeDescriptor, ValidationFragment

logger = logging.getLogger(__name__)


class MetadataKey(NamedTuple):
    """Namespaced key of one stored fragment."""

    model_type: type
    concern: Concern
    property_name: str | None
    kind: str

    def __str__(self) -> str:
        parts = [
            REFLECT,
            self.concern.value,
            f"{self.model_type.__module__}.{self.model_type.__qualname__}",
        ]
        if self.property_name is not None:
            parts.append(self.property_name)
        parts.append(self.kind)
        return ".".join(parts)


@dataclass(frozen=True)
class PropertyFragments:
    """The placements and modifiers attached to one property."""

    name: str
    placements: tuple[Fragment, ...] = ()
    modifiers: dict[str, Fragment] = field(default_factory=dict)

    @property
    def placement(self) -> Fragment | None:
        return self.placements[0] if len(self.placements) == 1 else None

    def modifier(self, kind: Modifier) -> Fragment | None:
        return self.modifiers.get(kind.value)


class MetadataStore:
    """
    Storage of class- and property-level UI metadata.

    Usage:
        store = MetadataStore()
        store.set_class(Person, UIModelMetadata(tag="person-form"))
        store.set_property(Person, "name", UIElementMetadata(tag="text-field"))

        store.class_bundle(Person)
        store.property_fragments(Person, "name")
    """

    def __init__(self):
        self._fragments: dict[MetadataKey, Fragment] = {}
        self._declared: dict[type, list[str]] = {}
        self._validations: dict[tuple[type, str], list[ValidationFragment]] = {}

    @staticmethod
    def key(
        model_type: type,
        concern: Concern,
        property_name: str | None = None,
        kind: str = "",
    ) -> MetadataKey:
        """Build the namespaced key a fragment is stored under."""
        return MetadataKey(model_type, concern, property_name, kind)

    # Write side

    def set_class(self, model_type: type, fragment: Fragment) -> None:
        """Attach a class-level fragment to a model type."""
        key = self.key(model_type, Concern.CLASS, kind=fragment.key)
        self._store(key, fragment)

    def set_property(self, model_type: type, name: str, fragment: Fragment) -> None:
        """Attach a placement or modifier fragment to a property."""
        key = self.key(model_type, Concern.PROPERTY, name, fragment.key)
        self._store(key, fragment)
        declared = self._declared.setdefault(model_type, [])
        if name not in declared:
            declared.append(name)

    def add_validation(self, model_type: type, name: str, fragment: ValidationFragment) -> None:
        """Declare an extra validation fragment for a property."""
        self._validations.setdefault((model_type, name), []).append(fragment)

    def _store(self, key: MetadataKey, fragment: Fragment) -> None:
        if key in self._fragments:
            logger.debug("Replacing metadata under %s", key)
        else:
            logger.debug("Storing metadata under %s", key)
        self._fragments[key] = fragment

    # Read side

    def get(self, model_type: type, property_name: str | None = None) -> Any:
        """
        Get the metadata of a model type or of one of its properties.

        Args:
            model_type: The model class.
            property_name: Optional property name.

        Returns:
            The UIClassBundle of the type, or the PropertyFragments of the
            property, or None when nothing is attached.
        """
        if property_name is None:
            return self.class_bundle(model_type)
        fragments = self.property_fragments(model_type, property_name)
        if not fragments.placements and not fragments.modifiers:
            return None
        return fragments

    def _lookup(self, model_type: type, concern: Concern, name: str | None, kind: str) -> Fragment | None:
        for cls in model_type.__mro__:
            fragment = self._fragments.get(self.key(cls, concern, name, kind))
            if fragment is not None:
                return fragment
        return None

    def properties_of(self, model_type: type) -> list[str]:
        """List annotated property names in declaration order."""
        names: list[str] = []
        for cls in reversed(model_type.__mro__):
            for name in self._declared.get(cls, []):
                if name not in names:
                    names.append(name)

        fields = list(getattr(model_type, "model_fields", {}))
        position = {name: index for index, name in enumerate(fields)}
        attached = {name: index for index, name in enumerate(names)}
        return sorted(names, key=lambda n: (position.get(n, len(fields)), attached[n]))

    def class_bundle(self, model_type: type) -> UIClassBundle | None:
        """Merge the class-level fragments of a model type into one bundle."""
        found = {
            concern: self._lookup(model_type, Concern.CLASS, None, concern.value)
            for concern in ClassConcern
        }
        if not any(found.values()):
            return None

        tag: str | None = None
        props: dict[str, Any] = {}
        item: UIListModelMetadata | None = None
        handlers: dict[str, Any] = {}
        rendered_by: str | None = None
        pk: str | None = None

        for concern in ClassConcern:
            fragment = found[concern]
            if fragment is None:
                continue
            if isinstance(fragment, UIModelMetadata):
                tag = fragment.tag or tag
                props = {**props, **fragment.props}
                rendered_by = fragment.rendered_by
                pk = fragment.pk
            elif isinstance(fragment, UIListModelMetadata):
                item = fragment
            elif isinstance(fragment, UIHandlerMetadata):
                handlers = {**handlers, **fragment.handlers}
            elif isinstance(fragment, UILayoutMetadata):
                tag = fragment.tag or tag
                props = {**props, **fragment.layout_props(), **fragment.props}
            elif isinstance(fragment, UIStepsMetadata):
                tag = fragment.tag or tag
                props = {
                    **props,
                    "pages": fragment.pages,
                    "paginated": fragment.paginated,
                    **fragment.props,
                }

        return UIClassBundle(
            tag=tag,
            props=props,
            item=item,
            handlers=handlers,
            rendered_by=rendered_by,
            pk=pk,
        )

    def property_fragments(self, model_type: type, name: str) -> PropertyFragments:
        """Get the placements and modifiers attached to one property."""
        placements = []
        for kind in Placement:
            fragment = self._lookup(model_type, Concern.PROPERTY, name, kind.value)
            if fragment is not None:
                placements.append(fragment)

        modifiers = {}
        for kind in Modifier:
            fragment = self._lookup(model_type, Concern.PROPERTY, name, kind.value)
            if fragment is not None:
                modifiers[kind.value] = fragment

        return PropertyFragments(name=name, placements=tuple(placements), modifiers=modifiers)

    def validations(self, model_type: type, name: str) -> list[TypeDescriptor | ValidationFragment]:
        """Get the validation list of a property, base type descriptor first."""
        declared: list[ValidationFragment] = []
        for cls in reversed(model_type.__mro__):
            declared.extend(self._validations.get((cls, name), []))
        return validation_fragments(model_type, name, declared)

    def rendered_by(self, model_type: type) -> str | None:
        """Get the rendering engine flavour declared for a model type."""
        bundle = self.class_bundle(model_type)
        return bundle.rendered_by if bundle else None

    def field_type(self, model_type: type, name: str) -> Any:
        """Get the declared type of a property, Optional unwrapped."""
        field_info = getattr(model_type, "model_fields", {}).get(name)
        if field_info is None:
            return None
        return unwrap_annotation(field_info.annotation)


_default_store = MetadataStore()


def get_store() -> MetadataStore:
    """Get the process default metadata store."""
    return _default_store
