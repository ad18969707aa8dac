"""
Field Tree Builder.

Compiles an annotated model instance into a FieldDefinition tree: class
metadata gives the root node, every annotated property contributes a prop
value, a nested subtree, a list item template or a leaf field, and
modifiers reorder, position or hide the resulting nodes.
"""

import logging
from enum import Enum
from typing import Any

from pydantic import BaseModel
from pydantic_core import to_json

from model_ui.config import ModelUIConfig, get_config
from model_ui.constants import (
    CHILD_OF,
    FORMAT,
    HANDLERS,
    HIDDEN,
    INHERIT_PROPS,
    NAME,
    OPERATION,
    PATH,
    RENDER,
    TYPE,
    VALID_VALIDATION_KEYS,
    VALUE,
    InputType,
    Modifier,
)
from model_ui.errors import (
    ChildNotAModel,
    ConflictingPlacement,
    CyclicModelReference,
    InvalidAttributeKey,
    MisplacedModifier,
    MissingUIDefinition,
)
from model_ui.formatting import generate_ui_model_id
from model_ui.metadata.store import MetadataStore, PropertyFragments, get_store
from model_ui.metadata.validation import is_model_type
from model_ui.models.field_definition import FieldDefinition, ListItemDefinition
from model_ui.models.metadata import (
    UIChildMetadata,
    UIClassBundle,
    UIElementMetadata,
    UIListPropMetadata,
    UIPropMetadata,
)
from model_ui.tracing import traced_operation
from model_ui.translator import Translator

logger = logging.getLogger(__name__)


def _join(parent: str | None, name: str) -> str:
    return f"{parent}.{name}" if parent else name


def _as_string(value: Any) -> Any:
    if value is None or isinstance(value, str):
        return value
    return to_json(value).decode()


def _operation_name(operation: Any) -> Any:
    return operation.value if isinstance(operation, Enum) else operation


class FieldTreeBuilder:
    """
    Builds FieldDefinition trees from annotated model instances.

    Usage:
        builder = FieldTreeBuilder()

        tree = builder.build(person, {"operation": "create"})
        tree.find("address.street").props["value"]
    """

    def __init__(
        self,
        store: MetadataStore | None = None,
        translator: Translator | None = None,
        config: ModelUIConfig | None = None,
    ):
        """
        Initialize the builder.

        Args:
            store: Metadata store to read from. If None, uses the process default store.
            translator: Type & validation translator. If None, one is built from config.
            config: Settings. If None, uses the global configuration.
        """
        self.config = config or get_config()
        self.store = store or get_store()
        self.translator = translator or Translator(config=self.config)

    def build(
        self,
        model: BaseModel,
        context_props: dict[str, Any] | None = None,
        generate_id: bool = True,
    ) -> FieldDefinition:
        """
        Build the field tree of a model instance.

        Args:
            model: The model instance.
            context_props: Caller context merged into every node (``operation``,
                ``handlers``, custom props). ``inheritProps`` overrides the
                model's own tag/props.
            generate_id: Whether to attach a ``rendererId`` to the root node.

        Returns:
            The root FieldDefinition.

        Raises:
            RenderingError: If the model's metadata is inconsistent.
        """
        return self._build(model, dict(context_props or {}), generate_id, ())

    def _build(
        self,
        model: BaseModel,
        context: dict[str, Any],
        generate_id: bool,
        ancestors: tuple[type, ...],
    ) -> FieldDefinition:
        model_type = type(model)
        if model_type in ancestors:
            raise CyclicModelReference((*ancestors, model_type))

        with traced_operation(f"build:{model_type.__name__}", path=context.get(CHILD_OF)):
            bundle = self.store.class_bundle(model_type)
            if bundle is None:
                raise MissingUIDefinition(model_type)

            inherited = context.get(INHERIT_PROPS) or {}
            tag = inherited.get("tag") or bundle.tag
            class_props = {**bundle.props, **inherited.get("props", {})}
            context = {key: value for key, value in context.items() if key != INHERIT_PROPS}

            logger.debug("Building field tree of %s at %s", model_type.__name__, context.get(CHILD_OF) or "<root>")

            entries: list[tuple[float | None, FieldDefinition]] = []
            prop_values: dict[str, Any] = {}
            item = self._default_item(bundle)
            mapper: dict[str, str] = {}

            for name in self.store.properties_of(model_type):
                fragments = self.store.property_fragments(model_type, name)
                if len(fragments.placements) > 1:
                    raise ConflictingPlacement(model_type, name, [p.key for p in fragments.placements])

                placement = fragments.placement
                node = None
                if isinstance(placement, UIPropMetadata):
                    value = getattr(model, name, None)
                    prop_values[placement.name or name] = _as_string(value) if placement.stringify else value
                elif isinstance(placement, UIChildMetadata):
                    node = self._build_child(model, name, placement, context, (*ancestors, model_type))
                elif isinstance(placement, UIListPropMetadata):
                    mapper = {**mapper, (placement.name or name): name}
                    item = self._list_item(bundle, placement, context, mapper)
                elif isinstance(placement, UIElementMetadata):
                    node = self._build_element(model, name, placement, context)

                if node is not None:
                    entries.append((None, node))
                if fragments.modifiers:
                    entries = self._apply_modifiers(model_type, fragments, entries, context)

            children = self._order_and_filter(entries, context.get(OPERATION))

            handlers = {**bundle.handlers, **context.get(HANDLERS, {})}
            result = FieldDefinition(
                tag=tag,
                props={**class_props, **prop_values, **context, HANDLERS: handlers},
                item=item,
                children=children or None,
            )
            if generate_id:
                result = result.model_copy(update={"renderer_id": generate_ui_model_id(model, bundle.pk)})
            return result

    def _build_child(
        self,
        model: BaseModel,
        name: str,
        placement: UIChildMetadata,
        context: dict[str, Any],
        ancestors: tuple[type, ...],
    ) -> FieldDefinition:
        model_type = type(model)
        declared = placement.model or self.store.field_type(model_type, name)
        if not is_model_type(declared):
            raise ChildNotAModel(model_type, name, declared)

        submodel = getattr(model, name, None)
        if submodel is None:
            # placeholder so the submodel's metadata can still be read
            submodel = declared.model_construct()
        elif not isinstance(submodel, BaseModel):
            raise ChildNotAModel(model_type, name, type(submodel))

        child_context = {
            **context,
            CHILD_OF: _join(context.get(CHILD_OF), name),
            INHERIT_PROPS: {"tag": placement.tag, "props": placement.props},
        }
        return self._build(submodel, child_context, False, ancestors)

    def _build_element(
        self,
        model: BaseModel,
        name: str,
        placement: UIElementMetadata,
        context: dict[str, Any],
    ) -> FieldDefinition:
        model_type = type(model)
        props = {
            NAME: name,
            **placement.props,
            PATH: _join(context.get(CHILD_OF), name),
            **context,
        }

        descriptor, *validations = self.store.validations(model_type, name)
        type_ = fmt = None
        for fragment in validations:
            if self.translator.is_validatable_by_attribute(fragment.key):
                props[self.translator.translate(fragment.key)] = self.translator.to_attribute_value(
                    fragment.key, fragment
                )
            elif self.translator.is_validatable_by_type(fragment.key):
                type_, fmt = self.translator.type_marker(fragment)
            else:
                raise InvalidAttributeKey(fragment.key, VALID_VALIDATION_KEYS)

        if type_ is None:
            type_ = self.translator.translate(descriptor.name.lower())
            if type_ == InputType.DATE.value:
                fmt = self.translator.date_format

        props[TYPE] = type_
        if fmt is not None:
            props[FORMAT] = fmt

        value = self.translator.format_value(type_, getattr(model, name, None), fmt)
        props[VALUE] = _as_string(value) if placement.serialize else value
        return FieldDefinition(tag=placement.tag, props=props)

    @staticmethod
    def _default_item(bundle: UIClassBundle) -> ListItemDefinition | None:
        if bundle.item is None:
            return None
        return ListItemDefinition(tag=bundle.item.tag, props=dict(bundle.item.props))

    @staticmethod
    def _list_item(
        bundle: UIClassBundle,
        placement: UIListPropMetadata,
        context: dict[str, Any],
        mapper: dict[str, str],
    ) -> ListItemDefinition:
        defaults = bundle.item.props if bundle.item else {}
        props = {**defaults, **placement.props, **context}
        tag = bundle.item.tag if bundle.item else props.get(RENDER, "")
        return ListItemDefinition(tag=tag, props=props, mapper=mapper)

    def _apply_modifiers(
        self,
        model_type: type,
        fragments: PropertyFragments,
        entries: list[tuple[float | None, FieldDefinition]],
        context: dict[str, Any],
    ) -> list[tuple[float | None, FieldDefinition]]:
        """Merge a property's modifiers into the node it rendered."""
        name = fragments.name
        path = _join(context.get(CHILD_OF), name)

        index = next(
            (
                i for i, (_, node) in enumerate(entries)
                if node.props.get(PATH) == path or node.props.get(CHILD_OF) == path
            ),
            None,
        )
        if index is None:
            placement = fragments.placement
            if placement is None:
                reason = "has no placement to attach them to"
            else:
                reason = f"its {placement.key} placement renders no node"
            raise MisplacedModifier(model_type, name, fragments.modifiers, reason)

        priority, node = entries[index]
        props = dict(node.props)

        hidden = fragments.modifier(Modifier.HIDDEN)
        if hidden is not None:
            props[HIDDEN] = list(hidden.operations)
        order = fragments.modifier(Modifier.ORDER)
        if order is not None:
            priority = order.order
        layout = fragments.modifier(Modifier.LAYOUT_PROP)
        if layout is not None:
            props["col"] = layout.col
            props["row"] = layout.row
        page = fragments.modifier(Modifier.PAGE)
        if page is not None:
            props["page"] = page.page

        updated = (priority, node.model_copy(update={"props": props}))
        return [*entries[:index], updated, *entries[index + 1:]]

    def _order_and_filter(
        self,
        entries: list[tuple[float | None, FieldDefinition]],
        operation: Any,
    ) -> list[FieldDefinition]:
        default = self.config.default_order_priority
        ordered = sorted(entries, key=lambda entry: default if entry[0] is None else entry[0])

        operation = _operation_name(operation)
        return [
            node for _, node in ordered
            if operation is None or operation not in node.props.get(HIDDEN, ())
        ]
