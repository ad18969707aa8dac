"""
Field definition output models.

A FieldDefinition is one node of the renderer-agnostic UI tree produced
by the field tree builder. Rendering engines convert the tree into their
native representation.
"""

from typing import Any, Iterator

from pydantic import BaseModel, ConfigDict, Field

from model_ui.constants import CHILD_OF, PATH


class ListItemDefinition(BaseModel):
    """Item template used when a node renders a collection."""

    tag: str = Field(default="", description="Tag used for each list item")
    props: dict[str, Any] = Field(default_factory=dict, description="Props for each list item")
    mapper: dict[str, str] = Field(
        default_factory=dict,
        description="External field name to property name",
    )


class FieldDefinition(BaseModel):
    """One compiled node of the UI tree."""

    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True)

    tag: str | None = Field(default=None, description="Concrete UI element/component tag")
    props: dict[str, Any] = Field(default_factory=dict, description="Merged props")
    children: list["FieldDefinition"] | None = Field(default=None, description="Ordered child nodes")
    item: ListItemDefinition | None = Field(default=None, description="List item template")
    renderer_id: str | None = Field(default=None, alias="rendererId")

    @property
    def path(self) -> str | None:
        return self.props.get(PATH) or self.props.get(CHILD_OF)

    def walk(self) -> Iterator["FieldDefinition"]:
        """Iterate over this node and all its descendants, depth first."""
        yield self
        for child in self.children or []:
            yield from child.walk()

    def find(self, path: str) -> "FieldDefinition | None":
        """Find a descendant by its dot-joined path."""
        for node in self.walk():
            if node is not self and node.path == path:
                return node
        return None

    def child_names(self) -> list[str]:
        """Names of direct children, the last path segment of each."""
        return [
            child.path.rsplit(".", 1)[-1]
            for child in self.children or []
            if child.path
        ]

    def to_dict(self) -> dict[str, Any]:
        """Export as a plain dict using camelCase keys and omitting unset parts."""
        return self.model_dump(by_alias=True, exclude_none=True)
