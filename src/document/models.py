"""Canonical Page Document Models."""

from typing import Any, Iterator, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from core import safe_json_dumps

CANONICAL_SCHEMA_VERSION = "1.0"
ROOT_ID = "root"
ROOT_TYPE = "Root"
DEFAULT_TITLE = "Untitled Page"


class _WireModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StateOverrides(_WireModel):
    """Per-state prop overrides."""

    hover: dict[str, Any] | None = None
    active: dict[str, Any] | None = None
    focus: dict[str, Any] | None = None


class TransitionSettings(_WireModel):
    """Transition applied when switching between states."""

    property: str = "all"
    duration: int = Field(default=200, ge=0)
    easing: str = "ease-out"
    delay: int = Field(default=0, ge=0)


class Node(_WireModel):
    """One component in the page tree."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    id: str = Field(min_length=1)
    type: str = Field(min_length=1)
    props: dict[str, Any] = Field(default_factory=dict)
    children: list[str] | None = None
    parent_id: str | None = None  # Advisory only; traversal goes top-down
    zone_id: str | None = None
    locked: bool = False
    hidden: bool = False
    states: StateOverrides | None = None
    transition: TransitionSettings | None = None


class RootNode(_WireModel):
    """Page root: metadata props plus top-level ordering."""

    id: Literal["root"] = ROOT_ID
    type: Literal["Root"] = ROOT_TYPE
    props: dict[str, Any] = Field(default_factory=lambda: {"title": DEFAULT_TITLE, "description": ""})
    children: list[str] = Field(default_factory=list)


class CanonicalDocument(_WireModel):
    """
    Current-version page document.

    ``components`` is an arena keyed by id; ``root.children`` and ``zones``
    reference into it. Dangling references are tolerated here and reported
    by the migrator and renderers.
    """

    schema_version: Literal["1.0"] = Field(
        default=CANONICAL_SCHEMA_VERSION,
        validation_alias=AliasChoices("schemaVersion", "version", "schema_version"),
        serialization_alias="schemaVersion",
    )
    root: RootNode = Field(default_factory=RootNode)
    components: dict[str, Node] = Field(default_factory=dict)
    zones: dict[str, list[str]] = Field(default_factory=dict)

    def get(self, node_id: str) -> Node | None:
        return self.components.get(node_id)

    def is_empty(self) -> bool:
        return not self.components and not self.root.children and not any(self.zones.values())

    def iter_references(self) -> Iterator[tuple[str | None, str]]:
        """(owner, referenced id) for root children, node children and zone entries."""
        for child_id in self.root.children:
            yield ROOT_ID, child_id
        for node in self.components.values():
            for child_id in node.children or ():
                yield node.id, child_id
        for zone, entries in self.zones.items():
            for child_id in entries:
                yield f"zone:{zone}", child_id

    def referenced_ids(self) -> set[str]:
        return {child_id for _, child_id in self.iter_references()}

    def dangling_references(self) -> list[tuple[str | None, str]]:
        """References whose target is missing from ``components``, in document order."""
        return [(owner, ref) for owner, ref in self.iter_references() if ref not in self.components]

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_json(self, **kwargs: Any) -> str:
        return safe_json_dumps(self.to_dict(), **kwargs)


def create_empty_document(title: str = DEFAULT_TITLE) -> CanonicalDocument:
    """Valid document with only the root node."""
    return CanonicalDocument(root=RootNode(props={"title": title, "description": ""}))
