"""Component Registry Types."""

from dataclasses import dataclass, field
from typing import Any, Callable, Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field

from palette import BrandColorPalette

NodeKind = Literal["root", "zone", "component", "module_container", "placeholder", "cycle"]

BUILTIN_SOURCE = "builtin"

# Props read, in order, as a component's text content
TEXT_PROPS = ("text", "content", "label", "title")


class RenderNode(BaseModel):
    """One node of the renderable output tree."""

    id: str
    type: str
    kind: NodeKind = "component"
    tag: str = "div"
    props: dict[str, Any] = Field(default_factory=dict)
    style: dict[str, Any] = Field(default_factory=dict)
    class_name: str | None = None
    text: str | None = None
    children: list["RenderNode"] = Field(default_factory=list)

    def walk(self):
        """Pre-order iteration over this node and its descendants."""
        yield self
        for child in self.children:
            yield from child.walk()

    def component_ids(self) -> list[str]:
        """Ids of component and placeholder nodes in pre-order."""
        return [n.id for n in self.walk() if n.kind in ("component", "placeholder", "cycle")]


RenderNode.model_rebuild()


@dataclass(frozen=True)
class RenderInput:
    """What a render function receives: brand-injected props split into content and style."""

    node_id: str
    type: str
    props: Mapping[str, Any]
    style: Mapping[str, Any]
    palette: BrandColorPalette
    class_name: str | None = None
    children: list[RenderNode] = field(default_factory=list)


RenderFunction = Callable[[RenderInput], RenderNode]


class ComponentDefinition(BaseModel):
    """Capability record for one component type."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    type: str = Field(..., min_length=1, description="Component type name")
    render: RenderFunction = Field(..., description="Render function")
    accepts_children: bool = Field(default=False, description="Resolve and nest children")
    tag: str | None = Field(default=None, description="Output tag override")
    category: str = Field(default="general")
    source: str = Field(default=BUILTIN_SOURCE, description="builtin or the providing module id")

    @property
    def is_module(self) -> bool:
        return self.source != BUILTIN_SOURCE


def node_text(props: Mapping[str, Any]) -> str | None:
    """First scalar text-like prop, as a string."""
    for name in TEXT_PROPS:
        value = props.get(name)
        if isinstance(value, (str, int, float)) and not isinstance(value, bool) and value != "":
            return str(value)
    return None


def element(inp: RenderInput, tag: str, *, text: str | None = None) -> RenderNode:
    """Plain element output for ``inp``."""
    return RenderNode(
        id=inp.node_id,
        type=inp.type,
        tag=tag,
        props=dict(inp.props),
        style=dict(inp.style),
        class_name=inp.class_name,
        text=text if text is not None else node_text(inp.props),
        children=list(inp.children),
    )


def block(tag: str = "div") -> RenderFunction:
    """Render function emitting ``tag`` with the node's text and children."""

    def render(inp: RenderInput) -> RenderNode:
        return element(inp, tag)

    render.__name__ = f"render_{tag}"
    return render
