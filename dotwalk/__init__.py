from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional, Sequence

from .render import RenderOption, render, render_nodes, render_edges, render_opts, render_subgraphs
from .types import (
    Arrow,
    ArrowVertex,
    CompassPoint,
    EmptyName,
    GraphKind,
    Id,
    IdError,
    InvalidChar,
    InvalidStartChar,
    RankDir,
    ShapeFill,
    Side,
    Style,
    Text,
    TextKind,
)

# There is a tension in the design of the labelling API.
#
# The graph itself provides labels for its nodes, edges and subgraphs
# rather than the node and edge objects labelling themselves. That way
# any object (an int, a tuple, a row from somewhere else) can be used as
# a node or edge directly, without being wrapped. Only nodes need both
# an identifier and a label; graphs only have identifiers and edges
# only have labels.


class GraphWalk(ABC):
    """GraphWalk is the topology half of a graph: which nodes, edges and
    subgraphs there are and how edges connect nodes.

    Nodes, edges and subgraphs can be any objects. The renderer never looks
    inside them, it only hands them back to the methods below. Every
    sequence is requested again for each render phase, so the graph must
    not change while it is being rendered.
    """

    @abstractmethod
    def nodes(self) -> Sequence[Any]:
        """Returns all the nodes in this graph."""

    @abstractmethod
    def edges(self) -> Sequence[Any]:
        """Returns all of the edges in this graph."""

    @abstractmethod
    def source(self, edge: Any) -> Any:
        """The source node for `edge`."""

    @abstractmethod
    def target(self, edge: Any) -> Any:
        """The target node for `edge`."""

    def subgraphs(self) -> Sequence[Any]:
        """Returns all the subgraphs in this graph."""
        return []

    def subgraph_nodes(self, subgraph: Any) -> Sequence[Any]:
        """Returns all the nodes in this subgraph."""
        return []


class Labeller(ABC):
    """Labeller is the labelling half of a graph: identifiers, labels,
    styles and attributes for the graph and everything in it.

    Only `graph_id` and `node_id` are required.
    """

    @abstractmethod
    def graph_id(self) -> Id:
        """Must return a DOT compatible identifier naming the graph."""

    @abstractmethod
    def node_id(self, node: Any) -> Id:
        """Maps `node` to a unique identifier with respect to this graph."""

    def graph_attrs(self) -> Mapping[str, str]:
        """Graph level attributes, written raw as `name=value` lines."""
        return {}

    def kind(self) -> GraphKind:
        return GraphKind.DIRECTED

    def rank_dir(self) -> Optional[RankDir]:
        """Rank direction; only written for directed graphs."""
        return None

    def node_label(self, node: Any) -> Text:
        """Maps `node` to a label that will be used in the rendered output.
        The label need not be unique, and may be the empty string; the
        default is just the output from `node_id`.
        """
        return Text.label(self.node_id(node).name)

    def node_style(self, node: Any) -> Style:
        return Style.NONE

    def node_color(self, node: Any) -> Optional[Text]:
        return None

    def node_shape(self, node: Any) -> Optional[Text]:
        """Maps `node` to one of the graphviz node shapes, see
        https://www.graphviz.org/doc/info/shapes.html.
        """
        return None

    def node_attrs(self, node: Any) -> Mapping[str, str]:
        return {}

    def edge_label(self, edge: Any) -> Text:
        """Maps `edge` to a label that will be used in the rendered output.
        The default is the empty string.
        """
        return Text.label("")

    def edge_style(self, edge: Any) -> Style:
        return Style.NONE

    def edge_color(self, edge: Any) -> Optional[Text]:
        return None

    def edge_start_arrow(self, edge: Any) -> Arrow:
        return Arrow()

    def edge_end_arrow(self, edge: Any) -> Arrow:
        return Arrow()

    def edge_start_port(self, edge: Any) -> Optional[Id]:
        return None

    def edge_end_port(self, edge: Any) -> Optional[Id]:
        return None

    def edge_start_point(self, edge: Any) -> Optional[CompassPoint]:
        return None

    def edge_end_point(self, edge: Any) -> Optional[CompassPoint]:
        return None

    def edge_attrs(self, edge: Any) -> Mapping[str, str]:
        """Edge attributes. Unlike everywhere else these are appended
        without surrounding brackets.
        """
        return {}

    def subgraph_id(self, subgraph: Any) -> Optional[Id]:
        """Maps `subgraph` to an identifier, or None for an anonymous one.
        Graphviz draws a box around subgraphs whose id starts with
        `cluster_`.
        """
        return None

    def subgraph_label(self, subgraph: Any) -> Text:
        return Text.label("")

    def subgraph_style(self, subgraph: Any) -> Style:
        return Style.NONE

    def subgraph_color(self, subgraph: Any) -> Optional[Text]:
        return None

    def subgraph_shape(self, subgraph: Any) -> Optional[Text]:
        return None

    def subgraph_attrs(self, subgraph: Any) -> Mapping[str, str]:
        return {}


def escape_html(s: str) -> str:
    """Escape `s` for use as content of an HTML label.

    Newlines become left aligned line breaks.
    """
    return (
        s.replace("&", "&amp;")
        .replace('"', "&quot;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace("\n", '<br align="left"/>')
    )


__all__ = [
    "Arrow",
    "ArrowVertex",
    "CompassPoint",
    "EmptyName",
    "GraphKind",
    "GraphWalk",
    "Id",
    "IdError",
    "InvalidChar",
    "InvalidStartChar",
    "Labeller",
    "RankDir",
    "RenderOption",
    "ShapeFill",
    "Side",
    "Style",
    "Text",
    "TextKind",
    "escape_html",
    "render",
    "render_edges",
    "render_nodes",
    "render_opts",
    "render_subgraphs",
]
