"""
An in-memory graph implementing both `GraphWalk` and `Labeller`, for callers
that do not have a graph type of their own.
"""
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from . import GraphWalk, Labeller
from .types import Arrow, ArrowVertex, CompassPoint, GraphKind, Id, RankDir, ShapeFill, Side, Style, Text

TextLike = Union[str, Text]


def _text(value: Optional[TextLike]) -> Optional[Text]:
    if value is None or isinstance(value, Text):
        return value
    return Text.label(value)


def _port(value: Optional[Union[str, Id]]) -> Optional[Id]:
    if value is None or isinstance(value, Id):
        return value
    return Id(value)


class SimpleNode:
    def __init__(
        self,
        nodeid: Id,
        label: Optional[Text] = None,
        style: Style = Style.NONE,
        color: Optional[Text] = None,
        shape: Optional[Text] = None,
        attrs: Optional[Dict[str, str]] = None,
    ):
        self.id = nodeid
        self.label = label
        self.style = style
        self.color = color
        self.shape = shape
        self.attrs = attrs if attrs is not None else {}

    def __repr__(self):
        return f"<SimpleNode {self.id}>"


class SimpleEdge:
    def __init__(
        self,
        source: str,
        target: str,
        label: Text,
        style: Style = Style.NONE,
        color: Optional[Text] = None,
        start_arrow: Optional[Arrow] = None,
        end_arrow: Optional[Arrow] = None,
        start_port: Optional[Id] = None,
        end_port: Optional[Id] = None,
        start_point: Optional[CompassPoint] = None,
        end_point: Optional[CompassPoint] = None,
        attrs: Optional[Dict[str, str]] = None,
    ):
        self.source = source
        self.target = target
        self.label = label
        self.style = style
        self.color = color
        self.start_arrow = start_arrow if start_arrow is not None else Arrow()
        self.end_arrow = end_arrow if end_arrow is not None else Arrow()
        self.start_port = start_port
        self.end_port = end_port
        self.start_point = start_point
        self.end_point = end_point
        self.attrs = attrs if attrs is not None else {}

    def __repr__(self):
        return f"<SimpleEdge {self.source} {self.target}>"


class SimpleSubgraph:
    def __init__(
        self,
        subgraph_id: Optional[Id],
        label: Text,
        nodes: List[str],
        style: Style = Style.NONE,
        color: Optional[Text] = None,
        shape: Optional[Text] = None,
        attrs: Optional[Dict[str, str]] = None,
    ):
        self.id = subgraph_id
        self.label = label
        self.nodes = nodes
        self.style = style
        self.color = color
        self.shape = shape
        self.attrs = attrs if attrs is not None else {}

    def __repr__(self):
        return f"<SimpleSubgraph {self.id or '(anonymous)'}>"


class SimpleGraph(GraphWalk, Labeller):
    """SimpleGraph keeps nodes, edges and subgraphs in insertion order,
    which is also the order they are rendered in.
    """

    def __init__(
        self,
        name: str,
        kind: GraphKind = GraphKind.DIRECTED,
        rankdir: Optional[RankDir] = None,
        graph_attr: Optional[Mapping[str, str]] = None,
    ):
        """
        :param name: Graph identifier.
        :param kind: Directed or undirected graph.
        :param rankdir: Rank direction, only used for directed graphs.
        :param graph_attr: Provide graph level dot attributes.
        """
        self._id = Id(name)
        self._kind = kind
        self._rankdir = rankdir
        self._graph_attr: Dict[str, str] = dict(graph_attr or {})
        self._nodes: Dict[str, SimpleNode] = {}
        self._edges: List[SimpleEdge] = []
        self._subgraphs: List[SimpleSubgraph] = []

    def add_node(
        self,
        nodeid: str,
        label: Optional[TextLike] = None,
        style: Style = Style.NONE,
        color: Optional[TextLike] = None,
        shape: Optional[TextLike] = None,
        attr: Optional[Mapping[str, str]] = None,
        **attrs: str,
    ) -> SimpleNode:
        """Create a new node.

        :param nodeid: Node identifier, must be unique in the graph.
        :param label: Node label. Defaults to the identifier.
        :param attr: Extra dot attributes, for names that clash with a parameter.
        :param attrs: Extra dot attributes.
        """
        if nodeid in self._nodes:
            raise ValueError(f'"{nodeid}" is already a node')
        node = SimpleNode(Id(nodeid), _text(label), style, _text(color), _text(shape), {**(attr or {}), **attrs})
        self._nodes[nodeid] = node
        return node

    def add_edge(
        self,
        source: str,
        target: str,
        label: TextLike = "",
        style: Style = Style.NONE,
        color: Optional[TextLike] = None,
        start_arrow: Optional[Arrow] = None,
        end_arrow: Optional[Arrow] = None,
        start_port: Optional[Union[str, Id]] = None,
        end_port: Optional[Union[str, Id]] = None,
        start_point: Optional[CompassPoint] = None,
        end_point: Optional[CompassPoint] = None,
        attr: Optional[Mapping[str, str]] = None,
        **attrs: str,
    ) -> SimpleEdge:
        """Connect two existing nodes."""
        for nodeid in (source, target):
            if nodeid not in self._nodes:
                raise KeyError(f'"{nodeid}" is not a node')
        edge = SimpleEdge(
            source,
            target,
            _text(label),
            style,
            _text(color),
            start_arrow,
            end_arrow,
            _port(start_port),
            _port(end_port),
            start_point,
            end_point,
            {**(attr or {}), **attrs},
        )
        self._edges.append(edge)
        return edge

    def add_subgraph(
        self,
        subgraph_id: Optional[str] = None,
        label: TextLike = "",
        nodes: Iterable[str] = (),
        style: Style = Style.NONE,
        color: Optional[TextLike] = None,
        shape: Optional[TextLike] = None,
        attr: Optional[Mapping[str, str]] = None,
        **attrs: str,
    ) -> SimpleSubgraph:
        """Create a subgraph grouping existing nodes.

        :param subgraph_id: Subgraph identifier, None for an anonymous one.
            Prefix it with `cluster_` to have graphviz draw a box around it.
        """
        members = list(nodes)
        for nodeid in members:
            if nodeid not in self._nodes:
                raise KeyError(f'"{nodeid}" is not a node')
        sid = Id(subgraph_id) if subgraph_id is not None else None
        merged = {**(attr or {}), **attrs}
        subgraph = SimpleSubgraph(sid, _text(label), members, style, _text(color), _text(shape), merged)
        self._subgraphs.append(subgraph)
        return subgraph

    # GraphWalk

    def nodes(self) -> List[SimpleNode]:
        return list(self._nodes.values())

    def edges(self) -> List[SimpleEdge]:
        return list(self._edges)

    def source(self, edge: SimpleEdge) -> SimpleNode:
        return self._nodes[edge.source]

    def target(self, edge: SimpleEdge) -> SimpleNode:
        return self._nodes[edge.target]

    def subgraphs(self) -> List[SimpleSubgraph]:
        return list(self._subgraphs)

    def subgraph_nodes(self, subgraph: SimpleSubgraph) -> List[SimpleNode]:
        return [self._nodes[nodeid] for nodeid in subgraph.nodes]

    # Labeller

    def graph_id(self) -> Id:
        return self._id

    def graph_attrs(self) -> Dict[str, str]:
        return self._graph_attr

    def kind(self) -> GraphKind:
        return self._kind

    def rank_dir(self) -> Optional[RankDir]:
        return self._rankdir

    def node_id(self, node: SimpleNode) -> Id:
        return node.id

    def node_label(self, node: SimpleNode) -> Text:
        if node.label is None:
            return super().node_label(node)
        return node.label

    def node_style(self, node: SimpleNode) -> Style:
        return node.style

    def node_color(self, node: SimpleNode) -> Optional[Text]:
        return node.color

    def node_shape(self, node: SimpleNode) -> Optional[Text]:
        return node.shape

    def node_attrs(self, node: SimpleNode) -> Dict[str, str]:
        return node.attrs

    def edge_label(self, edge: SimpleEdge) -> Text:
        return edge.label

    def edge_style(self, edge: SimpleEdge) -> Style:
        return edge.style

    def edge_color(self, edge: SimpleEdge) -> Optional[Text]:
        return edge.color

    def edge_start_arrow(self, edge: SimpleEdge) -> Arrow:
        return edge.start_arrow

    def edge_end_arrow(self, edge: SimpleEdge) -> Arrow:
        return edge.end_arrow

    def edge_start_port(self, edge: SimpleEdge) -> Optional[Id]:
        return edge.start_port

    def edge_end_port(self, edge: SimpleEdge) -> Optional[Id]:
        return edge.end_port

    def edge_start_point(self, edge: SimpleEdge) -> Optional[CompassPoint]:
        return edge.start_point

    def edge_end_point(self, edge: SimpleEdge) -> Optional[CompassPoint]:
        return edge.end_point

    def edge_attrs(self, edge: SimpleEdge) -> Dict[str, str]:
        return edge.attrs

    def subgraph_id(self, subgraph: SimpleSubgraph) -> Optional[Id]:
        return subgraph.id

    def subgraph_label(self, subgraph: SimpleSubgraph) -> Text:
        return subgraph.label

    def subgraph_style(self, subgraph: SimpleSubgraph) -> Style:
        return subgraph.style

    def subgraph_color(self, subgraph: SimpleSubgraph) -> Optional[Text]:
        return subgraph.color

    def subgraph_shape(self, subgraph: SimpleSubgraph) -> Optional[Text]:
        return subgraph.shape

    def subgraph_attrs(self, subgraph: SimpleSubgraph) -> Dict[str, str]:
        return subgraph.attrs

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SimpleGraph":
        """Build a graph from a JSON compatible description.

        :param data: Mapping with an ``id`` and optional ``kind``,
            ``rankdir``, ``attrs``, ``nodes``, ``edges`` and ``subgraphs``.
        :raises ValueError: On unknown names or invalid identifiers.
        :raises KeyError: On a missing required key or an unknown node.
        """
        graph = cls(
            data["id"],
            kind=parse_kind(data.get("kind", "directed")),
            rankdir=parse_rankdir(data["rankdir"]) if data.get("rankdir") else None,
            graph_attr=parse_attrs(data.get("attrs")),
        )
        for item in data.get("nodes", []):
            if isinstance(item, str):
                graph.add_node(item)
                continue
            graph.add_node(
                item["id"],
                label=parse_text(item.get("label")),
                style=parse_style(item.get("style")),
                color=parse_text(item.get("color")),
                shape=parse_text(item.get("shape")),
                attr=parse_attrs(item.get("attrs")),
            )
        for item in data.get("edges", []):
            graph.add_edge(
                item["source"],
                item["target"],
                label=parse_text(item.get("label", "")),
                style=parse_style(item.get("style")),
                color=parse_text(item.get("color")),
                start_arrow=parse_arrow(item.get("tail")),
                end_arrow=parse_arrow(item.get("head")),
                start_port=item.get("start_port"),
                end_port=item.get("end_port"),
                start_point=parse_compass(item.get("start_compass")),
                end_point=parse_compass(item.get("end_compass")),
                attr=parse_attrs(item.get("attrs")),
            )
        for item in data.get("subgraphs", []):
            graph.add_subgraph(
                item.get("id"),
                label=parse_text(item.get("label", "")),
                nodes=item.get("nodes", []),
                style=parse_style(item.get("style")),
                color=parse_text(item.get("color")),
                shape=parse_text(item.get("shape")),
                attr=parse_attrs(item.get("attrs")),
            )
        return graph


def _require_str(value: Any, what: str) -> None:
    if not isinstance(value, str):
        raise ValueError(f"{value!r} is not a valid {what}")


def parse_attrs(value: Any) -> Dict[str, str]:
    """An attribute mapping; names and values are written as given."""
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ValueError(f"{value!r} is not a valid attribute mapping")
    return dict(value)


def parse_text(value: Any) -> Optional[Text]:
    """A plain string, or a single entry mapping of ``label``, ``esc`` or ``html``."""
    if value is None or isinstance(value, Text):
        return value
    if isinstance(value, str):
        return Text.label(value)
    if isinstance(value, Mapping) and len(value) == 1:
        ((kind, text),) = value.items()
        if kind in ("label", "esc", "html"):
            return getattr(Text, kind)(text)
    raise ValueError(f"{value!r} is not a valid label")


def parse_style(value: Optional[str]) -> Style:
    if value is None:
        return Style.NONE
    _require_str(value, "style")
    if not value or value.lower() == "none":
        return Style.NONE
    try:
        return Style(value.lower())
    except ValueError:
        raise ValueError(f'"{value}" is not a valid style') from None


def parse_kind(value: str) -> GraphKind:
    _require_str(value, "graph kind")
    aliases = {"digraph": GraphKind.DIRECTED, "graph": GraphKind.UNDIRECTED}
    if value.lower() in aliases:
        return aliases[value.lower()]
    try:
        return GraphKind(value.lower())
    except ValueError:
        raise ValueError(f'"{value}" is not a valid graph kind') from None


def parse_rankdir(value: str) -> RankDir:
    _require_str(value, "direction")
    try:
        return RankDir(value.upper())
    except ValueError:
        raise ValueError(f'"{value}" is not a valid direction') from None


def parse_compass(value: Optional[str]) -> Optional[CompassPoint]:
    if value is None:
        return None
    _require_str(value, "compass point")
    try:
        return CompassPoint(":" + value.lower())
    except ValueError:
        raise ValueError(f'"{value}" is not a valid compass point') from None


# Longest first, so that "icurve" is not read as "i" + "curve".
_shapes_by_length = sorted(ArrowVertex.SHAPES, key=len, reverse=True)


def parse_vertex(name: str) -> ArrowVertex:
    """Parse a DOT arrow name such as ``normal``, ``olbox`` or ``rcrow``."""
    _require_str(name, "arrow")
    for shape in _shapes_by_length:
        if not name.endswith(shape):
            continue
        prefix = name[: -len(shape)]
        fill = ShapeFill.FILLED
        side = Side.BOTH
        if prefix.startswith("o"):
            fill = ShapeFill.OPEN
            prefix = prefix[1:]
        if prefix in ("l", "r"):
            side = Side.LEFT if prefix == "l" else Side.RIGHT
            prefix = ""
        if prefix:
            break
        return ArrowVertex(shape, fill, side)
    raise ValueError(f'"{name}" is not a valid arrow')


def parse_arrow(value: Union[None, str, Iterable[str]]) -> Arrow:
    """An arrow name or a list of names; None is the default arrow."""
    if value is None:
        return Arrow()
    if isinstance(value, str):
        value = [value]
    return Arrow(*(parse_vertex(name) for name in value))
