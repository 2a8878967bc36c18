from typing import Any, Iterable, List, Optional, Sequence

from .types import GraphKind, Style


class RenderOption:
    """A single render option.

    Flags (`RenderOption.NO_NODE_LABELS`, ...) are compared by value, so
    repeating one has no further effect. `RenderOption.fontname(name)`
    carries a value; when several are given the first one wins.
    """

    __slots__ = ("_name", "_value")

    def __init__(self, name: str, value: Optional[str] = None):
        self._name = name
        self._value = value

    @classmethod
    def fontname(cls, fontname: str) -> "RenderOption":
        return cls("fontname", fontname)

    @property
    def name(self) -> str:
        return self._name

    @property
    def value(self) -> Optional[str]:
        return self._value

    def __repr__(self) -> str:
        if self._value is None:
            return f"<RenderOption {self._name}>"
        return f"<RenderOption {self._name}={self._value!r}>"

    def __eq__(self, other) -> bool:
        if not isinstance(other, RenderOption):
            return NotImplemented
        return (self._name, self._value) == (other._name, other._value)

    def __hash__(self) -> int:
        return hash((self._name, self._value))


RenderOption.NO_EDGE_LABELS = RenderOption("no_edge_labels")
RenderOption.NO_NODE_LABELS = RenderOption("no_node_labels")
RenderOption.NO_EDGE_STYLES = RenderOption("no_edge_styles")
RenderOption.NO_EDGE_COLORS = RenderOption("no_edge_colors")
RenderOption.NO_NODE_STYLES = RenderOption("no_node_styles")
RenderOption.NO_NODE_COLORS = RenderOption("no_node_colors")
RenderOption.NO_ARROWS = RenderOption("no_arrows")
RenderOption.DARK_THEME = RenderOption("dark_theme")

# fmt: off
_dark_theme_graph_attrs = (
    'bgcolor="black"',
    'fontcolor="white"',
)
_dark_theme_content_attrs = (
    'color="white"',
    'fontcolor="white"',
)
# fmt: on


def _write(w: Any, text: str) -> None:
    w.write(text.encode("utf-8"))


def _first_fontname(options: Sequence[RenderOption]) -> Optional[str]:
    for option in options:
        if option.name == "fontname":
            return option.value
    return None


def render(g: Any, w: Any) -> None:
    """Renders graph `g` into the writer `w` in DOT syntax.

    Simple wrapper around `render_opts` with no options.
    """
    render_opts(g, w, [])


def render_opts(g: Any, w: Any, options: Iterable[RenderOption]) -> None:
    """Renders graph `g` into the writer `w` in DOT syntax.

    :param g: An object implementing both `GraphWalk` and `Labeller`.
    :param w: A binary sink; its `write` method receives UTF-8 encoded bytes.
    :param options: Render options, see `RenderOption`.

    Anything raised by the sink propagates unchanged and aborts rendering,
    leaving whatever was already written in the sink.
    """
    options = list(options)
    kind = g.kind()
    _write(w, f"{kind.as_keyword()} {g.graph_id()} {{\n")

    if kind is GraphKind.DIRECTED:
        rankdir = g.rank_dir()
        if rankdir is not None:
            _write(w, f'    rankdir="{rankdir.as_static_str()}";\n')

    for name, value in g.graph_attrs().items():
        _write(w, f"    {name}={value}\n")

    # Global graph properties
    graph_attrs: List[str] = []
    content_attrs: List[str] = []
    fontname = _first_fontname(options)
    if fontname is not None:
        font = f'fontname="{fontname}"'
        graph_attrs.append(font)
        content_attrs.append(font)
    if RenderOption.DARK_THEME in options:
        graph_attrs.extend(_dark_theme_graph_attrs)
        content_attrs.extend(_dark_theme_content_attrs)
    if graph_attrs or content_attrs:
        _write(w, f"    graph[{' '.join(graph_attrs)}];\n")
        content = " ".join(content_attrs)
        _write(w, f"    node[{content}];\n")
        _write(w, f"    edge[{content}];\n")

    render_subgraphs(w, g, g.subgraphs(), options)
    render_nodes(w, g, g.nodes(), options)
    render_edges(w, g, g.edges(), options)

    _write(w, "}\n")


def render_nodes(w: Any, graph: Any, nodes: Iterable[Any], options: Sequence[RenderOption]) -> None:
    for n in nodes:
        text = f"    {graph.node_id(n)}"

        if RenderOption.NO_NODE_LABELS not in options:
            text += f"[label={graph.node_label(n).to_escaped_string()}]"

        style = graph.node_style(n)
        if RenderOption.NO_NODE_STYLES not in options and style is not Style.NONE:
            text += f'[style="{style.as_static_str()}"]'

        if RenderOption.NO_NODE_COLORS not in options:
            color = graph.node_color(n)
            if color is not None:
                text += f"[color={color.to_escaped_string()}]"

        shape = graph.node_shape(n)
        if shape is not None:
            text += f"[shape={shape.to_escaped_string()}]"

        for name, value in graph.node_attrs(n).items():
            text += f"[{name}={value}]"

        _write(w, text + ";\n")


def render_subgraphs(w: Any, graph: Any, subgraphs: Iterable[Any], options: Sequence[RenderOption]) -> None:
    for s in subgraphs:
        text = "subgraph"

        subgraph_id = graph.subgraph_id(s)
        if subgraph_id is not None:
            text += f" {subgraph_id}"

        text += " {\n"

        if RenderOption.NO_NODE_LABELS not in options:
            text += f"    label={graph.subgraph_label(s).to_escaped_string()};\n"

        style = graph.subgraph_style(s)
        if RenderOption.NO_NODE_STYLES not in options and style is not Style.NONE:
            text += f'    style="{style.as_static_str()}";\n'

        if RenderOption.NO_NODE_COLORS not in options:
            color = graph.subgraph_color(s)
            if color is not None:
                text += f"    color={color.to_escaped_string()};\n"

        shape = graph.subgraph_shape(s)
        if shape is not None:
            text += f"    shape={shape.to_escaped_string()};\n"

        for name, value in graph.subgraph_attrs(s).items():
            text += f"    {name}={value};\n"

        for n in graph.subgraph_nodes(s):
            text += f"    {graph.node_id(n)};\n"

        _write(w, text + "}\n")


def render_edges(w: Any, graph: Any, edges: Iterable[Any], options: Sequence[RenderOption]) -> None:
    edge_op = graph.kind().as_edge_op()
    for e in edges:
        start_arrow = graph.edge_start_arrow(e)
        end_arrow = graph.edge_end_arrow(e)
        start_port = graph.edge_start_port(e)
        end_port = graph.edge_end_port(e)
        start_point = graph.edge_start_point(e)
        end_point = graph.edge_end_point(e)

        _write(w, "    ")

        text = str(graph.node_id(graph.source(e)))
        if start_port is not None:
            text += f":{start_port}"
        if start_point is not None:
            text += start_point.as_static_str()
        text += f" {edge_op} {graph.node_id(graph.target(e))}"
        if end_port is not None:
            text += f":{end_port}"
        if end_point is not None:
            text += end_point.as_static_str()

        if RenderOption.NO_EDGE_LABELS not in options:
            text += f"[label={graph.edge_label(e).to_escaped_string()}]"

        style = graph.edge_style(e)
        if RenderOption.NO_EDGE_STYLES not in options and style is not Style.NONE:
            text += f'[style="{style.as_static_str()}"]'

        if RenderOption.NO_EDGE_COLORS not in options:
            color = graph.edge_color(e)
            if color is not None:
                text += f"[color={color.to_escaped_string()}]"

        if RenderOption.NO_ARROWS not in options and not (start_arrow.is_default() and end_arrow.is_default()):
            text += "["
            if not end_arrow.is_default():
                text += f'arrowhead="{end_arrow.to_dot_string()}"'
            if not start_arrow.is_default():
                if not text.endswith("["):
                    text += " "
                text += f'dir="both" arrowtail="{start_arrow.to_dot_string()}"'
            text += "]"

        # Edge attributes are written without brackets.
        for name, value in graph.edge_attrs(e).items():
            text += f"{name}={value}"

        _write(w, text + ";\n")
