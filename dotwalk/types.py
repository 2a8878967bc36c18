from enum import Enum
from typing import Tuple


class GraphKind(Enum):
    """Graph kind determines if `digraph` or `graph` is used as keyword
    for the graph.
    """

    DIRECTED = "directed"
    UNDIRECTED = "undirected"

    def as_keyword(self) -> str:
        """The keyword to use to introduce the graph."""
        return "digraph" if self is GraphKind.DIRECTED else "graph"

    def as_edge_op(self) -> str:
        """The edgeop syntax to use for this graph kind."""
        return "->" if self is GraphKind.DIRECTED else "--"


class RankDir(Enum):
    """The direction to draw directed graphs (one rank at a time).

    See https://graphviz.org/docs/attr-types/rankdir/ for descriptions.
    """

    TOP_BOTTOM = "TB"
    LEFT_RIGHT = "LR"
    BOTTOM_TOP = "BT"
    RIGHT_LEFT = "RL"

    def as_static_str(self) -> str:
        return self.value


class IdError(ValueError):
    """Raised when a string is not usable as a bare DOT identifier."""


class EmptyName(IdError):
    def __init__(self):
        super().__init__("Id cannot be empty")


class InvalidStartChar(IdError):
    def __init__(self, char: str):
        self.char = char
        super().__init__(f"Id cannot begin with '{char}'")


class InvalidChar(IdError):
    def __init__(self, char: str):
        self.char = char
        super().__init__(f"Id cannot contain '{char}'")


def _is_id_char(c: str) -> bool:
    return c == "_" or (c.isascii() and c.isalnum())


class Id:
    """Id is a Graphviz `ID`.

    The name must be a non-empty string made up of ASCII alphanumeric or
    underscore characters, not beginning with a digit (i.e. the regular
    expression `[a-zA-Z_][a-zA-Z_0-9]*`). This is a strict subset of the
    `ID` format defined by the DOT language.

    Invalid names are rejected, never rewritten.
    """

    __slots__ = ("_name",)

    def __init__(self, name: str):
        """
        :param name: Identifier text.
        :raises EmptyName: If the name is empty.
        :raises InvalidStartChar: If the first character is not a letter or underscore.
        :raises InvalidChar: If any other character is not alphanumeric or underscore.
        """
        if not name:
            raise EmptyName()
        first = name[0]
        if not (first == "_" or (first.isascii() and first.isalpha())):
            raise InvalidStartChar(first)
        for c in name:
            if not _is_id_char(c):
                raise InvalidChar(c)
        self._name = name

    @classmethod
    def is_valid(cls, name: str) -> bool:
        try:
            cls(name)
        except IdError:
            return False
        return True

    @property
    def name(self) -> str:
        return self._name

    def __str__(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"Id({self._name!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Id):
            return NotImplemented
        return self._name == other._name

    def __hash__(self) -> int:
        return hash(self._name)


# fmt: off
_DEFAULT_ESCAPES = {
    "\t": "\\t",
    "\r": "\\r",
    "\n": "\\n",
    "\\": "\\\\",
    "'": "\\'",
    '"': '\\"',
}
# fmt: on


def escape_char(c: str, keep_backslash: bool = False) -> str:
    """Escape one character for use inside a double-quoted DOT string.

    Printable ASCII passes through, the usual control characters and quotes
    get a backslash escape, and anything else becomes `\\u{hex}`.
    """
    if keep_backslash and c == "\\":
        return c
    escaped = _DEFAULT_ESCAPES.get(c)
    if escaped is not None:
        return escaped
    if " " <= c <= "~":
        return c
    return f"\\u{{{ord(c):x}}}"


def escape_str(s: str, keep_backslash: bool = False) -> str:
    return "".join(escape_char(c, keep_backslash) for c in s)


class TextKind(Enum):
    LABEL = "label"
    ESC = "esc"
    HTML = "html"


class Text:
    """The text for a graphviz label on a node, edge or subgraph.

    There are three kinds of text:

    * ``Text.label(s)`` preserves the text as is. Backslashes are escaped
      and thus appear as backslashes in the rendered label.
    * ``Text.esc(s)`` uses the graphviz escString type
      (https://www.graphviz.org/docs/attr-types/escString). Backslashes are
      not escaped; they start an escape sequence interpreted by graphviz,
      e.g. ``\\l`` left-justifies the preceding line, ``\\r`` right-justifies
      it and ``\\n`` centers it.
    * ``Text.html(s)`` is a graphviz HTML string label. The string is printed
      exactly as given between ``<`` and ``>``. No escaping is performed.
    """

    __slots__ = ("_kind", "_text")

    def __init__(self, kind: TextKind, text: str):
        self._kind = kind
        self._text = text

    @classmethod
    def label(cls, s: str) -> "Text":
        return cls(TextKind.LABEL, s)

    @classmethod
    def esc(cls, s: str) -> "Text":
        return cls(TextKind.ESC, s)

    @classmethod
    def html(cls, s: str) -> "Text":
        return cls(TextKind.HTML, s)

    @property
    def kind(self) -> TextKind:
        return self._kind

    @property
    def text(self) -> str:
        return self._text

    def to_escaped_string(self) -> str:
        """Renders text as string suitable for a label in a .dot file.
        This includes quotes or suitable delimiters.
        """
        if self._kind is TextKind.LABEL:
            return f'"{escape_str(self._text)}"'
        if self._kind is TextKind.ESC:
            return f'"{escape_str(self._text, keep_backslash=True)}"'
        return f"<{self._text}>"

    def __repr__(self) -> str:
        return f"Text.{self._kind.value}({self._text!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Text):
            return NotImplemented
        return self._kind is other._kind and self._text == other._text

    def __hash__(self) -> int:
        return hash((self._kind, self._text))


class Style(Enum):
    """The style for a node, edge or subgraph.

    See https://www.graphviz.org/docs/attr-types/style/ for descriptions.
    Some of these are not valid for edges. `Style.NONE` means no style
    attribute is written at all.
    """

    NONE = ""
    SOLID = "solid"
    DASHED = "dashed"
    DOTTED = "dotted"
    BOLD = "bold"
    ROUNDED = "rounded"
    DIAGONALS = "diagonals"
    FILLED = "filled"
    STRIPED = "striped"
    WEDGED = "wedged"

    def as_static_str(self) -> str:
        return self.value


class ShapeFill(Enum):
    """Arrow modifier that determines if the shape is empty or filled."""

    OPEN = "o"
    FILLED = ""

    def as_static_str(self) -> str:
        return self.value


class Side(Enum):
    """Arrow modifier that determines if the shape is clipped.

    For example `Side.LEFT` means only the left side is visible.
    """

    LEFT = "l"
    RIGHT = "r"
    BOTH = ""

    def as_static_str(self) -> str:
        return self.value


class ArrowVertex:
    """One primitive of an arrow, as defined in
    http://www.graphviz.org/content/arrow-shapes.

    Use the constructors (`normal`, `crow`, ...) rather than building one
    directly; each accepts only the modifiers its shape supports.
    """

    __fill_and_side: Tuple[str, ...] = ("normal", "box", "icurve", "diamond", "inv")
    __fill_only: Tuple[str, ...] = ("dot",)
    __side_only: Tuple[str, ...] = ("crow", "curve", "tee", "vee")

    SHAPES: Tuple[str, ...] = ("none",) + __fill_and_side + __fill_only + __side_only

    __slots__ = ("_shape", "_fill", "_side")

    def __init__(self, shape: str, fill: ShapeFill = ShapeFill.FILLED, side: Side = Side.BOTH):
        if shape not in self.SHAPES:
            raise ValueError(f'"{shape}" is not a valid arrow shape')
        if fill is not ShapeFill.FILLED and not self._has_fill(shape):
            raise ValueError(f'"{shape}" arrow cannot be open')
        if side is not Side.BOTH and not self._has_side(shape):
            raise ValueError(f'"{shape}" arrow cannot be clipped')
        self._shape = shape
        self._fill = fill
        self._side = side

    @classmethod
    def _has_fill(cls, shape: str) -> bool:
        return shape in cls.__fill_and_side or shape in cls.__fill_only

    @classmethod
    def _has_side(cls, shape: str) -> bool:
        return shape in cls.__fill_and_side or shape in cls.__side_only

    @classmethod
    def none(cls) -> "ArrowVertex":
        """No arrow will be displayed."""
        return cls("none")

    @classmethod
    def normal(cls, fill: ShapeFill = ShapeFill.FILLED, side: Side = Side.BOTH) -> "ArrowVertex":
        """Arrow that ends in a triangle. Supports both fill and side clipping."""
        return cls("normal", fill, side)

    @classmethod
    def boxed(cls, fill: ShapeFill = ShapeFill.FILLED, side: Side = Side.BOTH) -> "ArrowVertex":
        """Arrow ending in a small square box."""
        return cls("box", fill, side)

    @classmethod
    def crow(cls, side: Side = Side.BOTH) -> "ArrowVertex":
        """Arrow ending in three branching lines, also called crow's foot."""
        return cls("crow", side=side)

    @classmethod
    def curve(cls, side: Side = Side.BOTH) -> "ArrowVertex":
        return cls("curve", side=side)

    @classmethod
    def icurve(cls, fill: ShapeFill = ShapeFill.FILLED, side: Side = Side.BOTH) -> "ArrowVertex":
        return cls("icurve", fill, side)

    @classmethod
    def diamond(cls, fill: ShapeFill = ShapeFill.FILLED, side: Side = Side.BOTH) -> "ArrowVertex":
        return cls("diamond", fill, side)

    @classmethod
    def dot(cls, fill: ShapeFill = ShapeFill.FILLED) -> "ArrowVertex":
        """Arrow ending in a circle."""
        return cls("dot", fill)

    @classmethod
    def inv(cls, fill: ShapeFill = ShapeFill.FILLED, side: Side = Side.BOTH) -> "ArrowVertex":
        """Arrow ending in an inverted triangle."""
        return cls("inv", fill, side)

    @classmethod
    def tee(cls, side: Side = Side.BOTH) -> "ArrowVertex":
        """Arrow ending with a T shaped arrow."""
        return cls("tee", side=side)

    @classmethod
    def vee(cls, side: Side = Side.BOTH) -> "ArrowVertex":
        """Arrow ending with a V shaped arrow."""
        return cls("vee", side=side)

    @property
    def shape(self) -> str:
        return self._shape

    @property
    def fill(self) -> ShapeFill:
        return self._fill

    @property
    def side(self) -> Side:
        return self._side

    def to_dot_string(self) -> str:
        """Renders the vertex as fill modifier, side modifier, then shape name."""
        res = ""
        if self._has_fill(self._shape):
            res += self._fill.as_static_str()
        if self._has_side(self._shape) and self._side is not Side.BOTH:
            res += self._side.as_static_str()
        return res + self._shape

    def __repr__(self) -> str:
        return f"<ArrowVertex {self.to_dot_string()}>"

    def __eq__(self, other) -> bool:
        if not isinstance(other, ArrowVertex):
            return NotImplemented
        return (self._shape, self._fill, self._side) == (other._shape, other._fill, other._side)

    def __hash__(self) -> int:
        return hash((self._shape, self._fill, self._side))


class Arrow:
    """All information that can describe an arrow connected to either start
    or end of an edge: up to four vertices drawn in order.

    An arrow without vertices is the default arrow; no arrowhead or
    arrowtail attribute is written for it.

    https://graphviz.org/doc/info/arrows.html
    """

    MAX_VERTICES = 4

    __slots__ = ("_arrows",)

    def __init__(self, *arrows: ArrowVertex):
        if len(arrows) > self.MAX_VERTICES:
            raise ValueError(f"an arrow holds at most {self.MAX_VERTICES} vertices, got {len(arrows)}")
        self._arrows = tuple(arrows)

    @classmethod
    def none(cls) -> "Arrow":
        """An arrow which draws nothing. This is not the default arrow."""
        return cls(ArrowVertex.none())

    @classmethod
    def normal(cls) -> "Arrow":
        """A regular triangle arrow, without modifiers."""
        return cls(ArrowVertex.normal())

    @classmethod
    def from_arrow(cls, vertex: ArrowVertex) -> "Arrow":
        return cls(vertex)

    @property
    def arrows(self) -> Tuple[ArrowVertex, ...]:
        return self._arrows

    def is_default(self) -> bool:
        return not self._arrows

    def to_dot_string(self) -> str:
        return "".join(a.to_dot_string() for a in self._arrows)

    def __repr__(self) -> str:
        return f"<Arrow {self.to_dot_string() or 'default'}>"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Arrow):
            return NotImplemented
        return self._arrows == other._arrows

    def __hash__(self) -> int:
        return hash(self._arrows)


class CompassPoint(Enum):
    """https://graphviz.org/docs/attr-types/portPos/"""

    NORTH = ":n"
    NORTH_EAST = ":ne"
    EAST = ":e"
    SOUTH_EAST = ":se"
    SOUTH = ":s"
    SOUTH_WEST = ":sw"
    WEST = ":w"
    NORTH_WEST = ":nw"
    CENTER = ":c"

    def as_static_str(self) -> str:
        return self.value
