import unittest

from dotwalk import (
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
    escape_html,
)


class IdTest(unittest.TestCase):
    def test_valid_names(self):
        for name in ("hello", "_", "_private", "N0", "a_b_c", "CamelCase9", "x" * 200):
            self.assertEqual(Id(name).name, name)
            self.assertEqual(str(Id(name)), name)

    def test_empty_name(self):
        with self.assertRaises(EmptyName):
            Id("")

    def test_invalid_start_char(self):
        for name, char in (("1abc", "1"), ("-x", "-"), (" a", " "), ("éa", "é"), ("{x}", "{")):
            with self.assertRaises(InvalidStartChar) as ctx:
                Id(name)
            self.assertEqual(ctx.exception.char, char)

    def test_invalid_char(self):
        for name, char in (("a b", " "), ("ab-c", "-"), ("naïve", "ï"), ("x.y", ".")):
            with self.assertRaises(InvalidChar) as ctx:
                Id(name)
            self.assertEqual(ctx.exception.char, char)

    def test_badly_formatted_id(self):
        with self.assertRaises(IdError):
            Id("Weird { struct : ure } !!!")

    def test_errors_are_value_errors(self):
        for name in ("", "1", "a b"):
            with self.assertRaises(ValueError):
                Id(name)

    def test_error_messages(self):
        self.assertEqual(str(EmptyName()), "Id cannot be empty")
        self.assertEqual(str(InvalidStartChar("1")), "Id cannot begin with '1'")
        self.assertEqual(str(InvalidChar("!")), "Id cannot contain '!'")

    def test_is_valid(self):
        self.assertTrue(Id.is_valid("cluster_0"))
        self.assertFalse(Id.is_valid("0cluster"))
        self.assertFalse(Id.is_valid(""))

    def test_equality(self):
        self.assertEqual(Id("a"), Id("a"))
        self.assertNotEqual(Id("a"), Id("b"))
        self.assertEqual(len({Id("a"), Id("a"), Id("b")}), 2)


class TextTest(unittest.TestCase):
    def test_label_doubles_backslash(self):
        self.assertEqual(Text.label(r"a\b").to_escaped_string(), r'"a\\b"')
        self.assertEqual(Text.label(r"left\l").to_escaped_string(), r'"left\\l"')

    def test_esc_keeps_backslash(self):
        self.assertEqual(Text.esc(r"left\l").to_escaped_string(), r'"left\l"')
        self.assertEqual(Text.esc(r"a\rb\nc").to_escaped_string(), r'"a\rb\nc"')

    def test_quotes_are_escaped(self):
        self.assertEqual(Text.label('say "hi"').to_escaped_string(), r'"say \"hi\""')
        self.assertEqual(Text.esc('say "hi"').to_escaped_string(), r'"say \"hi\""')
        self.assertEqual(Text.label("it's").to_escaped_string(), r'"it\'s"')

    def test_control_characters(self):
        self.assertEqual(Text.label("a\nb\tc\rd").to_escaped_string(), r'"a\nb\tc\rd"')
        self.assertEqual(Text.esc("a\nb").to_escaped_string(), r'"a\nb"')
        self.assertEqual(Text.label("\x00").to_escaped_string(), r'"\u{0}"')

    def test_non_ascii(self):
        self.assertEqual(Text.label("é").to_escaped_string(), r'"\u{e9}"')
        self.assertEqual(Text.esc("→").to_escaped_string(), r'"\u{2192}"')

    def test_printable_ascii_passes(self):
        s = "{x,y} <a|b> [c]; d=e"
        self.assertEqual(Text.label(s).to_escaped_string(), f'"{s}"')

    def test_html_is_verbatim(self):
        self.assertEqual(Text.html('<b>"x"</b>\\').to_escaped_string(), '<<b>"x"</b>\\>')

    def test_kind_and_text(self):
        t = Text.esc("x")
        self.assertIs(t.kind, TextKind.ESC)
        self.assertEqual(t.text, "x")
        self.assertEqual(Text.label("x"), Text.label("x"))
        self.assertNotEqual(Text.label("x"), Text.esc("x"))

    def test_escape_html(self):
        self.assertEqual(
            escape_html('a & b <c> "d"\ne'),
            'a &amp; b &lt;c&gt; &quot;d&quot;<br align="left"/>e',
        )
        self.assertEqual(escape_html("&lt;"), "&amp;lt;")


class AttributeTest(unittest.TestCase):
    def test_style(self):
        self.assertEqual(Style.NONE.as_static_str(), "")
        self.assertEqual(Style.DASHED.as_static_str(), "dashed")
        self.assertEqual(Style.WEDGED.as_static_str(), "wedged")
        self.assertEqual(len(Style), 10)

    def test_compass_point(self):
        self.assertEqual(CompassPoint.NORTH.as_static_str(), ":n")
        self.assertEqual(CompassPoint.SOUTH_WEST.as_static_str(), ":sw")
        self.assertEqual(CompassPoint.CENTER.as_static_str(), ":c")
        self.assertEqual(len(CompassPoint), 9)

    def test_rank_dir(self):
        tokens = [r.as_static_str() for r in RankDir]
        self.assertEqual(tokens, ["TB", "LR", "BT", "RL"])

    def test_graph_kind(self):
        self.assertEqual(GraphKind.DIRECTED.as_keyword(), "digraph")
        self.assertEqual(GraphKind.DIRECTED.as_edge_op(), "->")
        self.assertEqual(GraphKind.UNDIRECTED.as_keyword(), "graph")
        self.assertEqual(GraphKind.UNDIRECTED.as_edge_op(), "--")


class ArrowTest(unittest.TestCase):
    def test_default_vertices(self):
        expected = {
            ArrowVertex.none(): "none",
            ArrowVertex.normal(): "normal",
            ArrowVertex.boxed(): "box",
            ArrowVertex.crow(): "crow",
            ArrowVertex.curve(): "curve",
            ArrowVertex.icurve(): "icurve",
            ArrowVertex.diamond(): "diamond",
            ArrowVertex.dot(): "dot",
            ArrowVertex.inv(): "inv",
            ArrowVertex.tee(): "tee",
            ArrowVertex.vee(): "vee",
        }
        for vertex, token in expected.items():
            self.assertEqual(vertex.to_dot_string(), token)

    def test_fill_then_side_then_shape(self):
        self.assertEqual(ArrowVertex.normal(ShapeFill.OPEN, Side.LEFT).to_dot_string(), "olnormal")
        self.assertEqual(ArrowVertex.diamond(ShapeFill.OPEN, Side.RIGHT).to_dot_string(), "ordiamond")
        self.assertEqual(ArrowVertex.inv(side=Side.RIGHT).to_dot_string(), "rinv")
        self.assertEqual(ArrowVertex.boxed(ShapeFill.OPEN).to_dot_string(), "obox")
        self.assertEqual(ArrowVertex.icurve(ShapeFill.OPEN, Side.BOTH).to_dot_string(), "oicurve")

    def test_fill_only_and_side_only(self):
        self.assertEqual(ArrowVertex.dot(ShapeFill.OPEN).to_dot_string(), "odot")
        self.assertEqual(ArrowVertex.crow(Side.LEFT).to_dot_string(), "lcrow")
        self.assertEqual(ArrowVertex.tee(Side.RIGHT).to_dot_string(), "rtee")
        self.assertEqual(ArrowVertex.vee(Side.BOTH).to_dot_string(), "vee")

    def test_unsupported_modifiers(self):
        with self.assertRaises(ValueError):
            ArrowVertex("dot", side=Side.LEFT)
        with self.assertRaises(ValueError):
            ArrowVertex("crow", fill=ShapeFill.OPEN)
        with self.assertRaises(ValueError):
            ArrowVertex("none", fill=ShapeFill.OPEN)
        with self.assertRaises(ValueError):
            ArrowVertex("star")

    def test_composite_arrow(self):
        arrow = Arrow(ArrowVertex.crow(Side.LEFT), ArrowVertex.tee())
        self.assertEqual(arrow.to_dot_string(), "lcrowtee")
        self.assertEqual(len(arrow.arrows), 2)

    def test_default_arrow(self):
        self.assertTrue(Arrow().is_default())
        self.assertEqual(Arrow().to_dot_string(), "")
        self.assertFalse(Arrow.none().is_default())
        self.assertEqual(Arrow.none().to_dot_string(), "none")
        self.assertFalse(Arrow.normal().is_default())
        self.assertEqual(Arrow.from_arrow(ArrowVertex.vee()), Arrow(ArrowVertex.vee()))

    def test_at_most_four_vertices(self):
        Arrow(*[ArrowVertex.dot()] * 4)
        with self.assertRaises(ValueError):
            Arrow(*[ArrowVertex.dot()] * 5)
