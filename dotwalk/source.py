import io
from typing import Any, Sequence

from graphviz import Source

from .render import RenderOption, render_opts


def to_dot(g: Any, options: Sequence[RenderOption] = ()) -> str:
    """Render graph `g` and return the DOT text."""
    buf = io.BytesIO()
    render_opts(g, buf, options)
    return buf.getvalue().decode("utf-8")


def to_source(g: Any, options: Sequence[RenderOption] = (), **kwargs: Any) -> Source:
    """Render graph `g` into a `graphviz.Source`.

    The result can be saved, rendered or piped with the graphviz
    executables, or displayed inline in Jupyter.

    :param g: An object implementing both `GraphWalk` and `Labeller`.
    :param options: Render options.
    :param kwargs: Passed to `graphviz.Source` (filename, directory, format, engine, ...).
    """
    return Source(to_dot(g, options), **kwargs)
