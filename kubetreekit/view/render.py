"""HTML rendering of ``kubectl tree`` output."""

import html
import re

READY_COLOR = "forestgreen"
NOT_READY_COLOR = "tomato"

_LINE_BREAKS = re.compile(r"[\r\n]+")


def _font(text: str, color: str) -> str:
    return f'<font color="{color}">{text}</font>'


def render_tree_html(tree: str) -> str:
    """
    Highlight a ``kubectl tree`` listing.

    The header line is bold; lines reporting ``True`` readiness are green and
    lines reporting ``False`` are red. Lines are joined with ``<br>``.

    Example:
        >>> render_tree_html("NAME  READY\\npod/a  True")
        '<b>NAME  READY</b><br><font color="forestgreen">pod/a  True</font>'
    """
    lines = _LINE_BREAKS.split(tree.rstrip("\r\n"))
    rendered = []
    for index, line in enumerate(lines):
        text = html.escape(line, quote=False)
        if index == 0:
            text = f"<b>{text}</b>"
        if "True" in line:
            text = _font(text, READY_COLOR)
        elif "False" in line:
            text = _font(text, NOT_READY_COLOR)
        rendered.append(text)
    return "<br>".join(rendered)


def render_page(resource: str, tree: str) -> str:
    """Wrap a rendered tree in a standalone HTML document."""
    title = html.escape(f"Kubernetes Treeview {resource}")
    body = render_tree_html(tree)
    return (
        "<!doctype html>\n"
        "<html>\n"
        "<head>\n"
        '    <meta charset="UTF-8">\n'
        f"    <title>{title}</title>\n"
        "</head>\n"
        "<body>\n"
        "    <code>\n"
        f"        <pre id='content' style=\"font-size: 100%\">{body}</pre>\n"
        "    </code>\n"
        "</body>\n"
        "</html>\n"
    )
