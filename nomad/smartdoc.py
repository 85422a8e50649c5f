"""
SmartDoc to Markdown converter.

SmartDoc is the rich-text JSON format used by SmartSuite long-text fields:
``{"data": {"type": "doc", "content": [...]}, "html": "...", "preview": "..."}``.
The converter is one-directional and never raises: unknown node types
render their children, and malformed values are treated as absent.
"""

import re
from collections.abc import Callable, Mapping
from typing import Any

CALLOUT_ICONS = {
    "info": "💡",
    "warning": "⚠️",
    "error": "❌",
    "success": "✅",
    "note": "📝",
}

TOC_PLACEHOLDER = "## Table of Contents\n\n*[Table of contents will be generated automatically]*\n\n"

_BR_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)
_P_OPEN_RE = re.compile(r"<p[^>]*>", re.IGNORECASE)
_P_CLOSE_RE = re.compile(r"</p>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]+>")
_BLANK_LINES_RE = re.compile(r"\n\s*\n")


def render(smartdoc: Any) -> str:
    """Convert a SmartDoc object to Markdown.

    Falls back to a plain-text approximation of ``html``, then to
    ``preview``, when the document has no content nodes.
    """
    if not isinstance(smartdoc, Mapping):
        return ""

    data = smartdoc.get("data")
    content = data.get("content") if isinstance(data, Mapping) else None
    if isinstance(content, list) and content:
        return render_content(content)

    html = smartdoc.get("html")
    if isinstance(html, str) and html.strip():
        return html_to_text(html)

    preview = smartdoc.get("preview")
    if isinstance(preview, str) and preview.strip():
        return preview.strip()

    return ""


def html_to_text(html: str) -> str:
    """Lossy HTML to text: line breaks and paragraphs become newlines, other tags are dropped."""
    text = _BR_RE.sub("\n", html)
    text = _P_OPEN_RE.sub("\n", text)
    text = _P_CLOSE_RE.sub("\n", text)
    text = _TAG_RE.sub("", text)
    text = _BLANK_LINES_RE.sub("\n\n", text)
    return text.strip()


def is_smartdoc(value: Any) -> bool:
    """Structural check for a SmartDoc field value."""
    if not isinstance(value, Mapping):
        return False
    data = value.get("data")
    if not isinstance(data, Mapping) or data.get("type") != "doc":
        return False
    return "content" in data or "html" in value or "preview" in value


def convert_all_fields(record: Mapping[str, Any]) -> dict[str, str]:
    """Render every SmartDoc field of *record* into a ``<field>_markdown`` entry.

    Fields that aren't SmartDocs, or that render to an empty string, are
    skipped. *record* itself is left untouched.
    """
    converted = {}
    for field_name, value in record.items():
        if not is_smartdoc(value):
            continue
        markdown = render(value)
        if markdown:
            converted[f"{field_name}_markdown"] = markdown
    return converted


# ---------------------------------------------------------------------------
# Node rendering
# ---------------------------------------------------------------------------

def render_content(content: Any) -> str:
    if not isinstance(content, list):
        return ""
    return "".join(render_node(node) for node in content)


def render_node(node: Any) -> str:
    if not isinstance(node, Mapping) or not node.get("type"):
        return ""
    node_type = node["type"]
    renderer = NODE_RENDERERS.get(node_type) if isinstance(node_type, str) else None
    if renderer is None:
        # Unknown node types degrade to their children
        return _children(node)
    return renderer(node)


def _attrs(obj: Mapping) -> Mapping:
    attrs = obj.get("attrs")
    return attrs if isinstance(attrs, Mapping) else {}


def _children(node: Mapping) -> str:
    return render_content(node.get("content"))


def _paragraph(node: Mapping) -> str:
    content = _children(node)
    alignment = _attrs(node).get("textAlign")
    if alignment and alignment != "left":
        return f'<p style="text-align: {alignment}">{content}</p>\n\n'
    return content + "\n\n"


def _heading_level(value: Any) -> int:
    try:
        level = int(value or 1)
    except (TypeError, ValueError, OverflowError):
        return 1
    return max(1, min(level, 6))


def _heading(node: Mapping) -> str:
    hashes = "#" * _heading_level(_attrs(node).get("level"))
    return f"{hashes} {_children(node)}\n\n"


def _text(node: Mapping) -> str:
    text = node.get("text")
    text = "" if text is None else str(text)
    marks = node.get("marks")
    if isinstance(marks, list):
        for mark in marks:
            text = apply_mark(text, mark)
    return text


def apply_mark(text: str, mark: Any) -> str:
    """Wrap *text* in the Markdown (or inline HTML) for one mark."""
    if not isinstance(mark, Mapping):
        return text
    mark_type = mark.get("type")
    attrs = _attrs(mark)

    if mark_type == "bold":
        return f"**{text}**"
    if mark_type == "italic":
        return f"*{text}*"
    if mark_type == "underline":
        return f"<u>{text}</u>"
    if mark_type == "strike":
        return f"~~{text}~~"
    if mark_type == "code":
        return f"`{text}`"
    if mark_type == "link":
        href = attrs.get("href") or "#"
        title = f' "{attrs["title"]}"' if attrs.get("title") else ""
        return f"[{text}]({href}{title})"
    if mark_type == "color":
        color = attrs.get("color")
        if color:
            return f'<span style="color: {color}">{text}</span>'
        return text
    if mark_type == "highlight":
        background = attrs.get("color") or attrs.get("backgroundColor")
        if background:
            return f'<mark style="background-color: {background}">{text}</mark>'
        return f"<mark>{text}</mark>"
    return text


def _list(node: Mapping) -> str:
    # Ordered lists are not numbered; items always render as bullets
    return _children(node) + "\n"


def _list_item(node: Mapping) -> str:
    return f"- {_children(node).strip()}\n"


def _table(node: Mapping) -> str:
    rows = node.get("content")
    if not isinstance(rows, list):
        return ""
    if not rows:
        return "\n"

    rendered = [render_node(row) for row in rows]

    first_row = rows[0]
    cells = first_row.get("content") if isinstance(first_row, Mapping) else None
    if isinstance(cells, list) and any(
        isinstance(cell, Mapping) and cell.get("type") == "table_header" for cell in cells
    ):
        separator = "|" + " --- |" * len(cells) + "\n"
        return rendered[0] + separator + "".join(rendered[1:])

    return "".join(rendered) + "\n"


def _table_row(node: Mapping) -> str:
    cells = node.get("content")
    if not isinstance(cells, list):
        return "|\n"
    return "|" + "|".join(render_node(cell) for cell in cells) + "|\n"


def _table_cell(node: Mapping) -> str:
    return f" {_children(node).strip()} "


def _code_block(node: Mapping) -> str:
    language = _attrs(node).get("language") or ""
    return f"```{language}\n{_children(node)}```\n\n"


def _blockquote(node: Mapping) -> str:
    lines = [line for line in _children(node).split("\n") if line.strip()]
    return "\n".join(f"> {line}" for line in lines) + "\n\n"


def _check_list_item(node: Mapping) -> str:
    checkbox = "[x]" if _attrs(node).get("checked") else "[ ]"
    return f"- {checkbox} {_children(node).strip()}\n"


def _mention(node: Mapping) -> str:
    attrs = _attrs(node)
    return f"{attrs.get('prefix') or '@'}{attrs.get('title') or 'Unknown User'}"


def _attachment(node: Mapping) -> str:
    attrs = _attrs(node)
    return f"[📎 {attrs.get('title') or 'Attachment'}]({attrs.get('url') or '#'})"


def _image(node: Mapping) -> str:
    attrs = _attrs(node)
    src = attrs.get("src") or ""
    alt = attrs.get("alt") or attrs.get("title") or "Image"
    title = f' "{attrs["title"]}"' if attrs.get("title") else ""
    return f"![{alt}]({src}{title})\n\n"


def _callout(node: Mapping) -> str:
    callout_type = str(_attrs(node).get("type") or "info")
    icon = CALLOUT_ICONS.get(callout_type, CALLOUT_ICONS["info"])
    content = _children(node).replace("\n", "\n> ")
    return f"> {icon} **{callout_type.upper()}**\n> \n> {content}\n\n"


def _table_of_contents(node: Mapping) -> str:
    return TOC_PLACEHOLDER


NODE_RENDERERS: dict[str, Callable[[Mapping], str]] = {
    "paragraph": _paragraph,
    "heading": _heading,
    "text": _text,
    "bullet_list": _list,
    "ordered_list": _list,
    "list_item": _list_item,
    "table": _table,
    "table_row": _table_row,
    "table_header": _table_cell,
    "table_cell": _table_cell,
    "code_block": _code_block,
    "blockquote": _blockquote,
    "hard_break": lambda node: "\n",
    "horizontal_rule": lambda node: "\n---\n\n",
    "check_list": _list,
    "check_list_item": _check_list_item,
    "mention": _mention,
    "attachment": _attachment,
    "image": _image,
    "callout": _callout,
    "toc": _table_of_contents,
    "table_of_contents": _table_of_contents,
}
