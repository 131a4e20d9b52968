"""Pretty-printing for rendered example markup."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from html.parser import HTMLParser
from typing import List

_INLINE_TAGS = {
    "a",
    "abbr",
    "b",
    "bdi",
    "bdo",
    "br",
    "button",
    "cite",
    "code",
    "data",
    "dfn",
    "em",
    "i",
    "img",
    "input",
    "kbd",
    "label",
    "mark",
    "q",
    "s",
    "samp",
    "small",
    "span",
    "strong",
    "sub",
    "sup",
    "time",
    "u",
    "var",
    "wbr",
}

_VOID_TAGS = {
    "area",
    "base",
    "br",
    "col",
    "embed",
    "hr",
    "img",
    "input",
    "link",
    "meta",
    "source",
    "track",
    "wbr",
}

_PRESERVE_TAGS = {"pre", "textarea", "script", "style"}

# A new start tag of the same name closes the open one.
_IMPLIED_END_TAGS = {"li", "p", "option", "dt", "dd"}

_TAG_NAME = re.compile(r"<\s*([^\s/>]+)")
_WHITESPACE = re.compile(r"\s+")


@dataclass
class _Node:
    kind: str
    tag: str = ""
    start: str = ""
    end: str = ""
    text: str = ""
    children: List["_Node"] = field(default_factory=list)


class _TreeBuilder(HTMLParser):
    """Builds a lightweight node tree while keeping the original tag spelling."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=False)
        self.root = _Node(kind="element")
        self._stack: List[_Node] = [self.root]

    @property
    def _current(self) -> _Node:
        return self._stack[-1]

    def handle_starttag(self, tag: str, attrs) -> None:  # type: ignore[no-untyped-def]
        if tag in _IMPLIED_END_TAGS and self._current.tag == tag:
            self._stack.pop()
        node = _Node(kind="element", tag=tag, start=self.get_starttag_text() or f"<{tag}>")
        self._current.children.append(node)
        if tag not in _VOID_TAGS:
            self._stack.append(node)

    def handle_startendtag(self, tag: str, attrs) -> None:  # type: ignore[no-untyped-def]
        node = _Node(kind="element", tag=tag, start=self.get_starttag_text() or f"<{tag} />")
        self._current.children.append(node)

    def handle_endtag(self, tag: str) -> None:
        for index in range(len(self._stack) - 1, 0, -1):
            node = self._stack[index]
            if node.tag == tag:
                node.end = f"</{_written_name(node)}>"
                del self._stack[index:]
                return
        self._current.children.append(_Node(kind="text", text=f"</{tag}>"))

    def handle_data(self, data: str) -> None:
        self._current.children.append(_Node(kind="text", text=data))

    def handle_entityref(self, name: str) -> None:
        self._current.children.append(_Node(kind="text", text=f"&{name};"))

    def handle_charref(self, name: str) -> None:
        self._current.children.append(_Node(kind="text", text=f"&#{name};"))

    def handle_comment(self, data: str) -> None:
        self._current.children.append(_Node(kind="raw", text=f"<!--{data}-->"))

    def handle_decl(self, decl: str) -> None:
        self._current.children.append(_Node(kind="raw", text=f"<!{decl}>"))

    def handle_pi(self, data: str) -> None:
        self._current.children.append(_Node(kind="raw", text=f"<?{data}>"))

    def unknown_decl(self, data: str) -> None:
        self._current.children.append(_Node(kind="raw", text=f"<![{data}]>"))


def _written_name(node: _Node) -> str:
    match = _TAG_NAME.match(node.start)
    return match.group(1) if match else node.tag


def _collapse(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


class HtmlPrettifier:
    """Indents block elements and keeps inline runs on a single line."""

    def __init__(self, indent: str = "    ") -> None:
        self.indent = indent

    def prettify(self, markup: str) -> str:
        builder = _TreeBuilder()
        builder.feed(markup)
        builder.close()
        lines: List[str] = []
        self._render_children(builder.root.children, 0, lines)
        return "\n".join(lines)

    def _render_children(self, children: List[_Node], depth: int, lines: List[str]) -> None:
        run: List[_Node] = []
        for child in children:
            if self._is_inline(child):
                run.append(child)
                continue
            self._flush(run, depth, lines)
            run = []
            self._render_block(child, depth, lines)
        self._flush(run, depth, lines)

    def _flush(self, run: List[_Node], depth: int, lines: List[str]) -> None:
        text = _collapse("".join(self._render_inline(node) for node in run))
        if text:
            lines.append(f"{self.indent * depth}{text}")

    def _render_block(self, node: _Node, depth: int, lines: List[str]) -> None:
        prefix = self.indent * depth
        if node.kind == "raw":
            lines.append(f"{prefix}{node.text.strip()}")
            return
        if node.tag in _PRESERVE_TAGS:
            inner = "".join(self._render_inline(child) for child in node.children)
            lines.append(f"{prefix}{node.start}{inner}{node.end}")
            return
        if all(child.kind == "text" for child in node.children):
            inner = _collapse("".join(child.text for child in node.children))
            lines.append(f"{prefix}{node.start}{inner}{node.end}")
            return

        lines.append(f"{prefix}{node.start}")
        self._render_children(node.children, depth + 1, lines)
        if node.end:
            lines.append(f"{prefix}{node.end}")

    def _render_inline(self, node: _Node) -> str:
        if node.kind != "element":
            return node.text
        inner = "".join(self._render_inline(child) for child in node.children)
        return f"{node.start}{inner}{node.end}"

    def _is_inline(self, node: _Node) -> bool:
        if node.kind == "text":
            return True
        if node.kind == "raw":
            return False
        return node.tag in _INLINE_TAGS and all(self._is_inline(child) for child in node.children)


def prettify_html(markup: str, indent: str = "    ") -> str:
    """Convenience wrapper around :class:`HtmlPrettifier`."""
    return HtmlPrettifier(indent=indent).prettify(markup)


__all__ = ["HtmlPrettifier", "prettify_html"]
