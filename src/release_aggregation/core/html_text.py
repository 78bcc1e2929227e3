"""
HTML to plain text rendering for feed entry content.

Output keeps the line structure of the markup and is word-wrapped at a fixed
column width. Anchors render as ``text [href]``, so a link whose label ends a
long line lands on the next line as ``[href]``; field patterns rely on this.
"""

import re
import textwrap
from typing import Optional

from bs4 import BeautifulSoup, Comment, Declaration, Doctype, NavigableString, ProcessingInstruction, Tag

from release_aggregation.config import get_config

_SKIPPED_TAGS = {"script", "style", "noscript", "head", "template"}
_HEADING_TAGS = {"h1", "h2", "h3", "h4", "h5", "h6"}
_PARAGRAPH_TAGS = {"p", "blockquote", "table", "ul", "ol", "pre", "figure"}
_BLOCK_TAGS = {
    "div", "section", "article", "header", "footer", "nav", "aside", "main",
    "tr", "dl", "dt", "dd", "hr", "details", "summary", "li", "thead", "tbody",
}
_NON_TEXT = (Comment, Declaration, Doctype, ProcessingInstruction)
_WHITESPACE = re.compile(r"\s+")


class HtmlTextConverter:
    """Renders HTML fragments as wrapped plain text.

    Instances keep rendering state between calls; do not share one across threads.
    """

    def __init__(self, wordwrap: Optional[int] = None):
        """Initialize the converter.

        Args:
            wordwrap: Maximum line width in characters
        """
        self.wordwrap = wordwrap or get_config().extractor.wordwrap
        self._lines: list[str] = []
        self._inline: list[str] = []
        self._prefix = ""

    def convert(self, html: Optional[str]) -> str:
        """Convert an HTML fragment to plain text.

        Args:
            html: HTML content, may be empty

        Returns:
            Plain text with one rendered line per output line
        """
        self._lines = []
        self._inline = []
        self._prefix = ""

        if not html:
            return ""

        soup = BeautifulSoup(html, "html.parser")
        self._render_children(soup)
        self._flush()

        return "\n".join(self._lines).strip("\n")

    def _render_children(self, node: Tag) -> None:
        for child in node.children:
            self._render(child)

    def _render(self, node) -> None:
        if isinstance(node, NavigableString):
            if not isinstance(node, _NON_TEXT):
                self._inline.append(str(node))
            return

        if not isinstance(node, Tag):
            return

        name = node.name.lower()

        if name in _SKIPPED_TAGS:
            return

        if name == "br":
            self._line_break()
        elif name == "a":
            self._render_anchor(node)
        elif name == "img":
            alt = node.get("alt")
            if alt:
                self._inline.append(alt)
        elif name in _HEADING_TAGS:
            self._paragraph_break()
            start = len(self._lines)
            self._render_children(node)
            self._flush()
            self._lines[start:] = [line.upper() for line in self._lines[start:]]
            self._paragraph_break()
        elif name == "pre":
            self._paragraph_break()
            self._lines.extend(node.get_text().strip("\n").splitlines())
            self._paragraph_break()
        elif name in ("ul", "ol"):
            self._render_list(node, ordered=name == "ol")
        elif name in _PARAGRAPH_TAGS:
            self._paragraph_break()
            self._render_children(node)
            self._paragraph_break()
        elif name in _BLOCK_TAGS:
            self._flush()
            self._render_children(node)
            self._flush()
        else:
            self._render_children(node)

    def _render_anchor(self, node: Tag) -> None:
        text = _WHITESPACE.sub(" ", node.get_text()).strip()
        href = (node.get("href") or "").strip()
        if href.startswith("mailto:"):
            href = href[len("mailto:"):]

        if not href or href.startswith("#"):
            self._inline.append(text)
        elif not text:
            self._inline.append(href)
        else:
            self._inline.append(f"{text} [{href}]")

    def _render_list(self, node: Tag, ordered: bool) -> None:
        self._paragraph_break()
        number = 1
        for item in node.find_all("li", recursive=False):
            self._flush()
            self._prefix = f" {number}. " if ordered else " * "
            self._render_children(item)
            self._flush()
            # an empty item never consumed its marker
            self._prefix = ""
            number += 1
        self._paragraph_break()

    def _flush(self) -> None:
        """Move buffered inline text into wrapped output lines."""
        text = _WHITESPACE.sub(" ", "".join(self._inline)).strip()
        self._inline = []
        if not text:
            return

        text = self._prefix + text
        self._prefix = ""
        self._lines.extend(self._wrap(text))

    def _line_break(self) -> None:
        text = _WHITESPACE.sub(" ", "".join(self._inline)).strip()
        self._inline = []
        if text:
            text = self._prefix + text
            self._prefix = ""
            self._lines.extend(self._wrap(text))
        else:
            self._lines.append("")

    def _paragraph_break(self) -> None:
        self._flush()
        if self._lines and self._lines[-1] != "":
            self._lines.append("")

    def _wrap(self, text: str) -> list[str]:
        return textwrap.wrap(
            text,
            width=self.wordwrap,
            break_long_words=False,
            break_on_hyphens=False,
        )


def html_to_text(html: Optional[str], wordwrap: Optional[int] = None) -> str:
    """Convert an HTML fragment to wrapped plain text.

    Args:
        html: HTML content
        wordwrap: Maximum line width, defaults to the configured width

    Returns:
        Plain text
    """
    return HtmlTextConverter(wordwrap=wordwrap).convert(html)
