"""Lightweight Markdown outline parser.

Builds just enough of a syntax tree to tell protected text from prose.
This is not a CommonMark parser: it recognizes the constructs whose text
must never be rewritten and treats everything else as paragraph text.

Block Constructs:
- Front matter: ``---`` on the first line up to a ``---`` or ``...`` line
- Fenced code: 3+ backticks or tildes, closed by a matching fence or EOF
- Indented code: 4+ columns, not continuing a paragraph or list
- HTML comments: ``<!--`` through ``-->`` (or EOF)
- HTML blocks: a line starting with a tag, through the next blank line
- ATX headings and paragraphs (scanned for inlines)

Inline Constructs:
- Code spans (backtick runs of equal length)
- Inline comments ``<!-- ... -->``
- Autolinks ``<scheme:...>`` and bare ``http(s)://`` / ``www.`` URLs
- Images ``![alt](target)`` (protected whole)
- Links ``[text](target)`` (target protected, text scanned)

Node names match walker.PROTECTED_NODES, so the tree can be handed
straight to collect_protected_spans().

Example:
    >>> doc = parse_outline("Safe `code` safe")
    >>> [n.name for n in doc.children[0].children]
    ['InlineCode']

Thread Safety:
    A parser instance is used for one document. parse_outline() creates a
    fresh instance per call and is safe to call from any thread.

"""

import re

from dollarsmith.utils.logger import get_logger
from dollarsmith.walker import SyntaxNode

logger = get_logger(__name__)

_AUTOLINK_PATTERN = re.compile(r"<[A-Za-z][A-Za-z0-9.+-]{1,31}:[^\s<>]*>")
# Stops at a backslash so a trailing \) closer is never swallowed
_BARE_URL_PATTERN = re.compile(r"(?:https?://|www\.)[^\s<>\\]+")
_HTML_TAG_NAME_PATTERN = re.compile(r"</?([A-Za-z][A-Za-z0-9-]*)(?=[\s/>]|$)")
# A complete open or closing tag alone on its line
_HTML_LONE_TAG_PATTERN = re.compile(
    r"(?:<[A-Za-z][A-Za-z0-9-]*(?:\s+[^<>]*?)?/?>|</[A-Za-z][A-Za-z0-9-]*\s*>)\s*"
)
_LIST_MARKER_PATTERN = re.compile(r"(?:[-+*]|\d{1,9}[.)])(?:[ \t]|$)")
_ATX_HEADING_PATTERN = re.compile(r"#{1,6}(?:[ \t]|$)")

# Trailing characters never part of a bare URL (GFM extended autolinks)
_URL_TRAILING_PUNCT = ".,:;!?\"'*_~"

_ASCII_PUNCT = frozenset("!\"#$%&'()*+,-./:;<=>?@[\\]^_`{|}~")

# HTML blocks that run until their closing tag
_HTML_RAW_TAGS = frozenset({"pre", "script", "style", "textarea"})

# Block-level HTML tags that run until a blank line
_HTML_BLOCK_TAGS = frozenset(
    {
        "address", "article", "aside", "base", "basefont", "blockquote", "body",
        "caption", "center", "col", "colgroup", "dd", "details", "dialog", "dir",
        "div", "dl", "dt", "fieldset", "figcaption", "figure", "footer", "form",
        "frame", "frameset", "h1", "h2", "h3", "h4", "h5", "h6", "head", "header",
        "hr", "html", "iframe", "legend", "li", "link", "main", "menu", "menuitem",
        "nav", "noframes", "ol", "optgroup", "option", "p", "param", "search",
        "section", "summary", "table", "tbody", "td", "tfoot", "th", "thead",
        "title", "tr", "track", "ul",
    }
)


class _Line:
    """One source line. ``end`` excludes the newline, ``next`` includes it."""

    __slots__ = ("end", "indent", "next", "start", "stripped")

    def __init__(self, source: str, start: int, end: int, next_start: int) -> None:
        self.start = start
        self.end = end
        self.next = next_start
        text = source[start:end]
        self.stripped = text.lstrip(" \t")
        self.indent = _columns(text[: len(text) - len(self.stripped)])

    @property
    def is_blank(self) -> bool:
        return not self.stripped.strip()


def _columns(whitespace: str) -> int:
    """Width of leading whitespace with tab stops of 4."""
    col = 0
    for char in whitespace:
        col = col + 4 - col % 4 if char == "\t" else col + 1
    return col


def _split_lines(source: str) -> list[_Line]:
    lines: list[_Line] = []
    pos = 0
    n = len(source)
    while pos < n:
        nl = source.find("\n", pos)
        if nl == -1:
            lines.append(_Line(source, pos, n, n))
            break
        end = nl - 1 if nl > pos and source[nl - 1] == "\r" else nl
        lines.append(_Line(source, pos, end, nl + 1))
        pos = nl + 1
    return lines


class OutlineParser:
    """Single-use parser producing a SyntaxNode tree for one document."""

    __slots__ = ("_blocks", "_lines", "_source")

    def __init__(self, source: str) -> None:
        self._source = source
        self._lines = _split_lines(source)
        self._blocks: list[SyntaxNode] = []

    def parse(self) -> SyntaxNode:
        """Parse the document into a ``Document`` node."""
        self._scan_blocks()
        # An interrupted paragraph is flushed after the block that ended it
        blocks = sorted(self._blocks, key=lambda node: node.start)
        logger.debug("Outlined %d block(s)", len(blocks))
        return SyntaxNode("Document", 0, len(self._source), tuple(blocks))

    # -- Blocks ----------------------------------------------------------------

    def _scan_blocks(self) -> None:
        lines = self._lines
        i = self._scan_front_matter()
        para_start: int | None = None
        para_end = 0
        in_list = False

        def flush() -> None:
            nonlocal para_start
            if para_start is not None:
                self._blocks.append(self._inline_block("Paragraph", para_start, para_end))
                para_start = None

        while i < len(lines):
            line = lines[i]

            if line.is_blank:
                flush()
                i += 1
                continue

            if line.indent >= 4 and para_start is None and not in_list:
                i = self._scan_indented_code(i)
                continue

            stripped = line.stripped
            if line.indent < 4 or in_list:
                fence_end = self._scan_fence(i)
                if fence_end is not None:
                    flush()
                    i = fence_end
                    continue

            if line.indent < 4 and stripped.startswith("<!--"):
                flush()
                i = self._scan_comment_block(i)
                continue

            if line.indent < 4 and stripped.startswith("<"):
                html_end = self._scan_html_block(i, interrupting=para_start is not None)
                if html_end is not None:
                    flush()
                    i = html_end
                    continue

            if line.indent < 4 and _ATX_HEADING_PATTERN.match(stripped):
                flush()
                self._blocks.append(self._inline_block("Heading", line.start, line.end))
                in_list = False
                i += 1
                continue

            if _LIST_MARKER_PATTERN.match(stripped):
                in_list = True
            elif line.indent == 0 and para_start is None:
                in_list = False

            if para_start is None:
                para_start = line.start
            para_end = line.end
            i += 1

        flush()

    def _scan_front_matter(self) -> int:
        """Consume front matter at the top of the document.

        Returns the index of the first line after it (0 if there is none).

        """
        lines = self._lines
        if not lines or self._line_text(lines[0]).rstrip() != "---":
            return 0
        for j in range(1, len(lines)):
            if self._line_text(lines[j]).rstrip() in ("---", "..."):
                self._blocks.append(SyntaxNode("FrontMatter", 0, lines[j].end))
                return j + 1
        return 0

    def _scan_fence(self, i: int) -> int | None:
        """Consume a fenced code block opening at line ``i``.

        Returns the index of the line after the block, or None if line ``i``
        does not open a fence. An unclosed fence runs to the end of the
        document.

        """
        lines = self._lines
        stripped = lines[i].stripped
        if not stripped or stripped[0] not in "`~":
            return None

        fence_char = stripped[0]
        count = len(stripped) - len(stripped.lstrip(fence_char))
        if count < 3:
            return None

        info = stripped[count:]
        if fence_char == "`" and "`" in info:
            return None

        opener_indent = lines[i].indent
        for j in range(i + 1, len(lines)):
            candidate = lines[j]
            if candidate.indent > opener_indent + 3:
                continue
            body = candidate.stripped
            run = len(body) - len(body.lstrip(fence_char))
            if run >= count and not body[run:].strip():
                self._blocks.append(SyntaxNode("FencedCode", lines[i].start, candidate.end))
                return j + 1

        self._blocks.append(SyntaxNode("FencedCode", lines[i].start, len(self._source)))
        return len(lines)

    def _scan_indented_code(self, i: int) -> int:
        lines = self._lines
        last = i
        j = i + 1
        while j < len(lines) and (lines[j].is_blank or lines[j].indent >= 4):
            if not lines[j].is_blank:
                last = j
            j += 1
        self._blocks.append(SyntaxNode("CodeBlock", lines[i].start, lines[last].end))
        return last + 1

    def _scan_comment_block(self, i: int) -> int:
        lines = self._lines
        first = lines[i]
        body_start = first.end - len(first.stripped) + 4
        close = self._source.find("-->", body_start)
        if close == -1:
            self._blocks.append(SyntaxNode("CommentBlock", first.start, len(self._source)))
            return len(lines)

        j = i
        while lines[j].next <= close:
            j += 1
        self._blocks.append(SyntaxNode("CommentBlock", first.start, lines[j].end))
        return j + 1

    def _scan_html_block(self, i: int, *, interrupting: bool) -> int | None:
        """Consume an HTML block opening at line ``i``.

        Raw tags (pre, script, style, textarea) run to their closing tag;
        other blocks run to the next blank line. A lone tag on its own line
        starts a block only when no paragraph is open.

        Returns the index of the line after the block, or None.

        """
        lines = self._lines
        stripped = lines[i].stripped
        match = _HTML_TAG_NAME_PATTERN.match(stripped)
        if not match:
            return None
        tag = match.group(1).lower()

        if tag in _HTML_RAW_TAGS and not stripped.startswith("</"):
            closing = re.compile(f"</{tag}>", re.IGNORECASE).search(self._source, lines[i].start)
            if closing is None:
                self._blocks.append(SyntaxNode("HTMLBlock", lines[i].start, len(self._source)))
                return len(lines)
            close = closing.start()
            j = i
            while lines[j].next <= close:
                j += 1
            self._blocks.append(SyntaxNode("HTMLBlock", lines[i].start, lines[j].end))
            return j + 1

        if tag not in _HTML_BLOCK_TAGS:
            if interrupting or not _HTML_LONE_TAG_PATTERN.fullmatch(stripped):
                return None

        j = i
        while j + 1 < len(lines) and not lines[j + 1].is_blank:
            j += 1
        self._blocks.append(SyntaxNode("HTMLBlock", lines[i].start, lines[j].end))
        return j + 1

    def _line_text(self, line: _Line) -> str:
        return self._source[line.start : line.end]

    # -- Inlines ---------------------------------------------------------------

    def _inline_block(self, name: str, start: int, end: int) -> SyntaxNode:
        return SyntaxNode(name, start, end, tuple(self._scan_inlines(start, end)))

    def _scan_inlines(self, start: int, end: int) -> list[SyntaxNode]:
        """Find protected inline constructs in ``source[start:end]``."""
        src = self._source
        nodes: list[SyntaxNode] = []
        i = start

        while i < end:
            char = src[i]

            if char == "\\":
                i += 2 if i + 1 < end and src[i + 1] in _ASCII_PUNCT else 1
                continue

            if char == "`":
                run = self._run_length(i, end, "`")
                close = self._find_backtick_run(i + run, end, run)
                if close == -1:
                    i += run
                    continue
                nodes.append(SyntaxNode("InlineCode", i, close + run))
                i = close + run
                continue

            if char == "<":
                if src.startswith("<!--", i):
                    close = src.find("-->", i + 4, end)
                    if close != -1:
                        nodes.append(SyntaxNode("CommentBlock", i, close + 3))
                        i = close + 3
                        continue
                match = _AUTOLINK_PATTERN.match(src, i, end)
                if match:
                    nodes.append(SyntaxNode("URL", i, match.end()))
                    i = match.end()
                    continue
                i += 1
                continue

            if char == "!" and i + 1 < end and src[i + 1] == "[":
                label_end = self._match_bracket(i + 1, end, "[", "]")
                if label_end != -1 and label_end + 1 < end and src[label_end + 1] == "(":
                    target_end = self._match_bracket(label_end + 1, end, "(", ")")
                    if target_end != -1:
                        nodes.append(SyntaxNode("Image", i, target_end + 1))
                        i = target_end + 1
                        continue
                i += 2
                continue

            if char == "[":
                label_end = self._match_bracket(i, end, "[", "]")
                if label_end != -1 and label_end + 1 < end and src[label_end + 1] == "(":
                    target_end = self._match_bracket(label_end + 1, end, "(", ")")
                    if target_end != -1:
                        children = self._scan_inlines(i + 1, label_end)
                        children.append(SyntaxNode("LinkURL", label_end + 1, target_end + 1))
                        nodes.append(SyntaxNode("Link", i, target_end + 1, tuple(children)))
                        i = target_end + 1
                        continue
                i += 1
                continue

            if char in "hw" and (i == start or not src[i - 1].isalnum()):
                url_end = self._match_bare_url(i, end)
                if url_end != -1:
                    nodes.append(SyntaxNode("URL", i, url_end))
                    i = url_end
                    continue

            i += 1

        return nodes

    def _run_length(self, i: int, end: int, char: str) -> int:
        j = i
        while j < end and self._source[j] == char:
            j += 1
        return j - i

    def _find_backtick_run(self, i: int, end: int, length: int) -> int:
        """Offset of the next backtick run of exactly ``length``, or -1."""
        src = self._source
        while True:
            i = src.find("`", i, end)
            if i == -1:
                return -1
            run = self._run_length(i, end, "`")
            if run == length:
                return i
            i += run

    def _match_bracket(self, i: int, end: int, opener: str, closer: str) -> int:
        """Offset of the closer matching the opener at ``i``, or -1.

        Backslash escapes are honored; code spans are not looked into.

        """
        src = self._source
        depth = 0
        j = i
        while j < end:
            char = src[j]
            if char == "\\":
                j += 2
                continue
            if char == opener:
                depth += 1
            elif char == closer:
                depth -= 1
                if depth == 0:
                    return j
            j += 1
        return -1

    def _match_bare_url(self, i: int, end: int) -> int:
        """End offset of a bare URL starting at ``i``, or -1."""
        match = _BARE_URL_PATTERN.match(self._source, i, end)
        if not match:
            return -1
        url = match.group()
        prefix = 4 if url.startswith("www.") else url.index("://") + 3
        url = url.rstrip(_URL_TRAILING_PUNCT)
        # Drop unbalanced closing parens, e.g. "(see https://x.org)"
        while url.endswith(")") and url.count("(") < url.count(")"):
            url = url[:-1].rstrip(_URL_TRAILING_PUNCT)
        if len(url) <= prefix:
            return -1
        return i + len(url)


def parse_outline(source: str) -> SyntaxNode:
    """Parse Markdown source into a protected-construct outline.

    Args:
        source: Markdown source text

    Returns:
        ``Document`` SyntaxNode covering the whole source.

    """
    return OutlineParser(source).parse()


__all__ = ["OutlineParser", "parse_outline"]
