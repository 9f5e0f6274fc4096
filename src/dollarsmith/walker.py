"""Protected span collection from a syntax tree.

Any parser can feed dollarsmith by describing its output as a tree of
SyntaxNode records: a node name, half-open offsets and children. The walker
reports every node whose name is in the closed PROTECTED_NODES mapping and
never descends into it, so a code span inside an image, or a URL inside a
link target, yields one span rather than several.

Example:
    >>> tree = SyntaxNode("Document", 0, 16, (
    ...     SyntaxNode("Paragraph", 0, 16, (SyntaxNode("InlineCode", 5, 11),)),
    ... ))
    >>> collect_protected_spans(tree)
    [ProtectedSpan(kind=<SpanKind.INLINE_CODE: 'inline-code'>, start=5, end=11)]

Thread Safety:
    Pure functions over immutable nodes. Safe to call from any thread.

"""

from __future__ import annotations

from dataclasses import dataclass

from dollarsmith.nodes import ProtectedSpan, SpanKind, TextRegion
from dollarsmith.regions import extract_safe_regions


@dataclass(frozen=True, slots=True)
class SyntaxNode:
    """Parser-agnostic syntax tree node.

    ``name`` follows the node naming of the producing parser; only names in
    PROTECTED_NODES carry meaning here.

    """

    name: str
    start: int
    end: int
    children: tuple[SyntaxNode, ...] = ()


# Node name -> span kind. Anything not listed is walked into.
PROTECTED_NODES: dict[str, SpanKind] = {
    "FencedCode": SpanKind.FENCED_CODE,
    "CodeBlock": SpanKind.INDENTED_CODE,
    "InlineCode": SpanKind.INLINE_CODE,
    "HTMLBlock": SpanKind.HTML_BLOCK,
    "CommentBlock": SpanKind.COMMENT_BLOCK,
    "FrontMatter": SpanKind.FRONT_MATTER,
    "LinkURL": SpanKind.LINK_TARGET,
    "URL": SpanKind.BARE_URL,
    "Image": SpanKind.IMAGE,
}


def collect_protected_spans(root: SyntaxNode) -> list[ProtectedSpan]:
    """Collect protected spans in document order.

    Pre-order walk with an explicit stack. Children of a protected node are
    never pushed.

    """
    spans: list[ProtectedSpan] = []
    stack = [root]
    while stack:
        node = stack.pop()
        kind = PROTECTED_NODES.get(node.name)
        if kind is not None:
            spans.append(ProtectedSpan(kind=kind, start=node.start, end=node.end))
            continue
        # Reversed so the leftmost child is visited first
        stack.extend(reversed(node.children))
    return spans


def safe_regions_for_tree(root: SyntaxNode, length: int) -> list[TextRegion]:
    """Safe regions of a document given its syntax tree."""
    return extract_safe_regions(collect_protected_spans(root), length)


__all__ = [
    "PROTECTED_NODES",
    "SyntaxNode",
    "collect_protected_spans",
    "safe_regions_for_tree",
]
