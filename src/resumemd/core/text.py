from __future__ import annotations

from .ast import Node


def extract_text(node: Node) -> str:
    """Flatten an inline subtree into plain text.

    Literal leaves contribute their value, containers concatenate their
    children without separators, and anything else (breaks, images, rules)
    contributes nothing.
    """
    if node.value is not None:
        return node.value
    if node.children:
        return "".join(extract_text(child) for child in node.children)
    return ""


__all__ = ["extract_text"]
