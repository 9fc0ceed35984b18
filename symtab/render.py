"""
Presentation helpers that consume AVLTreeST.walk().

Nodes are labelled "key/height/size". Drawing stops below max_depth, so very
deep trees are cut off rather than flooding the output.
"""

from typing import Any, Dict, Iterator, List, Optional

MAX_DEPTH = 10


def label(info) -> str:
    return f"{info.key}/{info.height}/{info.size}"


def render_text(st, max_depth: int = MAX_DEPTH) -> str:
    """Sideways drawing: right subtree above the node, left subtree below."""
    if st.is_empty():
        return "<empty>"
    lines: List[str] = []
    # reverse in-order puts the right subtree first
    for info in reversed(list(st.walk("inorder"))):
        if info.depth > max_depth:
            continue
        lines.append("\t" * info.depth + label(info))
    return "\n".join(lines)


def to_dict(st, max_depth: int = MAX_DEPTH) -> Optional[Dict[str, Any]]:
    """Nested dict of the tree; children are None when absent or cut off."""
    if st.is_empty():
        return None
    return _build(st.walk("preorder"), max_depth)


def _build(infos: Iterator, max_depth: int) -> Dict[str, Any]:
    # a pre-order sequence plus child-presence flags fixes the shape
    info = next(infos)
    left = _build(infos, max_depth) if info.has_left else None
    right = _build(infos, max_depth) if info.has_right else None
    if info.depth >= max_depth:
        left = right = None
    return {
        "key": info.key,
        "height": info.height,
        "size": info.size,
        "left": left,
        "right": right,
    }
