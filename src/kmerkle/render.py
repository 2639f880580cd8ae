from __future__ import annotations

from .crypto import to_hex
from .merkle import MerkleTree


def format_tree(tree: MerkleTree) -> str:
    """Render leaves with their index, then levels from root to leaf hashes."""
    lines = ["Leaves:"]
    for i, leaf in enumerate(tree.leaves):
        lines.append(f"  {i}: {leaf}")
    for idx, level in enumerate(tree.levels):
        if len(level) == 1:
            lines.append("Root Hash:")
        else:
            lines.append(f"Level {idx}:")
        lines.extend(f"  {to_hex(d)}" for d in level)
    return "\n".join(lines) + "\n"
