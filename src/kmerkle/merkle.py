"""Binary Merkle tree over ordered string leaves.

- LeafHash(leaf) = Keccak256(utf8(leaf))
- NodeHash(left, right) = Keccak256(left || right)

An unpaired trailing node is paired with itself, so every level of n nodes
reduces to ceil(n / 2) parents. Levels are stored root first.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from .crypto import keccak256, to_hex

log = logging.getLogger(__name__)

Digest = bytes
Level = Tuple[Digest, ...]


class EmptyLeavesError(ValueError):
    """A Merkle tree needs at least one leaf."""


def _h(b: bytes) -> bytes:
    return keccak256(b)


def hash_leaf(leaf: str) -> Digest:
    if not isinstance(leaf, str):
        raise TypeError(f"leaf must be str, got {type(leaf).__name__}")
    return _h(leaf.encode("utf-8"))


def hash_pair(left: Digest, right: Digest) -> Digest:
    return _h(left + right)


def _own_leaves(leaves: Iterable[str]) -> Tuple[str, ...]:
    if isinstance(leaves, str):
        raise TypeError("leaves must be a sequence of strings, not a string")
    return tuple(leaves)


def build(leaves: Iterable[str]) -> List[Level]:
    """Compute every level of the tree, root level first.

    Raises EmptyLeavesError when no leaves are given and TypeError for
    non-string leaves.
    """
    lvl = [hash_leaf(leaf) for leaf in _own_leaves(leaves)]
    if not lvl:
        raise EmptyLeavesError("leaves must be non-empty")
    levels = [tuple(lvl)]
    while len(lvl) > 1:
        nxt = []
        for i in range(0, len(lvl), 2):
            a = lvl[i]
            b = lvl[i + 1] if i + 1 < len(lvl) else a  # duplicate last if odd
            nxt.append(hash_pair(a, b))
        levels.append(tuple(nxt))
        lvl = nxt
    levels.reverse()
    log.debug(
        "built merkle tree: %d leaves, level sizes %s",
        len(levels[-1]),
        [len(level) for level in levels],
    )
    return levels


@dataclass(frozen=True)
class MerkleTree:
    leaves: Tuple[str, ...]
    levels: Tuple[Level, ...]  # levels[0] = root, levels[-1] = leaf hashes

    def __post_init__(self):
        leaves = _own_leaves(self.leaves)
        levels = tuple(tuple(level) for level in self.levels)
        if not leaves or not levels:
            raise EmptyLeavesError("leaves must be non-empty")
        if len(levels[0]) != 1:
            raise ValueError("root level must hold exactly one digest")
        if len(levels[-1]) != len(leaves):
            raise ValueError("leaf level must hold one digest per leaf")
        object.__setattr__(self, "leaves", leaves)
        object.__setattr__(self, "levels", levels)

    @classmethod
    def from_leaves(cls, leaves: Iterable[str]) -> "MerkleTree":
        owned = _own_leaves(leaves)
        return cls(owned, tuple(build(owned)))

    def root_hash(self) -> Digest:
        return self.levels[0][0]

    def root_hex(self) -> str:
        return to_hex(self.root_hash())

    @property
    def depth(self) -> int:
        return len(self.levels)

    @property
    def leaf_hashes(self) -> Level:
        return self.levels[-1]
