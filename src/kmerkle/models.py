from __future__ import annotations
import logging
from typing import Any, Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .crypto import B64, B64D, from_hex, jcs_dumps, to_hex
from .merkle import MerkleTree

log = logging.getLogger(__name__)


class TreeExport(BaseModel):
    """JSON description of a built tree.

    `levels` holds lowercase hex digests, root level first, exactly as the
    tree stores them. Strict mode keeps a string `tree_size` or a numeric
    leaf from being silently coerced.
    """

    model_config = ConfigDict(strict=True)

    hash_alg: Literal["keccak256"] = "keccak256"
    tree_size: int = Field(ge=1)
    leaves: List[str] = Field(min_length=1)
    levels: List[List[str]] = Field(min_length=1)
    root_hex: str
    root_b64: str

    @field_validator("levels")
    @classmethod
    def _levels_are_hex_digests(cls, v):  # type: ignore[override]
        for level in v:
            if not level:
                raise ValueError("levels must not be empty")
            for digest in level:
                from_hex(digest)
        return v

    @field_validator("root_hex")
    @classmethod
    def _root_is_hex_digest(cls, v):  # type: ignore[override]
        from_hex(v)
        return v


def export_tree(tree: MerkleTree) -> TreeExport:
    root = tree.root_hash()
    return TreeExport(
        tree_size=len(tree.leaves),
        leaves=list(tree.leaves),
        levels=[[to_hex(d) for d in level] for level in tree.levels],
        root_hex=to_hex(root),
        root_b64=B64(root),
    )


def canonical_json(export: TreeExport) -> bytes:
    return jcs_dumps(export.model_dump())


def check_export(data: Dict[str, Any]) -> bool:
    """Rebuild the tree from the exported leaves and compare every field.

    Raises pydantic.ValidationError for a malformed document; returns False
    when a well-formed document does not match its own leaves.
    """
    export = TreeExport.model_validate(data)
    tree = MerkleTree.from_leaves(export.leaves)
    expected = export_tree(tree)
    if export.tree_size != expected.tree_size:
        log.info("export tree_size %d != %d leaves", export.tree_size, expected.tree_size)
        return False
    if export.levels != expected.levels:
        log.info("export levels do not match rebuilt tree")
        return False
    if export.root_hex != expected.root_hex:
        log.info("export root_hex does not match rebuilt tree")
        return False
    try:
        return B64D(export.root_b64) == tree.root_hash()
    except ValueError:
        return False
