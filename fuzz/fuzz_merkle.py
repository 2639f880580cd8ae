"""Fuzz harness for Merkle tree construction invariants."""
from __future__ import annotations
import atheris
import sys

with atheris.instrument_imports():
    from kmerkle.merkle import MerkleTree, hash_pair


def TestOneInput(data: bytes):  # noqa: N802
    if not data:
        return
    fdp = atheris.FuzzedDataProvider(data)
    # Bounded leaf count keeps each iteration cheap
    count = fdp.ConsumeIntInRange(1, 64)
    leaves = [fdp.ConsumeUnicodeNoSurrogates(16) for _ in range(count)]
    tree = MerkleTree.from_leaves(leaves)
    if len(tree.levels[0]) != 1 or len(tree.levels[-1]) != len(leaves):
        raise RuntimeError("root or leaf level has the wrong size")
    for parent, child in zip(tree.levels, tree.levels[1:]):
        if len(parent) != (len(child) + 1) // 2:
            raise RuntimeError("level is not ceil(child / 2) long")
        if len(child) % 2 == 1 and parent[-1] != hash_pair(child[-1], child[-1]):
            raise RuntimeError("odd trailing node was not paired with itself")
    if MerkleTree.from_leaves(leaves).root_hash() != tree.root_hash():
        raise RuntimeError("tree construction is not deterministic")


def main():
    atheris.Setup(sys.argv, TestOneInput, enable_python_coverage=True)
    atheris.Fuzz()


if __name__ == "__main__":
    main()
