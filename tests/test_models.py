import json

import pytest
from pydantic import ValidationError

from kmerkle.merkle import MerkleTree
from kmerkle.models import TreeExport, canonical_json, check_export, export_tree


def _export(leaves=("a", "b", "c", "d", "e")):
    return export_tree(MerkleTree.from_leaves(leaves))


def test_export_fields():
    tree = MerkleTree.from_leaves(["a", "b", "c"])
    exp = export_tree(tree)
    assert exp.hash_alg == "keccak256"
    assert exp.tree_size == 3
    assert exp.leaves == ["a", "b", "c"]
    assert [len(level) for level in exp.levels] == [1, 2, 3]
    assert exp.levels[0][0] == exp.root_hex == tree.root_hex()


def test_canonical_json_is_stable():
    a = canonical_json(_export())
    b = canonical_json(_export())
    assert a == b
    obj = json.loads(a)
    assert list(obj.keys()) == sorted(obj.keys())


def test_check_export_accepts_own_output():
    data = json.loads(canonical_json(_export()))
    assert check_export(data) is True


def test_check_export_rejects_tampering():
    data = json.loads(canonical_json(_export()))
    data["leaves"][4] = "f"
    assert check_export(data) is False

    data = json.loads(canonical_json(_export()))
    data["leaves"][0], data["leaves"][1] = data["leaves"][1], data["leaves"][0]
    assert check_export(data) is False

    data = json.loads(canonical_json(_export()))
    data["tree_size"] = 4
    assert check_export(data) is False

    other = _export(("x", "y"))
    data = json.loads(canonical_json(_export()))
    data["root_b64"] = other.root_b64
    assert check_export(data) is False


def test_malformed_export_raises():
    data = json.loads(canonical_json(_export()))
    data["levels"][0][0] = "nothex"
    with pytest.raises(ValidationError):
        check_export(data)
    with pytest.raises(ValidationError):
        TreeExport.model_validate({**data, "leaves": [], "tree_size": 0})
    with pytest.raises(ValidationError):
        TreeExport.model_validate({**data, "tree_size": "5"})
