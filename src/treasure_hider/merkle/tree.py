"""Standard Merkle tree.

Compatible with OpenZeppelin's ``@openzeppelin/merkle-tree`` ``StandardMerkleTree``
and ``MerkleProof.sol``:

- leaf = keccak256(keccak256(abi.encode(leaf_encoding, value)))
- leaves are sorted by hash, so the root does not depend on input order
- internal node = keccak256 of the sorted pair of children
- the tree is a flat array, root at index 0, leaves at the end in reverse
  sorted order
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Tuple

from eth_abi import encode
from eth_abi.exceptions import EncodingError
from eth_utils import keccak

from ..errors import InvalidArgumentError
from ..loot.utils import bytes32_from_hex

logger = logging.getLogger(__name__)

TREE_FORMAT = "standard-v1"


def standard_leaf_hash(leaf_encoding: Sequence[str], value: Sequence[Any]) -> bytes:
    """Double keccak of the ABI-encoded value.

    Raises:
        InvalidArgumentError: If the value does not match the leaf encoding
    """
    try:
        encoded = encode(list(leaf_encoding), list(value))
    except (EncodingError, TypeError, ValueError) as e:
        raise InvalidArgumentError(f"Leaf does not match {list(leaf_encoding)}: {e}") from e
    return keccak(keccak(encoded))


def hash_pair(a: bytes, b: bytes) -> bytes:
    if a < b:
        return keccak(a + b)
    return keccak(b + a)


def _left_child(i: int) -> int:
    return 2 * i + 1


def _right_child(i: int) -> int:
    return 2 * i + 2


def _parent(i: int) -> int:
    return (i - 1) // 2


def _sibling(i: int) -> int:
    if i == 0:
        raise InvalidArgumentError("Root has no siblings")
    return i + 1 if i % 2 else i - 1


def make_merkle_tree(leaves: Sequence[bytes]) -> List[bytes]:
    """Build the flat tree array from already sorted leaf hashes."""
    if not leaves:
        raise InvalidArgumentError("Expected non-zero number of leaves")

    tree: List[bytes] = [b""] * (2 * len(leaves) - 1)
    for i, leaf in enumerate(leaves):
        tree[len(tree) - 1 - i] = leaf
    for i in range(len(tree) - 1 - len(leaves), -1, -1):
        tree[i] = hash_pair(tree[_left_child(i)], tree[_right_child(i)])
    return tree


def process_proof(leaf: bytes, proof: Sequence[bytes]) -> bytes:
    computed = leaf
    for sibling in proof:
        computed = hash_pair(computed, sibling)
    return computed


@dataclass
class _IndexedValue:
    value: Tuple[Any, ...]
    tree_index: int


class StandardMerkleTree:
    """Merkle tree over ABI-encoded values.

    Example:
        ```python
        tree = StandardMerkleTree.of(
            [[(handler, salt, static_input)], ...],
            ["(address,bytes32,bytes)"],
        )
        proof = tree.get_proof(0)
        assert StandardMerkleTree.verify(tree.root, tree.leaf_encoding, tree.value(0), proof)
        ```
    """

    def __init__(
        self,
        tree: List[bytes],
        values: List[_IndexedValue],
        leaf_encoding: Sequence[str],
    ):
        self._tree = tree
        self._values = values
        self.leaf_encoding = list(leaf_encoding)

    @classmethod
    def of(
        cls, values: Sequence[Sequence[Any]], leaf_encoding: Sequence[str]
    ) -> "StandardMerkleTree":
        """Build a tree over ``values``, each encoded with ``leaf_encoding``.

        Raises:
            InvalidArgumentError: If there are no values or a value does not encode
        """
        hashed = sorted(
            (
                (standard_leaf_hash(leaf_encoding, value), value_index)
                for value_index, value in enumerate(values)
            ),
            key=lambda entry: entry[0],
        )
        tree = make_merkle_tree([leaf for leaf, _ in hashed])

        indexed: List[Optional[_IndexedValue]] = [None] * len(values)
        for leaf_index, (_, value_index) in enumerate(hashed):
            indexed[value_index] = _IndexedValue(
                value=tuple(values[value_index]),
                tree_index=len(tree) - leaf_index - 1,
            )

        logger.debug("Built Merkle tree with %d leaves", len(values))
        return cls(tree, [v for v in indexed if v is not None], leaf_encoding)

    @property
    def root(self) -> str:
        """Merkle root (bytes32 hex string)."""
        return "0x" + self._tree[0].hex()

    def __len__(self) -> int:
        return len(self._values)

    def entries(self) -> Iterator[Tuple[int, Tuple[Any, ...]]]:
        """Yield ``(index, value)`` in the order the values were given."""
        for i, indexed in enumerate(self._values):
            yield i, indexed.value

    def value(self, index: int) -> Tuple[Any, ...]:
        return self._values[index].value

    def leaf_hash(self, value: Sequence[Any]) -> str:
        return "0x" + standard_leaf_hash(self.leaf_encoding, value).hex()

    def get_proof(self, index: int) -> List[str]:
        """Inclusion proof for the value at ``index`` (insertion order).

        Returns:
            Sibling hashes (bytes32 hex strings) from the leaf up to the root
        """
        if index < 0 or index >= len(self._values):
            raise IndexError(f"Index out of range: {index}")

        tree_index = self._values[index].tree_index
        proof: List[str] = []
        while tree_index > 0:
            proof.append("0x" + self._tree[_sibling(tree_index)].hex())
            tree_index = _parent(tree_index)
        return proof

    @staticmethod
    def verify(
        root: str,
        leaf_encoding: Sequence[str],
        value: Sequence[Any],
        proof: Sequence[str],
    ) -> bool:
        """Check that ``proof`` proves ``value`` is a leaf of the tree with ``root``."""
        leaf = standard_leaf_hash(leaf_encoding, value)
        siblings = [bytes32_from_hex("proof node", node) for node in proof]
        return process_proof(leaf, siblings) == bytes32_from_hex("root", root)

    def dump(self) -> Dict[str, Any]:
        """Serialise the tree in the ``standard-v1`` JSON format.

        Byte values are written as hex strings.
        """

        def _jsonable(item: Any) -> Any:
            if isinstance(item, bytes):
                return "0x" + item.hex()
            if isinstance(item, (list, tuple)):
                return [_jsonable(i) for i in item]
            return item

        return {
            "format": TREE_FORMAT,
            "leafEncoding": self.leaf_encoding,
            "tree": ["0x" + node.hex() for node in self._tree],
            "values": [
                {"value": _jsonable(v.value), "treeIndex": v.tree_index}
                for v in self._values
            ],
        }


def find_and_prove(
    tree: StandardMerkleTree, predicate: Callable[[Tuple[Any, ...]], bool]
) -> Optional[List[str]]:
    """Proof for the first value (insertion order) matching ``predicate``.

    Looking the leaf up by content rather than by the index it was inserted
    at keeps this independent of how the tree orders its leaves.

    Returns:
        The inclusion proof, or None if no value matches
    """
    for i, value in tree.entries():
        if predicate(value):
            return tree.get_proof(i)
    return None
