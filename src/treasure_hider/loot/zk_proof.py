"""Reading zk proofs produced by ZoKrates.

Expected ``proof.json`` shape::

    {
      "proof": {
        "a": ["0x..", "0x.."],
        "b": [["0x..", "0x.."], ["0x..", "0x.."]],
        "c": ["0x..", "0x.."]
      },
      "inputs": [...]
    }

Field elements may be hex (``0x``-prefixed) or decimal numeric strings.
"""

import json
from pathlib import Path
from typing import Any, List, Union

from ..errors import InvalidArgumentError, ParseError
from .types import G1Point, G2Point, ZkProof
from .utils import parse_bytes32, to_bytes32_hex


def _field_element(path: str, value: Any) -> str:
    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return to_bytes32_hex(value)
        except InvalidArgumentError as e:
            raise ParseError(f"{path}: {e}") from e
    if not isinstance(value, str):
        raise ParseError(f"{path}: expected a numeric string, got {type(value).__name__}")
    if not value.isascii():
        raise ParseError(f"{path}: invalid field element {value!r}")
    if value.startswith("0x"):
        # ZoKrates may emit field elements without leading zero bytes
        try:
            return to_bytes32_hex(int(value, 16))
        except ValueError as e:
            raise ParseError(f"{path}: invalid hex field element {value!r}") from e
        except InvalidArgumentError as e:
            raise ParseError(f"{path}: {e}") from e
    try:
        return parse_bytes32(path, value)
    except InvalidArgumentError as e:
        raise ParseError(f"{path}: invalid field element {value!r}") from e


def _pair(path: str, value: Any) -> List[Any]:
    if not isinstance(value, list) or len(value) != 2:
        raise ParseError(f"{path}: expected an array of 2 elements")
    return value


def parse_zk_proof(document: Any) -> ZkProof:
    """Parse a decoded ``proof.json`` document.

    Raises:
        ParseError: If the document does not have the expected shape
    """
    if not isinstance(document, dict) or not isinstance(document.get("proof"), dict):
        raise ParseError("zk proof: missing 'proof' object")
    proof = document["proof"]
    for key in ("a", "b", "c"):
        if key not in proof:
            raise ParseError(f"zk proof: missing 'proof.{key}'")

    a = _pair("proof.a", proof["a"])
    b = _pair("proof.b", proof["b"])
    b_x = _pair("proof.b[0]", b[0])
    b_y = _pair("proof.b[1]", b[1])
    c = _pair("proof.c", proof["c"])

    return ZkProof(
        a=G1Point(x=_field_element("proof.a[0]", a[0]), y=_field_element("proof.a[1]", a[1])),
        b=G2Point(
            x=[_field_element(f"proof.b[0][{i}]", v) for i, v in enumerate(b_x)],
            y=[_field_element(f"proof.b[1][{i}]", v) for i, v in enumerate(b_y)],
        ),
        c=G1Point(x=_field_element("proof.c[0]", c[0]), y=_field_element("proof.c[1]", c[1])),
    )


def load_zk_proof(path: Union[str, Path]) -> ZkProof:
    """Read and parse a ZoKrates ``proof.json`` file.

    Raises:
        ParseError: If the file cannot be read, is not JSON or has the wrong shape
    """
    try:
        with open(path, "r") as f:
            document = json.load(f)
    except OSError as e:
        raise ParseError(f"Cannot read zk proof file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON in zk proof file {path}: {e}") from e

    return parse_zk_proof(document)
