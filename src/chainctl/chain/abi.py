"""
ABI Loader - Locates contract ABIs in Foundry build output and turns
command-line strings into ABI-encoded calls.

Foundry writes one artifact per contract at ``out/<File>.sol/<Name>.json``;
the ``abi`` key of that JSON is the contract interface.
"""

from __future__ import annotations

import json
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Optional, Sequence

from eth_abi import decode, encode
from eth_abi.exceptions import ABITypeError, DecodingError, EncodingError, ParseError
from eth_hash.auto import keccak

from ..errors import ArgumentError, ConfigError, FunctionNotFoundError, NetworkError, ValidationError

SOURCE_SUFFIX = ".sol"
ARTIFACT_SUFFIX = ".json"

_HEX_DIGITS = set("0123456789abcdef")


def keccak256(data: bytes) -> bytes:
    # NOTE: Keccak-256 != SHA3-256 (NIST). Never use hashlib.sha3_256 here.
    return keccak(data)


def to_checksum_address(address: str) -> str:
    """Convert an address to EIP-55 checksummed format.

    eth-account requires checksummed addresses in transaction fields.

    Raises:
        ValueError: If the value is not a 20-byte hex address
    """
    addr = address.strip().lower()
    if addr.startswith("0x"):
        addr = addr[2:]
    if len(addr) != 40 or not set(addr) <= _HEX_DIGITS:
        raise ValueError(f"Invalid address: {address}")

    addr_hash = keccak256(addr.encode("utf-8")).hex()
    result = "0x"
    for i, c in enumerate(addr):
        if c in "abcdef":
            result += c.upper() if int(addr_hash[i], 16) >= 8 else c
        else:
            result += c
    return result


# ---------------------------------------------------------------------------
# Artifact discovery
# ---------------------------------------------------------------------------


def require_artifacts_dir(out_dir: Path) -> Path:
    if not out_dir.is_dir():
        raise ConfigError(
            f"The `{out_dir.name}/` directory does not exist! Compile the contract first."
        )
    return out_dir


def artifact_path(out_dir: Path, contract_name: str) -> Path:
    """Path of the Foundry artifact for a contract defined in ``<Name>.sol``."""
    return out_dir / f"{contract_name}{SOURCE_SUFFIX}" / f"{contract_name}{ARTIFACT_SUFFIX}"


def discover_abi_file(out_dir: Path) -> Optional[Path]:
    """
    Pick the first artifact under ``out_dir``.

    Scans ``*.sol`` subdirectories in sorted order and returns the first
    ``*.json`` file (also sorted) found in any of them. The contract name is
    not considered, so callers should prefer an explicit path.

    Returns:
        Path to the artifact, or None if no candidate exists
    """
    folders = sorted(
        p for p in out_dir.iterdir() if p.is_dir() and p.name.endswith(SOURCE_SUFFIX)
    )
    for folder in folders:
        files = sorted(
            p for p in folder.iterdir() if p.is_file() and p.name.endswith(ARTIFACT_SUFFIX)
        )
        if files:
            return files[0]
    return None


def load_artifact_abi(path: Path) -> list[dict[str, Any]]:
    """
    Load the ``abi`` array from a compiled artifact.

    Raises:
        ConfigError: If the file does not exist
        ValidationError: If the file is not JSON or has no ``abi`` array
    """
    if not path.is_file():
        raise ConfigError(f"ABI file not found: {path}")

    try:
        with path.open("r", encoding="utf-8") as f:
            artifact = json.load(f)
    except json.JSONDecodeError as exc:
        raise ValidationError(f"Invalid ABI file {path}: {exc}") from exc

    abi = artifact.get("abi") if isinstance(artifact, dict) else None
    if not isinstance(abi, list):
        raise ValidationError(
            "Invalid ABI file format! Expected an object with an 'abi' key."
        )
    return abi


def parse_abi_json(text: str) -> list[dict[str, Any]]:
    """Parse a bare ABI array, as printed by ``forge inspect <id> abi``."""
    try:
        abi = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValidationError(f"Error parsing ABI: {exc}") from exc
    if not isinstance(abi, list):
        raise ValidationError("Invalid ABI format received from forge inspect.")
    return abi


# ---------------------------------------------------------------------------
# Entry lookup
# ---------------------------------------------------------------------------


def find_constructor(abi: Sequence[dict]) -> Optional[dict]:
    for entry in abi:
        if entry.get("type") == "constructor":
            return entry
    return None


def describe_inputs(entry: dict) -> str:
    """Render inputs as ``<name:type>`` pairs in declaration order."""
    return " ".join(
        f"<{inp.get('name', '')}:{inp.get('type', '')}>" for inp in entry.get("inputs", [])
    )


def canonical_type(param: dict) -> str:
    """ABI type string with tuples expanded, e.g. ``(address,uint256)[]``."""
    abi_type = param["type"]
    if abi_type.startswith("tuple"):
        inner = ",".join(canonical_type(c) for c in param.get("components", []))
        return f"({inner}){abi_type[len('tuple'):]}"
    return abi_type


def function_signature(entry: dict) -> str:
    types = ",".join(canonical_type(p) for p in entry.get("inputs", []))
    return f"{entry.get('name', '')}({types})"


def function_selector(entry: dict) -> bytes:
    return keccak256(function_signature(entry).encode("utf-8"))[:4]


def is_read_only(entry: dict) -> bool:
    mutability = entry.get("stateMutability")
    if mutability is not None:
        return mutability in ("view", "pure")
    return bool(entry.get("constant", False))


def find_function(abi: Sequence[dict], name: str, arg_count: Optional[int] = None) -> dict:
    """
    Resolve a function entry by name (and arity, for overloads).

    Raises:
        FunctionNotFoundError: If no function has that name
        ArgumentError: If no overload takes ``arg_count`` arguments
    """
    candidates = [
        entry
        for entry in abi
        if entry.get("type", "function") == "function" and entry.get("name") == name
    ]
    if not candidates:
        raise FunctionNotFoundError(f"Function {name} not found in ABI")
    if arg_count is None:
        return candidates[0]

    for entry in candidates:
        if len(entry.get("inputs", [])) == arg_count:
            return entry

    expected = ", ".join(function_signature(e) for e in candidates)
    raise ArgumentError(
        f"{name} takes a different number of arguments (got {arg_count}); expected: {expected}"
    )


# ---------------------------------------------------------------------------
# Values
# ---------------------------------------------------------------------------


def _json_list(raw: Any, abi_type: str) -> list:
    if isinstance(raw, (list, tuple)):
        return list(raw)
    try:
        value = json.loads(raw)
    except (TypeError, json.JSONDecodeError):
        raise ValueError(f"expected a JSON array for {abi_type}") from None
    if not isinstance(value, list):
        raise ValueError(f"expected a JSON array for {abi_type}")
    return value


def _coerce(abi_type: str, components: Optional[list], raw: Any) -> Any:
    if abi_type.endswith("]"):
        base = abi_type[: abi_type.rindex("[")]
        return [_coerce(base, components, item) for item in _json_list(raw, abi_type)]

    if abi_type == "tuple":
        items = _json_list(raw, abi_type)
        components = components or []
        if len(items) != len(components):
            raise ValueError(f"tuple expects {len(components)} values, got {len(items)}")
        return tuple(
            _coerce(c["type"], c.get("components"), item) for c, item in zip(components, items)
        )

    if abi_type.startswith(("uint", "int")):
        if isinstance(raw, bool):
            raise ValueError("expected an integer")
        if isinstance(raw, int):
            return raw
        text = str(raw).strip()
        if text.lower().startswith(("0x", "-0x")):
            return int(text, 16)
        return int(text, 10)

    if abi_type == "bool":
        if isinstance(raw, bool):
            return raw
        text = str(raw).strip().lower()
        if text in ("true", "1"):
            return True
        if text in ("false", "0"):
            return False
        raise ValueError("expected true or false")

    if abi_type == "address":
        return to_checksum_address(str(raw))

    if abi_type == "string":
        return str(raw)

    if abi_type.startswith("bytes"):
        text = str(raw).strip()
        if text.startswith("0x"):
            text = text[2:]
        return bytes.fromhex(text)

    if abi_type.startswith(("fixed", "ufixed")):
        try:
            return Decimal(str(raw).strip())
        except InvalidOperation:
            raise ValueError("expected a decimal number") from None

    raise ValueError(f"unsupported ABI type {abi_type}")


def coerce_args(entry: dict, raw_args: Sequence[Any]) -> list:
    """
    Convert raw command-line strings to Python values for ``entry``'s inputs.

    Arguments are matched to parameters by position only.

    Raises:
        ArgumentError: If the count differs or a value does not fit its type
    """
    inputs = entry.get("inputs", [])
    if len(inputs) != len(raw_args):
        raise ArgumentError(
            f"{function_signature(entry)} expects {len(inputs)} argument(s), got {len(raw_args)}"
        )

    values = []
    for index, (param, raw) in enumerate(zip(inputs, raw_args)):
        try:
            values.append(_coerce(param["type"], param.get("components"), raw))
        except ValueError as exc:
            label = param.get("name") or f"#{index}"
            raise ArgumentError(
                f"Argument {label} ({param['type']}): {exc}; got {raw!r}"
            ) from None
    return values


def encode_call(entry: dict, args: Sequence[Any]) -> str:
    """
    ABI-encode a function call.

    Returns:
        0x-prefixed hex encoded calldata
    """
    input_types = [canonical_type(p) for p in entry.get("inputs", [])]
    try:
        encoded_args = encode(input_types, list(args)) if input_types else b""
    except (EncodingError, ParseError, ABITypeError, TypeError, OverflowError) as exc:
        raise ArgumentError(f"Cannot encode arguments for {function_signature(entry)}: {exc}") from exc

    return "0x" + function_selector(entry).hex() + encoded_args.hex()


def decode_result(entry: dict, data: str) -> Any:
    """
    ABI-decode a function call result.

    Returns:
        Decoded result (None, a single value or a tuple)
    """
    output_types = [canonical_type(p) for p in entry.get("outputs", [])]
    if not output_types:
        return None

    try:
        raw = bytes.fromhex(data[2:] if data.startswith("0x") else data)
    except (TypeError, ValueError):
        raise NetworkError(
            f"Node returned non-hex data for {function_signature(entry)}: {data!r}"
        ) from None
    try:
        decoded = decode(output_types, raw)
    except (DecodingError, ParseError, ABITypeError) as exc:
        raise ValidationError(
            f"Could not decode result of {function_signature(entry)}: {exc}"
        ) from exc

    if len(decoded) == 1:
        return decoded[0]
    return decoded


def render_value(value: Any) -> str:
    """Human-readable form of a decoded value (bytes as hex, lists comma-joined)."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    if isinstance(value, (list, tuple)):
        return ",".join(render_value(v) for v in value)
    return str(value)
