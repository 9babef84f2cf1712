"""Asset record and query result models, plus their wire codec.

The wire encoding is part of the compatibility surface: field names and
casing (``ID``, ``description``, ``owner``, ``approvalOne``, ``approvalTwo``,
``registered``) and their order must not change. Records are stored as
compact JSON bytes.

Example:
    >>> asset = Asset(id="asset1", description="myAsset", owner="Org1")
    >>> encode_asset(asset)
    b'{"ID":"asset1","description":"myAsset","owner":"Org1","approvalOne":0,"approvalTwo":0,"registered":0}'
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, TypeAdapter, ValidationError

from assetledger.errors import DecodeFailureError
from assetledger.models.base import LedgerBaseModel


class Asset(LedgerBaseModel):
    """A registered asset as persisted in the world state.

    Approval flags are stored exactly as supplied; the approval workflow is
    the only code that sets ``approval_one``, ``approval_two`` and
    ``registered`` on an existing record.

    Attributes:
        id: Primary key, immutable after creation.
        description: Free text.
        owner: Controlling party; changed by transfer.
        approval_one: First sign-off flag (0 or 1).
        approval_two: Second sign-off flag (0 or 1).
        registered: Registration flag (0 or 1).
    """

    id: str = Field(..., alias="ID", strict=True, description="Asset identifier")
    description: str = Field(..., alias="description", strict=True)
    owner: str = Field(..., alias="owner", strict=True)
    approval_one: int = Field(default=0, alias="approvalOne", strict=True)
    approval_two: int = Field(default=0, alias="approvalTwo", strict=True)
    registered: int = Field(default=0, alias="registered", strict=True)

    def to_wire(self) -> dict[str, Any]:
        """Return the JSON-compatible wire form (aliased field names)."""
        return self.model_dump(by_alias=True)


class QueryResult(LedgerBaseModel):
    """A store key paired with its decoded record, produced by bulk queries."""

    key: str = Field(..., alias="Key")
    record: Asset = Field(..., alias="Record")

    def to_wire(self) -> dict[str, Any]:
        """Return ``{"Key": ..., "Record": {...}}``."""
        return self.model_dump(by_alias=True)


def encode_asset(asset: Asset) -> bytes:
    """Encode an asset into its stored byte form."""
    return asset.model_dump_json(by_alias=True).encode("utf-8")


_RECORD_ADAPTER: TypeAdapter[dict[str, Any]] = TypeAdapter(dict[str, Any])

# Wire alias by case-folded alias, for keys written with different casing.
_ALIASES_BY_FOLDED = {
    info.alias.lower(): info.alias for info in Asset.model_fields.values() if info.alias
}

# Stored records missing a field decode to the zero value for that field.
_ZERO_VALUES: dict[str, Any] = {
    "ID": "",
    "description": "",
    "owner": "",
    "approvalOne": 0,
    "approvalTwo": 0,
    "registered": 0,
}


def _record_fields(payload: dict[str, Any]) -> dict[str, Any]:
    """Pick the asset fields out of a decoded JSON object.

    Unknown keys are ignored and null values leave the zero value in place.
    An exact alias match takes precedence over a case-insensitive one.
    """
    values = dict(_ZERO_VALUES)
    exact: set[str] = set()
    for name, value in payload.items():
        alias = _ALIASES_BY_FOLDED.get(name.lower())
        if alias is None or value is None:
            continue
        if name == alias:
            exact.add(alias)
        elif alias in exact:
            continue
        values[alias] = value
    return values


def _validation_reason(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or '<root>'}: {err['msg']}"
        for err in exc.errors()
    )


def decode_asset(key: str, raw: bytes) -> Asset:
    """Decode stored bytes into an Asset.

    Decoding is lenient about shape: unknown keys are ignored, missing or
    null fields take their zero value ("" or 0), and keys match the wire
    names without regard to case. Only bytes that are not a JSON object, or
    a field holding a value of the wrong type, are rejected.

    Args:
        key: Store key the bytes were read from (used for error context).
        raw: Stored value.

    Returns:
        The decoded asset.

    Raises:
        DecodeFailureError: If the bytes are not a JSON object or a field
            has the wrong type.
    """
    try:
        payload = _RECORD_ADAPTER.validate_json(raw)
        return Asset.model_validate(_record_fields(payload))
    except ValidationError as exc:
        raise DecodeFailureError(key=key, reason=_validation_reason(exc)) from exc


__all__ = ["Asset", "QueryResult", "decode_asset", "encode_asset"]
