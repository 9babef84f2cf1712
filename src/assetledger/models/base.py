"""Base Pydantic model configuration for asset ledger models.

All ledger models inherit from LedgerBaseModel to ensure consistent behavior:
- Immutability (frozen=True); mutations go through ``model_copy(update=...)``
- Strict validation (extra="forbid") to catch typos and invalid fields
- Flexible field naming (populate_by_name=True) so wire aliases and Python
  names are both accepted
"""

from pydantic import BaseModel, ConfigDict


class LedgerBaseModel(BaseModel):
    """Base model for all asset ledger entities.

    Example:
        >>> from pydantic import Field
        >>> class MyModel(LedgerBaseModel):
        ...     name: str
        ...     count: int = Field(default=0, ge=0)
        >>>
        >>> obj = MyModel(name="test", count=5)
        >>> obj.name
        'test'
        >>> obj.count = 10  # Raises ValidationError (frozen)
        Traceback (most recent call last):
        ...
        pydantic_core._pydantic_core.ValidationError: ...
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        use_enum_values=False,
        validate_default=True,
        validate_assignment=True,
        json_schema_extra={
            "additionalProperties": False,
        },
    )
