"""Domain models for the collateral oracle."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Annotated, Any, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    TypeAdapter,
    ValidationError,
)

from ..errors import InvalidArgument

Identity = Annotated[str, Field(min_length=1)]

# Serialized in plain notation ("0.000000000000001234", never "1.234E-15")
CanonicalDecimal = Annotated[
    Decimal, PlainSerializer(lambda d: format(d, "f"), return_type=str, when_used="json")
]


class Config(BaseModel):
    """Process-wide oracle configuration."""

    owner: Identity
    mint_contract: Identity
    base_denom: Identity
    reference_oracle: Identity

    model_config = ConfigDict(frozen=True, extra="forbid")


class ReferenceOracleSource(BaseModel):
    """Relay the rate reported by the configured reference oracle."""

    type: Literal["reference_oracle"] = "reference_oracle"

    model_config = ConfigDict(frozen=True, extra="forbid")

    @property
    def label(self) -> str:
        return "reference_oracle"


class BandOracleSource(BaseModel):
    """Read a Band Protocol reference rate encoded as an integer at 1e18."""

    type: Literal["band_oracle"] = "band_oracle"
    oracle: Identity

    model_config = ConfigDict(frozen=True, extra="forbid")

    @property
    def label(self) -> str:
        return "band_oracle"


SourceType = Annotated[
    Union[ReferenceOracleSource, BandOracleSource],
    Field(discriminator="type"),
]

_SOURCE_TYPE_ADAPTER: TypeAdapter[Any] = TypeAdapter(SourceType)


def parse_source_type(value: Any) -> ReferenceOracleSource | BandOracleSource:
    """Parse a price source selector.

    Accepts an existing selector, a mapping such as ``{"type": "band_oracle",
    "oracle": "terra1..."}``, or the compact text form used on the command
    line: ``reference_oracle`` or ``band_oracle:<oracle address>``.

    Raises:
        InvalidArgument: If the selector is unknown or malformed
    """
    if isinstance(value, (ReferenceOracleSource, BandOracleSource)):
        return value
    if isinstance(value, str):
        kind, _, param = value.partition(":")
        value = {"type": kind.strip().lower()}
        if param:
            value["oracle"] = param.strip()
    try:
        return _SOURCE_TYPE_ADAPTER.validate_python(value)
    except ValidationError as e:
        raise InvalidArgument(f"Invalid price source {value!r}: {e}") from e


class CollateralAssetInfo(BaseModel):
    """Registry entry for one collateral asset."""

    asset: Identity
    price_source: SourceType
    multiplier: CanonicalDecimal = Field(ge=0)
    is_revoked: bool = False

    model_config = ConfigDict(frozen=True, extra="forbid")


@dataclass(frozen=True)
class PriceQuote:
    """Rate returned by a price source, with the upstream update timestamp."""

    rate: Decimal
    last_updated: int
