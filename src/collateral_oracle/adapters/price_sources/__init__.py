from __future__ import annotations

from typing import Any

from ...domain import Config
from ...errors import InvalidArgument
from ...querier import Querier
from .band_oracle import BandOracleAdapter
from .base import BasePriceSource
from .reference_oracle import ReferenceOracleAdapter

PRICE_SOURCES: dict[str, type[BasePriceSource]] = {
    "reference_oracle": ReferenceOracleAdapter,
    "band_oracle": BandOracleAdapter,
}


def get_price_source_class(source_type: str) -> type[BasePriceSource]:
    """Get price source class by selector tag.

    Args:
        source_type: Tag of the selector variant (case-insensitive)

    Returns:
        Price source class

    Raises:
        InvalidArgument: If source_type is not recognized
    """
    source_type_normalized = source_type.lower()
    if source_type_normalized not in PRICE_SOURCES:
        raise InvalidArgument(
            f"Unknown price source '{source_type}'. "
            f"Available: {', '.join(PRICE_SOURCES.keys())}"
        )
    return PRICE_SOURCES[source_type_normalized]


def build_price_source(config: Config, querier: Querier, source: Any) -> BasePriceSource:
    """Instantiate the price source handling ``source``."""
    return get_price_source_class(source.type)(config, querier, source)


__all__ = [
    "PRICE_SOURCES",
    "BasePriceSource",
    "BandOracleAdapter",
    "ReferenceOracleAdapter",
    "build_price_source",
    "get_price_source_class",
]
