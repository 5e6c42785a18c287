from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

from ...constants import BAND_RATE_DECIMALS
from ...domain import PriceQuote
from ...errors import InvalidArgument, UpstreamQueryFailed
from ...units import normalize_fixed_point
from .base import BasePriceSource

logger = logging.getLogger(__name__)


class BandReferenceData(BaseModel):
    # Uint128 rates are serialized as digit strings
    rate: StrictInt | StrictStr
    last_updated_base: int = Field(ge=0)
    last_updated_quote: int | None = Field(default=None, ge=0)

    model_config = ConfigDict(extra="ignore")


class BandOracleAdapter(BasePriceSource):
    """Adapter for Band Protocol reference data.

    Band reports ``rate`` as an unsigned integer scaled by 1e18, which is
    normalized to a Decimal with 18 fractional digits.
    """

    @property
    def source_type(self) -> str:
        return "band_oracle"

    def fetch_price(self, asset: str) -> PriceQuote:
        msg = {
            "get_reference_data": {
                "base_symbol": asset,
                "quote_symbol": self.config.base_denom,
            }
        }
        res = self.query(self.source.oracle, msg, BandReferenceData)
        try:
            rate = normalize_fixed_point(res.rate, BAND_RATE_DECIMALS)
        except InvalidArgument as e:
            logger.error("Band rate for %s is not an unsigned integer: %r", asset, res.rate)
            raise UpstreamQueryFailed(f"Malformed Band rate from {self.source.oracle}: {e}") from e

        logger.debug("Band rate %s/%s = %s", asset, self.config.base_denom, rate)
        return PriceQuote(rate=rate, last_updated=res.last_updated_base)
