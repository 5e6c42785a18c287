from __future__ import annotations

import logging
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from ...domain import PriceQuote
from .base import BasePriceSource

logger = logging.getLogger(__name__)


class ReferenceOracleResponse(BaseModel):
    rate: Decimal = Field(ge=0)
    last_updated_base: int = Field(ge=0)

    model_config = ConfigDict(extra="ignore")


class ReferenceOracleAdapter(BasePriceSource):
    """Relays the reference oracle's rate for ``asset`` against the base denomination.

    The reference oracle already reports a canonical decimal, so no
    rescaling is applied.
    """

    @property
    def source_type(self) -> str:
        return "reference_oracle"

    def fetch_price(self, asset: str) -> PriceQuote:
        msg = {
            "price": {
                "base_asset": asset,
                "quote_asset": self.config.base_denom,
            }
        }
        res = self.query(self.config.reference_oracle, msg, ReferenceOracleResponse)
        logger.debug(
            "Reference oracle rate %s/%s = %s (updated %d)",
            asset,
            self.config.base_denom,
            res.rate,
            res.last_updated_base,
        )
        return PriceQuote(rate=res.rate, last_updated=res.last_updated_base)
