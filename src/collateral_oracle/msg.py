"""Request and response models for the oracle's boundary operations.

Messages are externally tagged: a payload is a mapping with exactly one key,
the snake_case message name, whose value holds the message fields, e.g.
``{"revoke_collateral_asset": {"asset": "uluna"}}``.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .domain import CanonicalDecimal, Identity, SourceType


class _Msg(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class InstantiateMsg(_Msg):
    owner: Identity
    mint_contract: Identity
    base_denom: Identity
    reference_oracle: Identity


# --- execute ---


class UpdateConfig(_Msg):
    owner: Optional[str] = None
    mint_contract: Optional[str] = None
    base_denom: Optional[str] = None
    reference_oracle: Optional[str] = None


class RegisterCollateralAsset(_Msg):
    asset: Identity
    price_source: SourceType
    multiplier: CanonicalDecimal


class RevokeCollateralAsset(_Msg):
    asset: Identity


class UpdateCollateralPriceSource(_Msg):
    asset: Identity
    price_source: SourceType


class UpdateCollateralMultiplier(_Msg):
    asset: Identity
    multiplier: CanonicalDecimal


EXECUTE_MESSAGES: dict[str, type[_Msg]] = {
    "update_config": UpdateConfig,
    "register_collateral_asset": RegisterCollateralAsset,
    "revoke_collateral_asset": RevokeCollateralAsset,
    "update_collateral_price_source": UpdateCollateralPriceSource,
    "update_collateral_multiplier": UpdateCollateralMultiplier,
}


# --- query ---


class QueryConfig(_Msg):
    pass


class QueryCollateralPrice(_Msg):
    asset: Identity
    block_height: Optional[int] = Field(default=None, ge=0)


class QueryCollateralAssetInfo(_Msg):
    asset: Identity


class QueryCollateralAssetInfos(_Msg):
    pass


QUERY_MESSAGES: dict[str, type[_Msg]] = {
    "config": QueryConfig,
    "collateral_price": QueryCollateralPrice,
    "collateral_asset_info": QueryCollateralAssetInfo,
    "collateral_asset_infos": QueryCollateralAssetInfos,
}


# --- responses ---


class ConfigResponse(_Msg):
    owner: str
    mint_contract: str
    base_denom: str
    reference_oracle: str


class CollateralPriceResponse(_Msg):
    asset: str
    rate: CanonicalDecimal
    last_updated: int
    multiplier: CanonicalDecimal
    is_revoked: bool


class CollateralInfoResponse(_Msg):
    asset: str
    multiplier: CanonicalDecimal
    source_type: str
    is_revoked: bool


class CollateralInfosResponse(_Msg):
    collaterals: list[CollateralInfoResponse]
