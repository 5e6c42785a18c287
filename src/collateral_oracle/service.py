"""Oracle operations composed from the config store, registry and price sources."""

from __future__ import annotations

import logging
from typing import Any, Optional

from pydantic import ValidationError

from .adapters.price_sources import build_price_source
from .config import ConfigStore
from .domain import CollateralAssetInfo, Config
from .errors import InvalidArgument
from .msg import CollateralInfoResponse, CollateralPriceResponse
from .registry import AssetRegistry
from .state import AppState


def _info_response(info: CollateralAssetInfo) -> CollateralInfoResponse:
    return CollateralInfoResponse(
        asset=info.asset,
        multiplier=info.multiplier,
        source_type=info.price_source.label,
        is_revoked=info.is_revoked,
    )


class OracleService:
    """Entry point for every oracle operation.

    Mutating operations assume the caller's authorization was checked
    before reaching this layer.
    """

    def __init__(self, state: AppState):
        self.state = state
        self.config = ConfigStore(state.store)
        self.registry = AssetRegistry(state.store)

    @property
    def log(self) -> logging.Logger:
        return self.state.logger

    # --- config ---

    def instantiate(
        self, owner: str, mint_contract: str, base_denom: str, reference_oracle: str
    ) -> Config:
        """Create the oracle config. Fails if one already exists."""
        if self.config.exists():
            raise InvalidArgument("Oracle config is already initialized")
        try:
            config = Config(
                owner=owner,
                mint_contract=mint_contract,
                base_denom=base_denom,
                reference_oracle=reference_oracle,
            )
        except ValidationError as e:
            raise InvalidArgument(f"Invalid config: {e}") from e
        self.config.initialize(config)
        return config

    def update_config(
        self,
        owner: Optional[str] = None,
        mint_contract: Optional[str] = None,
        base_denom: Optional[str] = None,
        reference_oracle: Optional[str] = None,
    ) -> Config:
        return self.config.update(
            owner=owner,
            mint_contract=mint_contract,
            base_denom=base_denom,
            reference_oracle=reference_oracle,
        )

    def get_config(self) -> Config:
        return self.config.get()

    # --- registry ---

    def register_collateral_asset(
        self, asset: str, price_source: Any, multiplier: Any
    ) -> CollateralAssetInfo:
        return self.registry.register(asset, price_source, multiplier)

    def revoke_collateral_asset(self, asset: str) -> CollateralAssetInfo:
        return self.registry.revoke(asset)

    def update_collateral_price_source(
        self, asset: str, price_source: Any
    ) -> CollateralAssetInfo:
        return self.registry.update_source(asset, price_source)

    def update_collateral_multiplier(
        self, asset: str, multiplier: Any
    ) -> CollateralAssetInfo:
        return self.registry.update_multiplier(asset, multiplier)

    # --- queries ---

    def get_price(
        self, asset: str, block_height: Optional[int] = None
    ) -> CollateralPriceResponse:
        """Resolve the current rate of ``asset`` through its configured price source.

        The multiplier is reported but not applied, and revoked assets are
        still priced with ``is_revoked`` set. ``block_height`` is accepted
        for interface compatibility and does not affect the result.

        Raises:
            NotFound: If the asset is not registered
            UpstreamQueryFailed: If the price source fails
            ValueError: If no querier was provided and lcd_endpoint is not configured
        """
        info = self.registry.get(asset)
        config = self.config.get()
        if block_height is not None:
            self.log.debug("Ignoring block_height=%d for %s", block_height, asset)

        source = build_price_source(config, self.state.querier_required, info.price_source)
        quote = source.fetch_price(asset)
        self.log.debug(
            "Price of %s via %s: %s (updated %d)",
            asset,
            source.source_type,
            quote.rate,
            quote.last_updated,
        )
        return CollateralPriceResponse(
            asset=asset,
            rate=quote.rate,
            last_updated=quote.last_updated,
            multiplier=info.multiplier,
            is_revoked=info.is_revoked,
        )

    def get_asset_info(self, asset: str) -> CollateralInfoResponse:
        return _info_response(self.registry.get(asset))

    def list_asset_infos(self) -> list[CollateralInfoResponse]:
        return [_info_response(info) for info in self.registry.list()]
