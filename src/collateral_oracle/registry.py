"""Collateral asset registry."""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import Any

from .constants import COLLATERAL_ASSET_PREFIX
from .domain import CollateralAssetInfo, parse_source_type
from .errors import DuplicateAsset, InvalidArgument, NotFound
from .storage import KeyValueStore

logger = logging.getLogger(__name__)


def _validate_asset(asset: str) -> str:
    if not isinstance(asset, str) or not asset:
        raise InvalidArgument(f"Asset identity must be a non-empty string, got {asset!r}")
    return asset


def validate_multiplier(multiplier: Any) -> Decimal:
    """Coerce ``multiplier`` to a finite, non-negative Decimal.

    Floats are rejected because their binary value is not the decimal the
    caller wrote.

    Raises:
        InvalidArgument: If the multiplier is negative, not finite or unparseable
    """
    if isinstance(multiplier, (bool, float)):
        raise InvalidArgument(f"Multiplier must be a decimal string or Decimal, got {multiplier!r}")
    try:
        value = Decimal(multiplier)
    except (InvalidOperation, TypeError, ValueError) as e:
        raise InvalidArgument(f"Malformed multiplier: {multiplier!r}") from e
    if not value.is_finite():
        raise InvalidArgument(f"Multiplier must be finite, got {multiplier!r}")
    if value < 0:
        raise InvalidArgument(f"Multiplier must be non-negative, got {value}")
    return value


class AssetRegistry:
    """Maps each collateral asset to its price source, multiplier and revocation flag.

    Entries are never deleted; revocation is a flag on the entry. Every
    mutation is a single store write of the complete entry.
    """

    def __init__(self, store: KeyValueStore):
        self.store = store

    @staticmethod
    def _key(asset: str) -> str:
        return f"{COLLATERAL_ASSET_PREFIX}{asset}"

    def _load(self, asset: str) -> CollateralAssetInfo | None:
        raw = self.store.get(self._key(_validate_asset(asset)))
        if raw is None:
            return None
        return CollateralAssetInfo.model_validate_json(raw)

    def _save(self, info: CollateralAssetInfo) -> None:
        self.store.set(self._key(info.asset), info.model_dump_json())

    def register(self, asset: str, price_source: Any, multiplier: Any) -> CollateralAssetInfo:
        """Register a collateral asset.

        An asset whose entry was revoked may be registered again; the new
        entry replaces the old one entirely and is not revoked.

        Raises:
            DuplicateAsset: If the asset has an active entry
            InvalidArgument: If the source or multiplier is invalid
        """
        existing = self._load(asset)
        if existing is not None and not existing.is_revoked:
            raise DuplicateAsset(asset)

        info = CollateralAssetInfo(
            asset=asset,
            price_source=parse_source_type(price_source),
            multiplier=validate_multiplier(multiplier),
            is_revoked=False,
        )
        self._save(info)
        logger.info(
            "Registered collateral %s (source=%s, multiplier=%s)%s",
            asset,
            info.price_source.label,
            info.multiplier,
            " replacing revoked entry" if existing is not None else "",
        )
        return info

    def get(self, asset: str) -> CollateralAssetInfo:
        info = self._load(asset)
        if info is None:
            raise NotFound(f"Collateral asset not found: {asset}")
        return info

    def revoke(self, asset: str) -> CollateralAssetInfo:
        info = self.get(asset).model_copy(update={"is_revoked": True})
        self._save(info)
        logger.info("Revoked collateral %s", asset)
        return info

    def update_source(self, asset: str, price_source: Any) -> CollateralAssetInfo:
        source = parse_source_type(price_source)
        info = self.get(asset).model_copy(update={"price_source": source})
        self._save(info)
        logger.info("Updated price source of %s to %s", asset, source.label)
        return info

    def update_multiplier(self, asset: str, multiplier: Any) -> CollateralAssetInfo:
        value = validate_multiplier(multiplier)
        info = self.get(asset).model_copy(update={"multiplier": value})
        self._save(info)
        logger.info("Updated multiplier of %s to %s", asset, value)
        return info

    def list(self) -> list[CollateralAssetInfo]:
        """Return every entry, revoked ones included, ordered by asset identity."""
        entries = [
            CollateralAssetInfo.model_validate_json(raw)
            for _, raw in self.store.range(COLLATERAL_ASSET_PREFIX)
        ]
        return sorted(entries, key=lambda info: info.asset)
