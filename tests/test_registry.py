from __future__ import annotations

from decimal import Decimal

import pytest

from collateral_oracle.domain import BandOracleSource, ReferenceOracleSource
from collateral_oracle.errors import DuplicateAsset, InvalidArgument, NotFound
from collateral_oracle.registry import AssetRegistry
from collateral_oracle.storage import MemoryStore


@pytest.fixture
def registry():
    return AssetRegistry(MemoryStore())


def test_register_and_get(registry):
    registry.register("uluna", ReferenceOracleSource(), Decimal("1.5"))

    info = registry.get("uluna")
    assert info.asset == "uluna"
    assert info.price_source == ReferenceOracleSource()
    assert info.multiplier == Decimal("1.5")
    assert info.is_revoked is False


def test_register_duplicate_keeps_first_entry(registry):
    registry.register("uluna", "reference_oracle", "1.5")

    with pytest.raises(DuplicateAsset, match="uluna"):
        registry.register("uluna", "band_oracle:terra1band", "3")

    info = registry.get("uluna")
    assert info.multiplier == Decimal("1.5")
    assert info.price_source == ReferenceOracleSource()


def test_revoke_unregistered_asset_raises_not_found(registry):
    with pytest.raises(NotFound, match="uluna"):
        registry.revoke("uluna")


def test_revoked_flag_visible_on_get_and_list(registry):
    registry.register("uluna", "reference_oracle", "1")
    registry.register("uusd", "reference_oracle", "1")
    registry.revoke("uluna")

    assert registry.get("uluna").is_revoked is True
    assert registry.get("uluna").is_revoked is True
    assert {info.asset: info.is_revoked for info in registry.list()} == {
        "uluna": True,
        "uusd": False,
    }

    registry.update_multiplier("uluna", "2")
    registry.update_source("uluna", "band_oracle:terra1band")
    assert registry.get("uluna").is_revoked is True


def test_reregistering_revoked_asset_resets_entry(registry):
    registry.register("uluna", "reference_oracle", "1")
    registry.revoke("uluna")

    registry.register("uluna", {"type": "band_oracle", "oracle": "terra1band"}, "0.8")

    info = registry.get("uluna")
    assert info.is_revoked is False
    assert info.multiplier == Decimal("0.8")
    assert info.price_source == BandOracleSource(oracle="terra1band")


def test_update_source_keeps_multiplier_and_flag(registry):
    registry.register("uluna", "reference_oracle", "1.2")

    registry.update_source("uluna", "band_oracle:terra1band")

    info = registry.get("uluna")
    assert info.price_source == BandOracleSource(oracle="terra1band")
    assert info.multiplier == Decimal("1.2")
    assert info.is_revoked is False


def test_update_multiplier_keeps_source(registry):
    registry.register("uluna", "band_oracle:terra1band", "1.2")

    registry.update_multiplier("uluna", Decimal("0"))

    info = registry.get("uluna")
    assert info.multiplier == Decimal("0")
    assert info.price_source == BandOracleSource(oracle="terra1band")


@pytest.mark.parametrize(
    "operation",
    [
        lambda r: r.update_source("uluna", "reference_oracle"),
        lambda r: r.update_multiplier("uluna", "1"),
        lambda r: r.get("uluna"),
    ],
)
def test_operations_on_unregistered_asset_raise_not_found(registry, operation):
    with pytest.raises(NotFound):
        operation(registry)


@pytest.mark.parametrize("multiplier", ["-0.1", Decimal("-1"), "NaN", "Infinity", "abc", 1.5, None])
def test_invalid_multiplier_rejected_on_register(registry, multiplier):
    with pytest.raises(InvalidArgument):
        registry.register("uluna", "reference_oracle", multiplier)

    assert registry.list() == []


def test_invalid_multiplier_rejected_on_update(registry):
    registry.register("uluna", "reference_oracle", "1")

    with pytest.raises(InvalidArgument, match="non-negative"):
        registry.update_multiplier("uluna", "-2")

    assert registry.get("uluna").multiplier == Decimal("1")


@pytest.mark.parametrize("source", ["chainlink", "band_oracle", {"type": "reference_oracle", "x": 1}])
def test_invalid_source_rejected(registry, source):
    with pytest.raises(InvalidArgument):
        registry.register("uluna", source, "1")


def test_empty_asset_identity_rejected(registry):
    with pytest.raises(InvalidArgument):
        registry.register("", "reference_oracle", "1")


def test_list_is_ordered_regardless_of_registration_order(registry):
    for asset in ["uusd", "terra1xyz", "uluna", "terra1abc"]:
        registry.register(asset, "reference_oracle", "1")

    assert [info.asset for info in registry.list()] == [
        "terra1abc",
        "terra1xyz",
        "uluna",
        "uusd",
    ]
