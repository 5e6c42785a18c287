import pytest

from collateral_oracle.adapters.price_sources import (
    PRICE_SOURCES,
    BandOracleAdapter,
    ReferenceOracleAdapter,
    build_price_source,
    get_price_source_class,
)
from collateral_oracle.domain import BandOracleSource, Config, ReferenceOracleSource
from collateral_oracle.errors import InvalidArgument


@pytest.fixture
def config():
    return Config(
        owner="terra1owner",
        mint_contract="terra1mint",
        base_denom="uusd",
        reference_oracle="terra1reforacle",
    )


def test_every_selector_variant_has_a_price_source(make_querier):
    assert set(PRICE_SOURCES) == {"reference_oracle", "band_oracle"}
    for tag, cls in PRICE_SOURCES.items():
        assert cls(None, make_querier(), None).source_type == tag


def test_get_price_source_class_is_case_insensitive():
    assert get_price_source_class("Reference_Oracle") is ReferenceOracleAdapter


def test_get_price_source_class_rejects_unknown_tag():
    with pytest.raises(InvalidArgument, match="Unknown price source 'native'"):
        get_price_source_class("native")


def test_build_price_source_dispatches_on_selector(config, make_querier):
    querier = make_querier()

    reference = build_price_source(config, querier, ReferenceOracleSource())
    band = build_price_source(config, querier, BandOracleSource(oracle="terra1band"))

    assert isinstance(reference, ReferenceOracleAdapter)
    assert isinstance(band, BandOracleAdapter)
    assert band.source.oracle == "terra1band"
    assert band.querier is querier
