from decimal import Decimal

import pytest

from collateral_oracle.adapters.price_sources.band_oracle import BandOracleAdapter
from collateral_oracle.domain import BandOracleSource, Config
from collateral_oracle.errors import UpstreamQueryFailed


@pytest.fixture
def config():
    return Config(
        owner="terra1owner",
        mint_contract="terra1mint",
        base_denom="USD",
        reference_oracle="terra1reforacle",
    )


def test_fetch_price_normalizes_1e18_rate(config, make_querier):
    querier = make_querier(
        {
            "terra1band": {
                "rate": "3493968700000000000000",
                "last_updated_base": 1_650_000_000,
                "last_updated_quote": 1_650_000_005,
            }
        }
    )
    adapter = BandOracleAdapter(config, querier, BandOracleSource(oracle="terra1band"))

    quote = adapter.fetch_price("ETH")

    assert quote.rate == Decimal("3493.9687")
    assert f"{quote.rate:f}" == "3493.968700000000000000"
    assert quote.last_updated == 1_650_000_000
    assert querier.calls == [
        ("terra1band", {"get_reference_data": {"base_symbol": "ETH", "quote_symbol": "USD"}})
    ]


def test_fetch_price_accepts_integer_rate(config, make_querier):
    querier = make_querier({"terra1band": {"rate": 1234, "last_updated_base": 7}})
    adapter = BandOracleAdapter(config, querier, BandOracleSource(oracle="terra1band"))

    assert f"{adapter.fetch_price('ETH').rate:f}" == "0.000000000000001234"


def test_fetch_price_does_not_use_reference_oracle(config, make_querier):
    querier = make_querier({"terra1reforacle": {"rate": "1", "last_updated_base": 1}})
    adapter = BandOracleAdapter(config, querier, BandOracleSource(oracle="terra1band"))

    with pytest.raises(UpstreamQueryFailed):
        adapter.fetch_price("ETH")
    assert [contract for contract, _ in querier.calls] == ["terra1band"]


@pytest.mark.parametrize("rate", ["12a4", "-100", "1.5", 1.5, None])
def test_malformed_rate_raises_upstream_query_failed(config, make_querier, rate):
    querier = make_querier({"terra1band": {"rate": rate, "last_updated_base": 1}})
    adapter = BandOracleAdapter(config, querier, BandOracleSource(oracle="terra1band"))

    with pytest.raises(UpstreamQueryFailed):
        adapter.fetch_price("ETH")
