from __future__ import annotations

import logging
from typing import Any

import pytest

from collateral_oracle.errors import UpstreamQueryFailed
from collateral_oracle.querier import Querier
from collateral_oracle.service import OracleService
from collateral_oracle.settings import OracleSettings
from collateral_oracle.state import AppState
from collateral_oracle.storage import MemoryStore


class StubQuerier(Querier):
    """Querier answering from a fixed table of ``contract -> response``."""

    def __init__(self, responses: dict[str, Any] | None = None):
        self.responses = dict(responses or {})
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def query_smart(self, contract: str, msg: dict[str, Any]) -> Any:
        self.calls.append((contract, msg))
        response = self.responses.get(contract)
        if response is None:
            raise UpstreamQueryFailed(f"no route to {contract}")
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def settings():
    return OracleSettings(lcd_endpoint="https://lcd.example", query_timeout=1.0)


@pytest.fixture
def querier():
    return StubQuerier(
        {"terra1reforacle": {"rate": "1.25", "last_updated_base": 1_650_000_000}}
    )


@pytest.fixture
def state(settings, querier):
    return AppState(
        settings=settings,
        logger=logging.getLogger("test"),
        store=MemoryStore(),
        querier=querier,
    )


@pytest.fixture
def service(state):
    svc = OracleService(state)
    svc.instantiate(
        owner="terra1owner",
        mint_contract="terra1mint",
        base_denom="uusd",
        reference_oracle="terra1reforacle",
    )
    return svc


@pytest.fixture
def make_querier():
    return StubQuerier
