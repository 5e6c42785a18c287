"""Application state container."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .querier import LcdQuerier, Querier
from .settings import OracleSettings
from .storage import JsonFileStore, KeyValueStore, MemoryStore


@dataclass
class AppState:
    """Container for application-wide state and dependencies.

    Passed into every oracle operation to avoid global state and enable testing.
    """

    settings: OracleSettings
    logger: logging.Logger
    store: KeyValueStore = field(default_factory=MemoryStore)
    querier: Querier | None = None

    @property
    def querier_required(self) -> Querier:
        if self.querier is None:
            self.querier = LcdQuerier(
                self.settings.lcd_endpoint_required, self.settings.query_timeout
            )
        return self.querier

    @classmethod
    def from_settings(cls, settings: OracleSettings) -> "AppState":
        store: KeyValueStore = (
            JsonFileStore(settings.state_path) if settings.state_path else MemoryStore()
        )
        return cls(
            settings=settings,
            logger=logging.getLogger("collateral_oracle"),
            store=store,
        )
