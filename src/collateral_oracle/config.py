from __future__ import annotations

import logging
from typing import Optional

from pydantic import ValidationError

from .constants import CONFIG_KEY
from .domain import Config
from .errors import InvalidArgument, NotFound
from .storage import KeyValueStore

logger = logging.getLogger(__name__)


class ConfigStore:
    """Singleton oracle config persisted under a single store key."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def initialize(self, config: Config) -> None:
        self.store.set(CONFIG_KEY, config.model_dump_json())
        logger.info(
            "Initialized config: owner=%s base_denom=%s reference_oracle=%s",
            config.owner,
            config.base_denom,
            config.reference_oracle,
        )

    def exists(self) -> bool:
        return self.store.get(CONFIG_KEY) is not None

    def get(self) -> Config:
        raw = self.store.get(CONFIG_KEY)
        if raw is None:
            raise NotFound("Oracle config has not been initialized")
        return Config.model_validate_json(raw)

    def update(
        self,
        owner: Optional[str] = None,
        mint_contract: Optional[str] = None,
        base_denom: Optional[str] = None,
        reference_oracle: Optional[str] = None,
    ) -> Config:
        """Apply the provided fields and leave the others untouched.

        The merged config is validated as a whole before it is written, so a
        rejected field means nothing is applied.

        Raises:
            NotFound: If the config was never initialized
            InvalidArgument: If a provided field is not a valid identity
        """
        current = self.get()
        changes = {
            name: value
            for name, value in (
                ("owner", owner),
                ("mint_contract", mint_contract),
                ("base_denom", base_denom),
                ("reference_oracle", reference_oracle),
            )
            if value is not None
        }
        try:
            merged = Config.model_validate({**current.model_dump(), **changes})
        except ValidationError as e:
            raise InvalidArgument(f"Invalid config update: {e}") from e

        self.store.set(CONFIG_KEY, merged.model_dump_json())
        logger.info("Updated config fields: %s", ", ".join(sorted(changes)) or "none")
        return merged
