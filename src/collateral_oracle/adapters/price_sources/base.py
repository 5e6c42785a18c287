from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from ...domain import Config, PriceQuote
from ...errors import UpstreamQueryFailed
from ...querier import Querier

logger = logging.getLogger(__name__)

ResponseT = TypeVar("ResponseT", bound=BaseModel)


class BasePriceSource(ABC):
    """Abstract base class for price sources.

    A price source is built for one source selector and answers the rate of
    an asset quoted in the configured base denomination.
    """

    def __init__(self, config: Config, querier: Querier, source: Any):
        """Initialize the price source.

        Args:
            config: Oracle config (reference oracle address, base denomination)
            querier: Transport used for upstream queries
            source: The selector this source was dispatched for
        """
        self.config = config
        self.querier = querier
        self.source = source

    @property
    @abstractmethod
    def source_type(self) -> str:
        """Return the label of the selector this source handles."""
        ...

    @abstractmethod
    def fetch_price(self, asset: str) -> PriceQuote:
        """Fetch the rate of ``asset`` against the base denomination.

        Raises:
            UpstreamQueryFailed: If the upstream call fails or its payload is malformed
        """
        ...

    def query(self, contract: str, msg: dict[str, Any], response_model: type[ResponseT]) -> ResponseT:
        """Run a smart query and validate the response against ``response_model``."""
        try:
            data = self.querier.query_smart(contract, msg)
        except UpstreamQueryFailed as e:
            logger.error("%s query to %s failed: %s", self.source_type, contract, e)
            raise

        try:
            return response_model.model_validate(data)
        except ValidationError as e:
            logger.error(
                "%s returned a malformed %s payload: %s",
                contract,
                response_model.__name__,
                data,
            )
            raise UpstreamQueryFailed(
                f"Malformed response from {contract}: {e.error_count()} validation error(s)"
            ) from e
