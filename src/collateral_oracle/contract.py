"""Dispatch of boundary messages onto :class:`OracleService`."""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import BaseModel, ValidationError

from .errors import InvalidArgument
from .msg import (
    EXECUTE_MESSAGES,
    QUERY_MESSAGES,
    CollateralInfosResponse,
    ConfigResponse,
    InstantiateMsg,
    QueryCollateralAssetInfo,
    QueryCollateralAssetInfos,
    QueryCollateralPrice,
    QueryConfig,
    RegisterCollateralAsset,
    RevokeCollateralAsset,
    UpdateCollateralMultiplier,
    UpdateCollateralPriceSource,
    UpdateConfig,
)
from .service import OracleService

logger = logging.getLogger(__name__)

Payload = str | bytes | dict[str, Any]


def _load(payload: Payload) -> Any:
    if isinstance(payload, (str, bytes)):
        try:
            return json.loads(payload)
        except ValueError as e:
            raise InvalidArgument(f"Message is not valid JSON: {e}") from e
    return payload


def _validate(model: type[BaseModel], body: Any) -> Any:
    try:
        return model.model_validate(body if body is not None else {})
    except ValidationError as e:
        raise InvalidArgument(f"Invalid {model.__name__} message: {e}") from e


def parse_message(payload: Payload, kinds: dict[str, type[BaseModel]]) -> BaseModel:
    """Parse an externally tagged message into its model.

    Raises:
        InvalidArgument: If the payload is not a single known message
    """
    data = _load(payload)
    if not isinstance(data, dict) or len(data) != 1:
        raise InvalidArgument(
            f"Message must be an object with exactly one of: {', '.join(kinds)}"
        )
    (name, body), = data.items()
    if name not in kinds:
        raise InvalidArgument(f"Unknown message '{name}'. Available: {', '.join(kinds)}")
    return _validate(kinds[name], body)


def instantiate(service: OracleService, payload: Payload) -> None:
    msg: InstantiateMsg = _validate(InstantiateMsg, _load(payload))
    service.instantiate(
        owner=msg.owner,
        mint_contract=msg.mint_contract,
        base_denom=msg.base_denom,
        reference_oracle=msg.reference_oracle,
    )


def execute(service: OracleService, payload: Payload) -> None:
    """Apply one mutating message. The caller must already be authorized."""
    msg = parse_message(payload, EXECUTE_MESSAGES)
    logger.debug("Executing %s", type(msg).__name__)

    if isinstance(msg, UpdateConfig):
        service.update_config(
            owner=msg.owner,
            mint_contract=msg.mint_contract,
            base_denom=msg.base_denom,
            reference_oracle=msg.reference_oracle,
        )
    elif isinstance(msg, RegisterCollateralAsset):
        service.register_collateral_asset(msg.asset, msg.price_source, msg.multiplier)
    elif isinstance(msg, RevokeCollateralAsset):
        service.revoke_collateral_asset(msg.asset)
    elif isinstance(msg, UpdateCollateralPriceSource):
        service.update_collateral_price_source(msg.asset, msg.price_source)
    elif isinstance(msg, UpdateCollateralMultiplier):
        service.update_collateral_multiplier(msg.asset, msg.multiplier)
    else:  # pragma: no cover
        raise InvalidArgument(f"Unhandled execute message {type(msg).__name__}")


def query(service: OracleService, payload: Payload) -> dict[str, Any]:
    """Answer one query message with its JSON-ready response."""
    msg = parse_message(payload, QUERY_MESSAGES)
    logger.debug("Querying %s", type(msg).__name__)

    response: BaseModel
    if isinstance(msg, QueryConfig):
        response = ConfigResponse(**service.get_config().model_dump())
    elif isinstance(msg, QueryCollateralPrice):
        response = service.get_price(msg.asset, msg.block_height)
    elif isinstance(msg, QueryCollateralAssetInfo):
        response = service.get_asset_info(msg.asset)
    elif isinstance(msg, QueryCollateralAssetInfos):
        response = CollateralInfosResponse(collaterals=service.list_asset_infos())
    else:  # pragma: no cover
        raise InvalidArgument(f"Unhandled query message {type(msg).__name__}")
    return response.model_dump(mode="json")
