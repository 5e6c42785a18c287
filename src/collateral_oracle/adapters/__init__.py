from __future__ import annotations

from .price_sources import PRICE_SOURCES

__all__ = ["PRICE_SOURCES"]
