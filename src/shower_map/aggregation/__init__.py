"""Aggregation engine for rolling up quantities in the forest."""

from shower_map.aggregation.engine import ShowerMap

__all__ = ["ShowerMap"]
