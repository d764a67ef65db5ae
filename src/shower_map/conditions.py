"""Conditions: predicates used to select nodes by their payload.

A condition is any callable taking a ``TrackData`` and returning a bool.
"""

from __future__ import annotations

from typing import Any, Callable

from shower_map.particles import ParticleDefinition, TrackData

Condition = Callable[[TrackData[Any]], bool]


def accept_all(data: TrackData[Any]) -> bool:
    """Condition that matches every payload."""
    return True


def particle_type(pdef: ParticleDefinition) -> Condition:
    """Match payloads whose species is exactly pdef (identity comparison)."""

    def _matches(data: TrackData[Any]) -> bool:
        return data.pdef is pdef

    return _matches


def min_quantity(threshold: float) -> Condition:
    """Match payloads whose quantity is at least threshold."""

    def _matches(data: TrackData[Any]) -> bool:
        return data.data >= threshold

    return _matches


def any_of(*conditions: Condition) -> Condition:
    """Match if at least one condition matches. Empty matches nothing."""

    def _matches(data: TrackData[Any]) -> bool:
        return any(cond(data) for cond in conditions)

    return _matches


def all_of(*conditions: Condition) -> Condition:
    """Match if every condition matches. Empty matches everything."""

    def _matches(data: TrackData[Any]) -> bool:
        return all(cond(data) for cond in conditions)

    return _matches


def negate(condition: Condition) -> Condition:
    """Match payloads the given condition rejects."""

    def _matches(data: TrackData[Any]) -> bool:
        return not condition(data)

    return _matches
