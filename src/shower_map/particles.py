"""Particle definitions and per-track payloads."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Iterator, TypeVar

Q = TypeVar("Q")


@dataclass(frozen=True, eq=False)
class ParticleDefinition:
    """A particle species.

    Compared by identity: two definitions are the same species only if they
    are the same object, regardless of name.
    """

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class TrackData(Generic[Q]):
    """Payload of a node: the species tag and an accumulable quantity."""

    pdef: ParticleDefinition
    data: Q


class ParticleTable:
    """Interns particle definitions by name."""

    def __init__(self) -> None:
        self._defs: dict[str, ParticleDefinition] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._defs

    def __iter__(self) -> Iterator[ParticleDefinition]:
        return iter(self._defs.values())

    def __len__(self) -> int:
        return len(self._defs)

    def get(self, name: str) -> ParticleDefinition:
        """Return the definition for name, creating it on first use."""
        pdef = self._defs.get(name)
        if pdef is None:
            pdef = ParticleDefinition(name)
            self._defs[name] = pdef
        return pdef
