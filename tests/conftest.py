"""Pytest configuration and shared fixtures for shower-map tests."""

from pathlib import Path

import pytest

from shower_map.analysis import Analysis
from shower_map.particles import ParticleTable

FIXTURES = Path(__file__).parent / "fixtures"

# (id, parent, type, value) for the reference shower in fixtures/shower.yaml
REFERENCE_SHOWER = [
    (1, 0, "e-", 0.1),
    (2, 1, "e-", 0.2),
    (3, 2, "e+", 0.3),
    (4, 2, "p", 0.4),
    (5, 2, "p", 0.5),
    (6, 4, "p", 0.6),
    (7, 4, "e-", 0.7),
    (8, 5, "e+", 0.8),
    (9, 2, "p", 0.9),
]


@pytest.fixture(autouse=True)
def _isolate_environment(tmp_path, monkeypatch):
    """Keep tests away from real config files and env overrides."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for var in (
        "SHOWER_MAP_OUTPUT_FORMAT",
        "SHOWER_MAP_PRECISION",
        "SHOWER_MAP_WIDTH",
        "SHOWER_MAP_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)


@pytest.fixture
def particles():
    table = ParticleTable()
    for name in ("e-", "e+", "p"):
        table.get(name)
    return table


@pytest.fixture
def shower(particles):
    """The nine-particle reference shower."""
    analysis = Analysis()
    for node_id, parent_id, type_name, value in REFERENCE_SHOWER:
        analysis.insert(node_id, parent_id, particles.get(type_name), value)
    return analysis
