"""Tests for conditions and particle definitions."""

from shower_map.conditions import (
    accept_all,
    all_of,
    any_of,
    min_quantity,
    negate,
    particle_type,
)
from shower_map.particles import ParticleDefinition, ParticleTable, TrackData


def test_particle_definitions_compare_by_identity():
    a = ParticleDefinition("e-")
    b = ParticleDefinition("e-")
    assert a != b
    assert a == a
    assert str(a) == "e-"


def test_particle_table_interns_by_name():
    table = ParticleTable()
    electron = table.get("e-")
    assert table.get("e-") is electron
    assert "e-" in table
    assert "p" not in table
    table.get("p")
    assert len(table) == 2
    assert [d.name for d in table] == ["e-", "p"]


def test_accept_all():
    assert accept_all(TrackData(ParticleDefinition("x"), 0.0))


def test_particle_type_uses_identity():
    electron = ParticleDefinition("e-")
    impostor = ParticleDefinition("e-")
    cond = particle_type(electron)
    assert cond(TrackData(electron, 1.0))
    assert not cond(TrackData(impostor, 1.0))


def test_min_quantity():
    pdef = ParticleDefinition("p")
    cond = min_quantity(0.5)
    assert cond(TrackData(pdef, 0.5))
    assert not cond(TrackData(pdef, 0.4))


def test_combinators():
    electron = ParticleDefinition("e-")
    proton = ParticleDefinition("p")
    either = any_of(particle_type(electron), particle_type(proton))
    big_proton = all_of(particle_type(proton), min_quantity(1.0))

    assert either(TrackData(electron, 0.0))
    assert either(TrackData(proton, 0.0))
    assert not either(TrackData(ParticleDefinition("n"), 0.0))

    assert big_proton(TrackData(proton, 2.0))
    assert not big_proton(TrackData(proton, 0.5))
    assert not big_proton(TrackData(electron, 2.0))

    assert negate(particle_type(electron))(TrackData(proton, 0.0))
    assert not any_of()(TrackData(proton, 0.0))
    assert all_of()(TrackData(proton, 0.0))
