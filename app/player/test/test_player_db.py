from datetime import date, datetime, timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from app.db import Base
from app.player.enums import PlayerStatus
from app.player.models import Player


@pytest.fixture
def engine():
    """Engine SQLite en memoria para testing."""
    return create_engine("sqlite:///:memory:", echo=False)


@pytest.fixture
def session(engine):
    """Crea solo la tabla 'players' y devuelve una sesión limpia por test."""
    Base.metadata.create_all(bind=engine, tables=[Player.__table__])
    session = sessionmaker(bind=engine)()
    yield session
    session.rollback()
    session.close()


def test_create_valid_player_persists_and_generates_id(session):
    p = Player(name="Virat", birthday=date(1988, 11, 5))
    session.add(p)
    session.commit()

    saved = session.query(Player).one()
    assert saved.name == "Virat"
    assert saved.birthday == date(1988, 11, 5)
    assert isinstance(saved.id, int)
    assert saved.image_name is None


def test_status_defaults_to_active(session):
    p = Player(name="Rohit", birthday=date(1987, 4, 30))
    session.add(p)
    session.commit()
    session.refresh(p)
    assert p.status is PlayerStatus.ACTIVE


def test_inactive_status_is_stored(session):
    p = Player(name="Dhoni", birthday=date(1981, 7, 7), status=PlayerStatus.INACTIVE)
    session.add(p)
    session.commit()

    saved = session.query(Player).filter_by(name="Dhoni").one()
    assert saved.status is PlayerStatus.INACTIVE


def test_timestamps_are_equal_on_insert(session):
    p = Player(name="Bumrah", birthday=date(1993, 12, 6))
    session.add(p)
    session.commit()

    assert isinstance(p.created_at, datetime)
    assert p.created_at == p.updated_at


def test_update_refreshes_updated_at_only(session):
    p = Player(name="Jadeja", birthday=date(1988, 12, 6))
    session.add(p)
    session.commit()
    created_at, updated_at = p.created_at, p.updated_at

    p.image_name = "jadeja.png"
    session.commit()
    session.refresh(p)

    assert p.created_at == created_at
    assert p.updated_at > updated_at


def test_ids_are_sequential_and_distinct(session):
    a = Player(name="A", birthday=date(1990, 1, 1))
    b = Player(name="B", birthday=date(1991, 2, 2))
    session.add_all([a, b])
    session.commit()

    assert a.id != b.id


def test_name_is_unique_ignoring_case(session):
    session.add(Player(name="Shami", birthday=date(1990, 9, 3)))
    session.commit()

    session.add(Player(name="SHAMI", birthday=date(1991, 1, 1)))
    with pytest.raises(IntegrityError):
        session.commit()


def test_name_is_unique_ignoring_non_ascii_case(session):
    session.add(Player(name="Élise", birthday=date(1990, 9, 3)))
    session.commit()

    session.add(Player(name="ÉLISE", birthday=date(1991, 1, 1)))
    with pytest.raises(IntegrityError):
        session.commit()


def test_name_key_follows_name(session):
    p = Player(name="  Straße ", birthday=date(1990, 9, 3))
    assert p.name_key == "strasse"
    session.add(p)
    session.commit()

    p.name = "Élise"
    session.commit()
    session.refresh(p)
    assert p.name_key == "élise"


def test_unique_name_key_index_exists(engine, session):
    with engine.connect() as conn:
        rows = conn.exec_driver_sql(
            "SELECT name, sql FROM sqlite_master WHERE type='index' AND tbl_name='players'"
        ).fetchall()
    indexes = {name: sql for name, sql in rows}
    assert "UNIQUE" in indexes["uq_players_name_key"].upper()
    assert "name_key" in indexes["uq_players_name_key"]
    assert "idx_status" in indexes
    assert "idx_name" in indexes


def test_whitespace_only_name_raises_value_error_on_construction():
    with pytest.raises(ValueError, match="Player name is required"):
        Player(name="   ", birthday=date(2000, 1, 1))


def test_none_name_raises_value_error_on_construction():
    with pytest.raises(ValueError, match="Player name is required"):
        Player(name=None, birthday=date(2000, 1, 1))


def test_birthday_cannot_be_future_on_construction():
    future = date.today() + timedelta(days=10)
    with pytest.raises(ValueError, match="Birthday must be in the past"):
        Player(name="Futuro", birthday=future)


def test_birthday_today_is_rejected_on_construction():
    with pytest.raises(ValueError, match="Birthday must be in the past"):
        Player(name="Hoy", birthday=date.today())


def test_missing_birthday_raises_integrity_error_on_commit(session):
    p = Player(name="SinFecha")
    session.add(p)
    with pytest.raises(IntegrityError):
        session.commit()


def test_missing_name_raises_integrity_error_on_commit(session):
    p = Player(birthday=date(2000, 1, 1))
    session.add(p)
    with pytest.raises(IntegrityError):
        session.commit()
