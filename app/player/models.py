from datetime import date, datetime, timedelta
from sqlalchemy import Integer, String, Date, DateTime, Enum, Index, event
from sqlalchemy.orm import validates, Mapped, mapped_column

from app.db import Base
from app.player.enums import PlayerStatus
from app.player.validators import ERR_NAME_REQUIRED, ERR_BIRTHDAY_NOT_PAST


def normalize_name(name: str) -> str:
    """Clave de comparación del nombre: sin espacios extremos y en casefold (unicode)."""
    return name.strip().casefold()


class Player(Base):
    __tablename__ = "players"
    __table_args__ = (
        Index("idx_status", "status"),
        Index("idx_name", "name"),
        # un solo jugador por nombre, sin distinguir mayúsculas
        Index("uq_players_name_key", "name_key", unique=True),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    name_key: Mapped[str] = mapped_column(String(300), nullable=False)
    birthday: Mapped[date] = mapped_column(Date, nullable=False)
    image_name: Mapped[str | None] = mapped_column(String, nullable=True)
    status: Mapped[PlayerStatus] = mapped_column(
        Enum(PlayerStatus, native_enum=False, length=20),
        nullable=False,
        default=PlayerStatus.ACTIVE,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    @validates("name")
    def validate_name(self, key, value):
        if not value or value.strip() == "":
            raise ValueError(ERR_NAME_REQUIRED)
        self.name_key = normalize_name(value)
        return value

    @validates("birthday")
    def validate_birthday(self, key, value):
        if value is not None and value >= date.today():
            raise ValueError(ERR_BIRTHDAY_NOT_PAST)
        return value


@event.listens_for(Player, "before_insert")
def _on_create(mapper, connection, target: Player):
    now = datetime.now()
    target.created_at = now
    target.updated_at = now
    if target.status is None:
        target.status = PlayerStatus.ACTIVE


@event.listens_for(Player, "before_update")
def _on_update(mapper, connection, target: Player):
    now = datetime.now()
    if target.updated_at is not None and now <= target.updated_at:
        now = target.updated_at + timedelta(microseconds=1)
    target.updated_at = now
