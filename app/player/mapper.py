from datetime import date
from typing import Optional

from app.player.ages import calculate_age
from app.player.dtos import PlayerInDTO, PlayerOutDTO
from app.player.enums import PlayerStatus
from app.player.models import Player


def to_response(player: Optional[Player], today: Optional[date] = None) -> Optional[PlayerOutDTO]:
    """Convierte la entidad Player en PlayerOutDTO, calculando la edad."""
    if player is None:
        return None
    return PlayerOutDTO(
        id=player.id,
        name=player.name,
        birthday=player.birthday,
        image_name=player.image_name,
        status=player.status,
        age=calculate_age(player.birthday, today),
        created_at=player.created_at,
        updated_at=player.updated_at,
    )


def to_entity(player_data: Optional[PlayerInDTO]) -> Optional[Player]:
    """Crea una entidad Player (sin id ni timestamps) a partir del DTO de entrada."""
    if player_data is None:
        return None
    return Player(
        name=player_data.name,
        birthday=player_data.birthday,
        image_name=player_data.image_name,
        status=player_data.status or PlayerStatus.ACTIVE,
    )


def apply_update(player_data: Optional[PlayerInDTO], player: Optional[Player]) -> None:
    """Sobrescribe los campos editables de `player`; id y timestamps no se tocan."""
    if player_data is None or player is None:
        return
    player.name = player_data.name
    player.birthday = player_data.birthday
    player.image_name = player_data.image_name
    player.status = player_data.status or PlayerStatus.ACTIVE
