from datetime import date
from typing import List, Optional

from app.player.dtos import PlayerInDTO
from app.player.enums import PlayerStatus
from app.player.exceptions import PlayerValidationFailed

NAME_MAX_LENGTH = 100

ERR_NAME_REQUIRED = "Player name is required and cannot be blank"
ERR_NAME_TOO_LONG = f"Player name must be at most {NAME_MAX_LENGTH} characters"
ERR_BIRTHDAY_REQUIRED = "Birthday is required"
ERR_BIRTHDAY_NOT_PAST = "Birthday must be in the past"
ERR_STATUS_INVALID = "Status must be one of " + ", ".join(s.value for s in PlayerStatus)


def check_name(name: Optional[str]) -> str:
    if name is None or name.strip() == "":
        raise ValueError(ERR_NAME_REQUIRED)
    name = name.strip()
    if len(name) > NAME_MAX_LENGTH:
        raise ValueError(ERR_NAME_TOO_LONG)
    return name


def check_birthday(birthday: Optional[date]) -> date:
    if birthday is None:
        raise ValueError(ERR_BIRTHDAY_REQUIRED)
    if birthday >= date.today():
        raise ValueError(ERR_BIRTHDAY_NOT_PAST)
    return birthday


def check_status(status) -> Optional[PlayerStatus]:
    """Acepta cualquier combinación de mayúsculas; None significa el valor por defecto."""
    if status is None or isinstance(status, PlayerStatus):
        return status
    try:
        return PlayerStatus(str(status).strip().upper())
    except ValueError:
        raise ValueError(ERR_STATUS_INVALID) from None


def validate_player_in(player_data: PlayerInDTO) -> PlayerInDTO:
    """
    Valida los datos de entrada de un jugador.

    Junta un error por campo y lanza PlayerValidationFailed si hay alguno.
    Devuelve el DTO normalizado (nombre recortado, status canónico).
    """
    errors: List[str] = []
    checks = (
        ("name", check_name, player_data.name),
        ("birthday", check_birthday, player_data.birthday),
        ("status", check_status, player_data.status),
    )
    cleaned = {}
    for field, check, value in checks:
        try:
            cleaned[field] = check(value)
        except ValueError as e:
            errors.append(f"{field}: {e}")
    if errors:
        raise PlayerValidationFailed(errors)
    return PlayerInDTO(
        name=cleaned["name"],
        birthday=cleaned["birthday"],
        image_name=player_data.image_name,
        status=cleaned["status"],
    )
