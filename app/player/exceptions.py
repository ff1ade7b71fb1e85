from typing import List

from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)


# === Mensajes ===
ERR_PLAYER_NOT_FOUND = "Player not found with id: {player_id}"
ERR_PLAYER_DUPLICATE = "Player with name '{name}' already exists"
ERR_VALIDATION_FAILED = "Input validation failed"


# === Excepciones de dominio ===
class PlayerError(Exception):
    """Base de los errores del servicio; cada subclase fija su status HTTP."""
    status_code = HTTP_500_INTERNAL_SERVER_ERROR
    error = "Internal Server Error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class PlayerNotFound(PlayerError):
    status_code = HTTP_404_NOT_FOUND
    error = "Not Found"

    def __init__(self, player_id: int):
        super().__init__(ERR_PLAYER_NOT_FOUND.format(player_id=player_id))
        self.player_id = player_id


class PlayerConflict(PlayerError):
    status_code = HTTP_409_CONFLICT
    error = "Conflict"

    def __init__(self, name: str):
        super().__init__(ERR_PLAYER_DUPLICATE.format(name=name))
        self.name = name


class PlayerValidationFailed(PlayerError):
    status_code = HTTP_400_BAD_REQUEST
    error = "Validation Failed"

    def __init__(self, errors: List[str]):
        super().__init__(ERR_VALIDATION_FAILED)
        self.errors = errors
