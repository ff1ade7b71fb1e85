from datetime import date
from typing import List

from fastapi import APIRouter, Depends, Query, status

from app.db import get_db
from app.player.dtos import PlayerOutDTO
from app.player.exceptions import PlayerValidationFailed
from app.player.schemas import ApiResponse, PlayerIn, PlayerOut
from app.player.service import PlayerService
from app.player.validators import check_status

player_router = APIRouter(prefix="/api/players", tags=["players"])


def _out(player: PlayerOutDTO) -> PlayerOut:
    return PlayerOut.model_validate(player)


def _out_list(players: List[PlayerOutDTO]) -> List[PlayerOut]:
    return [_out(player) for player in players]


@player_router.get("")
def get_players(db=Depends(get_db)) -> ApiResponse[List[PlayerOut]]:
    """Retorna la lista de todos los jugadores."""
    players = PlayerService(db).get_players()
    return ApiResponse.ok("Players retrieved successfully", _out_list(players))


@player_router.post("", status_code=status.HTTP_201_CREATED)
def create_player(player_data: PlayerIn, db=Depends(get_db)) -> ApiResponse[PlayerOut]:
    """
    Crea un nuevo jugador.

    Parametros
    player_data : PlayerIn
        Datos del jugador a crear.

    raise
    PlayerValidationFailed (400) si los datos son inválidos.
    PlayerConflict (409) si el nombre ya está en uso.
    """
    player = PlayerService(db).create_player(player_data.to_dto())
    return ApiResponse.ok("Player created successfully", _out(player))


@player_router.get("/status/{player_status}")
def get_players_by_status(player_status: str, db=Depends(get_db)) -> ApiResponse[List[PlayerOut]]:
    """Retorna los jugadores con el status dado (ACTIVE / INACTIVE)."""
    try:
        wanted = check_status(player_status)
    except ValueError as e:
        raise PlayerValidationFailed([f"status: {e}"]) from e
    players = PlayerService(db).get_players_by_status(wanted)
    return ApiResponse.ok("Players retrieved successfully", _out_list(players))


@player_router.get("/search")
def search_players_by_name(
    name: str = Query("", description="Parte del nombre, sin distinguir mayúsculas"),
    db=Depends(get_db),
) -> ApiResponse[List[PlayerOut]]:
    players = PlayerService(db).search_players_by_name(name)
    return ApiResponse.ok("Search completed successfully", _out_list(players))


@player_router.get("/age-range")
def get_players_by_age_range(
    min_age: int = Query(..., alias="minAge", ge=0),
    max_age: int = Query(..., alias="maxAge", ge=0),
    db=Depends(get_db),
) -> ApiResponse[List[PlayerOut]]:
    players = PlayerService(db).get_players_by_age_range(min_age, max_age)
    return ApiResponse.ok("Players retrieved successfully", _out_list(players))


@player_router.get("/birthday-range")
def get_players_by_birthday_range(
    start_date: date = Query(..., alias="startDate"),
    end_date: date = Query(..., alias="endDate"),
    db=Depends(get_db),
) -> ApiResponse[List[PlayerOut]]:
    players = PlayerService(db).get_players_by_birthday_range(start_date, end_date)
    return ApiResponse.ok("Players retrieved successfully", _out_list(players))


@player_router.get("/count/active")
def get_active_players_count(db=Depends(get_db)) -> ApiResponse[int]:
    count = PlayerService(db).get_active_players_count()
    return ApiResponse.ok("Active players count retrieved", count)


@player_router.get("/count/inactive")
def get_inactive_players_count(db=Depends(get_db)) -> ApiResponse[int]:
    count = PlayerService(db).get_inactive_players_count()
    return ApiResponse.ok("Inactive players count retrieved", count)


@player_router.get("/count/total")
def get_total_players_count(db=Depends(get_db)) -> ApiResponse[int]:
    count = PlayerService(db).get_total_players_count()
    return ApiResponse.ok("Total players count retrieved", count)


# Las rutas con {player_id} van al final para no tapar /search, /count/...
@player_router.get("/{player_id}")
def get_player_by_id(player_id: int, db=Depends(get_db)) -> ApiResponse[PlayerOut]:
    """
    Retorna un jugador por su ID.

    Parametros
    player_id: ID del jugador a buscar.
    """
    player = PlayerService(db).get_player_by_id(player_id)
    return ApiResponse.ok("Player retrieved successfully", _out(player))


@player_router.put("/{player_id}")
def update_player(player_id: int, player_data: PlayerIn, db=Depends(get_db)) -> ApiResponse[PlayerOut]:
    player = PlayerService(db).update_player(player_id, player_data.to_dto())
    return ApiResponse.ok("Player updated successfully", _out(player))


@player_router.delete("/{player_id}")
def delete_player(player_id: int, db=Depends(get_db)) -> ApiResponse[None]:
    PlayerService(db).delete_player(player_id)
    return ApiResponse.ok("Player deleted successfully")
