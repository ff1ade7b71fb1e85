import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.player import mapper
from app.player.ages import birthday_bounds
from app.player.dtos import PlayerInDTO, PlayerOutDTO
from app.player.enums import PlayerStatus
from app.player.exceptions import PlayerConflict, PlayerNotFound
from app.player.models import Player, normalize_name
from app.player.validators import validate_player_in

logger = logging.getLogger(__name__)


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class PlayerService:
    def __init__(self, db: Session):
        self.db = db

    def _to_dtos(self, players: List[Player]) -> List[PlayerOutDTO]:
        today = date.today()
        return [mapper.to_response(player, today) for player in players]

    def _find_by_name(self, name: str) -> Optional[Player]:
        return (
            self.db.query(Player)
            .filter(Player.name_key == normalize_name(name))
            .first()
        )

    def _commit(self, name: str) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            # uq_players_name_key: otro escritor se quedó con el nombre entre el chequeo y el commit
            self.db.rollback()
            raise PlayerConflict(name) from e
        except Exception:
            self.db.rollback()
            raise

    def get_players(self) -> List[PlayerOutDTO]:
        """Devuelve todos los jugadores"""
        logger.info("Fetching all players")
        players = self.db.query(Player).order_by(Player.id).all()
        return self._to_dtos(players)

    def get_player_entity_by_id(self, player_id: int) -> Optional[Player]:
        """Devuelve la entidad Player por su ID (uso interno)"""
        return self.db.query(Player).filter(Player.id == player_id).first()

    def get_player_by_id(self, player_id: int) -> PlayerOutDTO:
        """Devuelve un jugador por su ID"""
        logger.info("Fetching player with id: %s", player_id)
        player = self.get_player_entity_by_id(player_id)
        if not player:
            raise PlayerNotFound(player_id)
        return mapper.to_response(player)

    def create_player(self, player_data: PlayerInDTO) -> PlayerOutDTO:
        """
        Crea un nuevo jugador.

        Falla con PlayerValidationFailed si los datos son inválidos y con
        PlayerConflict si ya existe un jugador con el mismo nombre
        (sin distinguir mayúsculas).
        """
        player_data = validate_player_in(player_data)
        logger.info("Creating new player: %s", player_data.name)
        if self._find_by_name(player_data.name):
            raise PlayerConflict(player_data.name)

        new_player = mapper.to_entity(player_data)
        self.db.add(new_player)
        self._commit(player_data.name)
        self.db.refresh(new_player)
        logger.info("Player created successfully with id: %s", new_player.id)
        return mapper.to_response(new_player)

    def update_player(self, player_id: int, player_data: PlayerInDTO) -> PlayerOutDTO:
        """
        Actualiza nombre, fecha de nacimiento, imagen y status de un jugador.

        Mantener el propio nombre no es conflicto; usar el de otro jugador sí.
        """
        logger.info("Updating player with id: %s", player_id)
        player = self.get_player_entity_by_id(player_id)
        if not player:
            raise PlayerNotFound(player_id)

        player_data = validate_player_in(player_data)
        holder = self._find_by_name(player_data.name)
        if holder is not None and holder.id != player_id:
            raise PlayerConflict(player_data.name)

        mapper.apply_update(player_data, player)
        self._commit(player_data.name)
        self.db.refresh(player)
        logger.info("Player updated successfully with id: %s", player_id)
        return mapper.to_response(player)

    def delete_player(self, player_id: int) -> int:
        """Elimina un jugador por su ID"""
        logger.info("Deleting player with id: %s", player_id)
        player = self.get_player_entity_by_id(player_id)
        if not player:
            raise PlayerNotFound(player_id)
        self.db.delete(player)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info("Player deleted successfully with id: %s", player_id)
        return player_id

    def get_players_by_status(self, status: PlayerStatus) -> List[PlayerOutDTO]:
        logger.info("Fetching players with status: %s", status.value)
        players = (
            self.db.query(Player)
            .filter(Player.status == status)
            .order_by(Player.id)
            .all()
        )
        return self._to_dtos(players)

    def search_players_by_name(self, term: str) -> List[PlayerOutDTO]:
        """Búsqueda por substring sin distinguir mayúsculas; '' devuelve todos."""
        logger.info("Searching players with name containing: %s", term)
        query = self.db.query(Player)
        if term:
            query = query.filter(
                Player.name_key.like(f"%{_escape_like(term.casefold())}%", escape="\\")
            )
        return self._to_dtos(query.order_by(Player.id).all())

    def get_players_by_age_range(self, min_age: int, max_age: int) -> List[PlayerOutDTO]:
        """
        Jugadores cuya edad (año actual menos año de nacimiento, la misma
        que se muestra) está en [min_age, max_age]. Se traduce a un
        intervalo de fechas de nacimiento para filtrar en la base.
        """
        logger.info("Fetching players with age between %s and %s", min_age, max_age)
        today = date.today()
        if min_age > max_age or today.year - min_age < date.min.year:
            return []
        desde, hasta = birthday_bounds(min_age, max_age, today)
        players = (
            self.db.query(Player)
            .filter(Player.birthday.between(desde, hasta))
            .order_by(Player.id)
            .all()
        )
        return self._to_dtos(players)

    def get_players_by_birthday_range(self, start_date: date, end_date: date) -> List[PlayerOutDTO]:
        logger.info("Fetching players born between %s and %s", start_date, end_date)
        players = (
            self.db.query(Player)
            .filter(Player.birthday.between(start_date, end_date))
            .order_by(Player.id)
            .all()
        )
        return self._to_dtos(players)

    def count_players_by_status(self, status: PlayerStatus) -> int:
        logger.info("Counting players with status: %s", status.value)
        return self.db.query(Player).filter(Player.status == status).count()

    def get_active_players_count(self) -> int:
        return self.count_players_by_status(PlayerStatus.ACTIVE)

    def get_inactive_players_count(self) -> int:
        return self.count_players_by_status(PlayerStatus.INACTIVE)

    def get_total_players_count(self) -> int:
        return self.get_active_players_count() + self.get_inactive_players_count()
