from dataclasses import dataclass
from typing import Optional
from datetime import date, datetime

from app.player.enums import PlayerStatus

@dataclass
class PlayerInDTO:
    name: str
    birthday: date
    image_name: Optional[str] = None
    status: Optional[PlayerStatus] = None

@dataclass
class PlayerOutDTO:
    id: int
    name: str
    birthday: date
    status: PlayerStatus
    age: int
    image_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
