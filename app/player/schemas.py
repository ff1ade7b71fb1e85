from datetime import date, datetime
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.player.dtos import PlayerInDTO, PlayerOutDTO
from app.player.enums import PlayerStatus
from app.player.validators import check_birthday, check_name, check_status

T = TypeVar("T")


class PlayerIn(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = Field(...)
    birthday: date = Field(...)
    image_name: Optional[str] = Field(None)
    status: Optional[PlayerStatus] = Field(None)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        return check_name(value)

    @field_validator("birthday")
    @classmethod
    def validate_birthday(cls, value: date) -> date:
        return check_birthday(value)

    @field_validator("status", mode="before")
    @classmethod
    def validate_status(cls, value):
        return check_status(value)

    def to_dto(self) -> PlayerInDTO:
        return PlayerInDTO(
            name=self.name,
            birthday=self.birthday,
            image_name=self.image_name,
            status=self.status,
        )


class PlayerOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int = Field(...)
    name: str = Field(..., min_length=1)
    birthday: date = Field(...)
    image_name: Optional[str] = Field(None)
    status: PlayerStatus = Field(...)
    age: int = Field(...)
    created_at: Optional[datetime] = Field(None)
    updated_at: Optional[datetime] = Field(None)

    def to_dto(self) -> PlayerOutDTO:
        return PlayerOutDTO(
            id=self.id,
            name=self.name,
            birthday=self.birthday,
            image_name=self.image_name,
            status=self.status,
            age=self.age,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class ApiResponse(BaseModel, Generic[T]):
    """Envoltorio uniforme de todas las respuestas exitosas."""
    success: bool = Field(...)
    message: str = Field(...)
    data: Optional[T] = Field(None)
    timestamp: datetime = Field(default_factory=datetime.now)

    @classmethod
    def ok(cls, message: str, data: Optional[T] = None) -> "ApiResponse[T]":
        return cls(success=True, message=message, data=data)


class ErrorResponse(BaseModel):
    timestamp: datetime = Field(default_factory=datetime.now)
    status: int = Field(...)
    error: str = Field(...)
    message: str = Field(...)
    path: str = Field(...)
    errors: Optional[List[str]] = Field(None)
