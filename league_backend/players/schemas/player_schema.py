from typing import Optional
from pydantic import BaseModel, ConfigDict


class PlayerCreate(BaseModel):
    name: str
    position: str
    number: int
    team_id: str
    is_manager: bool = False
    photo: Optional[str] = None


class PlayerUpdate(BaseModel):
    name: Optional[str] = None
    position: Optional[str] = None
    number: Optional[int] = None
    team_id: Optional[str] = None
    is_manager: Optional[bool] = None
    photo: Optional[str] = None


class PlayerOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    player_id: str
    name: str
    position: str
    number: int
    team_id: str
    is_manager: bool = False
    photo: Optional[str] = None
