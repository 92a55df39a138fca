from typing import Optional
from pydantic import BaseModel, ConfigDict


class TeamCreate(BaseModel):
    name: str
    primary_color: str = ""
    founded: str = ""
    stadium: str = ""
    logo: Optional[str] = None


class TeamUpdate(BaseModel):
    name: Optional[str] = None
    primary_color: Optional[str] = None
    founded: Optional[str] = None
    stadium: Optional[str] = None
    logo: Optional[str] = None


class TeamOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    team_id: str
    name: str
    primary_color: str
    founded: str
    stadium: str
    logo: Optional[str] = None
