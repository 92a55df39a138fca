from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from league_backend.core.database import Base

class Team(Base):
    __tablename__ = "teams"

    team_id = Column(String, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)
    primary_color = Column(String, nullable=False, default="")
    founded = Column(String, nullable=False, default="")
    stadium = Column(String, nullable=False, default="")
    logo = Column(String, nullable=True)

    players = relationship("Player", back_populates="team")
