from sqlalchemy import Column, String, Integer, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from league_backend.core.database import Base

class Player(Base):
    __tablename__ = "players"

    player_id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    position = Column(String, nullable=False)
    number = Column(Integer, nullable=False)
    team_id = Column(String, ForeignKey("teams.team_id"), nullable=False, index=True)
    is_manager = Column(Boolean, nullable=False, default=False)
    photo = Column(String, nullable=True)

    team = relationship("Team", back_populates="players")
