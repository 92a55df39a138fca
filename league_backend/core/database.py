from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from league_backend.core.config import settings

# SQLite needs to share its connection with FastAPI's worker threads
connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

# Create the engine with `pool_pre_ping=True` to prevent stale connections
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,   # tests connections before using them
    connect_args=connect_args,
)

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for models
Base = declarative_base()

# Dependency to get DB session
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

# Function to initialize the database
def init_db():
    # Import all models here
    from league_backend.teams.models.team_model import Team
    from league_backend.players.models.player_model import Player
    from league_backend.matches.models.match_model import Match
    from league_backend.match_events.models.player_event_model import Goal, Assist, YellowCard, RedCard
    from league_backend.users.models.user_model import User, UserRole, UserInvite
    from league_backend.core.utils import IdCounter

    # Use context manager to ensure connection is released
    with engine.begin() as conn:
        Base.metadata.create_all(bind=conn)
