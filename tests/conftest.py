# Settings are read at import time, so the database URL must exist first
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from league_backend.core.database import Base, get_db
from league_backend.teams.models.team_model import Team  # noqa: F401
from league_backend.players.models.player_model import Player  # noqa: F401
from league_backend.matches.models.match_model import Match  # noqa: F401
from league_backend.match_events.models.player_event_model import Goal, Assist, YellowCard, RedCard  # noqa: F401
from league_backend.users.models.user_model import User, UserRole, UserInvite  # noqa: F401
from league_backend.core.utils import IdCounter  # noqa: F401
from league_backend.main import app

ADMIN_ID = "admin-1"
ADMIN_HEADERS = {"X-User-Id": ADMIN_ID}


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    session.add(UserRole(user_id=ADMIN_ID, role="admin"))
    session.commit()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest_asyncio.fixture
async def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as test_client:
        yield test_client
    app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def admin_headers():
    return dict(ADMIN_HEADERS)
