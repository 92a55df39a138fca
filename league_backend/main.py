from fastapi import FastAPI
import logging
from fastapi.middleware.cors import CORSMiddleware
from league_backend.core.config import settings
from league_backend.core.database import init_db, SessionLocal
from league_backend.api import api_router

# Setup logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="League Backend")


# Allow CORS for all origins (you can restrict it later)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def bootstrap_admin():
    """Give BOOTSTRAP_ADMIN_ID the admin role so someone can send the first invites."""
    if not settings.BOOTSTRAP_ADMIN_ID:
        return
    from league_backend.users.services.user_service import UserService

    db = SessionLocal()
    try:
        UserService(db).set_user_role(settings.BOOTSTRAP_ADMIN_ID, "admin")
    finally:
        db.close()


# Ensure database tables are created
@app.on_event("startup")
async def startup():
    try:
        init_db()  # Calls Base.metadata.create_all(bind=engine)
        logger.info("✅ Database connected and tables created.")
        bootstrap_admin()
    except Exception as e:
        logger.error(f"❌ Database connection error: {e}")

@app.get("/")
async def home():
    return {"message": "Welcome to League Backend"}

# Include all API routes
app.include_router(api_router)
