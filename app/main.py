"""
Placement Portal - Main Application

FastAPI backend with:
- PostgreSQL for students, companies and drives
- MongoDB for notices and events
- Listmonk for transactional / bulk email
- DeepSeek (OpenAI-compatible) for mail bot drafts
- JWT authentication

Run: uvicorn app.main:app --reload
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import api_router
from app.db.mongodb import init_mongo_indexes
from app.core.config import get_settings

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Placement Portal",
    description="""
    Placement cell backend for students, recruiters and the AI mail bot.

    ## Features
    - **Authentication**: JWT-based auth for students, companies and the placement cell
    - **Students**: Registration with welcome email, profile management
    - **Companies**: Registration, approval email, recruitment drives
    - **Drives**: Eligibility-based notification of students
    - **Mail Bot**: AI-drafted, human-reviewed bulk announcements via Listmonk
    - **Notices & Events**: Public landing page feeds
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware (allow all for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api")


@app.on_event("startup")
async def startup_event():
    """Initialize MongoDB indexes on startup."""
    try:
        init_mongo_indexes()
    except Exception as e:
        logger.warning("MongoDB index initialization failed: %s", e)


@app.get("/", tags=["Health"])
async def root():
    return {"status": "healthy", "app": "Placement Portal"}


@app.get("/health", tags=["Health"])
def health_check():
    """Detailed health check."""
    from app.db.postgres import test_postgres_connection
    from app.db.mongodb import test_mongo_connection
    from app.services.listmonk_client import get_listmonk_client

    return {
        "status": "healthy",
        "postgres": "connected" if test_postgres_connection() else "disconnected",
        "mongodb": "connected" if test_mongo_connection() else "disconnected",
        "listmonk": "connected" if get_listmonk_client().test_connection() else "disconnected"
    }
