"""
Main FastAPI application entry point.
Configures the application, middleware, and includes routers.
"""
from dotenv import load_dotenv

# Load environment variables from .env file first
load_dotenv()

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from . import __version__
from .auth.router import router as auth_router
from .auth.dependencies import get_password_hasher
from .auth.repository import UserRepository
from .patients.router import router as patients_router
from .appointments.router import router as appointments_router
from .database import Base, SessionLocal, engine
from .config import settings
# Import all models here so the metadata knows every table
from .auth import models as auth_models  # noqa: F401
from .patients import models as patient_models  # noqa: F401
from .appointments import models as appointment_models  # noqa: F401
from .exceptions import register_exception_handlers
from .core.middleware import setup_middlewares
from .core.bootstrap import bootstrap_front_desk_if_needed

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting Front Desk Portal API...")
    # Create database tables if they don't exist; migrations live in alembic/
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        bootstrap_front_desk_if_needed(UserRepository(db), get_password_hasher(), settings)
    finally:
        db.close()
    yield

# Create FastAPI application
app = FastAPI(
    title="Front Desk Portal API",
    description="Staff authentication, patient records and appointment booking for a clinic front desk",
    version=__version__,
    lifespan=lifespan
)

# Register exception handlers
register_exception_handlers(app)

# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Setup custom middleware
setup_middlewares(app)

# Include routers
app.include_router(auth_router, prefix="/api/auth", tags=["Authentication"])
app.include_router(patients_router, prefix="/api/patients", tags=["Patients"])
app.include_router(appointments_router, prefix="/api/appointments", tags=["Appointments"])

# Root endpoint
@app.get("/")
def root():
    return {"message": "Welcome to Front Desk Portal API", "version": __version__}

# Health check endpoint
@app.get("/health")
def health_check():
    """
    Health check endpoint for monitoring.

    Returns:
        dict: Health status information
    """
    return {"status": "healthy"}
