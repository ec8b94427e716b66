import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import ojt_records.models  # noqa: F401  registers the tables on Base
from ojt_records.auth.token import get_token_issuer
from ojt_records.config import get_settings
from ojt_records.database import Base, SessionLocal, engine
from ojt_records.dependencies import get_password_hasher
from ojt_records.errors import ServiceError
from ojt_records.routers import auth, students
from ojt_records.services.auth import AuthService
from ojt_records.services.profiles import ProfileService
from ojt_records.stores.credentials import CredentialStore
from ojt_records.stores.students import StudentRecordStore

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

settings = get_settings()


def initialize_admin():
    """Create the tables and seed the admin account if it is missing"""
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        credentials = CredentialStore(db)
        auth_service = AuthService(
            credentials,
            ProfileService(StudentRecordStore(db), credentials),
            get_password_hasher(),
            get_token_issuer(),
        )
        auth_service.bootstrap_admin(settings.admin_email, settings.admin_password)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    initialize_admin()
    yield


app = FastAPI(title="OJT Records API", lifespan=lifespan)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.message},
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": ServiceError.message},
    )


# Include routers
app.include_router(auth.router, prefix="/api")
app.include_router(students.router, prefix="/api")


@app.get("/")
async def root():
    return {"message": "Welcome to the OJT Records API"}


# Health check endpoint
@app.get("/health")
async def health_check():
    return {"status": "healthy", "service": "ojt-records"}
