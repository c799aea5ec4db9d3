# student_records/main.py
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware

from . import errors
from .config import settings
from .database.base import Base
from .database.session import engine

# Import all models to ensure they're registered with Base
from .database.models.student import Student
from .database.models.student_file import StudentFile
from .routers import files, students, ui

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Alunos CPM",
    description="Student records and scanned documents",
    version="1.0.0"
)

# CORS middleware for frontend communication (between client req and api logic)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Signed cookie session for the admin pages
app.add_middleware(SessionMiddleware, secret_key=settings.SECRET_KEY)


@app.on_event("startup")
def create_tables():
    # Create all database tables
    Base.metadata.create_all(bind=engine)
    logger.info(f"Storage backend: {settings.STORAGE_BACKEND} (bucket {settings.STORAGE_BUCKET})")


@app.exception_handler(errors.AppError)
async def app_error_handler(request: Request, exc: errors.AppError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.info(f"Rejected request to {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": errors.INVALID_DATA})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


@app.exception_handler(ui.LoginRequired)
async def login_required_handler(request: Request, exc: ui.LoginRequired):
    return RedirectResponse("/login", status_code=303)


app.include_router(students.router)
app.include_router(files.router)
app.include_router(files.storage_router)
app.include_router(ui.router)


@app.get("/health")
def health_check():
    return {
        "status": "healthy",
        "service": "Alunos CPM API",
        "version": "1.0.0",
        "storage": settings.STORAGE_BACKEND
    }

#   cd backend
#   python -m uvicorn student_records.main:app --reload
#   API docs (interactive): http://127.0.0.1:8000/docs
