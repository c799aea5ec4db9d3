# student_records/config.py
from pydantic_settings import BaseSettings
from pathlib import Path
from typing import List, Optional

class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./student_records.db"

    # Session signing & admin login
    SECRET_KEY: str = "your-secret-key-change-this-in-production"
    ADMIN_EMAIL: str = "admincpm@cpmitabuna.com"
    ADMIN_PASSWORD: str = "cpm"

    # File Storage
    STORAGE_BACKEND: str = "local"  # "local" or "s3"
    STORAGE_BUCKET: str = "student-documents"
    UPLOAD_DIR: Path = Path("uploads")
    DOCUMENTS_DIR: Path = UPLOAD_DIR / "student_documents"
    MAX_FILE_SIZE: int = 10 * 1024 * 1024  # 10MB
    SIGNED_URL_EXPIRES_SECONDS: int = 3600  # 1 hour link

    # S3-compatible storage (Supabase Storage, MinIO, AWS)
    S3_ENDPOINT_URL: Optional[str] = None
    S3_REGION: str = "us-east-1"
    S3_ACCESS_KEY_ID: Optional[str] = None
    S3_SECRET_ACCESS_KEY: Optional[str] = None

    # App
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
