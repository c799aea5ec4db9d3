# student_records/database/base.py
from sqlalchemy.orm import declarative_base

# Base class for models
Base = declarative_base()
