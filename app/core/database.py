# app/core/database.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from app.core.config import settings

# one engine per process, every request borrows a pooled connection from it
engine = create_engine(
    settings.DATABASE_URL,
    pool_recycle=1800,  # seconds; stale connections are replaced, not reused
    pool_pre_ping=True  # a dead connection is swapped before the query runs
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

class Base(DeclarativeBase):
    pass

def get_db():
    # the session goes back to the pool even when the handler raises
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
