# ag_service/db/session.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from ag_service.core.config import settings

# SQLite is only used for local runs; it needs cross-thread access because
# FastAPI serves sync endpoints from a threadpool.
connect_args = (
    {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}
)

engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True, connect_args=connect_args)

# SessionLocal is a factory for creating new Session objects.
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        # Always close, even if the endpoint raised.
        db.close()
