from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from eventops.core.config import settings

# SQLite needs check_same_thread disabled because FastAPI serves sync
# endpoints from a threadpool.
connect_args = (
    {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}
)

engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True, connect_args=connect_args)

# A session is the unit of work for a single request or background job.
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        # Always release the connection, even if the endpoint raised.
        db.close()
