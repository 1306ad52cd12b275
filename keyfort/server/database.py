from typing import Generator
from sqlmodel import SQLModel, Session, create_engine
from .config import settings

# SQLite connections are shared across FastAPI's worker threads
connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    connect_args["check_same_thread"] = False

engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DATABASE_ECHO,
    connect_args=connect_args
)

# Called at startup; every table model must be imported before this runs
def init_db(bind=None):
    from . import models  # noqa: F401
    SQLModel.metadata.create_all(bind or engine)

# Request-scoped session for Depends; closed (and the connection returned
# to the pool) once the response is sent, even on error
def get_session() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session
