"""
Engine y sesiones de base de datos (SQLModel).

SQLite en desarrollo y tests; PostgreSQL en producción vía DATABASE_URL.
"""
from typing import Generator, Dict, Any
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel, create_engine, Session
import logging

from kumpels.config import settings

logger = logging.getLogger("kumpels.database")

# SQLite comparte la conexión entre los hilos del servidor
_connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_pre_ping=True,
    connect_args=_connect_args,
)


def create_db_and_tables() -> None:
    """Crea las tablas que falten. En producción se usan las migraciones de Alembic."""
    import kumpels.models  # noqa: F401

    SQLModel.metadata.create_all(engine)
    logger.info("Tablas verificadas/creadas")


def get_session() -> Generator[Session, None, None]:
    """Dependency de FastAPI: una sesión por request."""
    with Session(engine) as session:
        yield session


def get_session_direct() -> Session:
    """
    Sesión para scripts y tareas fuera de un request.

    El llamador debe cerrarla:
        session = get_session_direct()
        try:
            ...
        finally:
            session.close()
    """
    return Session(engine)


def check_database_health() -> Dict[str, Any]:
    """Ejecuta ``SELECT 1``; retorna el estado y, si falla, el error."""
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Base de datos no disponible: {e}")
        return {"status": "unhealthy", "error": str(e)}
    return {"status": "healthy"}
