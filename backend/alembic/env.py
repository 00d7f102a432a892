"""
Entorno de Alembic para las migraciones de Kumpels App.

La URL de conexión sale de ``settings.DATABASE_URL``; la de alembic.ini se ignora.
"""
from logging.config import fileConfig
from pathlib import Path
import sys

from alembic import context
from sqlalchemy import engine_from_config, pool
from sqlmodel import SQLModel

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import kumpels.models  # noqa: F401,E402
from kumpels.config import settings  # noqa: E402

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = SQLModel.metadata
DATABASE_URL = settings.DATABASE_URL
ES_SQLITE = DATABASE_URL.startswith("sqlite")

# Opciones comunes a ambos modos
OPCIONES = {
    "target_metadata": target_metadata,
    "compare_type": True,
    # SQLite no soporta ALTER COLUMN; se recrean las tablas
    "render_as_batch": ES_SQLITE,
}


def run_migrations_offline() -> None:
    """Emite el SQL de las migraciones sin conectarse a la base de datos."""
    context.configure(
        url=DATABASE_URL,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **OPCIONES,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Aplica las migraciones sobre la base de datos configurada."""
    seccion = config.get_section(config.config_ini_section) or {}
    seccion["sqlalchemy.url"] = DATABASE_URL
    engine = engine_from_config(seccion, prefix="sqlalchemy.", poolclass=pool.NullPool)

    with engine.connect() as connection:
        context.configure(connection=connection, **OPCIONES)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
