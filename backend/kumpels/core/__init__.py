"""
Módulo core: funcionalidades centrales del sistema.
"""
from kumpels.core.database import create_db_and_tables, get_session, get_session_direct, engine
from kumpels.core.exceptions import (
    BaseAppException,
    ValidationError,
    InvalidStateError,
    TransicionInvalidaError,
    NotFoundError,
    ConflictError,
    PermisoDenegadoError,
)

__all__ = [
    "create_db_and_tables",
    "get_session",
    "get_session_direct",
    "engine",
    "BaseAppException",
    "ValidationError",
    "InvalidStateError",
    "TransicionInvalidaError",
    "NotFoundError",
    "ConflictError",
    "PermisoDenegadoError",
]
