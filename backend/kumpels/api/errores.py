"""
Traducción de excepciones de dominio a respuestas HTTP.
"""
from fastapi import HTTPException, status

from kumpels.core.exceptions import (
    BaseAppException,
    ValidationError,
    InvalidStateError,
    NotFoundError,
    ConflictError,
    PermisoDenegadoError,
)


def a_http(exc: BaseAppException) -> HTTPException:
    """
    Convierte una excepción de los servicios en HTTPException.

    Uso:
        try:
            ...
        except BaseAppException as e:
            raise a_http(e)
    """
    if isinstance(exc, NotFoundError):
        codigo = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, ConflictError):
        codigo = status.HTTP_409_CONFLICT
    elif isinstance(exc, PermisoDenegadoError):
        codigo = status.HTTP_403_FORBIDDEN
    elif isinstance(exc, (ValidationError, InvalidStateError)):
        codigo = status.HTTP_400_BAD_REQUEST
    else:
        codigo = status.HTTP_500_INTERNAL_SERVER_ERROR
    return HTTPException(status_code=codigo, detail=exc.message)
