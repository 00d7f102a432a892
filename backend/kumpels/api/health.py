"""
Health checks para balanceadores y orquestadores (sin autenticación).
"""
from datetime import datetime
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from kumpels.config import settings
from kumpels.core.database import check_database_health

router = APIRouter(prefix="/health", tags=["health"])


def _respuesta(codigo: int, **contenido) -> JSONResponse:
    contenido["timestamp"] = datetime.utcnow().isoformat()
    return JSONResponse(status_code=codigo, content=contenido)


@router.get("", response_model=None)
async def health_check() -> JSONResponse:
    """Liveness: la aplicación responde."""
    return _respuesta(
        status.HTTP_200_OK,
        status="healthy",
        app=settings.APP_TITLE,
        version=settings.APP_VERSION,
        environment=settings.APP_ENV,
    )


@router.get("/readiness", response_model=None)
def readiness_probe() -> JSONResponse:
    """Readiness: 503 mientras la base de datos no responda."""
    database = check_database_health()
    if database["status"] != "healthy":
        return _respuesta(status.HTTP_503_SERVICE_UNAVAILABLE, status="not_ready", database=database)
    return _respuesta(status.HTTP_200_OK, status="ready", database=database)
