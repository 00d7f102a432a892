"""
API Principal de Kumpels App.
Trazabilidad de la dispensación de medicamentos hospitalarios.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from kumpels.config import settings
from kumpels.core.database import create_db_and_tables, get_session_direct
from kumpels.api.router import api_router
from kumpels.utils.logger import configurar_logging
from kumpels.utils.seed_data import inicializar_datos

logger = logging.getLogger("kumpels.main")

# Crear aplicación
app = FastAPI(
    title=settings.APP_TITLE,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION
)

# Configurar CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=settings.CORS_ALLOW_METHODS,
    allow_headers=settings.CORS_ALLOW_HEADERS,
)

app.include_router(api_router, prefix="/api")


# ============================================
# EVENTOS DE INICIO
# ============================================

@app.on_event("startup")
def on_startup():
    configurar_logging()
    create_db_and_tables()

    if settings.SEED_DATA_ON_STARTUP:
        session = get_session_direct()
        try:
            inicializar_datos(session)
        finally:
            session.close()

    logger.info(f"{settings.APP_TITLE} {settings.APP_VERSION} iniciada ({settings.APP_ENV})")


@app.get("/")
def root():
    return {"app": settings.APP_TITLE, "version": settings.APP_VERSION, "docs": "/docs"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
