"""
Configuración centralizada de la aplicación.
Todas las configuraciones en un solo lugar para fácil mantenimiento.
"""
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Configuración principal del sistema."""

    # ============================================
    # APLICACIÓN
    # ============================================
    APP_TITLE: str = "Kumpels App"
    APP_DESCRIPTION: str = "Trazabilidad de dispensación de medicamentos hospitalarios"
    APP_VERSION: str = "1.0.0"
    APP_ENV: str = "development"
    DEBUG: bool = False

    # ============================================
    # BASE DE DATOS
    # ============================================
    DATABASE_URL: str = "sqlite:///./kumpels.db"
    SEED_DATA_ON_STARTUP: bool = False

    # ============================================
    # CORS
    # ============================================
    CORS_ORIGINS: List[str] = ["*"]
    CORS_ALLOW_CREDENTIALS: bool = True
    CORS_ALLOW_METHODS: List[str] = ["*"]
    CORS_ALLOW_HEADERS: List[str] = ["*"]

    # ============================================
    # AUTENTICACIÓN (JWT)
    # ============================================
    JWT_SECRET_KEY: str = "cambiar-esta-clave-en-produccion"
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 30
    JWT_REFRESH_TOKEN_EXPIRE_DAYS: int = 7
    JWT_REMEMBER_ME_EXPIRE_DAYS: int = 30

    # ============================================
    # REGLAS DE NEGOCIO
    # ============================================
    SLA_ENTREGA_HORAS: float = 2.0
    SLA_DEVOLUCION_HORAS: float = 1.0
    TEMPERATURA_MIN: float = 2.0  # °C
    TEMPERATURA_MAX: float = 8.0  # °C
    MEDICAMENTOS_POR_PAGINA: int = 20
    USUARIOS_MAX_PAGINA: int = 50

    # ============================================
    # LOGGING
    # ============================================
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

    class Config:
        env_file = ".env"
        case_sensitive = True


# Instancia global de configuración
settings = Settings()
