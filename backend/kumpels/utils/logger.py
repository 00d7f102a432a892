"""
Configuración de logging del sistema.

Todos los módulos registran bajo el logger ``kumpels`` (``kumpels.escaneos``,
``kumpels.auth``, ...), así que basta configurar ese logger raíz.
"""
from typing import Optional
import logging

from kumpels.config import settings

# Librerías que con DEBUG generan demasiado ruido
SILENCIADOS = ("passlib", "multipart", "PIL")


def configurar_logging(nivel: Optional[str] = None) -> logging.Logger:
    """
    Configura el logger ``kumpels`` con salida a consola.

    Se puede llamar varias veces (API y scripts) sin duplicar handlers.

    Args:
        nivel: DEBUG, INFO, WARNING, ERROR o CRITICAL; por defecto LOG_LEVEL

    Returns:
        Logger ``kumpels``
    """
    nivel_num = getattr(logging, (nivel or settings.LOG_LEVEL).upper(), logging.INFO)

    logger = logging.getLogger("kumpels")
    logger.setLevel(nivel_num)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(settings.LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)

    for nombre in SILENCIADOS:
        logging.getLogger(nombre).setLevel(logging.WARNING)

    return logger
