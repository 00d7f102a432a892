#!/usr/bin/env python3
"""
Script para crear las tablas de la base de datos configurada.
"""
import sys
from pathlib import Path

# Agregar el directorio raíz al PYTHONPATH
sys.path.insert(0, str(Path(__file__).parent.parent))

from kumpels.config import settings
from kumpels.core.database import create_db_and_tables
from kumpels.utils.logger import configurar_logging

logger = configurar_logging()

if __name__ == "__main__":
    logger.info("=" * 60)
    logger.info(f"Creando tablas en {settings.DATABASE_URL.split('@')[-1]}...")
    logger.info("=" * 60)

    try:
        create_db_and_tables()
        logger.info("Tablas creadas exitosamente")
    except Exception as e:
        logger.error(f"Error al crear tablas: {e}", exc_info=True)
        sys.exit(1)
