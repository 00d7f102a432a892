#!/usr/bin/env python3
"""
Carga líneas, servicios, camas, causas de devolución y usuarios de prueba.

Uso:
    python scripts/seed_data.py [--sin-usuarios]
"""
import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from kumpels.core.database import create_db_and_tables, get_session_direct
from kumpels.utils.logger import configurar_logging
from kumpels.utils.seed_data import inicializar_datos, USUARIOS_PRUEBA

logger = configurar_logging()


def main() -> int:
    parser = argparse.ArgumentParser(description="Carga inicial de datos de Kumpels")
    parser.add_argument(
        "--sin-usuarios",
        action="store_true",
        help="No crear los usuarios de prueba",
    )
    args = parser.parse_args()

    create_db_and_tables()
    session = get_session_direct()
    try:
        resumen = inicializar_datos(session, incluir_usuarios=not args.sin_usuarios)
    finally:
        session.close()

    logger.info(
        f"Creados: {resumen.lineas} líneas, {resumen.servicios} servicios, "
        f"{resumen.camas} camas, {resumen.causas} causas, {resumen.usuarios} usuarios"
    )
    if not args.sin_usuarios:
        logger.info("Credenciales de prueba:")
        for usuario in USUARIOS_PRUEBA:
            logger.info(f"  {usuario['rol'].value:<20} {usuario['email']} / {usuario['password']}")
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except Exception as e:
        logger.error(f"Error en la carga de datos: {e}")
        sys.exit(1)
