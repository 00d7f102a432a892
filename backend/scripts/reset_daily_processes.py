#!/usr/bin/env python3
"""
Elimina todos los procesos diarios, sus procesos de medicación y escaneos.

Uso:
    python scripts/reset_daily_processes.py --confirmar
"""
import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from kumpels.core.database import get_session_direct
from kumpels.services.proceso_diario_service import ProcesoDiarioService
from kumpels.utils.logger import configurar_logging

logger = configurar_logging()


def main() -> int:
    parser = argparse.ArgumentParser(description="Reinicia los procesos diarios")
    parser.add_argument(
        "--confirmar",
        action="store_true",
        help="Requerido; la operación no se puede deshacer",
    )
    args = parser.parse_args()

    if not args.confirmar:
        logger.error("Agrega --confirmar para eliminar los procesos")
        return 1

    session = get_session_direct()
    try:
        resultado = ProcesoDiarioService(session).eliminar_procesos()
    finally:
        session.close()

    logger.info("=" * 60)
    logger.info(f"Procesos diarios eliminados:    {resultado.procesos_diarios}")
    logger.info(f"Procesos de medicación:         {resultado.procesos_medicacion}")
    logger.info(f"Escaneos QR:                    {resultado.escaneos_qr}")
    logger.info("=" * 60)
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except Exception as e:
        logger.error(f"Error reiniciando procesos: {e}")
        sys.exit(1)
