#!/usr/bin/env python3
"""
Importa pacientes desde un archivo CSV.

Uso:
    python scripts/import_patients.py pacientes.csv

El encabezado debe incluir: id_externo, nombre, apellido, fecha_nacimiento,
genero, linea, cama. Opcionales: fecha_ingreso, servicio, historia_clinica, notas.
"""
import argparse
import csv
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from kumpels.core.database import get_session_direct
from kumpels.utils.importacion import ImportadorPacientes
from kumpels.utils.logger import configurar_logging

logger = configurar_logging()


def main() -> int:
    parser = argparse.ArgumentParser(description="Importa pacientes desde CSV")
    parser.add_argument("archivo", type=Path, help="Ruta del archivo CSV")
    parser.add_argument("--encoding", default="utf-8-sig")
    args = parser.parse_args()

    if not args.archivo.exists():
        logger.error(f"No existe el archivo {args.archivo}")
        return 1

    session = get_session_direct()
    try:
        with args.archivo.open(newline="", encoding=args.encoding) as f:
            resumen = ImportadorPacientes(session).importar(csv.DictReader(f))
    finally:
        session.close()

    for error in resumen.errores:
        logger.warning(error)
    logger.info(
        f"{resumen.procesados} filas: {resumen.creados} creados, "
        f"{resumen.actualizados} actualizados, {len(resumen.errores)} con error"
    )
    return 1 if resumen.errores else 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except Exception as e:
        logger.error(f"Error importando pacientes: {e}")
        sys.exit(1)
