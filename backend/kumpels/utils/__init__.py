"""
Utilidades compartidas del sistema.
"""
from kumpels.utils.fechas import inicio_del_dia, rango_del_dia, horas_entre
from kumpels.utils.logger import configurar_logging

__all__ = [
    "inicio_del_dia",
    "rango_del_dia",
    "horas_entre",
    "configurar_logging",
]
