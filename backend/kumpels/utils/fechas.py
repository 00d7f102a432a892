"""
Utilidades de fechas.

El sistema trabaja en UTC: "hoy" es el día calendario UTC en curso.
"""
from datetime import datetime, date, timedelta, timezone
from typing import Tuple, Union


def inicio_del_dia(fecha: Union[datetime, date, None] = None) -> datetime:
    """
    Normaliza una fecha a las 00:00:00 de su día.

    Args:
        fecha: Fecha a normalizar (por defecto, ahora)

    Returns:
        datetime a medianoche
    """
    if fecha is None:
        fecha = datetime.utcnow()
    if isinstance(fecha, datetime) and fecha.tzinfo is not None:
        fecha = fecha.astimezone(timezone.utc)
    if not isinstance(fecha, datetime):
        fecha = datetime(fecha.year, fecha.month, fecha.day)
    return fecha.replace(hour=0, minute=0, second=0, microsecond=0, tzinfo=None)


def rango_del_dia(fecha: Union[datetime, date, None] = None) -> Tuple[datetime, datetime]:
    """Retorna (inicio, fin) del día, con fin exclusivo."""
    inicio = inicio_del_dia(fecha)
    return inicio, inicio + timedelta(days=1)


def horas_entre(desde: datetime, hasta: datetime) -> float:
    """Horas transcurridas entre dos instantes."""
    return (hasta - desde).total_seconds() / 3600
