"""
Endpoints de Estadísticas y su exportación.
"""
from fastapi import APIRouter, Depends, Response
from sqlmodel import Session
from typing import Optional
from datetime import datetime

from kumpels.core.database import get_session
from kumpels.core.auth_dependencies import require_permissions
from kumpels.core.exceptions import BaseAppException
from kumpels.models.usuario import PermisoEnum
from kumpels.schemas.estadisticas import FiltrosEstadisticas, EstadisticasResponse
from kumpels.services.estadisticas_service import EstadisticasService
from kumpels.services.exportacion_service import ExportacionService
from kumpels.api.errores import a_http

router = APIRouter()


def filtros_estadisticas(
    linea_id: Optional[str] = None,
    servicio_id: Optional[str] = None,
    fecha_desde: Optional[datetime] = None,
    fecha_hasta: Optional[datetime] = None,
    proceso_diario_id: Optional[str] = None,
) -> FiltrosEstadisticas:
    return FiltrosEstadisticas(
        linea_id=linea_id,
        servicio_id=servicio_id,
        fecha_desde=fecha_desde,
        fecha_hasta=fecha_hasta,
        proceso_diario_id=proceso_diario_id,
    )


@router.get(
    "",
    response_model=EstadisticasResponse,
    dependencies=[Depends(require_permissions(PermisoEnum.ESTADISTICAS_VER))]
)
def obtener_estadisticas(
    tipo: Optional[str] = "general",
    filtros: FiltrosEstadisticas = Depends(filtros_estadisticas),
    session: Session = Depends(get_session)
):
    """
    Estadísticas de dispensación.

    - ``general``: porcentajes de cumplimiento
    - ``comparativo``: tiempos por etapa y línea, devoluciones manuales
      y cumplimiento de temperatura
    """
    try:
        return EstadisticasService(session).obtener(tipo, filtros)
    except BaseAppException as e:
        raise a_http(e)


@router.get(
    "/exportar",
    dependencies=[Depends(require_permissions(PermisoEnum.ESTADISTICAS_EXPORTAR))]
)
def exportar_estadisticas(
    formato: Optional[str] = None,
    tipo: Optional[str] = None,
    filtros: FiltrosEstadisticas = Depends(filtros_estadisticas),
    session: Session = Depends(get_session)
):
    """Descarga las estadísticas en CSV, HTML imprimible (pdf) o Excel."""
    try:
        archivo = ExportacionService(session).exportar(formato, tipo, filtros)
    except BaseAppException as e:
        raise a_http(e)

    return Response(
        content=archivo.contenido,
        media_type=archivo.media_type,
        headers={
            "Content-Disposition": f'attachment; filename="{archivo.nombre_archivo}"'
        }
    )
