"""
Endpoints de Devoluciones Manuales y Causas de Devolución.
"""
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from typing import Optional, List

from kumpels.core.database import get_session
from kumpels.core.auth_dependencies import get_current_user, require_permissions
from kumpels.core.exceptions import BaseAppException
from kumpels.models.usuario import Usuario, PermisoEnum
from kumpels.models.enums import EstadoDevolucionManualEnum
from kumpels.schemas.devolucion import (
    CausaDevolucionResponse,
    DevolucionManualCreate,
    DevolucionManualUpdate,
    DevolucionManualResponse,
)
from kumpels.schemas.responses import MessageResponse
from kumpels.services.devolucion_service import DevolucionService
from kumpels.api.errores import a_http

router = APIRouter()
causas_router = APIRouter()


@causas_router.get("", response_model=List[CausaDevolucionResponse])
def listar_causas(
    current_user: Usuario = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    """Causas activas ordenadas por código."""
    return DevolucionService(session).listar_causas()


@router.get("", response_model=List[DevolucionManualResponse])
def listar_devoluciones(
    paciente_id: Optional[str] = None,
    estado: Optional[EstadoDevolucionManualEnum] = None,
    generado_por: Optional[str] = None,
    revisado_por: Optional[str] = None,
    current_user: Usuario = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    return DevolucionService(session).listar(paciente_id, estado, generado_por, revisado_por)


@router.post(
    "",
    response_model=DevolucionManualResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_permissions(PermisoEnum.DEVOLUCION_REGISTRAR))]
)
def crear_devolucion(
    data: DevolucionManualCreate,
    current_user: Usuario = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    """Registra una devolución manual con sus insumos."""
    try:
        return DevolucionService(session).crear(data, current_user)
    except BaseAppException as e:
        raise a_http(e)


@router.get("/{devolucion_id}", response_model=DevolucionManualResponse)
def obtener_devolucion(
    devolucion_id: str,
    current_user: Usuario = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    try:
        return DevolucionService(session).obtener(devolucion_id)
    except BaseAppException as e:
        raise a_http(e)


@router.put("/{devolucion_id}", response_model=DevolucionManualResponse)
def actualizar_devolucion(
    devolucion_id: str,
    data: DevolucionManualUpdate,
    current_user: Usuario = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    """
    Modifica o revisa una devolución.

    Aprobar o rechazar es exclusivo del regente de farmacia o SUPERADMIN.
    """
    try:
        return DevolucionService(session).actualizar(devolucion_id, data, current_user)
    except BaseAppException as e:
        raise a_http(e)


@router.delete("/{devolucion_id}", response_model=MessageResponse)
def eliminar_devolucion(
    devolucion_id: str,
    current_user: Usuario = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    try:
        DevolucionService(session).eliminar(devolucion_id)
    except BaseAppException as e:
        raise a_http(e)
    return MessageResponse(success=True, message="Devolución eliminada correctamente")
