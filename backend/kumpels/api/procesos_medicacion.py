"""
Endpoints de Procesos de Medicación.
"""
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from typing import Optional, List

from kumpels.core.database import get_session
from kumpels.core.auth_dependencies import get_current_user, require_permissions
from kumpels.core.exceptions import BaseAppException
from kumpels.models.usuario import Usuario, PermisoEnum
from kumpels.models.enums import EstadoProcesoEnum, PasoProcesoEnum
from kumpels.schemas.proceso import (
    ProcesoMedicacionCreate,
    ProcesoMedicacionUpdate,
    ProcesoMedicacionResponse,
    ProcesoMedicacionDetalleResponse,
)
from kumpels.schemas.responses import MessageResponse
from kumpels.services.proceso_medicacion_service import ProcesoMedicacionService
from kumpels.services.permisos_proceso import transiciones_validas
from kumpels.api.errores import a_http

router = APIRouter()


@router.get(
    "",
    response_model=List[ProcesoMedicacionResponse],
    dependencies=[Depends(require_permissions(PermisoEnum.PROCESO_VER))]
)
def listar_procesos(
    paciente_id: Optional[str] = None,
    paso: Optional[PasoProcesoEnum] = None,
    estado: Optional[EstadoProcesoEnum] = None,
    proceso_diario_id: Optional[str] = None,
    session: Session = Depends(get_session)
):
    """Procesos por fecha de creación descendente."""
    return ProcesoMedicacionService(session).listar(paciente_id, paso, estado, proceso_diario_id)


@router.post(
    "",
    response_model=ProcesoMedicacionResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_permissions(PermisoEnum.PROCESO_CREAR))]
)
def crear_proceso(data: ProcesoMedicacionCreate, session: Session = Depends(get_session)):
    """Crea un proceso PENDING para un paciente y paso."""
    try:
        return ProcesoMedicacionService(session).crear(data)
    except BaseAppException as e:
        raise a_http(e)


@router.get(
    "/{proceso_id}",
    response_model=ProcesoMedicacionDetalleResponse,
    dependencies=[Depends(require_permissions(PermisoEnum.PROCESO_VER))]
)
def obtener_proceso(proceso_id: str, session: Session = Depends(get_session)):
    try:
        return ProcesoMedicacionService(session).obtener(proceso_id)
    except BaseAppException as e:
        raise a_http(e)


@router.get(
    "/{proceso_id}/transiciones",
    response_model=List[EstadoProcesoEnum],
    dependencies=[Depends(require_permissions(PermisoEnum.PROCESO_VER))]
)
def listar_transiciones(proceso_id: str, session: Session = Depends(get_session)):
    """Estados a los que el proceso puede pasar manualmente."""
    try:
        proceso = ProcesoMedicacionService(session).obtener(proceso_id)
    except BaseAppException as e:
        raise a_http(e)
    return transiciones_validas(proceso.estado)


@router.put("/{proceso_id}", response_model=ProcesoMedicacionResponse)
def actualizar_proceso(
    proceso_id: str,
    data: ProcesoMedicacionUpdate,
    current_user: Usuario = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    """
    Cambia el estado o las notas de un proceso.

    El rol debe poder operar el paso y la transición debe ser válida;
    SUPERADMIN puede forzar cualquier transición.
    """
    try:
        return ProcesoMedicacionService(session).actualizar(proceso_id, data, current_user)
    except BaseAppException as e:
        raise a_http(e)


@router.delete("/{proceso_id}", response_model=MessageResponse)
def eliminar_proceso(
    proceso_id: str,
    current_user: Usuario = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    """Elimina un proceso (solo SUPERADMIN)."""
    try:
        ProcesoMedicacionService(session).eliminar(proceso_id, current_user)
    except BaseAppException as e:
        raise a_http(e)
    return MessageResponse(success=True, message="Proceso eliminado correctamente")
