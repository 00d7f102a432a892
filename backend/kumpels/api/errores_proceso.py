"""
Endpoints de Registros de Error de Proceso.
"""
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from typing import Optional, List

from kumpels.core.database import get_session
from kumpels.core.auth_dependencies import get_current_user, require_permissions
from kumpels.core.exceptions import BaseAppException
from kumpels.models.usuario import Usuario, PermisoEnum
from kumpels.models.enums import PasoProcesoEnum, TipoRegistroEnum
from kumpels.schemas.registro_error import (
    RegistroErrorCreate,
    RegistroErrorUpdate,
    RegistroErrorResponse,
)
from kumpels.schemas.responses import MessageResponse
from kumpels.services.registro_error_service import RegistroErrorService
from kumpels.api.errores import a_http

router = APIRouter()


@router.get("", response_model=List[RegistroErrorResponse])
def listar_registros(
    paciente_id: Optional[str] = None,
    proceso_medicacion_id: Optional[str] = None,
    paso: Optional[PasoProcesoEnum] = None,
    tipo: Optional[TipoRegistroEnum] = None,
    incluir_resueltos: bool = False,
    current_user: Usuario = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    """Registros del más reciente al más antiguo; por defecto sin los resueltos."""
    return RegistroErrorService(session).listar(
        paciente_id, proceso_medicacion_id, paso, tipo, incluir_resueltos
    )


@router.post(
    "",
    response_model=RegistroErrorResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_permissions(PermisoEnum.ERROR_REPORTAR))]
)
def reportar_registro(
    data: RegistroErrorCreate,
    current_user: Usuario = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    try:
        return RegistroErrorService(session).crear(data, current_user)
    except BaseAppException as e:
        raise a_http(e)


@router.get("/{registro_id}", response_model=RegistroErrorResponse)
def obtener_registro(
    registro_id: str,
    current_user: Usuario = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    try:
        return RegistroErrorService(session).obtener(registro_id)
    except BaseAppException as e:
        raise a_http(e)


@router.put(
    "/{registro_id}",
    response_model=RegistroErrorResponse,
    dependencies=[Depends(require_permissions(PermisoEnum.ERROR_RESOLVER))]
)
def actualizar_registro(
    registro_id: str,
    data: RegistroErrorUpdate,
    current_user: Usuario = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    """Resuelve, reabre o corrige el mensaje de un registro."""
    try:
        return RegistroErrorService(session).actualizar(registro_id, data, current_user)
    except BaseAppException as e:
        raise a_http(e)


@router.delete("/{registro_id}", response_model=MessageResponse)
def eliminar_registro(
    registro_id: str,
    current_user: Usuario = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    try:
        RegistroErrorService(session).eliminar(registro_id)
    except BaseAppException as e:
        raise a_http(e)
    return MessageResponse(success=True, message="Registro eliminado correctamente")
