"""
Endpoints de Pacientes.
"""
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from typing import Optional, List

from kumpels.core.database import get_session
from kumpels.core.auth_dependencies import require_permissions
from kumpels.core.exceptions import BaseAppException
from kumpels.models.usuario import PermisoEnum
from kumpels.models.enums import EstadoPacienteEnum, NombreLineaEnum
from kumpels.schemas.paciente import (
    PacienteCreate,
    PacienteUpdate,
    PacienteResponse,
    PacienteDetalleResponse,
    EscaneoEnPaciente,
)
from kumpels.schemas.responses import MessageResponse
from kumpels.services.paciente_service import PacienteService
from kumpels.api.errores import a_http

router = APIRouter()


@router.get(
    "",
    response_model=List[PacienteResponse],
    dependencies=[Depends(require_permissions(PermisoEnum.PACIENTE_VER))]
)
def listar_pacientes(
    linea: Optional[NombreLineaEnum] = None,
    cama_id: Optional[str] = None,
    estado: Optional[EstadoPacienteEnum] = None,
    busqueda: Optional[str] = None,
    session: Session = Depends(get_session)
):
    """
    Lista pacientes por fecha de ingreso descendente.

    ``busqueda`` compara nombre, apellido, identificador externo e
    historia clínica sin distinguir mayúsculas.
    """
    return PacienteService(session).listar(linea, cama_id, estado, busqueda)


@router.post(
    "",
    response_model=PacienteResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_permissions(PermisoEnum.PACIENTE_CREAR))]
)
def crear_paciente(data: PacienteCreate, session: Session = Depends(get_session)):
    """Registra el ingreso de un paciente en una cama libre."""
    try:
        return PacienteService(session).crear(data)
    except BaseAppException as e:
        raise a_http(e)


@router.get(
    "/{paciente_id}",
    response_model=PacienteDetalleResponse,
    dependencies=[Depends(require_permissions(PermisoEnum.PACIENTE_VER))]
)
def obtener_paciente(paciente_id: str, session: Session = Depends(get_session)):
    """Paciente con sus procesos y escaneos."""
    try:
        return PacienteService(session).obtener(paciente_id)
    except BaseAppException as e:
        raise a_http(e)


@router.put(
    "/{paciente_id}",
    response_model=PacienteResponse,
    dependencies=[Depends(require_permissions(PermisoEnum.PACIENTE_EDITAR))]
)
def actualizar_paciente(
    paciente_id: str,
    data: PacienteUpdate,
    session: Session = Depends(get_session)
):
    try:
        return PacienteService(session).actualizar(paciente_id, data)
    except BaseAppException as e:
        raise a_http(e)


@router.delete(
    "/{paciente_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_permissions(PermisoEnum.PACIENTE_ELIMINAR))]
)
def eliminar_paciente(paciente_id: str, session: Session = Depends(get_session)):
    """Elimina el paciente y todos sus registros asociados."""
    try:
        PacienteService(session).eliminar(paciente_id)
    except BaseAppException as e:
        raise a_http(e)
    return MessageResponse(success=True, message="Paciente eliminado correctamente")


@router.get(
    "/{paciente_id}/escaneos-qr",
    response_model=List[EscaneoEnPaciente],
    dependencies=[Depends(require_permissions(PermisoEnum.PACIENTE_VER))]
)
def listar_escaneos_paciente(paciente_id: str, session: Session = Depends(get_session)):
    """Escaneos QR del paciente en orden cronológico."""
    try:
        return PacienteService(session).listar_escaneos_qr(paciente_id)
    except BaseAppException as e:
        raise a_http(e)
