"""
Endpoints de Procesos Diarios.
"""
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from typing import Optional, List
from datetime import datetime

from kumpels.core.database import get_session
from kumpels.core.auth_dependencies import get_current_user
from kumpels.core.exceptions import BaseAppException
from kumpels.models.usuario import Usuario
from kumpels.models.proceso_diario import ProcesoDiario
from kumpels.models.enums import EstadoProcesoDiarioEnum
from kumpels.schemas.proceso import (
    ProcesoDiarioCreate,
    ProcesoDiarioUpdate,
    ProcesoDiarioResponse,
    ReinicioProcesosResponse,
)
from kumpels.services.proceso_diario_service import ProcesoDiarioService
from kumpels.api.errores import a_http

router = APIRouter()


def _a_response(proceso: ProcesoDiario, service: ProcesoDiarioService) -> ProcesoDiarioResponse:
    respuesta = ProcesoDiarioResponse.model_validate(proceso)
    respuesta.total_procesos = service.contar_procesos(proceso.id)
    return respuesta


@router.get("", response_model=List[ProcesoDiarioResponse])
def listar_procesos_diarios(
    fecha: Optional[datetime] = None,
    estado: Optional[EstadoProcesoDiarioEnum] = None,
    iniciado_por: Optional[str] = None,
    current_user: Usuario = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    """Procesos diarios por fecha descendente, con sus conteos."""
    service = ProcesoDiarioService(session)
    return [_a_response(p, service) for p in service.listar(fecha, estado, iniciado_por)]


@router.get("/hoy", response_model=Optional[ProcesoDiarioResponse])
def obtener_proceso_de_hoy(
    current_user: Usuario = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    """Proceso diario activo de hoy, o null."""
    service = ProcesoDiarioService(session)
    proceso = service.obtener_activo_hoy()
    return _a_response(proceso, service) if proceso else None


@router.post("", response_model=ProcesoDiarioResponse, status_code=status.HTTP_201_CREATED)
def crear_proceso_diario(
    data: ProcesoDiarioCreate,
    current_user: Usuario = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    """Inicia el proceso diario de una fecha (regente o SUPERADMIN)."""
    service = ProcesoDiarioService(session)
    try:
        return _a_response(service.crear(data, current_user), service)
    except BaseAppException as e:
        raise a_http(e)


@router.post("/reinicio", response_model=ReinicioProcesosResponse)
def reiniciar_procesos(
    current_user: Usuario = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    """
    Elimina todos los procesos diarios, los procesos de medicación y los
    escaneos ligados a ellos.
    """
    try:
        resultado = ProcesoDiarioService(session).reiniciar(current_user)
    except BaseAppException as e:
        raise a_http(e)

    return ReinicioProcesosResponse(
        message="Procesos reiniciados correctamente",
        procesos_diarios_eliminados=resultado.procesos_diarios,
        procesos_medicacion_eliminados=resultado.procesos_medicacion,
        escaneos_qr_eliminados=resultado.escaneos_qr,
    )


@router.get("/{proceso_diario_id}", response_model=ProcesoDiarioResponse)
def obtener_proceso_diario(
    proceso_diario_id: str,
    current_user: Usuario = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    service = ProcesoDiarioService(session)
    try:
        return _a_response(service.obtener(proceso_diario_id), service)
    except BaseAppException as e:
        raise a_http(e)


@router.put("/{proceso_diario_id}", response_model=ProcesoDiarioResponse)
def actualizar_proceso_diario(
    proceso_diario_id: str,
    data: ProcesoDiarioUpdate,
    current_user: Usuario = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    """Cambia estado o notas (regente o SUPERADMIN)."""
    service = ProcesoDiarioService(session)
    try:
        return _a_response(service.actualizar(proceso_diario_id, data, current_user), service)
    except BaseAppException as e:
        raise a_http(e)
