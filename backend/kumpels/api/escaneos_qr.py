"""
Endpoints de Escaneos QR.
Cada escaneo procesa en lote a los pacientes elegibles.
"""
from fastapi import APIRouter, Depends
from sqlmodel import Session
from typing import Optional, List

from kumpels.core.database import get_session
from kumpels.core.auth_dependencies import get_current_user, require_permissions
from kumpels.core.exceptions import BaseAppException
from kumpels.models.usuario import Usuario, PermisoEnum
from kumpels.schemas.qr import (
    EscaneoRequest,
    LlegadaPisoRequest,
    PacienteProcesado,
    RecepcionDevolucionRequest,
    RegistroEscaneoResponse,
    ResultadoEscaneoResponse,
)
from kumpels.schemas.proceso import ProcesoMedicacionResponse
from kumpels.services.escaneo_qr_service import EscaneoQRService, ResultadoEscaneo
from kumpels.api.errores import a_http

router = APIRouter(dependencies=[Depends(require_permissions(PermisoEnum.QR_ESCANEAR))])


def _a_response(resultado: ResultadoEscaneo) -> ResultadoEscaneoResponse:
    return ResultadoEscaneoResponse(
        message=resultado.message,
        pacientes_procesados=resultado.pacientes_procesados,
        registros_creados=resultado.registros_creados,
        procesos_actualizados=resultado.procesos_actualizados,
        pacientes=[
            PacienteProcesado(
                id=p.id,
                nombre=p.nombre,
                apellido=p.apellido,
                cama=p.cama.numero if p.cama else None,
            )
            for p in resultado.pacientes
        ],
    )


@router.get("", response_model=List[RegistroEscaneoResponse])
def listar_escaneos(
    proceso_diario_id: Optional[str] = None,
    session: Session = Depends(get_session)
):
    """
    Escaneos del proceso diario indicado más las devoluciones de otros
    días, del más reciente al más antiguo.
    """
    return EscaneoQRService(session).listar_escaneos(proceso_diario_id)


@router.post("/despacho-farmacia", response_model=ResultadoEscaneoResponse)
def escanear_despacho_farmacia(
    data: EscaneoRequest,
    current_user: Usuario = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    """Salida del carro de farmacia hacia una línea."""
    try:
        return _a_response(EscaneoQRService(session).despacho_farmacia(data, current_user))
    except BaseAppException as e:
        raise a_http(e)


@router.post("/llegada-servicio", response_model=ResultadoEscaneoResponse)
def escanear_llegada_servicio(
    data: EscaneoRequest,
    current_user: Usuario = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    """Llegada del carro (entrega o devolución) al servicio del código."""
    try:
        return _a_response(EscaneoQRService(session).llegada_servicio(data, current_user))
    except BaseAppException as e:
        raise a_http(e)


@router.post("/llegada-piso", response_model=ResultadoEscaneoResponse)
def registrar_llegada_piso(
    data: LlegadaPisoRequest,
    current_user: Usuario = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    """Llegada al piso por nombre de servicio y fecha de proceso."""
    try:
        return _a_response(EscaneoQRService(session).llegada_piso(data, current_user))
    except BaseAppException as e:
        raise a_http(e)


@router.post("/recogida-devolucion", response_model=ResultadoEscaneoResponse)
def escanear_recogida_devolucion(
    data: EscaneoRequest,
    current_user: Usuario = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    try:
        return _a_response(EscaneoQRService(session).recogida_devolucion(data, current_user))
    except BaseAppException as e:
        raise a_http(e)


@router.post("/retorno-devolucion", response_model=ResultadoEscaneoResponse)
def escanear_retorno_devolucion(
    data: EscaneoRequest,
    current_user: Usuario = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    """Devoluciones recogidas que regresan a farmacia; quedan completadas."""
    try:
        return _a_response(EscaneoQRService(session).retorno_devolucion(data, current_user))
    except BaseAppException as e:
        raise a_http(e)


@router.post("/despacho-farmacia-devolucion", response_model=ResultadoEscaneoResponse)
def escanear_despacho_farmacia_devolucion(
    data: EscaneoRequest,
    current_user: Usuario = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    try:
        return _a_response(
            EscaneoQRService(session).despacho_farmacia_devolucion(data, current_user)
        )
    except BaseAppException as e:
        raise a_http(e)


@router.post(
    "/recepcion-devolucion",
    response_model=ProcesoMedicacionResponse,
    dependencies=[Depends(require_permissions(PermisoEnum.DEVOLUCION_RECIBIR))]
)
def confirmar_recepcion_devolucion(
    data: RecepcionDevolucionRequest,
    current_user: Usuario = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    """Confirma a mano la recepción de una devolución en farmacia."""
    try:
        return EscaneoQRService(session).recepcion_devolucion(data, current_user)
    except BaseAppException as e:
        raise a_http(e)
