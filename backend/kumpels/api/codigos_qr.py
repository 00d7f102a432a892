"""
Endpoints de Códigos QR.
"""
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from kumpels.core.database import get_session
from kumpels.core.auth_dependencies import get_current_user
from kumpels.core.exceptions import BaseAppException
from kumpels.models.usuario import Usuario
from kumpels.schemas.qr import (
    CodigoQRGenerarRequest,
    CodigoQRResponse,
    CodigoQRGeneradoResponse,
    CodigosQRAgrupadosResponse,
)
from kumpels.services.codigo_qr_service import CodigoQRService
from kumpels.api.errores import a_http

router = APIRouter()


@router.get("", response_model=CodigosQRAgrupadosResponse)
def listar_codigos_activos(
    current_user: Usuario = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    """Códigos activos agrupados por tipo."""
    return CodigoQRService(session).listar_activos()


@router.post("", response_model=CodigoQRGeneradoResponse, status_code=status.HTTP_201_CREATED)
def generar_codigos(
    data: CodigoQRGenerarRequest,
    current_user: Usuario = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    """
    Genera códigos QR (solo SUPERADMIN).

    - ``generar``: un código del tipo indicado, desactivando el anterior
    - ``generar_todos_llegada_servicio``: uno por cada servicio activo
    """
    service = CodigoQRService(session)
    try:
        if data.accion == "generar_todos_llegada_servicio":
            codigos = service.generar_todos_llegada_servicio(current_user)
            mensaje = f"Se generaron {len(codigos)} códigos de llegada a servicio"
        else:
            codigos = [service.generar(data.tipo, current_user, data.servicio_id)]
            mensaje = "Código QR generado correctamente"
    except BaseAppException as e:
        raise a_http(e)

    return CodigoQRGeneradoResponse(
        message=mensaje,
        codigos=[CodigoQRResponse.model_validate(c) for c in codigos],
    )
