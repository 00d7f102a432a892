"""
Endpoints de Líneas, Servicios y Camas.
"""
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from typing import List, Optional

from kumpels.core.database import get_session
from kumpels.core.auth_dependencies import require_permissions
from kumpels.core.exceptions import BaseAppException
from kumpels.models.usuario import PermisoEnum
from kumpels.schemas.infraestructura import (
    LineaResponse,
    ServicioResponse,
    CamaResponse,
    CamaCreate,
)
from kumpels.services.infraestructura_service import InfraestructuraService
from kumpels.api.errores import a_http

router = APIRouter()

puede_ver = Depends(require_permissions(PermisoEnum.INFRAESTRUCTURA_VER))


@router.get("/lineas", response_model=List[LineaResponse], dependencies=[puede_ver])
def listar_lineas(session: Session = Depends(get_session)):
    """Líneas activas con sus servicios y camas."""
    return InfraestructuraService(session).listar_lineas()


@router.get("/servicios", response_model=List[ServicioResponse], dependencies=[puede_ver])
def listar_servicios(
    linea_id: Optional[str] = None,
    session: Session = Depends(get_session)
):
    """Servicios activos con su línea y cantidad de pacientes activos."""
    return InfraestructuraService(session).listar_servicios(linea_id)


@router.get("/camas", response_model=List[CamaResponse], dependencies=[puede_ver])
def listar_camas(
    linea_id: Optional[str] = None,
    disponible: Optional[bool] = None,
    session: Session = Depends(get_session)
):
    """Camas activas; con ``disponible=true`` solo las libres."""
    return InfraestructuraService(session).listar_camas(linea_id, disponible)


@router.post(
    "/camas",
    response_model=CamaResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_permissions(PermisoEnum.INFRAESTRUCTURA_GESTIONAR))]
)
def crear_cama(data: CamaCreate, session: Session = Depends(get_session)):
    """Crea una cama en una línea."""
    try:
        return InfraestructuraService(session).crear_cama(data)
    except BaseAppException as e:
        raise a_http(e)
