"""
Endpoints del catálogo de Medicamentos.
"""
from fastapi import APIRouter, Depends, Query
from sqlmodel import Session
from typing import Optional

from kumpels.core.database import get_session
from kumpels.core.auth_dependencies import get_current_user
from kumpels.models.usuario import Usuario
from kumpels.schemas.medicamento import MedicamentosPaginados
from kumpels.services.medicamento_service import MedicamentoService

router = APIRouter()


@router.get("", response_model=MedicamentosPaginados)
def buscar_medicamentos(
    q: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1, le=100),
    current_user: Usuario = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    """Búsqueda paginada por códigos, nombre, principio activo o marca."""
    return MedicamentoService(session).buscar(q, page, limit)
