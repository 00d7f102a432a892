"""
Endpoints de Perfil de usuario.
"""
from fastapi import APIRouter, Depends
from sqlmodel import Session

from kumpels.core.database import get_session
from kumpels.core.auth_dependencies import get_current_user
from kumpels.core.exceptions import BaseAppException
from kumpels.models.usuario import Usuario
from kumpels.schemas.auth_schemas import PerfilUpdate, UserResponse, usuario_a_response
from kumpels.services.usuario_service import UsuarioService
from kumpels.api.errores import a_http

router = APIRouter()


@router.get("/{usuario_id}", response_model=UserResponse)
def obtener_perfil(
    usuario_id: str,
    current_user: Usuario = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    """Perfil propio, o cualquiera para SUPERADMIN."""
    try:
        usuario = UsuarioService(session).obtener_perfil(usuario_id, current_user)
    except BaseAppException as e:
        raise a_http(e)
    return usuario_a_response(usuario)


@router.put("/{usuario_id}", response_model=UserResponse)
def actualizar_perfil(
    usuario_id: str,
    data: PerfilUpdate,
    current_user: Usuario = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    """Actualiza el perfil. Solo SUPERADMIN cambia roles."""
    try:
        usuario = UsuarioService(session).actualizar_perfil(usuario_id, data, current_user)
    except BaseAppException as e:
        raise a_http(e)
    return usuario_a_response(usuario)
