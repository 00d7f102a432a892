"""
Dependencies de autenticación para FastAPI.

Sin token válido los endpoints protegidos responden 401; con token pero sin
el permiso requerido, 403.
"""
from typing import List, Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlmodel import Session
import logging

from kumpels.core.database import get_session
from kumpels.models.usuario import Usuario, PermisoEnum
from kumpels.services.auth_service import auth_service

logger = logging.getLogger("kumpels.auth")

bearer = HTTPBearer(auto_error=False)


def _no_autenticado(detalle: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detalle,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    session: Session = Depends(get_session)
) -> Usuario:
    """
    Usuario dueño del access token del header Authorization.

    Raises:
        HTTPException 401: Sin token, token inválido o de refresco, o
            usuario inexistente o desactivado
    """
    if not credentials:
        raise _no_autenticado("Se requiere iniciar sesión")

    payload = auth_service.decode_token(credentials.credentials)
    if not payload or payload.type != "access":
        raise _no_autenticado("Sesión inválida o expirada")

    usuario = auth_service.get_user_by_id(payload.sub, session)
    if not usuario or not usuario.is_active:
        logger.warning(f"Token válido para usuario inexistente o inactivo: {payload.sub}")
        raise _no_autenticado("Usuario no encontrado o desactivado")

    return usuario


def require_permissions(*permisos: PermisoEnum):
    """
    Dependency que exige todos los permisos indicados.

    Uso:
        @router.post("", dependencies=[Depends(require_permissions(PermisoEnum.QR_GESTIONAR))])
    """
    async def verificar(current_user: Usuario = Depends(get_current_user)) -> Usuario:
        faltantes = [p for p in permisos if not current_user.tiene_permiso(p)]
        if faltantes:
            logger.info(
                f"{current_user.email} ({current_user.rol.value}) sin permiso "
                f"{', '.join(p.value for p in faltantes)}"
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Permiso requerido: {', '.join(p.value for p in faltantes)}",
            )
        return current_user

    return verificar


def get_user_permisos(user: Usuario) -> List[str]:
    """Permisos del usuario como strings ordenados."""
    return sorted(p.value for p in user.permisos)
