"""
Router de Autenticación.

Sesión (login, refresh, logout), cuenta propia y administración de
usuarios. La administración exige ``usuarios:gestionar`` (solo SUPERADMIN).
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status, Request
from sqlmodel import Session

from kumpels.config import settings
from kumpels.core.database import get_session
from kumpels.core.exceptions import BaseAppException
from kumpels.core.auth_dependencies import get_current_user, require_permissions, get_user_permisos
from kumpels.models.usuario import Usuario, PermisoEnum
from kumpels.services.auth_service import auth_service
from kumpels.services.usuario_service import UsuarioService
from kumpels.api.errores import a_http
from kumpels.schemas.auth_schemas import (
    LoginRequest,
    LoginResponse,
    TokenResponse,
    RefreshTokenRequest,
    UserResponse,
    UserListResponse,
    UsuarioCreate,
    UsuarioUpdate,
    PasswordChangeRequest,
    PasswordResetRequest,
    usuario_a_response,
)
from kumpels.schemas.responses import MessageResponse


router = APIRouter(prefix="/auth", tags=["Autenticación"])

EXPIRA_EN = settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES * 60

solo_admin = [Depends(require_permissions(PermisoEnum.USUARIOS_GESTIONAR))]


def _no_autorizado(detalle: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detalle)


# ============================================
# SESIÓN
# ============================================

@router.post("/login", response_model=LoginResponse)
async def login(
    request: Request,
    data: LoginRequest,
    session: Session = Depends(get_session)
):
    """Email y contraseña; retorna el usuario y su par de tokens."""
    user = auth_service.authenticate_user(data.email, data.password, session)
    if not user:
        raise _no_autorizado("Credenciales inválidas")

    refresh = auth_service.create_refresh_token(
        user,
        session,
        user_agent=request.headers.get("user-agent"),
        ip_address=request.client.host if request.client else None,
        remember_me=data.remember_me,
    )
    return LoginResponse(
        user=usuario_a_response(user),
        tokens=TokenResponse(
            access_token=auth_service.create_access_token(user),
            refresh_token=refresh,
            expires_in=EXPIRA_EN,
        ),
    )


@router.post("/refresh", response_model=TokenResponse)
async def refresh_token(
    data: RefreshTokenRequest,
    session: Session = Depends(get_session)
):
    """Nuevo access token; el refresh token se mantiene hasta que expire o se revoque."""
    registro = auth_service.verify_refresh_token(data.refresh_token, session)
    if not registro:
        raise _no_autorizado("Refresh token inválido o expirado")

    user = auth_service.get_user_by_id(registro.user_id, session)
    if not user or not user.is_active:
        raise _no_autorizado("Usuario no encontrado o desactivado")

    return TokenResponse(
        access_token=auth_service.create_access_token(user),
        refresh_token=data.refresh_token,
        expires_in=EXPIRA_EN,
    )


@router.post("/logout", response_model=MessageResponse)
async def logout(
    data: RefreshTokenRequest,
    current_user: Usuario = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    auth_service.revoke_refresh_token(data.refresh_token, session)
    return MessageResponse(success=True, message="Sesión cerrada")


@router.post("/logout-all", response_model=MessageResponse)
async def logout_all(
    current_user: Usuario = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    """Revoca todas las sesiones del usuario actual."""
    cerradas = auth_service.revoke_all_user_tokens(current_user.id, session)
    return MessageResponse(success=True, message=f"{cerradas} sesiones cerradas")


# ============================================
# CUENTA PROPIA
# ============================================

@router.get("/me", response_model=UserResponse)
async def get_me(current_user: Usuario = Depends(get_current_user)):
    return usuario_a_response(current_user)


@router.get("/me/permisos", response_model=List[str])
async def get_my_permissions(current_user: Usuario = Depends(get_current_user)):
    return get_user_permisos(current_user)


@router.put("/me/password", response_model=MessageResponse)
async def change_password(
    data: PasswordChangeRequest,
    current_user: Usuario = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    """Cambia la contraseña propia; todas las sesiones deben volver a iniciar."""
    try:
        UsuarioService(session).cambiar_password(
            current_user, data.current_password, data.new_password
        )
    except BaseAppException as e:
        raise a_http(e)
    return MessageResponse(
        success=True,
        message="Contraseña actualizada. Inicia sesión nuevamente."
    )


# ============================================
# ADMINISTRACIÓN DE USUARIOS
# ============================================

@router.get("/usuarios", response_model=UserListResponse, dependencies=solo_admin)
async def list_users(
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=settings.USUARIOS_MAX_PAGINA),
    search: Optional[str] = None,
    session: Session = Depends(get_session)
):
    """Usuarios más recientes primero; ``search`` busca en email, nombre y apellido."""
    usuarios, total = UsuarioService(session).listar(page, page_size, search)
    return UserListResponse(
        users=[usuario_a_response(u) for u in usuarios],
        total=total,
        page=page,
        page_size=page_size,
        total_pages=(total + page_size - 1) // page_size,
    )


@router.post(
    "/usuarios",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=solo_admin
)
async def create_user(
    data: UsuarioCreate,
    current_user: Usuario = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    try:
        return usuario_a_response(UsuarioService(session).crear(data, current_user))
    except BaseAppException as e:
        raise a_http(e)


@router.get("/usuarios/{user_id}", response_model=UserResponse, dependencies=solo_admin)
async def get_user(user_id: str, session: Session = Depends(get_session)):
    try:
        return usuario_a_response(UsuarioService(session).obtener(user_id))
    except BaseAppException as e:
        raise a_http(e)


@router.put("/usuarios/{user_id}", response_model=UserResponse, dependencies=solo_admin)
async def update_user(
    user_id: str,
    data: UsuarioUpdate,
    session: Session = Depends(get_session)
):
    """Desactivar una cuenta también revoca sus sesiones."""
    try:
        return usuario_a_response(UsuarioService(session).actualizar(user_id, data))
    except BaseAppException as e:
        raise a_http(e)


@router.delete("/usuarios/{user_id}", response_model=MessageResponse, dependencies=solo_admin)
async def delete_user(
    user_id: str,
    current_user: Usuario = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    """Nadie puede eliminar su propia cuenta."""
    try:
        UsuarioService(session).eliminar(user_id, current_user)
    except BaseAppException as e:
        raise a_http(e)
    return MessageResponse(success=True, message="Usuario eliminado correctamente")


@router.put(
    "/usuarios/{user_id}/reset-password",
    response_model=MessageResponse,
    dependencies=solo_admin
)
async def reset_user_password(
    user_id: str,
    data: PasswordResetRequest,
    session: Session = Depends(get_session)
):
    """Fija una contraseña nueva y cierra las sesiones del usuario."""
    try:
        user = UsuarioService(session).restablecer_password(user_id, data.password)
    except BaseAppException as e:
        raise a_http(e)
    return MessageResponse(success=True, message=f"Contraseña de {user.email} restablecida")
