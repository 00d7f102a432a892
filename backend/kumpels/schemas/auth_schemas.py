"""
Schemas de autenticación y administración de usuarios.
Validación de datos para login, tokens, usuarios y perfiles.
"""
from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List
from datetime import datetime

from kumpels.models.usuario import RolEnum


# ============================================
# REQUEST SCHEMAS
# ============================================

class LoginRequest(BaseModel):
    """Schema para login."""
    email: EmailStr
    password: str = Field(..., min_length=1)
    remember_me: bool = Field(default=False)  # Para refresh token más largo


class RefreshTokenRequest(BaseModel):
    """Schema para refresh de token."""
    refresh_token: str


class PasswordChangeRequest(BaseModel):
    """Schema para cambio de la contraseña propia."""
    current_password: str
    new_password: str = Field(..., min_length=7, max_length=100)


class UsuarioCreate(BaseModel):
    """Schema para crear un usuario (solo SUPERADMIN)."""
    email: EmailStr
    password: str = Field(..., min_length=7, max_length=100)
    nombre: str = Field(..., min_length=2, max_length=30)
    apellido: str = Field(..., min_length=2, max_length=30)
    rol: RolEnum = Field(default=RolEnum.ENFERMERA)
    is_active: bool = True


class UsuarioUpdate(BaseModel):
    """Schema para actualizar un usuario (solo SUPERADMIN)."""
    email: Optional[EmailStr] = None
    nombre: Optional[str] = Field(None, min_length=2, max_length=30)
    apellido: Optional[str] = Field(None, min_length=2, max_length=30)
    rol: Optional[RolEnum] = None
    is_active: Optional[bool] = None


class PasswordResetRequest(BaseModel):
    """Schema para que el administrador restablezca una contraseña."""
    password: str = Field(..., min_length=7, max_length=100)


class PerfilUpdate(BaseModel):
    """Schema para actualizar un perfil."""
    nombre: Optional[str] = Field(None, min_length=2, max_length=30)
    apellido: Optional[str] = Field(None, min_length=2, max_length=30)
    avatar_url: Optional[str] = Field(None, max_length=500)
    rol: Optional[RolEnum] = None


# ============================================
# RESPONSE SCHEMAS
# ============================================

class TokenResponse(BaseModel):
    """Schema de respuesta con tokens."""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int  # segundos hasta expiración


class UserResponse(BaseModel):
    """Schema de respuesta de usuario (sin password)."""
    id: str
    email: str
    nombre: str
    apellido: str
    nombre_completo: str
    rol: RolEnum
    avatar_url: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime
    last_login: Optional[datetime] = None
    permisos: List[str]  # Lista de permisos como strings

    class Config:
        from_attributes = True


class UserListResponse(BaseModel):
    """Página de usuarios."""
    users: List[UserResponse]
    total: int
    page: int
    page_size: int
    total_pages: int


class LoginResponse(BaseModel):
    """Schema de respuesta de login exitoso."""
    user: UserResponse
    tokens: TokenResponse
    message: str = "Login exitoso"


# ============================================
# TOKEN PAYLOAD
# ============================================

class TokenPayload(BaseModel):
    """Payload del JWT token."""
    sub: str  # user_id
    email: str
    rol: str
    exp: datetime
    iat: datetime
    type: str = "access"  # "access" o "refresh"


def usuario_a_response(usuario) -> UserResponse:
    """Convierte un Usuario en su respuesta pública con la lista de permisos."""
    return UserResponse(
        id=usuario.id,
        email=usuario.email,
        nombre=usuario.nombre,
        apellido=usuario.apellido,
        nombre_completo=usuario.nombre_completo,
        rol=usuario.rol,
        avatar_url=usuario.avatar_url,
        is_active=usuario.is_active,
        created_at=usuario.created_at,
        updated_at=usuario.updated_at,
        last_login=usuario.last_login,
        permisos=sorted(p.value for p in usuario.permisos),
    )
