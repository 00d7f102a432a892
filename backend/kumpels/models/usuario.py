"""
Modelo de Usuario para autenticación.
"""
from typing import Optional
from datetime import datetime
from enum import Enum
from sqlmodel import SQLModel, Field
import uuid


# ============================================
# ENUMS
# ============================================

class RolEnum(str, Enum):
    """
    Roles disponibles en el sistema.

    - SUPERADMIN: Administración total (usuarios, códigos QR, borrados)
    - ENFERMERA: Entrega y devolución en el servicio
    - VALIDADOR_FARMACIA: Validación farmacéutica de la dispensación
    - REGENTE_FARMACIA: Predespacho, alistamiento, procesos diarios y
      aprobación de devoluciones
    """
    SUPERADMIN = "SUPERADMIN"
    ENFERMERA = "NURSE"
    VALIDADOR_FARMACIA = "PHARMACY_VALIDATOR"
    REGENTE_FARMACIA = "PHARMACY_REGENT"


class PermisoEnum(str, Enum):
    """Permisos granulares del sistema."""

    # Pacientes
    PACIENTE_VER = "paciente:ver"
    PACIENTE_CREAR = "paciente:crear"
    PACIENTE_EDITAR = "paciente:editar"
    PACIENTE_ELIMINAR = "paciente:eliminar"

    # Infraestructura (líneas, servicios, camas)
    INFRAESTRUCTURA_VER = "infraestructura:ver"
    INFRAESTRUCTURA_GESTIONAR = "infraestructura:gestionar"

    # Procesos diarios
    PROCESO_DIARIO_GESTIONAR = "proceso_diario:gestionar"
    PROCESO_DIARIO_REINICIAR = "proceso_diario:reiniciar"

    # Procesos de medicación
    PROCESO_VER = "proceso:ver"
    PROCESO_CREAR = "proceso:crear"
    PROCESO_ELIMINAR = "proceso:eliminar"

    # Códigos QR
    QR_GESTIONAR = "qr:gestionar"
    QR_ESCANEAR = "qr:escanear"

    # Devoluciones
    DEVOLUCION_REGISTRAR = "devolucion:registrar"
    DEVOLUCION_APROBAR = "devolucion:aprobar"
    DEVOLUCION_RECIBIR = "devolucion:recibir"

    # Registros de error
    ERROR_REPORTAR = "error:reportar"
    ERROR_RESOLVER = "error:resolver"

    # Estadísticas
    ESTADISTICAS_VER = "estadisticas:ver"
    ESTADISTICAS_EXPORTAR = "estadisticas:exportar"

    # Usuarios
    USUARIOS_GESTIONAR = "usuarios:gestionar"


# ============================================
# PERMISOS POR ROL
# ============================================

_PERMISOS_BASE: set[PermisoEnum] = {
    PermisoEnum.PACIENTE_VER,
    PermisoEnum.INFRAESTRUCTURA_VER,
    PermisoEnum.PROCESO_VER,
    PermisoEnum.PROCESO_CREAR,
    PermisoEnum.QR_ESCANEAR,
    PermisoEnum.DEVOLUCION_REGISTRAR,
    PermisoEnum.ERROR_REPORTAR,
    PermisoEnum.ERROR_RESOLVER,
    PermisoEnum.ESTADISTICAS_VER,
    PermisoEnum.ESTADISTICAS_EXPORTAR,
}

PERMISOS_POR_ROL: dict[RolEnum, set[PermisoEnum]] = {
    RolEnum.SUPERADMIN: set(PermisoEnum),  # Todos los permisos

    RolEnum.REGENTE_FARMACIA: _PERMISOS_BASE | {
        PermisoEnum.PACIENTE_CREAR,
        PermisoEnum.PACIENTE_EDITAR,
        PermisoEnum.PROCESO_DIARIO_GESTIONAR,
        PermisoEnum.PROCESO_DIARIO_REINICIAR,
        PermisoEnum.DEVOLUCION_APROBAR,
        PermisoEnum.DEVOLUCION_RECIBIR,
    },

    RolEnum.VALIDADOR_FARMACIA: set(_PERMISOS_BASE),

    RolEnum.ENFERMERA: _PERMISOS_BASE | {
        PermisoEnum.PACIENTE_CREAR,
        PermisoEnum.PACIENTE_EDITAR,
        PermisoEnum.DEVOLUCION_RECIBIR,
    },
}


# ============================================
# MODELO USUARIO
# ============================================

class Usuario(SQLModel, table=True):
    """Modelo de usuario del sistema."""

    __tablename__ = "usuarios"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    hashed_password: str = Field(max_length=255)
    nombre: str = Field(max_length=30)
    apellido: str = Field(max_length=30)
    rol: RolEnum = Field(default=RolEnum.ENFERMERA)
    avatar_url: Optional[str] = Field(default=None, max_length=500)

    # Estado
    is_active: bool = Field(default=True)

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
    last_login: Optional[datetime] = Field(default=None)

    @property
    def nombre_completo(self) -> str:
        """Nombre y apellido del usuario."""
        return f"{self.nombre} {self.apellido}".strip()

    @property
    def permisos(self) -> set[PermisoEnum]:
        """Obtiene los permisos basados en el rol."""
        return PERMISOS_POR_ROL.get(self.rol, set())

    def tiene_permiso(self, permiso: PermisoEnum) -> bool:
        """Verifica si el usuario tiene un permiso específico."""
        return permiso in self.permisos


# ============================================
# MODELO REFRESH TOKEN
# ============================================

class RefreshToken(SQLModel, table=True):
    """Modelo para almacenar refresh tokens."""

    __tablename__ = "refresh_tokens"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    token: str = Field(unique=True, index=True)
    user_id: str = Field(foreign_key="usuarios.id", index=True)

    expires_at: datetime
    created_at: datetime = Field(default_factory=datetime.utcnow)
    revoked: bool = Field(default=False)
    revoked_at: Optional[datetime] = Field(default=None)

    # Información del dispositivo/sesión
    user_agent: Optional[str] = Field(default=None, max_length=500)
    ip_address: Optional[str] = Field(default=None, max_length=45)

    @property
    def is_expired(self) -> bool:
        """Verifica si el token ha expirado."""
        return datetime.utcnow() > self.expires_at

    @property
    def is_valid(self) -> bool:
        """Verifica si el token es válido (no revocado y no expirado)."""
        return not self.revoked and not self.is_expired
