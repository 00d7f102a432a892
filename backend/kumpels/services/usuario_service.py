"""
Servicio de Usuarios.
Administración de cuentas (SUPERADMIN) y perfiles propios.
"""
from typing import Optional, Tuple, List
from sqlmodel import Session
import logging

from kumpels.config import settings
from kumpels.models.usuario import Usuario, RolEnum
from kumpels.repositories.usuario_repo import UsuarioRepository, RefreshTokenRepository
from kumpels.services.auth_service import auth_service
from kumpels.schemas.auth_schemas import UsuarioCreate, UsuarioUpdate, PerfilUpdate
from kumpels.core.exceptions import (
    ValidationError,
    ConflictError,
    PermisoDenegadoError,
    UsuarioNotFoundError,
)

logger = logging.getLogger("kumpels.usuarios")


class UsuarioService:
    """
    Servicio para gestión de usuarios.

    La administración es exclusiva de SUPERADMIN (se exige en el router).
    Los perfiles los edita su dueño o un SUPERADMIN.
    """

    def __init__(self, session: Session):
        self.session = session
        self.repo = UsuarioRepository(session)
        self.token_repo = RefreshTokenRepository(session)

    # ============================================
    # ADMINISTRACIÓN
    # ============================================

    def listar(
        self,
        page: int = 1,
        page_size: int = 10,
        search: Optional[str] = None,
    ) -> Tuple[List[Usuario], int]:
        """
        Página de usuarios filtrada por email, nombre o apellido.

        Returns:
            Tupla (usuarios, total)
        """
        page = max(page, 1)
        page_size = min(max(page_size, 1), settings.USUARIOS_MAX_PAGINA)
        return self.repo.listar_paginado(page, page_size, search)

    def obtener(self, usuario_id: str) -> Usuario:
        usuario = self.repo.obtener_por_id(usuario_id)
        if not usuario:
            raise UsuarioNotFoundError(usuario_id)
        return usuario

    def crear(self, data: UsuarioCreate, creado_por: Usuario) -> Usuario:
        """
        Crea una cuenta con la contraseña hasheada.

        Raises:
            ConflictError: Si el email ya está registrado
        """
        email = data.email.lower()
        if self.repo.obtener_por_email(email):
            raise ConflictError(f"El email {email} ya está registrado")

        usuario = self.repo.guardar(Usuario(
            email=email,
            hashed_password=auth_service.hash_password(data.password),
            nombre=data.nombre,
            apellido=data.apellido,
            rol=data.rol,
            is_active=data.is_active,
        ))
        logger.info(f"Usuario {email} ({usuario.rol.value}) creado por {creado_por.email}")
        return usuario

    def actualizar(self, usuario_id: str, data: UsuarioUpdate) -> Usuario:
        """
        Actualiza los campos enviados de una cuenta.

        Desactivar una cuenta revoca sus sesiones.
        """
        usuario = self.obtener(usuario_id)

        if data.email is not None:
            email = data.email.lower()
            existente = self.repo.obtener_por_email(email)
            if existente and existente.id != usuario.id:
                raise ConflictError(f"El email {email} ya está registrado")
            usuario.email = email

        for campo in ("nombre", "apellido", "rol", "is_active"):
            valor = getattr(data, campo)
            if valor is not None:
                setattr(usuario, campo, valor)

        usuario = self.repo.guardar(usuario)
        if data.is_active is False:
            auth_service.revoke_all_user_tokens(usuario.id, self.session)

        logger.info(f"Usuario {usuario.email} actualizado")
        return usuario

    def eliminar(self, usuario_id: str, actual: Usuario) -> None:
        """
        Elimina una cuenta y sus refresh tokens.

        Raises:
            ValidationError: Si el usuario intenta eliminarse a sí mismo
        """
        if usuario_id == actual.id:
            raise ValidationError("No puedes eliminar tu propia cuenta")

        usuario = self.obtener(usuario_id)
        for token in self.token_repo.listar_por_usuario(usuario.id):
            self.session.delete(token)
        self.session.flush()
        self.repo.eliminar(usuario)
        logger.warning(f"Usuario {usuario.email} eliminado por {actual.email}")

    def cambiar_password(self, usuario: Usuario, actual: str, nueva: str) -> int:
        """
        Cambia la contraseña propia y cierra todas las sesiones.

        Returns:
            Sesiones cerradas

        Raises:
            ValidationError: Si la contraseña actual no coincide o la nueva es igual
        """
        if not auth_service.verify_password(actual, usuario.hashed_password):
            raise ValidationError("Contraseña actual incorrecta")
        if actual == nueva:
            raise ValidationError("La nueva contraseña debe ser diferente a la actual")

        auth_service.update_password(usuario, nueva, self.session)
        return auth_service.revoke_all_user_tokens(usuario.id, self.session)

    def restablecer_password(self, usuario_id: str, password: str) -> Usuario:
        """Fija una nueva contraseña y cierra las sesiones abiertas."""
        usuario = self.obtener(usuario_id)
        auth_service.update_password(usuario, password, self.session)
        auth_service.revoke_all_user_tokens(usuario.id, self.session)
        logger.info(f"Contraseña de {usuario.email} restablecida")
        return usuario

    # ============================================
    # PERFILES
    # ============================================

    def obtener_perfil(self, usuario_id: str, actual: Usuario) -> Usuario:
        self._verificar_dueno(usuario_id, actual)
        return self.obtener(usuario_id)

    def actualizar_perfil(
        self,
        usuario_id: str,
        data: PerfilUpdate,
        actual: Usuario
    ) -> Usuario:
        """
        Actualiza nombre, apellido, avatar y rol de un perfil.

        Raises:
            PermisoDenegadoError: Si no es el propio perfil ni SUPERADMIN, o
                si alguien distinto de SUPERADMIN intenta cambiar el rol
        """
        self._verificar_dueno(usuario_id, actual)
        usuario = self.obtener(usuario_id)

        if data.rol is not None and data.rol != usuario.rol:
            if actual.rol != RolEnum.SUPERADMIN:
                logger.warning(f"{actual.email} intentó cambiar el rol de {usuario.email}")
                raise PermisoDenegadoError("Solo un SUPERADMIN puede cambiar roles")
            usuario.rol = data.rol

        if data.nombre is not None:
            usuario.nombre = data.nombre
        if data.apellido is not None:
            usuario.apellido = data.apellido
        if data.avatar_url is not None:
            usuario.avatar_url = data.avatar_url or None

        return self.repo.guardar(usuario)

    @staticmethod
    def _verificar_dueno(usuario_id: str, actual: Usuario) -> None:
        if usuario_id != actual.id and actual.rol != RolEnum.SUPERADMIN:
            raise PermisoDenegadoError("Solo puedes consultar o editar tu propio perfil")
