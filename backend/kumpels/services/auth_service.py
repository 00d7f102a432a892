"""
Servicio de Autenticación.

Access tokens JWT firmados (python-jose) de vida corta y refresh tokens
opacos guardados en la tabla ``refresh_tokens``. Las contraseñas se
guardan con bcrypt vía passlib.
"""
from datetime import datetime, timedelta
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlmodel import Session, select
import logging
import secrets

from kumpels.config import settings
from kumpels.models.usuario import Usuario, RefreshToken
from kumpels.repositories.usuario_repo import UsuarioRepository, RefreshTokenRepository
from kumpels.schemas.auth_schemas import TokenPayload

logger = logging.getLogger("kumpels.auth")

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class AuthService:
    """Emisión y validación de credenciales de sesión."""

    def __init__(self):
        self.secret_key = settings.JWT_SECRET_KEY
        self.algorithm = settings.JWT_ALGORITHM
        self.access_token_expire = timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES)
        self.refresh_token_expire = timedelta(days=settings.JWT_REFRESH_TOKEN_EXPIRE_DAYS)
        self.remember_me_expire = timedelta(days=settings.JWT_REMEMBER_ME_EXPIRE_DAYS)

    # ============================================
    # CONTRASEÑAS
    # ============================================

    def hash_password(self, password: str) -> str:
        return pwd_context.hash(password)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        return pwd_context.verify(plain_password, hashed_password)

    def update_password(self, user: Usuario, new_password: str, session: Session) -> None:
        user.hashed_password = self.hash_password(new_password)
        UsuarioRepository(session).guardar(user)
        logger.info(f"Contraseña actualizada para {user.email}")

    # ============================================
    # ACCESS TOKEN (JWT)
    # ============================================

    def create_access_token(self, user: Usuario, expires_delta: Optional[timedelta] = None) -> str:
        """JWT con id, email y rol del usuario."""
        ahora = datetime.utcnow()
        payload = {
            "sub": user.id,
            "email": user.email,
            "rol": user.rol.value,
            "iat": ahora,
            "exp": ahora + (expires_delta or self.access_token_expire),
            "type": "access",
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def decode_token(self, token: str) -> Optional[TokenPayload]:
        """Payload del token, o None si la firma no es válida o expiró."""
        try:
            return TokenPayload(**jwt.decode(token, self.secret_key, algorithms=[self.algorithm]))
        except JWTError:
            return None

    # ============================================
    # REFRESH TOKENS
    # ============================================

    def create_refresh_token(
        self,
        user: Usuario,
        session: Session,
        user_agent: Optional[str] = None,
        ip_address: Optional[str] = None,
        remember_me: bool = False
    ) -> str:
        """
        Registra un refresh token para la sesión del dispositivo.

        Con ``remember_me`` la vigencia es JWT_REMEMBER_ME_EXPIRE_DAYS.
        """
        vigencia = self.remember_me_expire if remember_me else self.refresh_token_expire
        registro = RefreshTokenRepository(session).guardar(RefreshToken(
            token=secrets.token_urlsafe(64),
            user_id=user.id,
            expires_at=datetime.utcnow() + vigencia,
            user_agent=user_agent,
            ip_address=ip_address,
        ))
        return registro.token

    def verify_refresh_token(self, token: str, session: Session) -> Optional[RefreshToken]:
        """Refresh token si existe, no está revocado y no expiró."""
        registro = RefreshTokenRepository(session).obtener_por_token(token)
        if registro and registro.is_valid:
            return registro
        return None

    def revoke_refresh_token(self, token: str, session: Session) -> bool:
        repo = RefreshTokenRepository(session)
        registro = repo.obtener_por_token(token)
        if not registro:
            return False
        self._revocar(registro)
        repo.guardar(registro)
        return True

    def revoke_all_user_tokens(self, user_id: str, session: Session) -> int:
        """Revoca las sesiones abiertas de un usuario; retorna cuántas eran."""
        vigentes = session.exec(
            select(RefreshToken).where(
                RefreshToken.user_id == user_id,
                RefreshToken.revoked == False,  # noqa: E712
            )
        ).all()
        for registro in vigentes:
            self._revocar(registro)
            session.add(registro)
        session.commit()
        return len(vigentes)

    @staticmethod
    def _revocar(registro: RefreshToken) -> None:
        registro.revoked = True
        registro.revoked_at = datetime.utcnow()

    # ============================================
    # USUARIOS
    # ============================================

    def authenticate_user(self, email: str, password: str, session: Session) -> Optional[Usuario]:
        """
        Valida email y contraseña, y registra la fecha de último login.

        Returns:
            El usuario, o None si no existe, está desactivado o la
            contraseña no coincide
        """
        user = self.get_user_by_email(email, session)
        if not user or not user.is_active or not self.verify_password(password, user.hashed_password):
            logger.warning(f"Login rechazado para {email}")
            return None

        user.last_login = datetime.utcnow()
        session.add(user)
        session.commit()
        session.refresh(user)
        logger.info(f"Login de {user.email} ({user.rol.value})")
        return user

    def get_user_by_id(self, user_id: str, session: Session) -> Optional[Usuario]:
        return session.get(Usuario, user_id)

    def get_user_by_email(self, email: str, session: Session) -> Optional[Usuario]:
        return UsuarioRepository(session).obtener_por_email(email)


auth_service = AuthService()
