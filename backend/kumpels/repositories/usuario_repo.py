"""
Repository de Usuarios y Refresh Tokens.
"""
from typing import Optional, List, Tuple
from sqlmodel import Session, select, or_, func

from kumpels.repositories.base import BaseRepository
from kumpels.models.usuario import Usuario, RefreshToken


class UsuarioRepository(BaseRepository[Usuario]):
    """Repository para operaciones de usuarios."""

    def __init__(self, session: Session):
        super().__init__(session, Usuario)

    def obtener_por_email(self, email: str) -> Optional[Usuario]:
        """Busca un usuario por email sin distinguir mayúsculas."""
        query = select(Usuario).where(func.lower(Usuario.email) == email.lower())
        return self.session.exec(query).first()

    def listar_paginado(
        self,
        pagina: int = 1,
        tamano: int = 10,
        busqueda: Optional[str] = None,
    ) -> Tuple[List[Usuario], int]:
        """
        Lista usuarios paginados, más recientes primero.

        Args:
            pagina: Página (desde 1)
            tamano: Usuarios por página
            busqueda: Texto buscado en email, nombre y apellido

        Returns:
            Tupla (usuarios, total)
        """
        query = select(Usuario)
        if busqueda:
            patron = f"%{busqueda.lower()}%"
            query = query.where(
                or_(
                    func.lower(Usuario.email).like(patron),
                    func.lower(Usuario.nombre).like(patron),
                    func.lower(Usuario.apellido).like(patron),
                )
            )
        total = self.contar_query(query)
        query = query.order_by(Usuario.created_at.desc()).offset((pagina - 1) * tamano).limit(tamano)
        return list(self.session.exec(query).all()), total


class RefreshTokenRepository(BaseRepository[RefreshToken]):
    """Repository para refresh tokens."""

    def __init__(self, session: Session):
        super().__init__(session, RefreshToken)

    def obtener_por_token(self, token: str) -> Optional[RefreshToken]:
        query = select(RefreshToken).where(RefreshToken.token == token)
        return self.session.exec(query).first()

    def listar_por_usuario(self, user_id: str) -> List[RefreshToken]:
        query = select(RefreshToken).where(RefreshToken.user_id == user_id)
        return list(self.session.exec(query).all())
