"""
Repository de Cama.
"""
from typing import Optional, List
from sqlmodel import Session, select

from kumpels.repositories.base import BaseRepository
from kumpels.models.cama import Cama
from kumpels.models.linea import Linea
from kumpels.models.paciente import Paciente
from kumpels.models.enums import EstadoPacienteEnum


class CamaRepository(BaseRepository[Cama]):
    """Repository para operaciones de camas."""

    def __init__(self, session: Session):
        super().__init__(session, Cama)

    def obtener_por_linea_y_numero(self, linea_id: str, numero: str) -> Optional[Cama]:
        """
        Obtiene una cama por su número dentro de una línea.

        Args:
            linea_id: ID de la línea
            numero: Número de la cama (ej: "PC01")

        Returns:
            La cama o None
        """
        query = select(Cama).where(Cama.linea_id == linea_id, Cama.numero == numero)
        return self.session.exec(query).first()

    def listar(
        self,
        linea_id: Optional[str] = None,
        solo_disponibles: bool = False
    ) -> List[Cama]:
        """
        Camas activas ordenadas por línea y número.

        Args:
            linea_id: Filtrar por línea
            solo_disponibles: Si True, excluye camas con paciente activo

        Returns:
            Lista de camas
        """
        query = (
            select(Cama)
            .join(Linea, Cama.linea_id == Linea.id)
            .where(Cama.activa == True)  # noqa: E712
        )
        if linea_id:
            query = query.where(Cama.linea_id == linea_id)
        if solo_disponibles:
            ocupadas = select(Paciente.cama_id).where(
                Paciente.estado == EstadoPacienteEnum.ACTIVO
            )
            query = query.where(Cama.id.not_in(ocupadas))

        query = query.order_by(Linea.nombre_visible, Cama.numero)
        return list(self.session.exec(query).all())

    def obtener_paciente_activo(
        self,
        cama_id: str,
        excluir_paciente_id: Optional[str] = None
    ) -> Optional[Paciente]:
        """
        Obtiene el paciente activo que ocupa una cama.

        Args:
            cama_id: ID de la cama
            excluir_paciente_id: Paciente a ignorar (al reasignar su propia cama)

        Returns:
            El paciente o None
        """
        query = select(Paciente).where(
            Paciente.cama_id == cama_id,
            Paciente.estado == EstadoPacienteEnum.ACTIVO
        )
        if excluir_paciente_id:
            query = query.where(Paciente.id != excluir_paciente_id)
        return self.session.exec(query).first()
