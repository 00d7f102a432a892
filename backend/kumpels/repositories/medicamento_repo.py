"""
Repository del catálogo de Medicamentos.
"""
from typing import Optional, List, Tuple
from sqlmodel import Session, select, or_, func

from kumpels.repositories.base import BaseRepository
from kumpels.models.medicamento import Medicamento


class MedicamentoRepository(BaseRepository[Medicamento]):
    """Repository para el catálogo de medicamentos."""

    def __init__(self, session: Session):
        super().__init__(session, Medicamento)

    def buscar(
        self,
        texto: Optional[str] = None,
        pagina: int = 1,
        limite: int = 20,
    ) -> Tuple[List[Medicamento], int]:
        """
        Busca medicamentos activos por nombres, marca, estructura semántica o códigos.

        Args:
            texto: Texto a buscar sin distinguir mayúsculas
            pagina: Página (desde 1)
            limite: Tamaño de página

        Returns:
            Tupla (medicamentos de la página, total de coincidencias)
        """
        query = select(Medicamento).where(Medicamento.activo == True)  # noqa: E712
        if texto:
            patron = f"%{texto.lower()}%"
            query = query.where(
                or_(
                    func.lower(Medicamento.codigo_servinte).like(patron),
                    func.lower(Medicamento.codigo_nuevo_estandar).like(patron),
                    func.lower(Medicamento.cum_sin_ceros).like(patron),
                    func.lower(Medicamento.cum_con_ceros).like(patron),
                    func.lower(Medicamento.nombre_preciso).like(patron),
                    func.lower(Medicamento.principio_activo).like(patron),
                    func.lower(Medicamento.marca_comercial).like(patron),
                    func.lower(Medicamento.nueva_estructura_estandar_semantico).like(patron),
                )
            )

        total = self.contar_query(query)
        offset = (pagina - 1) * limite
        query = query.order_by(Medicamento.nombre_preciso, Medicamento.codigo_servinte).offset(offset).limit(limite)
        return list(self.session.exec(query).all()), total
