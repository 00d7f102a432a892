"""
Servicio del catálogo de Medicamentos.
"""
from typing import Optional
from sqlmodel import Session

from kumpels.config import settings
from kumpels.repositories.medicamento_repo import MedicamentoRepository
from kumpels.schemas.medicamento import MedicamentoResponse, MedicamentosPaginados
from kumpels.schemas.responses import PaginacionResponse


class MedicamentoService:
    """Búsqueda paginada sobre el catálogo de medicamentos activos."""

    def __init__(self, session: Session):
        self.session = session
        self.repo = MedicamentoRepository(session)

    def buscar(
        self,
        q: Optional[str] = None,
        page: int = 1,
        limit: Optional[int] = None,
    ) -> MedicamentosPaginados:
        """
        Busca medicamentos por código o nombre.

        Args:
            q: Texto a buscar (sin distinguir mayúsculas)
            page: Página, desde 1
            limit: Resultados por página

        Returns:
            Medicamentos de la página y metadatos de paginación
        """
        page = max(page, 1)
        limit = limit or settings.MEDICAMENTOS_POR_PAGINA
        medicamentos, total = self.repo.buscar(q, page, limit)
        return MedicamentosPaginados(
            medicamentos=[MedicamentoResponse.model_validate(m) for m in medicamentos],
            pagination=PaginacionResponse.calcular(page, limit, total),
        )
