"""
Schemas de Respuestas Comunes.
"""
from pydantic import BaseModel
from typing import Optional


class MessageResponse(BaseModel):
    """Respuesta genérica con mensaje."""
    success: bool
    message: str
    data: Optional[dict] = None


class PaginacionResponse(BaseModel):
    """Metadatos de paginación."""
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool

    @classmethod
    def calcular(cls, page: int, limit: int, total: int) -> "PaginacionResponse":
        """Construye la paginación a partir de página, límite y total."""
        total_pages = (total + limit - 1) // limit if limit > 0 else 0
        return cls(
            page=page,
            limit=limit,
            total=total,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_prev=page > 1,
        )
