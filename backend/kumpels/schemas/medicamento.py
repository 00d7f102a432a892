"""
Schemas del catálogo de Medicamentos.
"""
from pydantic import BaseModel
from typing import Optional, List

from kumpels.schemas.responses import PaginacionResponse


class MedicamentoResponse(BaseModel):
    id: str
    codigo_servinte: str
    codigo_nuevo_estandar: Optional[str] = None
    cum_sin_ceros: Optional[str] = None
    cum_con_ceros: Optional[str] = None
    nombre_preciso: str
    principio_activo: Optional[str] = None
    concentracion_estandarizada: Optional[str] = None
    forma_farmaceutica: Optional[str] = None
    marca_comercial: Optional[str] = None
    nueva_estructura_estandar_semantico: Optional[str] = None
    clasificacion_articulo: Optional[str] = None
    via_administracion: Optional[str] = None
    descripcion_cum: Optional[str] = None
    activo: bool

    class Config:
        from_attributes = True


class MedicamentosPaginados(BaseModel):
    """Página de resultados de búsqueda."""
    medicamentos: List[MedicamentoResponse]
    pagination: PaginacionResponse
