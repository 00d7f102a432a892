"""
Schemas de Devoluciones Manuales y Causas de Devolución.
"""
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

from kumpels.models.enums import EstadoDevolucionManualEnum
from kumpels.schemas.paciente import PacienteBasico


class CausaDevolucionResponse(BaseModel):
    id: str
    codigo: int
    descripcion: str
    activa: bool

    class Config:
        from_attributes = True


class InsumoDevolucionCreate(BaseModel):
    """Insumo devuelto."""
    medicamento_id: Optional[str] = None
    codigo_insumo: str = Field(..., min_length=1)
    nombre_insumo: str = Field(..., min_length=1)
    cantidad_devuelta: int = Field(..., gt=0)


class InsumoDevolucionResponse(BaseModel):
    id: str
    medicamento_id: Optional[str] = None
    codigo_insumo: str
    nombre_insumo: str
    cantidad_devuelta: int

    class Config:
        from_attributes = True


class DevolucionManualCreate(BaseModel):
    """Schema para registrar una devolución manual."""
    paciente_id: str
    causa: Optional[str] = None
    comentarios: Optional[str] = None
    insumos: List[InsumoDevolucionCreate] = Field(..., min_length=1)


class DevolucionManualUpdate(BaseModel):
    """Schema para revisar o modificar una devolución manual."""
    estado: Optional[EstadoDevolucionManualEnum] = None
    causa: Optional[str] = None
    comentarios: Optional[str] = None
    insumos: Optional[List[InsumoDevolucionCreate]] = None


class DevolucionManualResponse(BaseModel):
    """Schema de respuesta para devolución manual."""
    id: str
    paciente_id: str
    paciente: Optional[PacienteBasico] = None
    generado_por: str
    revisado_por: Optional[str] = None
    estado: EstadoDevolucionManualEnum
    fecha_aprobacion: Optional[datetime] = None
    causa: Optional[str] = None
    comentarios: Optional[str] = None
    insumos: List[InsumoDevolucionResponse] = []
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
