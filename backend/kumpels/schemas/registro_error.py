"""
Schemas de Registros de Error de Proceso.
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from kumpels.models.enums import PasoProcesoEnum, TipoRegistroEnum


class RegistroErrorCreate(BaseModel):
    """Schema para reportar un error, advertencia o nota."""
    paciente_id: str
    proceso_medicacion_id: Optional[str] = None
    paso: PasoProcesoEnum
    tipo: TipoRegistroEnum = TipoRegistroEnum.ERROR
    mensaje: str = Field(..., max_length=2000)


class RegistroErrorUpdate(BaseModel):
    resuelto: Optional[bool] = None
    mensaje: Optional[str] = Field(None, max_length=2000)


class RegistroErrorResponse(BaseModel):
    """Schema de respuesta para registro de error."""
    id: str
    paciente_id: str
    proceso_medicacion_id: Optional[str] = None
    paso: PasoProcesoEnum
    tipo: TipoRegistroEnum
    mensaje: str
    reportado_por: str
    rol_reportante: str
    reportado_en: datetime
    resuelto_en: Optional[datetime] = None
    resuelto_por: Optional[str] = None

    class Config:
        from_attributes = True
