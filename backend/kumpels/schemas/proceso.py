"""
Schemas de Procesos Diarios y Procesos de Medicación.
"""
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

from kumpels.models.enums import (
    EstadoProcesoDiarioEnum,
    EstadoProcesoEnum,
    PasoProcesoEnum,
    TipoRegistroEnum,
)
from kumpels.schemas.paciente import PacienteBasico


# ============================================
# PROCESO DIARIO
# ============================================

class ProcesoDiarioCreate(BaseModel):
    """Schema para iniciar un proceso diario."""
    fecha: Optional[datetime] = None
    notas: Optional[str] = None


class ProcesoDiarioUpdate(BaseModel):
    """Schema para actualizar un proceso diario."""
    estado: Optional[EstadoProcesoDiarioEnum] = None
    completado_en: Optional[datetime] = None
    notas: Optional[str] = None


class ProcesoEnDiario(BaseModel):
    """Proceso de medicación dentro de un proceso diario."""
    id: str
    paso: PasoProcesoEnum
    estado: EstadoProcesoEnum
    paciente: Optional[PacienteBasico] = None

    class Config:
        from_attributes = True


class ProcesoDiarioResponse(BaseModel):
    """Schema de respuesta para proceso diario."""
    id: str
    fecha: datetime
    iniciado_por: str
    iniciado_en: datetime
    completado_en: Optional[datetime] = None
    estado: EstadoProcesoDiarioEnum
    notas: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    total_procesos: int = 0
    procesos: List[ProcesoEnDiario] = []

    class Config:
        from_attributes = True


class ReinicioProcesosResponse(BaseModel):
    """Conteos eliminados al reiniciar los procesos diarios."""
    message: str
    procesos_diarios_eliminados: int
    procesos_medicacion_eliminados: int
    escaneos_qr_eliminados: int


# ============================================
# PROCESO DE MEDICACIÓN
# ============================================

class ProcesoMedicacionCreate(BaseModel):
    """Schema para crear un proceso de medicación."""
    paciente_id: str
    paso: PasoProcesoEnum
    proceso_diario_id: Optional[str] = None
    notas: Optional[str] = None


class ProcesoMedicacionUpdate(BaseModel):
    """Schema para cambiar el estado o las notas de un proceso."""
    estado: Optional[EstadoProcesoEnum] = None
    notas: Optional[str] = Field(None, max_length=2000)


class RegistroErrorEnProceso(BaseModel):
    id: str
    tipo: TipoRegistroEnum
    mensaje: str
    reportado_por: str
    reportado_en: datetime
    resuelto_en: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProcesoMedicacionResponse(BaseModel):
    """Schema de respuesta para proceso de medicación."""
    id: str
    paciente_id: str
    proceso_diario_id: Optional[str] = None
    paso: PasoProcesoEnum
    estado: EstadoProcesoEnum
    iniciado_en: Optional[datetime] = None
    iniciado_por: Optional[str] = None
    completado_en: Optional[datetime] = None
    completado_por: Optional[str] = None
    notas: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    paciente: Optional[PacienteBasico] = None

    class Config:
        from_attributes = True


class ProcesoMedicacionDetalleResponse(ProcesoMedicacionResponse):
    """Proceso con sus registros de error."""
    registros_error: List[RegistroErrorEnProceso] = []
