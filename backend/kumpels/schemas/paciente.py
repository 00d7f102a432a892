"""
Schemas de Paciente.
"""
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

from kumpels.models.enums import (
    EstadoPacienteEnum,
    EstadoProcesoEnum,
    GeneroEnum,
    PasoProcesoEnum,
    TipoCodigoQREnum,
    TipoTransaccionEnum,
)
from kumpels.schemas.infraestructura import CamaBasica, ServicioBasico


class PacienteCreate(BaseModel):
    """
    Schema para crear un paciente.

    Los campos obligatorios se validan en el servicio para responder 400
    con un mensaje claro.
    """
    id_externo: Optional[str] = Field(None, max_length=50)
    nombre: Optional[str] = Field(None, max_length=100)
    apellido: Optional[str] = Field(None, max_length=100)
    fecha_nacimiento: Optional[datetime] = None
    genero: Optional[GeneroEnum] = None
    fecha_ingreso: Optional[datetime] = None
    cama_id: Optional[str] = None
    servicio_id: Optional[str] = None
    historia_clinica: Optional[str] = None
    notas: Optional[str] = None


class PacienteUpdate(BaseModel):
    """Schema para actualizar un paciente (parcial)."""
    id_externo: Optional[str] = Field(None, min_length=1, max_length=50)
    nombre: Optional[str] = Field(None, min_length=1, max_length=100)
    apellido: Optional[str] = Field(None, min_length=1, max_length=100)
    fecha_nacimiento: Optional[datetime] = None
    genero: Optional[GeneroEnum] = None
    fecha_ingreso: Optional[datetime] = None
    cama_id: Optional[str] = None
    servicio_id: Optional[str] = None
    estado: Optional[EstadoPacienteEnum] = None
    historia_clinica: Optional[str] = None
    notas: Optional[str] = None


class PacienteBasico(BaseModel):
    """Datos mínimos de un paciente para respuestas anidadas."""
    id: str
    id_externo: str
    nombre: str
    apellido: str
    estado: EstadoPacienteEnum
    cama: Optional[CamaBasica] = None

    class Config:
        from_attributes = True


class ProcesoEnPaciente(BaseModel):
    """Proceso de medicación dentro de la ficha del paciente."""
    id: str
    paso: PasoProcesoEnum
    estado: EstadoProcesoEnum
    proceso_diario_id: Optional[str] = None
    iniciado_en: Optional[datetime] = None
    completado_en: Optional[datetime] = None
    notas: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CodigoQREnEscaneo(BaseModel):
    id: str
    qr_id: str
    tipo: TipoCodigoQREnum
    servicio_id: Optional[str] = None

    class Config:
        from_attributes = True


class EscaneoEnPaciente(BaseModel):
    """Registro de escaneo dentro de la ficha del paciente."""
    id: str
    codigo_qr_id: str
    codigo_qr: Optional[CodigoQREnEscaneo] = None
    escaneado_por: str
    proceso_diario_id: Optional[str] = None
    temperatura: Optional[float] = None
    linea_destino_id: Optional[str] = None
    tipo_transaccion: Optional[TipoTransaccionEnum] = None
    escaneado_en: datetime

    class Config:
        from_attributes = True


class PacienteResponse(BaseModel):
    """Schema de respuesta para paciente."""
    id: str
    id_externo: str
    nombre: str
    apellido: str
    fecha_nacimiento: datetime
    genero: GeneroEnum
    fecha_ingreso: datetime
    cama_id: str
    servicio_id: str
    estado: EstadoPacienteEnum
    historia_clinica: Optional[str] = None
    notas: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    cama: Optional[CamaBasica] = None
    servicio: Optional[ServicioBasico] = None
    procesos: List[ProcesoEnPaciente] = []

    class Config:
        from_attributes = True


class PacienteDetalleResponse(PacienteResponse):
    """Paciente con sus registros de escaneo QR."""
    escaneos_qr: List[EscaneoEnPaciente] = []
