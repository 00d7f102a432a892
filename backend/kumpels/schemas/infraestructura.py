"""
Schemas de Líneas, Servicios y Camas.
"""
from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime

from kumpels.models.enums import NombreLineaEnum, EstadoPacienteEnum


class LineaBasica(BaseModel):
    """Datos mínimos de una línea."""
    id: str
    nombre: NombreLineaEnum
    nombre_visible: str
    descripcion: Optional[str] = None

    class Config:
        from_attributes = True


class ServicioBasico(BaseModel):
    """Datos mínimos de un servicio."""
    id: str
    nombre: str
    descripcion: Optional[str] = None
    linea_id: str

    class Config:
        from_attributes = True


class CamaBasica(BaseModel):
    """Cama con su línea."""
    id: str
    numero: str
    linea_id: str
    linea: Optional[LineaBasica] = None

    class Config:
        from_attributes = True


class PacienteEnCama(BaseModel):
    """Paciente activo que ocupa una cama."""
    id: str
    id_externo: str
    nombre: str
    apellido: str
    estado: EstadoPacienteEnum

    class Config:
        from_attributes = True


class CamaEnLinea(BaseModel):
    id: str
    numero: str
    activa: bool

    class Config:
        from_attributes = True


class LineaResponse(BaseModel):
    """Línea con sus servicios y camas activas."""
    id: str
    nombre: NombreLineaEnum
    nombre_visible: str
    descripcion: Optional[str] = None
    activa: bool
    servicios: List[ServicioBasico] = []
    camas: List[CamaEnLinea] = []
    created_at: datetime
    updated_at: datetime


class ServicioResponse(BaseModel):
    """Servicio con su línea y cantidad de pacientes activos."""
    id: str
    nombre: str
    descripcion: Optional[str] = None
    linea_id: str
    activo: bool
    linea: LineaBasica
    pacientes_activos: int = 0


class CamaResponse(BaseModel):
    """Cama con su línea y el paciente activo que la ocupa."""
    id: str
    numero: str
    linea_id: str
    activa: bool
    linea: LineaBasica
    paciente: Optional[PacienteEnCama] = None
    created_at: datetime
    updated_at: datetime


class CamaCreate(BaseModel):
    """Schema para crear una cama."""
    numero: Optional[str] = None
    linea_id: Optional[str] = None
