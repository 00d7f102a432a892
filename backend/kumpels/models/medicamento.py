"""
Modelo de Medicamento (catálogo).
"""
from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime
import uuid


class Medicamento(SQLModel, table=True):
    """
    Catálogo de medicamentos con sus códigos institucionales (Servinte),
    código estándar nuevo y códigos CUM.
    """
    __tablename__ = "medicamento"

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        primary_key=True
    )
    codigo_servinte: str = Field(index=True)
    codigo_nuevo_estandar: Optional[str] = Field(default=None, index=True)
    cum_sin_ceros: Optional[str] = Field(default=None)
    cum_con_ceros: Optional[str] = Field(default=None)
    nombre_preciso: str = Field(index=True)
    principio_activo: Optional[str] = Field(default=None)
    concentracion_estandarizada: Optional[str] = Field(default=None)
    forma_farmaceutica: Optional[str] = Field(default=None)
    marca_comercial: Optional[str] = Field(default=None)
    nueva_estructura_estandar_semantico: Optional[str] = Field(default=None)
    clasificacion_articulo: Optional[str] = Field(default=None)
    via_administracion: Optional[str] = Field(default=None)
    descripcion_cum: Optional[str] = Field(default=None)
    activo: bool = Field(default=True)

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
