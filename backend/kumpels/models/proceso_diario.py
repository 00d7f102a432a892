"""
Modelo de Proceso Diario.
"""
from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime
import uuid

from kumpels.models.enums import EstadoProcesoDiarioEnum

if TYPE_CHECKING:
    from kumpels.models.proceso_medicacion import ProcesoMedicacion


class ProcesoDiario(SQLModel, table=True):
    """
    Contenedor diario de procesos de medicación.

    Existe como máximo uno por día calendario; la fecha se guarda
    normalizada al inicio del día.
    """
    __tablename__ = "proceso_diario"

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        primary_key=True
    )
    fecha: datetime = Field(unique=True, index=True)
    iniciado_por: str = Field(foreign_key="usuarios.id", index=True)
    iniciado_en: datetime = Field(default_factory=datetime.utcnow)
    completado_en: Optional[datetime] = Field(default=None)
    estado: EstadoProcesoDiarioEnum = Field(default=EstadoProcesoDiarioEnum.ACTIVO, index=True)
    notas: Optional[str] = Field(default=None)

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    # Relaciones
    procesos: List["ProcesoMedicacion"] = Relationship(back_populates="proceso_diario")

    def __repr__(self) -> str:
        return f"ProcesoDiario(id={self.id}, fecha={self.fecha.date()}, estado={self.estado})"

    @property
    def esta_activo(self) -> bool:
        return self.estado == EstadoProcesoDiarioEnum.ACTIVO
