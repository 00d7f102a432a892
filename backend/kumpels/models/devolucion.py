"""
Modelos de Devoluciones Manuales y Causas de Devolución.
"""
from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime
import uuid

from kumpels.models.enums import EstadoDevolucionManualEnum

if TYPE_CHECKING:
    from kumpels.models.paciente import Paciente


class CausaDevolucion(SQLModel, table=True):
    """Catálogo de causas de devolución de medicamentos."""
    __tablename__ = "causa_devolucion"

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        primary_key=True
    )
    codigo: int = Field(unique=True, index=True)
    descripcion: str
    activa: bool = Field(default=True)

    created_at: datetime = Field(default_factory=datetime.utcnow)


class DevolucionManual(SQLModel, table=True):
    """
    Devolución de medicamentos registrada fuera del flujo QR.

    La genera enfermería y la revisa el regente de farmacia, que la
    aprueba o rechaza.
    """
    __tablename__ = "devolucion_manual"

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        primary_key=True
    )
    paciente_id: str = Field(foreign_key="paciente.id", index=True)
    generado_por: str = Field(foreign_key="usuarios.id", index=True)
    revisado_por: Optional[str] = Field(default=None, foreign_key="usuarios.id", index=True)
    estado: EstadoDevolucionManualEnum = Field(
        default=EstadoDevolucionManualEnum.PENDIENTE, index=True
    )
    fecha_aprobacion: Optional[datetime] = Field(default=None)
    causa: Optional[str] = Field(default=None)
    comentarios: Optional[str] = Field(default=None)

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    # Relaciones
    paciente: "Paciente" = Relationship()
    insumos: List["InsumoDevolucion"] = Relationship(
        back_populates="devolucion",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"}
    )

    @property
    def fue_revisada(self) -> bool:
        return self.estado != EstadoDevolucionManualEnum.PENDIENTE


class InsumoDevolucion(SQLModel, table=True):
    """Insumo (medicamento) incluido en una devolución manual."""
    __tablename__ = "insumo_devolucion"

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        primary_key=True
    )
    devolucion_id: str = Field(foreign_key="devolucion_manual.id", index=True)
    medicamento_id: Optional[str] = Field(default=None, foreign_key="medicamento.id")
    codigo_insumo: str
    nombre_insumo: str
    cantidad_devuelta: int

    devolucion: "DevolucionManual" = Relationship(back_populates="insumos")
