"""
Modelos de Códigos QR y Registros de Escaneo.
"""
from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime
import uuid

from kumpels.models.enums import TipoCodigoQREnum, TipoTransaccionEnum

if TYPE_CHECKING:
    from kumpels.models.servicio import Servicio
    from kumpels.models.paciente import Paciente


class CodigoQR(SQLModel, table=True):
    """
    Código QR impreso en un punto del recorrido de los medicamentos.

    Solo un código activo por tipo (y por servicio en los tipos ligados a
    servicio). Al regenerar, el anterior queda inactivo.
    """
    __tablename__ = "codigo_qr"

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        primary_key=True
    )
    qr_id: str = Field(unique=True, index=True)
    tipo: TipoCodigoQREnum = Field(index=True)
    imagen_data_url: str  # data:image/png;base64,...
    servicio_id: Optional[str] = Field(default=None, foreign_key="servicio.id", index=True)
    creado_por: str = Field(foreign_key="usuarios.id")
    activo: bool = Field(default=True, index=True)

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    # Relaciones
    servicio: Optional["Servicio"] = Relationship()
    escaneos: List["RegistroEscaneoQR"] = Relationship(back_populates="codigo_qr")

    def __repr__(self) -> str:
        return f"CodigoQR(qr_id={self.qr_id}, tipo={self.tipo}, activo={self.activo})"


class RegistroEscaneoQR(SQLModel, table=True):
    """
    Evento de escaneo de un código QR para un paciente.

    Un escaneo sobre un código de línea o servicio genera un registro por
    cada paciente afectado.
    """
    __tablename__ = "registro_escaneo_qr"

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        primary_key=True
    )
    paciente_id: str = Field(foreign_key="paciente.id", index=True)
    codigo_qr_id: str = Field(foreign_key="codigo_qr.id", index=True)
    escaneado_por: str = Field(foreign_key="usuarios.id")
    proceso_diario_id: Optional[str] = Field(
        default=None, foreign_key="proceso_diario.id", index=True
    )
    temperatura: Optional[float] = Field(default=None)  # °C del contenedor
    linea_destino_id: Optional[str] = Field(default=None, foreign_key="linea.id")
    tipo_transaccion: Optional[TipoTransaccionEnum] = Field(default=None)
    escaneado_en: datetime = Field(default_factory=datetime.utcnow, index=True)

    # Relaciones
    paciente: "Paciente" = Relationship(back_populates="escaneos_qr")
    codigo_qr: "CodigoQR" = Relationship(back_populates="escaneos")
