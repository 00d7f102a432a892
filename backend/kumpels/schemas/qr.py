"""
Schemas de Códigos QR y Escaneos.
"""
from pydantic import BaseModel, Field
from typing import Optional, List, Literal
from datetime import datetime

from kumpels.models.enums import TipoCodigoQREnum, TipoTransaccionEnum
from kumpels.schemas.infraestructura import ServicioBasico
from kumpels.schemas.paciente import PacienteBasico, CodigoQREnEscaneo


# ============================================
# CÓDIGOS QR
# ============================================

class CodigoQRGenerarRequest(BaseModel):
    """
    Acción sobre códigos QR.

    - ``generar``: genera un código del tipo indicado
    - ``generar_todos_llegada_servicio``: un código de llegada por servicio activo
    """
    accion: Literal["generar", "generar_todos_llegada_servicio"]
    tipo: Optional[TipoCodigoQREnum] = None
    servicio_id: Optional[str] = None


class CodigoQRResponse(BaseModel):
    """Schema de respuesta para código QR."""
    id: str
    qr_id: str
    tipo: TipoCodigoQREnum
    imagen_data_url: str
    servicio_id: Optional[str] = None
    servicio: Optional[ServicioBasico] = None
    creado_por: str
    activo: bool
    created_at: datetime

    class Config:
        from_attributes = True


class CodigosQRAgrupadosResponse(BaseModel):
    """Códigos activos agrupados por tipo."""
    despacho_farmacia: Optional[CodigoQRResponse] = None
    despacho_farmacia_devolucion: Optional[CodigoQRResponse] = None
    retorno_devolucion: Optional[CodigoQRResponse] = None
    llegada_servicio: List[CodigoQRResponse] = []
    recogida_devolucion: List[CodigoQRResponse] = []
    tiene_codigos_activos: bool = False


class CodigoQRGeneradoResponse(BaseModel):
    message: str
    codigos: List[CodigoQRResponse]


# ============================================
# ESCANEOS
# ============================================

class EscaneoRequest(BaseModel):
    """
    Datos de un escaneo QR.

    ``qr_id`` y ``temperatura`` se validan en el servicio para responder
    400 cuando faltan.
    """
    qr_id: Optional[str] = None
    temperatura: Optional[float] = None
    linea_destino: Optional[str] = None  # ID de la línea destino
    tipo_transaccion: Optional[TipoTransaccionEnum] = None


class LlegadaPisoRequest(BaseModel):
    """Registro de llegada al piso por nombre de servicio."""
    nombre_servicio: str = Field(..., min_length=1)
    fecha_proceso: datetime


class RecepcionDevolucionRequest(BaseModel):
    paciente_id: Optional[str] = None
    proceso_medicacion_id: Optional[str] = None


class PacienteProcesado(BaseModel):
    id: str
    nombre: str
    apellido: str
    cama: Optional[str] = None


class ResultadoEscaneoResponse(BaseModel):
    """Resultado de un escaneo por lote."""
    success: bool = True
    message: str
    pacientes_procesados: int
    registros_creados: int
    procesos_actualizados: int
    pacientes: List[PacienteProcesado] = []


class RegistroEscaneoResponse(BaseModel):
    """Registro de escaneo con paciente y código."""
    id: str
    paciente_id: str
    paciente: Optional[PacienteBasico] = None
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
