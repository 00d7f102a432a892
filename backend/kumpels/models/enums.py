"""
Enumeraciones del sistema.
Centralizadas para evitar imports circulares.

Los valores se mantienen en los códigos que usan los lectores QR y los
reportes ya existentes.
"""
from enum import Enum


class PasoProcesoEnum(str, Enum):
    """Pasos del proceso de medicación, en orden."""
    PREDESPACHO = "PREDESPACHO"
    ALISTAMIENTO = "ALISTAMIENTO"
    VALIDACION = "VALIDACION"
    ENTREGA = "ENTREGA"
    DEVOLUCION = "DEVOLUCION"


class EstadoProcesoEnum(str, Enum):
    """Estado de un proceso de medicación."""
    PENDIENTE = "PENDING"
    EN_PROGRESO = "IN_PROGRESS"
    COMPLETADO = "COMPLETED"
    ERROR = "ERROR"
    # Estados alcanzados solo mediante escaneo QR
    DESPACHADO_FARMACIA = "DISPATCHED_FROM_PHARMACY"
    ENTREGADO_SERVICIO = "DELIVERED_TO_SERVICE"
    RECOGIDO_SERVICIO = "PICKED_UP_FROM_SERVICE"


class EstadoProcesoDiarioEnum(str, Enum):
    """Ciclo de vida del proceso diario."""
    ACTIVO = "ACTIVE"
    COMPLETADO = "COMPLETED"
    CANCELADO = "CANCELLED"


class EstadoPacienteEnum(str, Enum):
    """Estado de hospitalización del paciente."""
    ACTIVO = "ACTIVE"
    DADO_DE_ALTA = "DISCHARGED"
    TRASLADADO = "TRANSFERRED"
    FALLECIDO = "DECEASED"


class GeneroEnum(str, Enum):
    """Género registrado del paciente."""
    MASCULINO = "MALE"
    FEMENINO = "FEMALE"
    OTRO = "OTHER"


class NombreLineaEnum(str, Enum):
    """Líneas (agrupaciones de pisos/servicios) del hospital."""
    LINEA_1 = "LINE_1"
    LINEA_2 = "LINE_2"
    LINEA_3 = "LINE_3"
    LINEA_4 = "LINE_4"
    LINEA_5 = "LINE_5"


class TipoCodigoQREnum(str, Enum):
    """Tipo de código QR según el punto del recorrido en que se escanea."""
    DESPACHO_FARMACIA = "PHARMACY_DISPATCH"
    LLEGADA_SERVICIO = "SERVICE_ARRIVAL"
    RECOGIDA_DEVOLUCION = "DEVOLUTION_PICKUP"
    RETORNO_DEVOLUCION = "DEVOLUTION_RETURN"
    DESPACHO_FARMACIA_DEVOLUCION = "PHARMACY_DISPATCH_DEVOLUTION"


class TipoTransaccionEnum(str, Enum):
    """Sentido del movimiento registrado en un escaneo."""
    ENTREGA = "ENTREGA"
    DEVOLUCION = "DEVOLUCION"


class EstadoDevolucionManualEnum(str, Enum):
    """Estado de revisión de una devolución manual."""
    PENDIENTE = "PENDING"
    APROBADA = "APPROVED"
    RECHAZADA = "REJECTED"


class TipoRegistroEnum(str, Enum):
    """Severidad de un registro de error de proceso."""
    ERROR = "ERROR"
    ADVERTENCIA = "WARNING"
    INFO = "INFO"


# ============================================
# NOMBRES PARA MOSTRAR
# ============================================

NOMBRES_PASO: dict[PasoProcesoEnum, str] = {
    PasoProcesoEnum.PREDESPACHO: "Predespacho",
    PasoProcesoEnum.ALISTAMIENTO: "Alistamiento",
    PasoProcesoEnum.VALIDACION: "Validación",
    PasoProcesoEnum.ENTREGA: "Entrega",
    PasoProcesoEnum.DEVOLUCION: "Devolución",
}

NOMBRES_ESTADO: dict[EstadoProcesoEnum, str] = {
    EstadoProcesoEnum.PENDIENTE: "Pendiente",
    EstadoProcesoEnum.EN_PROGRESO: "En Progreso",
    EstadoProcesoEnum.COMPLETADO: "Completado",
    EstadoProcesoEnum.ERROR: "Error",
    EstadoProcesoEnum.DESPACHADO_FARMACIA: "Salió de Farmacia",
    EstadoProcesoEnum.ENTREGADO_SERVICIO: "Entregado en Servicio",
    EstadoProcesoEnum.RECOGIDO_SERVICIO: "Recogido en Servicio",
}


def nombre_paso(paso: PasoProcesoEnum) -> str:
    """Nombre legible de un paso del proceso."""
    return NOMBRES_PASO.get(paso, "Desconocido")


def nombre_estado(estado: EstadoProcesoEnum) -> str:
    """Nombre legible de un estado del proceso."""
    return NOMBRES_ESTADO.get(estado, "Desconocido")
