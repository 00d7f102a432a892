"""
Schemas de Estadísticas.
"""
from pydantic import BaseModel
from typing import Optional, List, Union, Literal
from datetime import datetime


class FiltrosEstadisticas(BaseModel):
    """Filtros comunes a las estadísticas y su exportación."""
    linea_id: Optional[str] = None
    servicio_id: Optional[str] = None
    fecha_desde: Optional[datetime] = None
    fecha_hasta: Optional[datetime] = None
    proceso_diario_id: Optional[str] = None


class MetricasCumplimiento(BaseModel):
    """Porcentajes enteros de cumplimiento."""
    cumplimiento_entrega: int = 0
    cumplimiento_devoluciones: int = 0
    adherencia_carro: int = 0
    pacientes_con_errores: int = 0


class TiempoLinea(BaseModel):
    nombre: str
    predespacho: float = 0.0
    alistamiento: float = 0.0
    verificacion: float = 0.0
    entrega: float = 0.0
    total: float = 0.0


class TiempoPorEtapa(BaseModel):
    total: float = 0.0
    cambio: float = 0.0
    lineas: List[TiempoLinea] = []


class DevolucionesPorRazon(BaseModel):
    razon: str
    cantidad: int
    porcentaje: int


class MetricasDevolucionesManuales(BaseModel):
    total: int = 0
    cambio: float = 0.0
    porcentaje: int = 0
    por_razon: List[DevolucionesPorRazon] = []


class CumplimientoTemperatura(BaseModel):
    temperatura_promedio: Optional[float] = None
    fuera_de_rango: int = 0
    total_lecturas: int = 0
    porcentaje_cumplimiento: int = 0


class EtapaCuelloBotella(BaseModel):
    etapa: str
    tiempo_promedio: float
    retrasos: int


class EficienciaProcesos(BaseModel):
    tiempo_promedio_completado: float = 0.0
    tasa_completado_a_tiempo: float = 0.0
    etapas_cuello_botella: List[EtapaCuelloBotella] = []


class MetricasComparativas(BaseModel):
    tiempo_promedio_por_etapa: TiempoPorEtapa
    devoluciones_manuales: MetricasDevolucionesManuales
    cumplimiento_temperatura: CumplimientoTemperatura
    eficiencia_procesos: EficienciaProcesos


class EstadisticasResponse(BaseModel):
    """Respuesta de estadísticas según tipo."""
    tipo: Literal["general", "comparativo"]
    data: Union[MetricasCumplimiento, MetricasComparativas]
