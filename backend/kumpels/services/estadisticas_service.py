"""
Servicio de estadísticas de dispensación.
Calcula las métricas de cumplimiento (general) y el análisis comparativo.
"""
from typing import Dict, List, Optional, Set
from collections import defaultdict
from sqlmodel import Session, select, or_
import logging

from kumpels.config import settings
from kumpels.models.paciente import Paciente
from kumpels.models.cama import Cama
from kumpels.models.servicio import Servicio
from kumpels.models.proceso_medicacion import ProcesoMedicacion
from kumpels.models.codigo_qr import CodigoQR, RegistroEscaneoQR
from kumpels.models.registro_error import RegistroErrorProceso
from kumpels.models.devolucion import DevolucionManual
from kumpels.models.enums import (
    EstadoProcesoEnum,
    PasoProcesoEnum,
    TipoCodigoQREnum,
)
from kumpels.repositories.paciente_repo import PacienteRepository
from kumpels.schemas.estadisticas import (
    FiltrosEstadisticas,
    MetricasCumplimiento,
    MetricasComparativas,
    TiempoLinea,
    TiempoPorEtapa,
    DevolucionesPorRazon,
    MetricasDevolucionesManuales,
    CumplimientoTemperatura,
    EficienciaProcesos,
    EstadisticasResponse,
)
from kumpels.core.exceptions import ValidationError

logger = logging.getLogger("kumpels.estadisticas")

TIPOS_ESTADISTICA = ("general", "comparativo")

# Pasos que se promedian por línea, con su clave de salida
ETAPAS_COMPARATIVAS = {
    PasoProcesoEnum.PREDESPACHO: "predespacho",
    PasoProcesoEnum.ALISTAMIENTO: "alistamiento",
    PasoProcesoEnum.VALIDACION: "verificacion",
    PasoProcesoEnum.ENTREGA: "entrega",
}

TIPOS_ADHERENCIA = (
    TipoCodigoQREnum.DESPACHO_FARMACIA,
    TipoCodigoQREnum.LLEGADA_SERVICIO,
)


def porcentaje(parte: int, total: int) -> int:
    """Porcentaje entero redondeado hacia arriba en .5; 0 si no hay total."""
    if total <= 0:
        return 0
    return int(parte * 100 / total + 0.5)


def promedio(valores: List[float]) -> float:
    return sum(valores) / len(valores) if valores else 0.0


class EstadisticasService:
    """
    Servicio para calcular estadísticas.

    Provee:
    - Métricas de cumplimiento: entregas y devoluciones a tiempo,
      adherencia al carro de medicamentos, pacientes con errores
    - Análisis comparativo: tiempos por etapa y línea, devoluciones
      manuales, cumplimiento de temperatura
    """

    def __init__(self, session: Session):
        self.session = session
        self.paciente_repo = PacienteRepository(session)

    def obtener(self, tipo: Optional[str], filtros: FiltrosEstadisticas) -> EstadisticasResponse:
        """
        Calcula las estadísticas del tipo pedido.

        Raises:
            ValidationError: Si el tipo no es ``general`` ni ``comparativo``
        """
        tipo = tipo or "general"
        if tipo == "general":
            return EstadisticasResponse(tipo=tipo, data=self.calcular_cumplimiento(filtros))
        if tipo == "comparativo":
            return EstadisticasResponse(tipo=tipo, data=self.calcular_comparativo(filtros))
        raise ValidationError(f"Tipo de estadística no válido: {tipo}")

    # ============================================
    # GENERAL
    # ============================================

    def calcular_cumplimiento(self, filtros: FiltrosEstadisticas) -> MetricasCumplimiento:
        """Métricas de cumplimiento sobre los pacientes activos en alcance."""
        pacientes = self.paciente_repo.listar_activos_en_alcance(
            filtros.linea_id, filtros.servicio_id
        )
        total_pacientes = len(pacientes)
        if total_pacientes == 0:
            return MetricasCumplimiento()

        procesos = self._procesos(filtros)

        entregas = [
            p for p in procesos
            if p.paso == PasoProcesoEnum.ENTREGA and p.estado == EstadoProcesoEnum.COMPLETADO
        ]
        entregas_a_tiempo = [
            p for p in entregas if p.duracion_horas <= settings.SLA_ENTREGA_HORAS
        ]

        devoluciones = [
            p for p in procesos
            if p.paso == PasoProcesoEnum.DEVOLUCION
            and p.estado in (EstadoProcesoEnum.COMPLETADO, EstadoProcesoEnum.EN_PROGRESO)
        ]
        devoluciones_a_tiempo = [
            p for p in devoluciones if p.duracion_horas <= settings.SLA_DEVOLUCION_HORAS
        ]

        paciente_ids = {p.paciente_id for p in procesos}
        con_carro = self._pacientes_con_escaneo(paciente_ids, filtros.proceso_diario_id)
        con_errores = self._pacientes_con_errores([p.id for p in procesos])

        metricas = MetricasCumplimiento(
            cumplimiento_entrega=porcentaje(len(entregas_a_tiempo), len(entregas)),
            cumplimiento_devoluciones=porcentaje(len(devoluciones_a_tiempo), len(devoluciones)),
            adherencia_carro=porcentaje(len(con_carro), total_pacientes),
            pacientes_con_errores=porcentaje(len(con_errores), total_pacientes),
        )
        logger.debug(f"Cumplimiento calculado sobre {len(procesos)} procesos: {metricas}")
        return metricas

    # ============================================
    # COMPARATIVO
    # ============================================

    def calcular_comparativo(self, filtros: FiltrosEstadisticas) -> MetricasComparativas:
        """Tiempos por etapa, devoluciones manuales y temperatura."""
        procesos = self._procesos(filtros, incluir_servicio=False)

        lineas = self._tiempos_por_linea(procesos)
        tiempos = TiempoPorEtapa(
            total=round(sum(linea.total for linea in lineas), 2),
            lineas=lineas,
        )

        return MetricasComparativas(
            tiempo_promedio_por_etapa=tiempos,
            devoluciones_manuales=self._devoluciones_manuales(filtros, len(procesos)),
            cumplimiento_temperatura=self._temperatura({p.paciente_id for p in procesos}),
            eficiencia_procesos=EficienciaProcesos(),
        )

    def _tiempos_por_linea(self, procesos: List[ProcesoMedicacion]) -> List[TiempoLinea]:
        """Promedio de horas por etapa, agrupado por la línea del servicio del paciente."""
        nombres: Dict[str, str] = {}
        duraciones: Dict[str, Dict[str, List[float]]] = defaultdict(lambda: defaultdict(list))

        for proceso in procesos:
            linea = proceso.paciente.servicio.linea
            nombres.setdefault(linea.id, linea.nombre_visible)
            etapa = ETAPAS_COMPARATIVAS.get(proceso.paso)
            if etapa:
                duraciones[linea.id][etapa].append(proceso.duracion_horas)

        resultado = []
        for linea_id, nombre in nombres.items():
            promedios = {
                etapa: promedio(duraciones[linea_id][etapa])
                for etapa in ETAPAS_COMPARATIVAS.values()
            }
            resultado.append(TiempoLinea(
                nombre=nombre,
                total=round(sum(promedios.values()), 2),
                **{etapa: round(valor, 2) for etapa, valor in promedios.items()},
            ))
        return resultado

    def _devoluciones_manuales(
        self,
        filtros: FiltrosEstadisticas,
        total_procesos: int
    ) -> MetricasDevolucionesManuales:
        query = select(DevolucionManual)
        if filtros.fecha_desde:
            query = query.where(DevolucionManual.created_at >= filtros.fecha_desde)
        if filtros.fecha_hasta:
            query = query.where(DevolucionManual.created_at <= filtros.fecha_hasta)
        devoluciones = self.session.exec(query).all()

        por_razon: Dict[str, int] = defaultdict(int)
        for devolucion in devoluciones:
            por_razon[devolucion.causa or "Sin especificar"] += 1

        total = len(devoluciones)
        return MetricasDevolucionesManuales(
            total=total,
            porcentaje=porcentaje(total, total_procesos),
            por_razon=[
                DevolucionesPorRazon(
                    razon=razon,
                    cantidad=cantidad,
                    porcentaje=porcentaje(cantidad, total),
                )
                for razon, cantidad in por_razon.items()
            ],
        )

    def _temperatura(self, paciente_ids: Set[str]) -> CumplimientoTemperatura:
        """Lecturas de temperatura de los escaneos de los pacientes."""
        if not paciente_ids:
            return CumplimientoTemperatura()

        lecturas = list(self.session.exec(
            select(RegistroEscaneoQR.temperatura).where(
                RegistroEscaneoQR.paciente_id.in_(paciente_ids),
                RegistroEscaneoQR.temperatura.is_not(None),
            )
        ).all())
        if not lecturas:
            return CumplimientoTemperatura()

        fuera = [
            t for t in lecturas
            if t < settings.TEMPERATURA_MIN or t > settings.TEMPERATURA_MAX
        ]
        return CumplimientoTemperatura(
            temperatura_promedio=round(promedio(lecturas), 2),
            fuera_de_rango=len(fuera),
            total_lecturas=len(lecturas),
            porcentaje_cumplimiento=porcentaje(len(lecturas) - len(fuera), len(lecturas)),
        )

    # ============================================
    # CONSULTAS
    # ============================================

    def _procesos(
        self,
        filtros: FiltrosEstadisticas,
        incluir_servicio: bool = True
    ) -> List[ProcesoMedicacion]:
        """
        Procesos en alcance de los filtros.

        La línea se resuelve por la cama o por el servicio del paciente.
        """
        query = select(ProcesoMedicacion)
        if filtros.fecha_desde:
            query = query.where(ProcesoMedicacion.created_at >= filtros.fecha_desde)
        if filtros.fecha_hasta:
            query = query.where(ProcesoMedicacion.created_at <= filtros.fecha_hasta)
        if filtros.proceso_diario_id:
            query = query.where(ProcesoMedicacion.proceso_diario_id == filtros.proceso_diario_id)

        if filtros.linea_id or (incluir_servicio and filtros.servicio_id):
            pacientes = select(Paciente.id)
            if filtros.linea_id:
                pacientes = pacientes.where(
                    or_(
                        Paciente.cama_id.in_(
                            select(Cama.id).where(Cama.linea_id == filtros.linea_id)
                        ),
                        Paciente.servicio_id.in_(
                            select(Servicio.id).where(Servicio.linea_id == filtros.linea_id)
                        ),
                    )
                )
            if incluir_servicio and filtros.servicio_id:
                pacientes = pacientes.where(Paciente.servicio_id == filtros.servicio_id)
            query = query.where(ProcesoMedicacion.paciente_id.in_(pacientes))

        return list(self.session.exec(query).all())

    def _pacientes_con_escaneo(
        self,
        paciente_ids: Set[str],
        proceso_diario_id: Optional[str]
    ) -> Set[str]:
        """Pacientes con escaneo de despacho o de llegada a servicio."""
        if not paciente_ids:
            return set()
        query = (
            select(RegistroEscaneoQR.paciente_id)
            .join(CodigoQR, RegistroEscaneoQR.codigo_qr_id == CodigoQR.id)
            .where(
                RegistroEscaneoQR.paciente_id.in_(paciente_ids),
                CodigoQR.tipo.in_(TIPOS_ADHERENCIA),
            )
        )
        if proceso_diario_id:
            query = query.where(RegistroEscaneoQR.proceso_diario_id == proceso_diario_id)
        return set(self.session.exec(query).all())

    def _pacientes_con_errores(self, proceso_ids: List[str]) -> Set[str]:
        """Pacientes con algún registro de error ligado a sus procesos."""
        if not proceso_ids:
            return set()
        query = select(RegistroErrorProceso.paciente_id).where(
            RegistroErrorProceso.proceso_medicacion_id.in_(proceso_ids)
        )
        return set(self.session.exec(query).all())
