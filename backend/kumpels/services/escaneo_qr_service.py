"""
Servicio de Escaneos QR.

Cada punto del recorrido de los medicamentos tiene un código QR. Escanearlo
registra el evento para todos los pacientes elegibles del lote (línea o
servicio) y avanza el estado de sus procesos de entrega o devolución.

Flujo de entrega:
    ALISTAMIENTO completado
      -> despacho de farmacia   (ENTREGA: DISPATCHED_FROM_PHARMACY)
      -> llegada al servicio    (ENTREGA: DELIVERED_TO_SERVICE)

Flujo de devolución:
    DEVOLUCION en progreso
      -> recogida en servicio   (PICKED_UP_FROM_SERVICE)
      -> retorno a farmacia     (COMPLETED)
"""
from typing import Optional, List, Set
from dataclasses import dataclass, field
from datetime import datetime
from sqlmodel import Session
import logging

from kumpels.models.usuario import Usuario, RolEnum
from kumpels.models.paciente import Paciente
from kumpels.models.linea import Linea
from kumpels.models.codigo_qr import CodigoQR, RegistroEscaneoQR
from kumpels.models.proceso_diario import ProcesoDiario
from kumpels.models.proceso_medicacion import ProcesoMedicacion
from kumpels.models.enums import (
    EstadoProcesoEnum,
    PasoProcesoEnum,
    TipoCodigoQREnum,
    TipoTransaccionEnum,
    nombre_estado,
)
from kumpels.repositories.codigo_qr_repo import CodigoQRRepository, RegistroEscaneoRepository
from kumpels.repositories.proceso_repo import ProcesoDiarioRepository, ProcesoMedicacionRepository
from kumpels.repositories.paciente_repo import PacienteRepository
from kumpels.repositories.linea_repo import LineaRepository, ServicioRepository
from kumpels.schemas.qr import EscaneoRequest, LlegadaPisoRequest, RecepcionDevolucionRequest
from kumpels.services.proceso_diario_service import ProcesoDiarioService
from kumpels.utils.fechas import inicio_del_dia
from kumpels.core.exceptions import (
    ValidationError,
    PermisoDenegadoError,
    NotFoundError,
    CodigoQRNotFoundError,
    ProcesoDiarioNotFoundError,
    ProcesoMedicacionNotFoundError,
)

logger = logging.getLogger("kumpels.escaneos")

ROLES_SERVICIO = (RolEnum.REGENTE_FARMACIA, RolEnum.SUPERADMIN)
ROLES_RECEPCION = (RolEnum.REGENTE_FARMACIA, RolEnum.SUPERADMIN, RolEnum.ENFERMERA)

ESTADOS_DESPACHO_DEVOLUCION = [
    EstadoProcesoEnum.EN_PROGRESO,
    EstadoProcesoEnum.DESPACHADO_FARMACIA,
    EstadoProcesoEnum.ENTREGADO_SERVICIO,
    EstadoProcesoEnum.COMPLETADO,
]

ESTADOS_RECEPCION = (
    EstadoProcesoEnum.EN_PROGRESO,
    EstadoProcesoEnum.DESPACHADO_FARMACIA,
    EstadoProcesoEnum.ENTREGADO_SERVICIO,
)


@dataclass
class ResultadoEscaneo:
    """Resultado de un escaneo por lote."""
    message: str
    pacientes: List[Paciente] = field(default_factory=list)
    registros_creados: int = 0
    procesos_actualizados: int = 0

    @property
    def pacientes_procesados(self) -> int:
        return len(self.pacientes)


class EscaneoQRService:
    """Servicio de escaneos QR por lote."""

    def __init__(self, session: Session):
        self.session = session
        self.codigo_repo = CodigoQRRepository(session)
        self.escaneo_repo = RegistroEscaneoRepository(session)
        self.diario_repo = ProcesoDiarioRepository(session)
        self.proceso_repo = ProcesoMedicacionRepository(session)
        self.paciente_repo = PacienteRepository(session)
        self.linea_repo = LineaRepository(session)
        self.servicio_repo = ServicioRepository(session)

    # ============================================
    # ENTREGA
    # ============================================

    def despacho_farmacia(self, data: EscaneoRequest, usuario: Usuario) -> ResultadoEscaneo:
        """
        Salida de farmacia de los medicamentos de una línea.

        Elegibles: pacientes activos de la línea con ALISTAMIENTO completado
        en el proceso diario de hoy y sin despacho registrado hoy.

        Raises:
            ValidationError: Datos faltantes, línea inválida o sin elegibles
            CodigoQRNotFoundError: Código inexistente, inactivo o de otro tipo
            ProcesoDiarioNotFoundError: Si no hay proceso diario activo hoy
        """
        self._validar_basico(data)
        linea = self._linea_obligatoria(data.linea_destino)
        if not data.tipo_transaccion:
            raise ValidationError("Tipo de transacción es requerido")
        codigo = self._codigo(data.qr_id, TipoCodigoQREnum.DESPACHO_FARMACIA)

        diario = self.diario_repo.obtener_activo_del_dia()
        if not diario:
            raise ProcesoDiarioNotFoundError(inicio_del_dia().date().isoformat())

        candidatos = self._con_proceso(
            self.paciente_repo.listar_activos_por_servicios(
                self.servicio_repo.ids_por_linea(linea.id)
            ),
            PasoProcesoEnum.ALISTAMIENTO,
            [EstadoProcesoEnum.COMPLETADO],
            diario.id,
        )
        pacientes = self._sin_escaneo(candidatos, TipoCodigoQREnum.DESPACHO_FARMACIA)
        if not pacientes:
            raise ValidationError(
                "No hay pacientes elegibles para salida de farmacia en la línea "
                "seleccionada o ya fueron registrados"
            )

        self._registrar(pacientes, codigo, usuario, diario, data, linea.id)
        for paciente in pacientes:
            self._mover_entrega(
                paciente, diario, EstadoProcesoEnum.DESPACHADO_FARMACIA, usuario
            )
        self.session.commit()

        return self._resultado(
            f"Salida de farmacia registrada para {len(pacientes)} pacientes "
            f"de la línea {linea.nombre_visible}",
            pacientes,
            procesos=len(pacientes),
        )

    def llegada_servicio(self, data: EscaneoRequest, usuario: Usuario) -> ResultadoEscaneo:
        """
        Llegada de los medicamentos (o del carro de devolución) al servicio
        del código.

        ENTREGA: pacientes despachados hoy pasan a DELIVERED_TO_SERVICE.
        DEVOLUCION: devoluciones despachadas de farmacia pasan a
        DELIVERED_TO_SERVICE.
        """
        self._verificar_rol(usuario, ROLES_SERVICIO, "escanear llegadas a servicio")
        self._validar_basico(data)
        if not data.tipo_transaccion:
            raise ValidationError("Tipo de transacción es requerido")
        codigo = self._codigo(data.qr_id, TipoCodigoQREnum.LLEGADA_SERVICIO, con_servicio=True)
        linea = self._linea_del_servicio(codigo, data.linea_destino)

        diario = self.diario_repo.obtener_activo_del_dia()
        if not diario:
            raise ValidationError("No hay proceso diario activo para hoy")

        activos = self.paciente_repo.listar_activos_por_servicios([codigo.servicio_id])

        if data.tipo_transaccion == TipoTransaccionEnum.ENTREGA:
            alistados = self._con_proceso(
                activos, PasoProcesoEnum.ALISTAMIENTO, [EstadoProcesoEnum.COMPLETADO], diario.id
            )
            despachados = self.escaneo_repo.pacientes_escaneados(
                [p.id for p in alistados],
                TipoCodigoQREnum.DESPACHO_FARMACIA,
                tipo_transaccion=TipoTransaccionEnum.ENTREGA,
            )
            pacientes = self._sin_escaneo(
                [p for p in alistados if p.id in despachados],
                TipoCodigoQREnum.LLEGADA_SERVICIO,
                TipoTransaccionEnum.ENTREGA,
                codigo.servicio_id,
            )
        else:
            pacientes = self._sin_escaneo(
                self._con_proceso(
                    activos,
                    PasoProcesoEnum.DEVOLUCION,
                    [EstadoProcesoEnum.DESPACHADO_FARMACIA],
                    diario.id,
                ),
                TipoCodigoQREnum.LLEGADA_SERVICIO,
                TipoTransaccionEnum.DEVOLUCION,
                codigo.servicio_id,
            )

        if not pacientes:
            raise ValidationError(
                "No hay pacientes listos para llegada a este servicio en la línea "
                "seleccionada o ya fueron registrados"
            )

        self._registrar(pacientes, codigo, usuario, diario, data, data.linea_destino)
        actualizados = 0
        for paciente in pacientes:
            if data.tipo_transaccion == TipoTransaccionEnum.ENTREGA:
                self._mover_entrega(
                    paciente, diario, EstadoProcesoEnum.ENTREGADO_SERVICIO, usuario
                )
                actualizados += 1
            else:
                proceso = self.proceso_repo.obtener_por_clave(
                    paciente.id, PasoProcesoEnum.DEVOLUCION, diario.id
                )
                if proceso:
                    self._cambiar_estado(proceso, EstadoProcesoEnum.ENTREGADO_SERVICIO)
                    actualizados += 1
        self.session.commit()

        if data.tipo_transaccion == TipoTransaccionEnum.ENTREGA:
            mensaje = "Llegada a servicio registrada"
        else:
            mensaje = "Llegada a piso para devolución registrada"
        return self._resultado(
            f"{mensaje} para {len(pacientes)} paciente(s) de la línea {linea.nombre_visible}",
            pacientes,
            procesos=actualizados,
        )

    def llegada_piso(self, data: LlegadaPisoRequest, usuario: Usuario) -> ResultadoEscaneo:
        """
        Registro de llegada al piso por nombre de servicio y fecha.

        Las entregas completadas de ese día pasan a DELIVERED_TO_SERVICE y
        se anota la hora de llegada.
        """
        diario = self.diario_repo.obtener_por_fecha(data.fecha_proceso)
        if not diario:
            raise NotFoundError("Proceso diario", data.fecha_proceso.date().isoformat())

        servicio = self.servicio_repo.obtener_por_nombre(data.nombre_servicio)
        activos = (
            self.paciente_repo.listar_activos_por_servicios([servicio.id]) if servicio else []
        )
        procesos = self.proceso_repo.listar_por_pacientes(
            [p.id for p in activos],
            PasoProcesoEnum.ENTREGA,
            [EstadoProcesoEnum.COMPLETADO],
            diario.id,
        )
        if not procesos:
            raise ValidationError("No hay pacientes elegibles para llegada a servicio")

        ahora = datetime.utcnow().isoformat()
        for proceso in procesos:
            nota = f"Llegada a servicio: {ahora}"
            proceso.notas = f"{proceso.notas}\n{nota}" if proceso.notas else nota
            self._cambiar_estado(proceso, EstadoProcesoEnum.ENTREGADO_SERVICIO)
        self.session.commit()

        pacientes = [p for p in activos if p.id in {pr.paciente_id for pr in procesos}]
        logger.info(f"Llegada a piso {data.nombre_servicio} registrada por {usuario.email}")
        return self._resultado(
            f"Llegada a servicio registrada para {len(pacientes)} pacientes "
            f"del servicio {data.nombre_servicio}",
            pacientes,
            registros=0,
            procesos=len(procesos),
        )

    # ============================================
    # DEVOLUCIÓN
    # ============================================

    def recogida_devolucion(self, data: EscaneoRequest, usuario: Usuario) -> ResultadoEscaneo:
        """Recogida en el servicio de las devoluciones en progreso."""
        self._verificar_rol(usuario, ROLES_SERVICIO, "escanear recogidas de devolución")
        self._validar_basico(data)
        self._exigir_devolucion(data)
        codigo = self._codigo(data.qr_id, TipoCodigoQREnum.RECOGIDA_DEVOLUCION, con_servicio=True)
        linea = self._linea_del_servicio(codigo, data.linea_destino)

        diario = self.diario_repo.obtener_activo_del_dia()
        if not diario:
            raise ValidationError("No hay proceso diario activo para hoy")

        pacientes = self._sin_escaneo(
            self._con_proceso(
                self.paciente_repo.listar_activos_por_servicios([codigo.servicio_id]),
                PasoProcesoEnum.DEVOLUCION,
                [EstadoProcesoEnum.EN_PROGRESO],
                diario.id,
            ),
            TipoCodigoQREnum.RECOGIDA_DEVOLUCION,
            TipoTransaccionEnum.DEVOLUCION,
            codigo.servicio_id,
        )
        if not pacientes:
            raise ValidationError(
                "No hay pacientes listos para recogida de devolución en este servicio "
                "o ya fueron registrados"
            )

        self._registrar(pacientes, codigo, usuario, diario, data, data.linea_destino)
        for paciente in pacientes:
            proceso = self.proceso_repo.obtener_por_clave(
                paciente.id, PasoProcesoEnum.DEVOLUCION, diario.id
            )
            self._cambiar_estado(proceso, EstadoProcesoEnum.RECOGIDO_SERVICIO)
        self.session.commit()

        return self._resultado(
            f"Recogida de devolución registrada para {len(pacientes)} paciente(s) "
            f"de la línea {linea.nombre_visible}",
            pacientes,
            procesos=len(pacientes),
        )

    def retorno_devolucion(self, data: EscaneoRequest, usuario: Usuario) -> ResultadoEscaneo:
        """Retorno a farmacia: las devoluciones recogidas quedan COMPLETED."""
        self._validar_basico(data)
        linea = self._linea_obligatoria(data.linea_destino)
        self._exigir_devolucion(data)
        codigo = self._codigo(data.qr_id, TipoCodigoQREnum.RETORNO_DEVOLUCION)

        diario = self.diario_repo.obtener_activo_del_dia()
        if not diario:
            raise ProcesoDiarioNotFoundError(inicio_del_dia().date().isoformat())

        activos = self.paciente_repo.listar_activos_por_servicios(
            self.servicio_repo.ids_por_linea(linea.id)
        )
        procesos = self.proceso_repo.listar_por_pacientes(
            [p.id for p in activos],
            PasoProcesoEnum.DEVOLUCION,
            [EstadoProcesoEnum.RECOGIDO_SERVICIO],
            diario.id,
        )
        ya_escaneados = self.escaneo_repo.pacientes_escaneados(
            [p.paciente_id for p in procesos],
            TipoCodigoQREnum.RETORNO_DEVOLUCION,
            tipo_transaccion=TipoTransaccionEnum.DEVOLUCION,
        )
        procesos = [p for p in procesos if p.paciente_id not in ya_escaneados]
        if not procesos:
            raise ValidationError(
                "No hay pacientes elegibles para recepción de devolución en la línea "
                "seleccionada o ya fueron registrados"
            )

        pacientes = [p.paciente for p in procesos]
        self._registrar(pacientes, codigo, usuario, diario, data, linea.id)
        for proceso in procesos:
            self._completar(proceso, usuario)
        self.session.commit()

        return self._resultado(
            f"Recepción de devolución completada para {len(pacientes)} pacientes "
            f"de la línea {linea.nombre_visible}",
            pacientes,
            procesos=len(procesos),
        )

    def despacho_farmacia_devolucion(
        self,
        data: EscaneoRequest,
        usuario: Usuario
    ) -> ResultadoEscaneo:
        """
        Llegada a farmacia del carro de devolución de una línea.

        Solo registra escaneos; el estado de las devoluciones no cambia. Si
        no hay proceso diario hoy se crea uno.
        """
        self._validar_basico(data)
        linea = self._linea_obligatoria(data.linea_destino)
        if not data.tipo_transaccion:
            raise ValidationError("Tipo de transacción es requerido")
        codigo = self._codigo(data.qr_id, TipoCodigoQREnum.DESPACHO_FARMACIA_DEVOLUCION)

        diario = ProcesoDiarioService(self.session).obtener_o_crear_hoy(usuario)

        procesos = self.proceso_repo.listar_por_pacientes(
            [p.id for p in self._pacientes_de_linea(linea.id)],
            PasoProcesoEnum.DEVOLUCION,
            ESTADOS_DESPACHO_DEVOLUCION,
            diario.id,
            incluir_sin_proceso_diario=True,
        )
        if not procesos:
            raise ValidationError(
                f"No hay pacientes con devoluciones activas en la línea {linea.nombre_visible}"
            )

        ya_escaneados = self.escaneo_repo.pacientes_escaneados(
            [p.paciente_id for p in procesos],
            TipoCodigoQREnum.DESPACHO_FARMACIA_DEVOLUCION,
            tipo_transaccion=TipoTransaccionEnum.DEVOLUCION,
        )
        # un registro por paciente aunque tenga devoluciones de varios días
        pendientes = list({
            p.paciente_id: p for p in procesos if p.paciente_id not in ya_escaneados
        }.values())
        if not pendientes:
            raise ValidationError(
                f"Todos los pacientes con devoluciones en la línea "
                f"{linea.nombre_visible} ya han sido escaneados"
            )

        for proceso in pendientes:
            self.session.add(RegistroEscaneoQR(
                paciente_id=proceso.paciente_id,
                codigo_qr_id=codigo.id,
                escaneado_por=usuario.id,
                proceso_diario_id=proceso.proceso_diario_id or diario.id,
                temperatura=data.temperatura,
                linea_destino_id=linea.id,
                tipo_transaccion=data.tipo_transaccion,
            ))
        self.session.commit()

        pacientes = [p.paciente for p in pendientes]
        return self._resultado(
            f"Llegada a farmacia registrada para {len(pacientes)} "
            f"paciente{'s' if len(pacientes) > 1 else ''} de la línea {linea.nombre_visible}",
            pacientes,
            registros=len(pendientes),
            procesos=0,
        )

    def recepcion_devolucion(
        self,
        data: RecepcionDevolucionRequest,
        usuario: Usuario
    ) -> ProcesoMedicacion:
        """
        Confirmación manual de la recepción de una devolución en farmacia.

        Raises:
            PermisoDenegadoError: Rol sin acceso
            ValidationError: IDs faltantes o estado no recibible
            ProcesoMedicacionNotFoundError: Proceso inexistente o de otro paciente
        """
        self._verificar_rol(usuario, ROLES_RECEPCION, "confirmar recepción de devoluciones")
        if not data.paciente_id or not data.proceso_medicacion_id:
            raise ValidationError("paciente_id y proceso_medicacion_id son requeridos")

        proceso = self.proceso_repo.obtener_por_id(data.proceso_medicacion_id)
        if not proceso or proceso.paciente_id != data.paciente_id:
            raise ProcesoMedicacionNotFoundError(data.proceso_medicacion_id)

        if proceso.paso != PasoProcesoEnum.DEVOLUCION:
            raise ValidationError("El proceso no es de devolución")
        if proceso.estado not in ESTADOS_RECEPCION:
            raise ValidationError(
                f"La devolución no se puede recibir en estado {nombre_estado(proceso.estado)}"
            )

        self._completar(proceso, usuario)
        self.session.commit()
        self.session.refresh(proceso)

        logger.info(f"Recepción de devolución {proceso.id} confirmada por {usuario.email}")
        return proceso

    # ============================================
    # CONSULTA
    # ============================================

    def listar_escaneos(self, proceso_diario_id: Optional[str] = None) -> List[RegistroEscaneoQR]:
        return self.escaneo_repo.listar(proceso_diario_id)

    # ============================================
    # AUXILIARES
    # ============================================

    @staticmethod
    def _validar_basico(data: EscaneoRequest) -> None:
        if not data.qr_id:
            raise ValidationError("qr_id es requerido")
        if data.temperatura is None:
            raise ValidationError("Temperatura es requerida")

    @staticmethod
    def _exigir_devolucion(data: EscaneoRequest) -> None:
        if data.tipo_transaccion != TipoTransaccionEnum.DEVOLUCION:
            raise ValidationError("Tipo de transacción debe ser DEVOLUCION")

    @staticmethod
    def _verificar_rol(usuario: Usuario, roles: tuple, accion: str) -> None:
        if usuario.rol not in roles:
            logger.warning(f"{usuario.email} ({usuario.rol.value}) intentó {accion}")
            raise PermisoDenegadoError(f"Tu rol no puede {accion}")

    def _codigo(self, qr_id: str, tipo: TipoCodigoQREnum, con_servicio: bool = False) -> CodigoQR:
        codigo = self.codigo_repo.obtener_activo(qr_id, tipo)
        if not codigo or (con_servicio and not codigo.servicio_id):
            logger.warning(f"Escaneo rechazado: código {qr_id} no válido para {tipo.value}")
            raise CodigoQRNotFoundError(qr_id)
        return codigo

    def _linea_obligatoria(self, linea_id: Optional[str]) -> Linea:
        if not linea_id:
            raise ValidationError("Línea de destino es requerida")
        linea = self.linea_repo.obtener_por_id(linea_id)
        if not linea:
            raise ValidationError("Línea de destino no válida")
        return linea

    def _linea_del_servicio(self, codigo: CodigoQR, linea_id: Optional[str]) -> Linea:
        """La línea del servicio del código; una línea explícita debe coincidir."""
        linea_servicio = codigo.servicio.linea
        if not linea_id:
            return linea_servicio
        linea = self._linea_obligatoria(linea_id)
        if linea.id != linea_servicio.id:
            raise ValidationError(
                "La línea seleccionada no coincide con el servicio del código QR"
            )
        return linea

    def _pacientes_de_linea(self, linea_id: str) -> List[Paciente]:
        """Pacientes de los servicios de la línea, en cualquier estado."""
        return self.paciente_repo.listar_por_servicios(
            self.servicio_repo.ids_por_linea(linea_id)
        )

    def _con_proceso(
        self,
        pacientes: List[Paciente],
        paso: PasoProcesoEnum,
        estados: List[EstadoProcesoEnum],
        proceso_diario_id: str,
    ) -> List[Paciente]:
        """Filtra los pacientes que tienen un proceso del paso en esos estados."""
        procesos = self.proceso_repo.listar_por_pacientes(
            [p.id for p in pacientes], paso, estados, proceso_diario_id
        )
        con_proceso: Set[str] = {p.paciente_id for p in procesos}
        return [p for p in pacientes if p.id in con_proceso]

    def _sin_escaneo(
        self,
        pacientes: List[Paciente],
        tipo: TipoCodigoQREnum,
        tipo_transaccion: Optional[TipoTransaccionEnum] = None,
        servicio_id: Optional[str] = None,
    ) -> List[Paciente]:
        """Descarta los pacientes ya escaneados hoy con ese tipo de código."""
        escaneados = self.escaneo_repo.pacientes_escaneados(
            [p.id for p in pacientes], tipo,
            tipo_transaccion=tipo_transaccion, servicio_id=servicio_id,
        )
        return [p for p in pacientes if p.id not in escaneados]

    def _registrar(
        self,
        pacientes: List[Paciente],
        codigo: CodigoQR,
        usuario: Usuario,
        diario: ProcesoDiario,
        data: EscaneoRequest,
        linea_id: Optional[str],
    ) -> None:
        for paciente in pacientes:
            self.session.add(RegistroEscaneoQR(
                paciente_id=paciente.id,
                codigo_qr_id=codigo.id,
                escaneado_por=usuario.id,
                proceso_diario_id=diario.id,
                temperatura=data.temperatura,
                linea_destino_id=linea_id,
                tipo_transaccion=data.tipo_transaccion,
            ))
        logger.info(
            f"{len(pacientes)} escaneos {codigo.tipo.value} registrados por {usuario.email}"
        )

    def _mover_entrega(
        self,
        paciente: Paciente,
        diario: ProcesoDiario,
        estado: EstadoProcesoEnum,
        usuario: Usuario,
    ) -> None:
        """Lleva el proceso ENTREGA del paciente al estado, creándolo si falta."""
        proceso = self.proceso_repo.obtener_por_clave(paciente.id, PasoProcesoEnum.ENTREGA, diario.id)
        if proceso is None:
            proceso = ProcesoMedicacion(
                paciente_id=paciente.id,
                proceso_diario_id=diario.id,
                paso=PasoProcesoEnum.ENTREGA,
                iniciado_en=datetime.utcnow(),
                iniciado_por=usuario.id,
            )
        elif estado == EstadoProcesoEnum.DESPACHADO_FARMACIA:
            proceso.iniciado_en = datetime.utcnow()
        self._cambiar_estado(proceso, estado)

    def _cambiar_estado(self, proceso: ProcesoMedicacion, estado: EstadoProcesoEnum) -> None:
        proceso.estado = estado
        proceso.updated_at = datetime.utcnow()
        self.session.add(proceso)

    def _completar(self, proceso: ProcesoMedicacion, usuario: Usuario) -> None:
        proceso.completado_en = datetime.utcnow()
        proceso.completado_por = usuario.id
        self._cambiar_estado(proceso, EstadoProcesoEnum.COMPLETADO)

    @staticmethod
    def _resultado(
        mensaje: str,
        pacientes: List[Paciente],
        registros: Optional[int] = None,
        procesos: int = 0,
    ) -> ResultadoEscaneo:
        logger.info(mensaje)
        return ResultadoEscaneo(
            message=mensaje,
            pacientes=pacientes,
            registros_creados=len(pacientes) if registros is None else registros,
            procesos_actualizados=procesos,
        )
