"""
Repositories de Código QR y Registro de Escaneo.
"""
from typing import Optional, List, Set
from datetime import datetime
from sqlmodel import Session, select, or_

from kumpels.repositories.base import BaseRepository
from kumpels.models.codigo_qr import CodigoQR, RegistroEscaneoQR
from kumpels.models.enums import TipoCodigoQREnum, TipoTransaccionEnum
from kumpels.utils.fechas import rango_del_dia


class CodigoQRRepository(BaseRepository[CodigoQR]):
    """Repository para operaciones de códigos QR."""

    def __init__(self, session: Session):
        super().__init__(session, CodigoQR)

    def obtener_activo(self, qr_id: str, tipo: TipoCodigoQREnum) -> Optional[CodigoQR]:
        """
        Obtiene un código activo del tipo esperado.

        Args:
            qr_id: Identificador escaneado
            tipo: Tipo que el punto de escaneo exige

        Returns:
            El código o None si no existe, está inactivo o es de otro tipo
        """
        query = select(CodigoQR).where(
            CodigoQR.qr_id == qr_id,
            CodigoQR.tipo == tipo,
            CodigoQR.activo == True,  # noqa: E712
        )
        return self.session.exec(query).first()

    def listar_activos(self) -> List[CodigoQR]:
        query = (
            select(CodigoQR)
            .where(CodigoQR.activo == True)  # noqa: E712
            .order_by(CodigoQR.created_at.desc())
        )
        return list(self.session.exec(query).all())

    def listar_activos_de_tipo(
        self,
        tipo: TipoCodigoQREnum,
        servicio_id: Optional[str] = None
    ) -> List[CodigoQR]:
        """Códigos activos de un tipo, opcionalmente de un servicio."""
        query = select(CodigoQR).where(
            CodigoQR.tipo == tipo,
            CodigoQR.activo == True,  # noqa: E712
        )
        if servicio_id:
            query = query.where(CodigoQR.servicio_id == servicio_id)
        return list(self.session.exec(query).all())


class RegistroEscaneoRepository(BaseRepository[RegistroEscaneoQR]):
    """Repository para los registros de escaneo QR."""

    def __init__(self, session: Session):
        super().__init__(session, RegistroEscaneoQR)

    def pacientes_escaneados(
        self,
        paciente_ids: List[str],
        tipo_codigo: TipoCodigoQREnum,
        fecha: Optional[datetime] = None,
        tipo_transaccion: Optional[TipoTransaccionEnum] = None,
        servicio_id: Optional[str] = None,
    ) -> Set[str]:
        """
        Pacientes que ya tienen un escaneo de cierto tipo de código en el día.

        Args:
            paciente_ids: Pacientes a revisar
            tipo_codigo: Tipo del código escaneado
            fecha: Día a revisar (por defecto, hoy)
            tipo_transaccion: Restringe a ENTREGA o DEVOLUCION
            servicio_id: Restringe a códigos de un servicio

        Returns:
            Conjunto de IDs de pacientes ya escaneados
        """
        if not paciente_ids:
            return set()
        inicio, fin = rango_del_dia(fecha)
        query = (
            select(RegistroEscaneoQR.paciente_id)
            .join(CodigoQR, RegistroEscaneoQR.codigo_qr_id == CodigoQR.id)
            .where(
                RegistroEscaneoQR.paciente_id.in_(paciente_ids),
                CodigoQR.tipo == tipo_codigo,
                RegistroEscaneoQR.escaneado_en >= inicio,
                RegistroEscaneoQR.escaneado_en < fin,
            )
        )
        if tipo_transaccion:
            query = query.where(RegistroEscaneoQR.tipo_transaccion == tipo_transaccion)
        if servicio_id:
            query = query.where(CodigoQR.servicio_id == servicio_id)
        return set(self.session.exec(query).all())

    def listar_por_paciente(self, paciente_id: str) -> List[RegistroEscaneoQR]:
        """Escaneos de un paciente en orden cronológico."""
        query = (
            select(RegistroEscaneoQR)
            .where(RegistroEscaneoQR.paciente_id == paciente_id)
            .order_by(RegistroEscaneoQR.escaneado_en)
        )
        return list(self.session.exec(query).all())

    def listar(self, proceso_diario_id: Optional[str] = None) -> List[RegistroEscaneoQR]:
        """
        Escaneos más recientes primero.

        Con proceso diario, incluye los del proceso diario y además los de
        devolución registrados en otro proceso diario o sin él.
        """
        query = select(RegistroEscaneoQR)
        if proceso_diario_id:
            query = query.where(
                or_(
                    RegistroEscaneoQR.proceso_diario_id == proceso_diario_id,
                    RegistroEscaneoQR.tipo_transaccion == TipoTransaccionEnum.DEVOLUCION,
                )
            )
        return list(self.session.exec(query.order_by(RegistroEscaneoQR.escaneado_en.desc())).all())

    def listar_por_pacientes(
        self,
        paciente_ids: List[str],
        proceso_diario_id: Optional[str] = None,
    ) -> List[RegistroEscaneoQR]:
        """Escaneos de varios pacientes, opcionalmente de un proceso diario."""
        if not paciente_ids:
            return []
        query = select(RegistroEscaneoQR).where(RegistroEscaneoQR.paciente_id.in_(paciente_ids))
        if proceso_diario_id:
            query = query.where(RegistroEscaneoQR.proceso_diario_id == proceso_diario_id)
        return list(self.session.exec(query).all())
