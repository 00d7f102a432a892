"""
Servicio de Códigos QR.
Generación de los códigos impresos en cada punto del recorrido.
"""
from typing import Optional, List
from datetime import datetime
from io import BytesIO
import base64
import json
import logging
import time
import uuid

import qrcode
from sqlmodel import Session

from kumpels.models.usuario import Usuario, RolEnum
from kumpels.models.codigo_qr import CodigoQR
from kumpels.models.servicio import Servicio
from kumpels.models.enums import TipoCodigoQREnum
from kumpels.repositories.codigo_qr_repo import CodigoQRRepository
from kumpels.repositories.linea_repo import ServicioRepository
from kumpels.schemas.qr import CodigoQRResponse, CodigosQRAgrupadosResponse
from kumpels.utils.constants import PREFIJOS_QR, QR_TAMANO_CAJA, QR_BORDE
from kumpels.core.exceptions import (
    ValidationError,
    PermisoDenegadoError,
    ServicioNotFoundError,
)

logger = logging.getLogger("kumpels.codigos_qr")

TIPOS_CON_SERVICIO = (
    TipoCodigoQREnum.LLEGADA_SERVICIO,
    TipoCodigoQREnum.RECOGIDA_DEVOLUCION,
)


# ============================================
# IMAGEN Y CONTENIDO
# ============================================

def generar_imagen_data_url(contenido: str) -> str:
    """
    Genera la imagen PNG del código y la retorna como data URL.

    Args:
        contenido: Texto a codificar

    Returns:
        ``data:image/png;base64,...``
    """
    qr = qrcode.QRCode(version=1, box_size=QR_TAMANO_CAJA, border=QR_BORDE)
    qr.add_data(contenido)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")

    buffer = BytesIO()
    img.save(buffer, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buffer.getvalue()).decode("ascii")


def construir_payload(
    qr_id: str,
    tipo: TipoCodigoQREnum,
    servicio_id: Optional[str] = None
) -> str:
    """Contenido JSON codificado en la imagen."""
    payload = {"qr_id": qr_id, "tipo": tipo.value}
    if servicio_id:
        payload["servicio_id"] = servicio_id
    payload["generado_en"] = datetime.utcnow().isoformat()
    return json.dumps(payload)


def parsear_payload(texto: str) -> Optional[dict]:
    """
    Decodifica el contenido leído de un QR.

    Returns:
        Diccionario con ``qr_id`` y ``tipo`` válidos, o None si el texto no
        corresponde a un código del sistema
    """
    try:
        datos = json.loads(texto)
    except (TypeError, ValueError):
        return None
    if not isinstance(datos, dict) or not datos.get("qr_id"):
        return None
    try:
        datos["tipo"] = TipoCodigoQREnum(datos.get("tipo"))
    except ValueError:
        return None
    return datos


def generar_qr_id(tipo: TipoCodigoQREnum, servicio: Optional[Servicio] = None) -> str:
    """``<prefijo>[_<servicio>]_<timestamp>_<aleatorio>``"""
    partes = [PREFIJOS_QR[tipo.value]]
    if servicio is not None:
        partes.append(servicio.nombre)
    partes.append(str(int(time.time() * 1000)))
    partes.append(uuid.uuid4().hex[:9 if servicio is None else 6])
    return "_".join(partes)


# ============================================
# SERVICIO
# ============================================

class CodigoQRService:
    """
    Servicio de códigos QR.

    Solo existe un código activo por tipo (por servicio en los tipos
    ligados a servicio). Solo el SUPERADMIN genera códigos.
    """

    def __init__(self, session: Session):
        self.session = session
        self.repo = CodigoQRRepository(session)
        self.servicio_repo = ServicioRepository(session)

    def listar_activos(self) -> CodigosQRAgrupadosResponse:
        """Códigos activos agrupados por tipo."""
        agrupados = CodigosQRAgrupadosResponse()
        for codigo in self.repo.listar_activos():
            respuesta = CodigoQRResponse.model_validate(codigo)
            if codigo.tipo == TipoCodigoQREnum.DESPACHO_FARMACIA:
                agrupados.despacho_farmacia = agrupados.despacho_farmacia or respuesta
            elif codigo.tipo == TipoCodigoQREnum.DESPACHO_FARMACIA_DEVOLUCION:
                agrupados.despacho_farmacia_devolucion = (
                    agrupados.despacho_farmacia_devolucion or respuesta
                )
            elif codigo.tipo == TipoCodigoQREnum.RETORNO_DEVOLUCION:
                agrupados.retorno_devolucion = agrupados.retorno_devolucion or respuesta
            elif codigo.tipo == TipoCodigoQREnum.LLEGADA_SERVICIO:
                agrupados.llegada_servicio.append(respuesta)
            elif codigo.tipo == TipoCodigoQREnum.RECOGIDA_DEVOLUCION:
                agrupados.recogida_devolucion.append(respuesta)
            agrupados.tiene_codigos_activos = True
        return agrupados

    def generar(
        self,
        tipo: Optional[TipoCodigoQREnum],
        usuario: Usuario,
        servicio_id: Optional[str] = None,
    ) -> CodigoQR:
        """
        Genera un nuevo código y desactiva el anterior del mismo tipo.

        Args:
            tipo: Tipo de código
            usuario: Usuario que lo genera
            servicio_id: Servicio, obligatorio en llegada y recogida

        Raises:
            PermisoDenegadoError: Si el usuario no es SUPERADMIN
            ValidationError: Si falta el tipo o el servicio requerido
            ServicioNotFoundError: Si el servicio no existe
        """
        self._verificar_superadmin(usuario)
        if not tipo:
            raise ValidationError("El tipo de código es obligatorio")

        servicio = None
        if tipo in TIPOS_CON_SERVICIO:
            if not servicio_id:
                raise ValidationError("Este tipo de código requiere un servicio")
            servicio = self.servicio_repo.obtener_por_id(servicio_id)
            if not servicio:
                raise ServicioNotFoundError(servicio_id)

        self._desactivar(self.repo.listar_activos_de_tipo(
            tipo, servicio.id if servicio else None
        ))
        codigo = self._crear(tipo, usuario, servicio)
        self.session.commit()
        self.session.refresh(codigo)

        logger.info(f"Código {codigo.qr_id} generado por {usuario.email}")
        return codigo

    def generar_todos_llegada_servicio(self, usuario: Usuario) -> List[CodigoQR]:
        """
        Regenera un código de llegada para cada servicio activo.

        Todos los códigos de llegada activos quedan desactivados.
        """
        self._verificar_superadmin(usuario)

        self._desactivar(self.repo.listar_activos_de_tipo(TipoCodigoQREnum.LLEGADA_SERVICIO))
        codigos = [
            self._crear(TipoCodigoQREnum.LLEGADA_SERVICIO, usuario, servicio)
            for servicio in self.servicio_repo.listar_activos()
        ]
        self.session.commit()
        for codigo in codigos:
            self.session.refresh(codigo)

        logger.info(f"{len(codigos)} códigos de llegada generados por {usuario.email}")
        return codigos

    def _crear(
        self,
        tipo: TipoCodigoQREnum,
        usuario: Usuario,
        servicio: Optional[Servicio]
    ) -> CodigoQR:
        qr_id = generar_qr_id(tipo, servicio)
        servicio_id = servicio.id if servicio else None
        codigo = CodigoQR(
            qr_id=qr_id,
            tipo=tipo,
            servicio_id=servicio_id,
            imagen_data_url=generar_imagen_data_url(
                construir_payload(qr_id, tipo, servicio_id)
            ),
            creado_por=usuario.id,
        )
        self.session.add(codigo)
        return codigo

    def _desactivar(self, codigos: List[CodigoQR]) -> None:
        ahora = datetime.utcnow()
        for codigo in codigos:
            codigo.activo = False
            codigo.updated_at = ahora
            self.session.add(codigo)
        self.session.flush()

    @staticmethod
    def _verificar_superadmin(usuario: Usuario) -> None:
        if usuario.rol != RolEnum.SUPERADMIN:
            logger.warning(f"{usuario.email} intentó generar códigos QR")
            raise PermisoDenegadoError("Solo el SUPERADMIN puede generar códigos QR")
