"""
Carga inicial de datos del sistema.
Crea líneas, servicios, camas, causas de devolución y usuarios de prueba.

Cada paso omite los registros que ya existen, así que se puede ejecutar
varias veces sobre la misma base de datos.
"""
from dataclasses import dataclass
from sqlmodel import Session, select
import logging

from kumpels.models.linea import Linea
from kumpels.models.servicio import Servicio
from kumpels.models.cama import Cama
from kumpels.models.devolucion import CausaDevolucion
from kumpels.models.usuario import Usuario, RolEnum
from kumpels.models.enums import NombreLineaEnum
from kumpels.repositories.devolucion_repo import CausaDevolucionRepository
from kumpels.services.auth_service import auth_service
from kumpels.utils.constants import LINEAS_HOSPITAL, SERVICIOS_HOSPITAL, CAUSAS_DEVOLUCION

logger = logging.getLogger("kumpels.seed")


# ============================================
# USUARIOS DE PRUEBA
# ============================================
# IMPORTANTE: Estas son credenciales de desarrollo/demo
# En producción, crear usuarios con credenciales seguras

USUARIOS_PRUEBA = [
    {
        "email": "admin@kumpels.co",
        "password": "Admin123!",
        "nombre": "Administrador",
        "apellido": "Sistema",
        "rol": RolEnum.SUPERADMIN,
    },
    {
        "email": "regente@kumpels.co",
        "password": "Regente123!",
        "nombre": "Regente",
        "apellido": "Farmacia",
        "rol": RolEnum.REGENTE_FARMACIA,
    },
    {
        "email": "validador@kumpels.co",
        "password": "Validador123!",
        "nombre": "Validador",
        "apellido": "Farmacia",
        "rol": RolEnum.VALIDADOR_FARMACIA,
    },
    {
        "email": "enfermera@kumpels.co",
        "password": "Enfermera123!",
        "nombre": "María",
        "apellido": "González",
        "rol": RolEnum.ENFERMERA,
    },
]


@dataclass
class ResumenCarga:
    """Registros creados por la carga inicial."""
    lineas: int = 0
    servicios: int = 0
    camas: int = 0
    causas: int = 0
    usuarios: int = 0


def crear_lineas(session: Session, resumen: ResumenCarga) -> dict:
    """
    Crea las líneas que falten.

    Returns:
        Diccionario nombre de línea -> Linea
    """
    lineas = {}
    for data in LINEAS_HOSPITAL:
        nombre = NombreLineaEnum(data["nombre"])
        linea = session.exec(select(Linea).where(Linea.nombre == nombre)).first()
        if not linea:
            linea = Linea(
                nombre=nombre,
                nombre_visible=data["nombre_visible"],
                descripcion=data["descripcion"],
            )
            session.add(linea)
            resumen.lineas += 1
        lineas[data["nombre"]] = linea
    session.flush()
    return lineas


def crear_servicios_y_camas(session: Session, lineas: dict, resumen: ResumenCarga) -> None:
    """Crea servicios y sus camas; los números de cama son únicos por línea."""
    for data in SERVICIOS_HOSPITAL:
        linea = lineas[data["linea"]]
        servicio = session.exec(
            select(Servicio).where(
                Servicio.nombre == data["nombre"],
                Servicio.linea_id == linea.id,
            )
        ).first()
        if not servicio:
            session.add(Servicio(nombre=data["nombre"], linea_id=linea.id))
            resumen.servicios += 1

        existentes = set(session.exec(
            select(Cama.numero).where(Cama.linea_id == linea.id)
        ).all())
        for numero in data["camas"]:
            if numero in existentes:
                continue
            session.add(Cama(numero=numero, linea_id=linea.id))
            existentes.add(numero)
            resumen.camas += 1
    session.flush()


def crear_causas_devolucion(session: Session, resumen: ResumenCarga) -> None:
    repo = CausaDevolucionRepository(session)
    for codigo, descripcion in CAUSAS_DEVOLUCION:
        if not repo.obtener_por_codigo(codigo):
            repo.agregar(CausaDevolucion(codigo=codigo, descripcion=descripcion))
            resumen.causas += 1


def crear_usuarios_prueba(session: Session, resumen: ResumenCarga) -> None:
    """Crea un usuario por rol; si el email ya existe, lo omite."""
    for data in USUARIOS_PRUEBA:
        if auth_service.get_user_by_email(data["email"], session):
            logger.debug(f"Usuario {data['email']} ya existe, omitiendo")
            continue
        session.add(Usuario(
            email=data["email"],
            hashed_password=auth_service.hash_password(data["password"]),
            nombre=data["nombre"],
            apellido=data["apellido"],
            rol=data["rol"],
        ))
        resumen.usuarios += 1


def inicializar_datos(session: Session, incluir_usuarios: bool = True) -> ResumenCarga:
    """
    Ejecuta la carga inicial completa en una transacción.

    Args:
        session: Sesión de base de datos
        incluir_usuarios: Si se crean los usuarios de prueba

    Returns:
        Conteo de registros creados
    """
    resumen = ResumenCarga()
    try:
        lineas = crear_lineas(session, resumen)
        crear_servicios_y_camas(session, lineas, resumen)
        crear_causas_devolucion(session, resumen)
        if incluir_usuarios:
            crear_usuarios_prueba(session, resumen)
        session.commit()
    except Exception:
        session.rollback()
        logger.error("Error en la carga inicial de datos", exc_info=True)
        raise

    logger.info(f"Carga inicial completada: {resumen}")
    return resumen
