"""
Fixtures de pytest para tests.
"""
import os

# La app crea tablas al iniciar; en tests se usa una base en memoria
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SEED_DATA_ON_STARTUP", "false")

from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel, Session, create_engine
from sqlmodel.pool import StaticPool

import kumpels.models  # noqa: F401
from kumpels.core.database import get_session
from kumpels.main import app
from kumpels.models.enums import NombreLineaEnum, GeneroEnum
from kumpels.models.usuario import RolEnum
from kumpels.services.auth_service import auth_service


# Engine para tests (SQLite en memoria)
@pytest.fixture(name="engine")
def engine_fixture():
    """Crea un engine de test en memoria."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Crea una sesión de test."""
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session):
    """Crea un cliente de test con sesión inyectada."""
    def get_session_override():
        yield session

    app.dependency_overrides[get_session] = get_session_override

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


# ============================================
# USUARIOS Y AUTENTICACIÓN
# ============================================

@pytest.fixture
def crear_usuario(session):
    """Factory fixture para crear usuarios."""
    from kumpels.models.usuario import Usuario

    def _crear_usuario(
        rol=RolEnum.ENFERMERA,
        email=None,
        password="Clave123!",
        nombre="Usuario",
        apellido="Prueba",
        is_active=True,
    ):
        usuario = Usuario(
            email=email or f"{rol.name.lower()}@kumpels.co",
            hashed_password=auth_service.hash_password(password),
            nombre=nombre,
            apellido=apellido,
            rol=rol,
            is_active=is_active,
        )
        session.add(usuario)
        session.commit()
        session.refresh(usuario)
        return usuario

    return _crear_usuario


@pytest.fixture
def auth_headers():
    """Construye el header Authorization para un usuario."""
    def _auth_headers(usuario):
        token = auth_service.create_access_token(usuario)
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest.fixture
def admin(crear_usuario):
    return crear_usuario(RolEnum.SUPERADMIN, nombre="Admin")


@pytest.fixture
def regente(crear_usuario):
    return crear_usuario(RolEnum.REGENTE_FARMACIA, nombre="Regente")


@pytest.fixture
def validador(crear_usuario):
    return crear_usuario(RolEnum.VALIDADOR_FARMACIA, nombre="Validador")


@pytest.fixture
def enfermera(crear_usuario):
    return crear_usuario(RolEnum.ENFERMERA, nombre="Enfermera")


@pytest.fixture
def admin_headers(admin, auth_headers):
    return auth_headers(admin)


@pytest.fixture
def regente_headers(regente, auth_headers):
    return auth_headers(regente)


@pytest.fixture
def validador_headers(validador, auth_headers):
    return auth_headers(validador)


@pytest.fixture
def enfermera_headers(enfermera, auth_headers):
    return auth_headers(enfermera)


# ============================================
# INFRAESTRUCTURA Y PACIENTES
# ============================================

@pytest.fixture
def crear_linea(session):
    """Factory fixture para crear líneas."""
    from kumpels.models.linea import Linea

    def _crear_linea(nombre=NombreLineaEnum.LINEA_1, nombre_visible=None):
        linea = Linea(
            nombre=nombre,
            nombre_visible=nombre_visible or f"Línea {nombre.value[-1]}",
        )
        session.add(linea)
        session.commit()
        session.refresh(linea)
        return linea

    return _crear_linea


@pytest.fixture
def crear_servicio(session):
    """Factory fixture para crear servicios."""
    from kumpels.models.servicio import Servicio

    def _crear_servicio(linea_id, nombre="Medicina Interna", activo=True):
        servicio = Servicio(nombre=nombre, linea_id=linea_id, activo=activo)
        session.add(servicio)
        session.commit()
        session.refresh(servicio)
        return servicio

    return _crear_servicio


@pytest.fixture
def crear_cama(session):
    """Factory fixture para crear camas."""
    from kumpels.models.cama import Cama

    def _crear_cama(linea_id, numero="101"):
        cama = Cama(numero=numero, linea_id=linea_id)
        session.add(cama)
        session.commit()
        session.refresh(cama)
        return cama

    return _crear_cama


@pytest.fixture
def crear_paciente(session):
    """Factory fixture para crear pacientes."""
    from kumpels.models.paciente import Paciente

    def _crear_paciente(cama_id, servicio_id, id_externo="CC1001", **kwargs):
        defaults = {
            "nombre": "Juan",
            "apellido": "Pérez",
            "fecha_nacimiento": datetime(1980, 5, 17),
            "genero": GeneroEnum.MASCULINO,
        }
        defaults.update(kwargs)

        paciente = Paciente(
            id_externo=id_externo,
            cama_id=cama_id,
            servicio_id=servicio_id,
            **defaults
        )
        session.add(paciente)
        session.commit()
        session.refresh(paciente)
        return paciente

    return _crear_paciente


@pytest.fixture
def hospital(crear_linea, crear_servicio, crear_cama, crear_paciente):
    """Crea una línea con un servicio, tres camas y dos pacientes."""
    linea = crear_linea()
    servicio = crear_servicio(linea.id)
    camas = [crear_cama(linea.id, numero=f"10{i}") for i in range(1, 4)]
    pacientes = [
        crear_paciente(camas[0].id, servicio.id, id_externo="CC1001"),
        crear_paciente(
            camas[1].id, servicio.id, id_externo="CC1002",
            nombre="Ana", apellido="Gómez", genero=GeneroEnum.FEMENINO
        ),
    ]
    return {
        "linea": linea,
        "servicio": servicio,
        "camas": camas,
        "pacientes": pacientes,
    }


# ============================================
# PROCESOS
# ============================================

@pytest.fixture
def crear_proceso_diario(session):
    """Factory fixture para crear procesos diarios."""
    from kumpels.models.proceso_diario import ProcesoDiario
    from kumpels.utils.fechas import inicio_del_dia

    def _crear_proceso_diario(usuario, fecha=None, **kwargs):
        proceso = ProcesoDiario(
            fecha=inicio_del_dia(fecha),
            iniciado_por=usuario.id,
            **kwargs
        )
        session.add(proceso)
        session.commit()
        session.refresh(proceso)
        return proceso

    return _crear_proceso_diario


@pytest.fixture
def crear_proceso(session):
    """Factory fixture para crear procesos de medicación."""
    from kumpels.models.proceso_medicacion import ProcesoMedicacion

    def _crear_proceso(paciente_id, paso, proceso_diario_id=None, **kwargs):
        proceso = ProcesoMedicacion(
            paciente_id=paciente_id,
            paso=paso,
            proceso_diario_id=proceso_diario_id,
            **kwargs
        )
        session.add(proceso)
        session.commit()
        session.refresh(proceso)
        return proceso

    return _crear_proceso


@pytest.fixture
def crear_codigo_qr(session):
    """Factory fixture para crear códigos QR activos."""
    from kumpels.models.codigo_qr import CodigoQR

    def _crear_codigo_qr(tipo, usuario, servicio_id=None, qr_id=None, activo=True):
        codigo = CodigoQR(
            qr_id=qr_id or f"{tipo.value}_TEST",
            tipo=tipo,
            servicio_id=servicio_id,
            imagen_data_url="data:image/png;base64,",
            creado_por=usuario.id,
            activo=activo,
        )
        session.add(codigo)
        session.commit()
        session.refresh(codigo)
        return codigo

    return _crear_codigo_qr
