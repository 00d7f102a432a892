"""
Constantes del sistema.
Valores fijos utilizados en toda la aplicación y en la carga inicial.
"""
from typing import List


def _rango(prefijo: str, cantidad: int, ancho: int = 2, inicio: int = 1) -> List[str]:
    """Genera identificadores de cama consecutivos (PC01, PC02, ...)."""
    return [f"{prefijo}{str(i).zfill(ancho)}" for i in range(inicio, inicio + cantidad)]


def _habitaciones(numeros: List[int], letras: str = "ABCD") -> List[str]:
    """Genera camas compartidas por habitación (213A, 213B, ...)."""
    return [f"{numero}{letra}" for numero in numeros for letra in letras]


# ============================================
# LÍNEAS
# ============================================

LINEAS_HOSPITAL = [
    {"nombre": "LINE_1", "nombre_visible": "Línea 1", "descripcion": "Línea 1 - UCI Pediátrica"},
    {"nombre": "LINE_2", "nombre_visible": "Línea 2", "descripcion": "Línea 2 - Adultos y Transplantes"},
    {"nombre": "LINE_3", "nombre_visible": "Línea 3", "descripcion": "Línea 3 - Adultos y Pediatría"},
    {"nombre": "LINE_4", "nombre_visible": "Línea 4", "descripcion": "Línea 4 - Pediatría y Neonatos"},
    {"nombre": "LINE_5", "nombre_visible": "Línea 5", "descripcion": "Línea 5 - UCI Médica y Urgencias"},
]


# ============================================
# SERVICIOS Y CAMAS POR LÍNEA
# ============================================

SERVICIOS_HOSPITAL = [
    # Línea 1
    {"nombre": "UCI PEDIATRICA CARDIOVASCULAR", "linea": "LINE_1", "camas": _rango("PC", 22)},
    {"nombre": "UCI QUIRÚRGICA", "linea": "LINE_1", "camas": _rango("UQ", 10)},
    {"nombre": "UCI PEDIATRICA GENERAL", "linea": "LINE_1", "camas": _rango("UP", 23)},
    # Línea 2
    {"nombre": "SEGUNDO ADULTOS", "linea": "LINE_2", "camas": _habitaciones(list(range(213, 229)))},
    {
        "nombre": "PEBELLON BENEFACTORES",
        "linea": "LINE_2",
        "camas": [
            "ST1A", "ST1B", "ST2", "ST3A", "ST3B", "ST4", "ST5A", "ST5B", "ST6", "ST7A", "ST7B",
            "ST8A", "ST8B", "ST8C", "ST9", "ST10A", "ST10B", "ST11", "ST12", "ST13", "ST14", "ST15",
        ],
    },
    {"nombre": "UNIDAD DE TRANSPLANTES", "linea": "LINE_2", "camas": _rango("UT", 7, ancho=1)},
    # Línea 3
    {
        "nombre": "TERCERO ADULTOS",
        "linea": "LINE_3",
        "camas": (
            [str(n) for n in range(321, 329)]
            + _habitaciones([329]) + ["330"] + _habitaciones([331])
            + [str(n) for n in range(332, 341)]
            + ["341A", "341B", "342A", "342B"]
        ),
    },
    {
        "nombre": "CUARTO ADULTOS",
        "linea": "LINE_3",
        "camas": [str(n) for n in range(401, 413)] + _habitaciones(list(range(413, 417))) + ["417", "418"],
    },
    {
        "nombre": "SEGUNDO PEDIATRIA",
        "linea": "LINE_3",
        "camas": [
            "ST16A", "ST16B", "ST17", "ST18A", "ST18B", "ST19A", "ST19B",
            "ST20A", "ST20B", "ST21A", "ST21B", "ST22A", "ST22B",
        ],
    },
    # Línea 4
    {
        "nombre": "TERCERO PEDIATRÍA",
        "linea": "LINE_4",
        "camas": (
            ["308"] + _habitaciones([309]) + ["310"] + _habitaciones([311, 313])
            + ["314A", "314B", "314C", "315A", "315B", "316"]
        ),
    },
    {
        "nombre": "SUITE PEDIATRICA",
        "linea": "LINE_4",
        "camas": _rango("STP", 7, ancho=1) + ["302", "304", "306"] + _habitaciones([307]),
    },
    {"nombre": "NEONATOS", "linea": "LINE_4", "camas": _rango("NE", 19)},
    # Línea 5
    {"nombre": "TERCERO REINALDO", "linea": "LINE_5", "camas": [str(n) for n in range(351, 367)]},
    {"nombre": "QUINTO REINALDO", "linea": "LINE_5", "camas": [str(n) for n in range(501, 517)]},
    {"nombre": "SEXTO REINALDO", "linea": "LINE_5", "camas": [str(n) for n in range(601, 617)]},
    {"nombre": "UCI MEDICA 1", "linea": "LINE_5", "camas": _rango("UM1-", 12)},
    {"nombre": "UCI MEDICA 2", "linea": "LINE_5", "camas": _rango("UM2-", 16)},
    {"nombre": "UCI MEDICA 3", "linea": "LINE_5", "camas": _rango("UM3-", 15)},
    {"nombre": "UCI CARDIOVASCULAR", "linea": "LINE_5", "camas": _rango("UQ", 14, inicio=11)},
    {"nombre": "URGENCIAS", "linea": "LINE_5", "camas": _rango("URG", 30)},
]


# ============================================
# CAUSAS DE DEVOLUCIÓN
# ============================================

CAUSAS_DEVOLUCION = [
    (1, "Cambio de vía de administración"),
    (2, "Cambio de forma farmacéutica"),
    (3, "Cambio de frecuencia de administración"),
    (4, "Cambio de dosis"),
    (5, "Equivocación en la entrega de farmacia"),
    (6, "Suministro suspendido"),
    (7, "Suministro rechazado por paciente"),
    (8, "Paciente dado de alta"),
    (9, "Paciente fallece"),
]


# ============================================
# CÓDIGOS QR
# ============================================

# Prefijo del qr_id según tipo de código
PREFIJOS_QR = {
    "PHARMACY_DISPATCH": "pd",
    "SERVICE_ARRIVAL": "sa",
    "DEVOLUTION_PICKUP": "dp",
    "DEVOLUTION_RETURN": "dr",
    "PHARMACY_DISPATCH_DEVOLUTION": "pdd",
}

QR_TAMANO_CAJA = 10
QR_BORDE = 1
