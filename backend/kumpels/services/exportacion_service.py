"""
Exportación de estadísticas a CSV, HTML imprimible y hoja de Excel (SpreadsheetML).
"""
from typing import List, Optional, Sequence
from dataclasses import dataclass
from datetime import datetime
from xml.sax.saxutils import escape as xml_escape
import csv
import io
import logging

from jinja2 import Environment, PackageLoader, select_autoescape
from sqlmodel import Session

from kumpels.schemas.estadisticas import (
    FiltrosEstadisticas,
    MetricasCumplimiento,
    MetricasComparativas,
)
from kumpels.services.estadisticas_service import EstadisticasService, TIPOS_ESTADISTICA
from kumpels.core.exceptions import ValidationError

logger = logging.getLogger("kumpels.exportacion")

FORMATOS = {
    "csv": ("text/csv", "csv"),
    "pdf": ("text/html", "html"),
    "excel": ("application/vnd.ms-excel", "xls"),
}

ETIQUETAS_GENERAL = [
    ("cumplimiento_entrega", "Cumplimiento horario entrega"),
    ("cumplimiento_devoluciones", "Cumplimiento horario devoluciones"),
    ("adherencia_carro", "Adherencia verificación carro medicamentos"),
    ("pacientes_con_errores", "Pacientes con errores en entrega de medicamentos"),
]

ENCABEZADO_TIEMPOS = [
    "Línea",
    "Predespacho (hrs)",
    "Alistamiento (hrs)",
    "Verificación (hrs)",
    "Entrega (hrs)",
    "Total (hrs)",
]

MESES = [
    "enero", "febrero", "marzo", "abril", "mayo", "junio", "julio",
    "agosto", "septiembre", "octubre", "noviembre", "diciembre",
]


@dataclass
class ArchivoExportado:
    contenido: str
    media_type: str
    nombre_archivo: str


def _filas_general(metricas: MetricasCumplimiento) -> List[tuple]:
    return [(etiqueta, getattr(metricas, campo)) for campo, etiqueta in ETIQUETAS_GENERAL]


def _filas_tiempos(metricas: MetricasComparativas) -> List[tuple]:
    return [
        (linea.nombre, linea.predespacho, linea.alistamiento, linea.verificacion,
         linea.entrega, linea.total)
        for linea in metricas.tiempo_promedio_por_etapa.lineas
    ]


def _temperatura_promedio(metricas: MetricasComparativas) -> str:
    promedio = metricas.cumplimiento_temperatura.temperatura_promedio
    return "N/A" if promedio is None else str(promedio)


# ============================================
# CSV
# ============================================

def generar_csv(datos, tipo: str) -> str:
    """
    Genera el CSV de las estadísticas.

    General: una fila por métrica. Comparativo: secciones de tiempos por
    línea, devoluciones por razón y cumplimiento de temperatura.
    """
    salida = io.StringIO()
    writer = csv.writer(salida, lineterminator="\n")

    if tipo == "general":
        writer.writerow(["Métrica", "Valor (%)"])
        writer.writerows(_filas_general(datos))
        return salida.getvalue()

    salida.write("Reporte Comparativo de Estadísticas\n\n")
    salida.write("Tiempo Promedio por Etapa por Línea\n")
    writer.writerow(ENCABEZADO_TIEMPOS)
    writer.writerows(_filas_tiempos(datos))

    salida.write("\nDevoluciones Manuales por Razón\n")
    writer.writerow(["Razón", "Cantidad", "Porcentaje (%)"])
    for razon in datos.devoluciones_manuales.por_razon:
        writer.writerow([razon.razon, razon.cantidad, razon.porcentaje])

    temperatura = datos.cumplimiento_temperatura
    salida.write("\nCompliance de Temperatura\n")
    writer.writerow(["Temperatura Promedio", _temperatura_promedio(datos)])
    writer.writerow(["Lecturas Fuera de Rango", temperatura.fuera_de_rango])
    writer.writerow(["Total de Lecturas", temperatura.total_lecturas])
    writer.writerow(["Porcentaje de Compliance", temperatura.porcentaje_cumplimiento])
    return salida.getvalue()


# ============================================
# HTML (para imprimir como PDF)
# ============================================

plantillas = Environment(
    loader=PackageLoader("kumpels", "templates"),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


def _fecha_larga(fecha: datetime) -> str:
    return f"{fecha.day} de {MESES[fecha.month - 1]} de {fecha.year}"


def generar_html(datos, tipo: str, filtros: FiltrosEstadisticas) -> str:
    """Documento HTML autocontenido con filtros, métricas y pie de página."""
    contexto = {
        "tipo": tipo,
        "titulo": "General" if tipo == "general" else "Comparativo",
        "generado_el": _fecha_larga(datetime.utcnow()),
        "filtros": [
            ("Línea", filtros.linea_id),
            ("Servicio", filtros.servicio_id),
            ("Desde", filtros.fecha_desde),
            ("Hasta", filtros.fecha_hasta),
            ("Proceso diario", filtros.proceso_diario_id),
        ],
    }
    if tipo == "general":
        contexto["filas_general"] = _filas_general(datos)
    else:
        contexto.update(
            encabezado_tiempos=ENCABEZADO_TIEMPOS,
            filas_tiempos=_filas_tiempos(datos),
            devoluciones=datos.devoluciones_manuales,
            filas_razones=[
                (r.razon, r.cantidad, f"{r.porcentaje}%")
                for r in datos.devoluciones_manuales.por_razon
            ],
            temperatura=datos.cumplimiento_temperatura,
            temperatura_promedio=_temperatura_promedio(datos),
        )
    return plantillas.get_template("reporte_estadisticas.html").render(**contexto)


# ============================================
# EXCEL (SpreadsheetML 2003)
# ============================================

def _celda(valor) -> str:
    if isinstance(valor, (int, float)) and not isinstance(valor, bool):
        return f'<Cell><Data ss:Type="Number">{valor}</Data></Cell>'
    return f'<Cell><Data ss:Type="String">{xml_escape(str(valor))}</Data></Cell>'


def _fila(valores: Sequence) -> str:
    return "   <Row>" + "".join(_celda(v) for v in valores) + "</Row>\n"


def generar_excel(datos, tipo: str) -> str:
    """Hoja "Estadísticas" en XML de hoja de cálculo que Excel abre directamente."""
    filas = ""
    if tipo == "general":
        filas += _fila(["Métrica", "Valor (%)"])
        filas += "".join(_fila(f) for f in _filas_general(datos))
    else:
        filas += _fila(ENCABEZADO_TIEMPOS)
        filas += "".join(_fila(f) for f in _filas_tiempos(datos))
        filas += _fila([])
        filas += _fila(["Razón", "Cantidad", "Porcentaje (%)"])
        filas += "".join(
            _fila([r.razon, r.cantidad, r.porcentaje])
            for r in datos.devoluciones_manuales.por_razon
        )

    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<Workbook xmlns="urn:schemas-microsoft-com:office:spreadsheet"\n'
        ' xmlns:o="urn:schemas-microsoft-com:office:office"\n'
        ' xmlns:x="urn:schemas-microsoft-com:office:excel"\n'
        ' xmlns:ss="urn:schemas-microsoft-com:office:spreadsheet"\n'
        ' xmlns:html="http://www.w3.org/TR/REC-html40">\n'
        ' <Worksheet ss:Name="Estadísticas">\n'
        "  <Table>\n"
        f"{filas}"
        "  </Table>\n"
        " </Worksheet>\n"
        "</Workbook>\n"
    )


# ============================================
# SERVICIO
# ============================================

class ExportacionService:
    """Exporta las estadísticas en el formato pedido."""

    def __init__(self, session: Session):
        self.session = session
        self.estadisticas = EstadisticasService(session)

    def exportar(
        self,
        formato: Optional[str],
        tipo: Optional[str],
        filtros: FiltrosEstadisticas
    ) -> ArchivoExportado:
        """
        Genera el archivo de estadísticas.

        Args:
            formato: ``csv``, ``pdf`` (HTML para imprimir) o ``excel``
            tipo: ``general`` o ``comparativo``
            filtros: Filtros de las estadísticas

        Raises:
            ValidationError: Si falta o no es válido el formato o el tipo
        """
        if not formato or not tipo:
            raise ValidationError("Los parámetros formato y tipo son obligatorios")
        if formato not in FORMATOS:
            raise ValidationError(f"Formato no soportado: {formato}")
        if tipo not in TIPOS_ESTADISTICA:
            raise ValidationError(f"Tipo de estadística no válido: {tipo}")

        datos = self.estadisticas.obtener(tipo, filtros).data
        media_type, extension = FORMATOS[formato]

        if formato == "csv":
            contenido = generar_csv(datos, tipo)
        elif formato == "pdf":
            contenido = generar_html(datos, tipo, filtros)
        else:
            contenido = generar_excel(datos, tipo)

        nombre = f"estadisticas_{tipo}_{datetime.utcnow().date().isoformat()}.{extension}"
        logger.info(f"Estadísticas exportadas: {nombre}")
        return ArchivoExportado(contenido=contenido, media_type=media_type, nombre_archivo=nombre)
