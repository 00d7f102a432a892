"""
Excepciones personalizadas del sistema.
Proporciona excepciones semánticas para mejor manejo de errores.
"""


class BaseAppException(Exception):
    """
    Excepción base de la aplicación.
    Todas las excepciones personalizadas heredan de esta.
    """
    def __init__(self, message: str, code: str = "ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


# ============================================
# ERRORES DE VALIDACIÓN
# ============================================

class ValidationError(BaseAppException):
    """Error de validación de datos."""
    def __init__(self, message: str):
        super().__init__(message, "VALIDATION_ERROR")


class InvalidStateError(BaseAppException):
    """Estado inválido para la operación solicitada."""
    def __init__(self, message: str):
        super().__init__(message, "INVALID_STATE")


class TransicionInvalidaError(InvalidStateError):
    """Transición de estado no permitida para un proceso de medicación."""
    def __init__(self, estado_actual: str, estado_nuevo: str):
        super().__init__(
            f"Transición no permitida: {estado_actual} -> {estado_nuevo}"
        )
        self.estado_actual = estado_actual
        self.estado_nuevo = estado_nuevo


# ============================================
# ERRORES DE NO ENCONTRADO
# ============================================

class NotFoundError(BaseAppException):
    """Recurso no encontrado."""
    def __init__(self, resource: str, identifier: str):
        super().__init__(
            f"{resource} con identificador '{identifier}' no encontrado",
            "NOT_FOUND"
        )
        self.resource = resource
        self.identifier = identifier


class PacienteNotFoundError(NotFoundError):
    """Paciente no encontrado."""
    def __init__(self, paciente_id: str):
        super().__init__("Paciente", paciente_id)


class CamaNotFoundError(NotFoundError):
    """Cama no encontrada."""
    def __init__(self, cama_id: str):
        super().__init__("Cama", cama_id)


class LineaNotFoundError(NotFoundError):
    """Línea no encontrada."""
    def __init__(self, linea_id: str):
        super().__init__("Línea", linea_id)


class ServicioNotFoundError(NotFoundError):
    """Servicio no encontrado."""
    def __init__(self, servicio_id: str):
        super().__init__("Servicio", servicio_id)


class ProcesoDiarioNotFoundError(NotFoundError):
    """Proceso diario no encontrado."""
    def __init__(self, proceso_diario_id: str):
        super().__init__("Proceso diario", proceso_diario_id)


class ProcesoMedicacionNotFoundError(NotFoundError):
    """Proceso de medicación no encontrado."""
    def __init__(self, proceso_id: str):
        super().__init__("Proceso de medicación", proceso_id)


class CodigoQRNotFoundError(NotFoundError):
    """Código QR inexistente, inactivo o de otro tipo."""
    def __init__(self, qr_id: str):
        super().__init__("Código QR", qr_id)


class UsuarioNotFoundError(NotFoundError):
    """Usuario no encontrado."""
    def __init__(self, usuario_id: str):
        super().__init__("Usuario", usuario_id)


# ============================================
# ERRORES DE CONFLICTO
# ============================================

class ConflictError(BaseAppException):
    """El recurso ya existe o entra en conflicto con otro."""
    def __init__(self, message: str):
        super().__init__(message, "CONFLICT")


class CamaOcupadaError(ConflictError):
    """La cama ya tiene un paciente activo."""
    def __init__(self, cama_id: str):
        super().__init__(f"La cama '{cama_id}' ya está ocupada por un paciente activo")
        self.cama_id = cama_id


# ============================================
# ERRORES DE PERMISOS
# ============================================

class PermisoDenegadoError(BaseAppException):
    """El rol del usuario no permite la operación."""
    def __init__(self, message: str = "No tienes permisos para realizar esta acción"):
        super().__init__(message, "FORBIDDEN")
