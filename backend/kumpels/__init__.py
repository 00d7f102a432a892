"""
Kumpels App: trazabilidad de la dispensación de medicamentos hospitalarios.
"""
