"""Migración inicial - Crear todas las tablas

Revision ID: 001_initial
Revises: 
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    ]


def upgrade() -> None:
    """Crea todas las tablas del sistema."""

    # Tabla Usuarios
    op.create_table(
        'usuarios',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('nombre', sa.String(length=30), nullable=False),
        sa.Column('apellido', sa.String(length=30), nullable=False),
        sa.Column('rol', sa.String(), nullable=False),
        sa.Column('avatar_url', sa.String(length=500), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, default=True),
        *_timestamps(),
        sa.Column('last_login', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_usuarios_email', 'usuarios', ['email'], unique=True)

    # Tabla Refresh Tokens
    op.create_table(
        'refresh_tokens',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('token', sa.String(), nullable=False),
        sa.Column('user_id', sa.String(), nullable=False),
        sa.Column('expires_at', sa.DateTime(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('revoked', sa.Boolean(), nullable=False, default=False),
        sa.Column('revoked_at', sa.DateTime(), nullable=True),
        sa.Column('user_agent', sa.String(length=500), nullable=True),
        sa.Column('ip_address', sa.String(length=45), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['usuarios.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_refresh_tokens_token', 'refresh_tokens', ['token'], unique=True)
    op.create_index('ix_refresh_tokens_user_id', 'refresh_tokens', ['user_id'])

    # Tabla Linea
    op.create_table(
        'linea',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('nombre', sa.String(), nullable=False),
        sa.Column('nombre_visible', sa.String(), nullable=False),
        sa.Column('descripcion', sa.String(), nullable=True),
        sa.Column('activa', sa.Boolean(), nullable=False, default=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_linea_nombre', 'linea', ['nombre'], unique=True)

    # Tabla Servicio
    op.create_table(
        'servicio',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('nombre', sa.String(), nullable=False),
        sa.Column('descripcion', sa.String(), nullable=True),
        sa.Column('linea_id', sa.String(), nullable=False),
        sa.Column('activo', sa.Boolean(), nullable=False, default=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['linea_id'], ['linea.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_servicio_nombre', 'servicio', ['nombre'])
    op.create_index('ix_servicio_linea_id', 'servicio', ['linea_id'])

    # Tabla Cama
    op.create_table(
        'cama',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('numero', sa.String(), nullable=False),
        sa.Column('linea_id', sa.String(), nullable=False),
        sa.Column('activa', sa.Boolean(), nullable=False, default=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['linea_id'], ['linea.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('linea_id', 'numero', name='uq_cama_linea_numero')
    )
    op.create_index('ix_cama_numero', 'cama', ['numero'])
    op.create_index('ix_cama_linea_id', 'cama', ['linea_id'])

    # Tabla Paciente
    op.create_table(
        'paciente',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('id_externo', sa.String(), nullable=False),
        sa.Column('nombre', sa.String(), nullable=False),
        sa.Column('apellido', sa.String(), nullable=False),
        sa.Column('fecha_nacimiento', sa.DateTime(), nullable=False),
        sa.Column('genero', sa.String(), nullable=False),
        sa.Column('fecha_ingreso', sa.DateTime(), nullable=False),
        sa.Column('cama_id', sa.String(), nullable=False),
        sa.Column('servicio_id', sa.String(), nullable=False),
        sa.Column('estado', sa.String(), nullable=False),
        sa.Column('historia_clinica', sa.String(), nullable=True),
        sa.Column('notas', sa.String(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['cama_id'], ['cama.id']),
        sa.ForeignKeyConstraint(['servicio_id'], ['servicio.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_paciente_id_externo', 'paciente', ['id_externo'], unique=True)
    op.create_index('ix_paciente_cama_id', 'paciente', ['cama_id'])
    op.create_index('ix_paciente_servicio_id', 'paciente', ['servicio_id'])
    op.create_index('ix_paciente_estado', 'paciente', ['estado'])
    op.create_index('ix_paciente_historia_clinica', 'paciente', ['historia_clinica'])

    # Tabla Proceso Diario
    op.create_table(
        'proceso_diario',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('fecha', sa.DateTime(), nullable=False),
        sa.Column('iniciado_por', sa.String(), nullable=False),
        sa.Column('iniciado_en', sa.DateTime(), nullable=False),
        sa.Column('completado_en', sa.DateTime(), nullable=True),
        sa.Column('estado', sa.String(), nullable=False),
        sa.Column('notas', sa.String(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['iniciado_por'], ['usuarios.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_proceso_diario_fecha', 'proceso_diario', ['fecha'], unique=True)
    op.create_index('ix_proceso_diario_iniciado_por', 'proceso_diario', ['iniciado_por'])
    op.create_index('ix_proceso_diario_estado', 'proceso_diario', ['estado'])

    # Tabla Proceso Medicacion
    op.create_table(
        'proceso_medicacion',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('paciente_id', sa.String(), nullable=False),
        sa.Column('proceso_diario_id', sa.String(), nullable=True),
        sa.Column('paso', sa.String(), nullable=False),
        sa.Column('estado', sa.String(), nullable=False),
        sa.Column('iniciado_en', sa.DateTime(), nullable=True),
        sa.Column('iniciado_por', sa.String(), nullable=True),
        sa.Column('completado_en', sa.DateTime(), nullable=True),
        sa.Column('completado_por', sa.String(), nullable=True),
        sa.Column('notas', sa.String(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['paciente_id'], ['paciente.id']),
        sa.ForeignKeyConstraint(['proceso_diario_id'], ['proceso_diario.id']),
        sa.ForeignKeyConstraint(['iniciado_por'], ['usuarios.id']),
        sa.ForeignKeyConstraint(['completado_por'], ['usuarios.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_proceso_medicacion_paciente_id', 'proceso_medicacion', ['paciente_id'])
    op.create_index('ix_proceso_medicacion_proceso_diario_id', 'proceso_medicacion', ['proceso_diario_id'])
    op.create_index('ix_proceso_medicacion_paso', 'proceso_medicacion', ['paso'])
    op.create_index('ix_proceso_medicacion_estado', 'proceso_medicacion', ['estado'])

    # Tabla Codigo QR
    op.create_table(
        'codigo_qr',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('qr_id', sa.String(), nullable=False),
        sa.Column('tipo', sa.String(), nullable=False),
        sa.Column('imagen_data_url', sa.Text(), nullable=False),
        sa.Column('servicio_id', sa.String(), nullable=True),
        sa.Column('creado_por', sa.String(), nullable=False),
        sa.Column('activo', sa.Boolean(), nullable=False, default=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['servicio_id'], ['servicio.id']),
        sa.ForeignKeyConstraint(['creado_por'], ['usuarios.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_codigo_qr_qr_id', 'codigo_qr', ['qr_id'], unique=True)
    op.create_index('ix_codigo_qr_tipo', 'codigo_qr', ['tipo'])
    op.create_index('ix_codigo_qr_servicio_id', 'codigo_qr', ['servicio_id'])
    op.create_index('ix_codigo_qr_activo', 'codigo_qr', ['activo'])

    # Tabla Registro Escaneo QR
    op.create_table(
        'registro_escaneo_qr',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('paciente_id', sa.String(), nullable=False),
        sa.Column('codigo_qr_id', sa.String(), nullable=False),
        sa.Column('escaneado_por', sa.String(), nullable=False),
        sa.Column('proceso_diario_id', sa.String(), nullable=True),
        sa.Column('temperatura', sa.Float(), nullable=True),
        sa.Column('linea_destino_id', sa.String(), nullable=True),
        sa.Column('tipo_transaccion', sa.String(), nullable=True),
        sa.Column('escaneado_en', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['paciente_id'], ['paciente.id']),
        sa.ForeignKeyConstraint(['codigo_qr_id'], ['codigo_qr.id']),
        sa.ForeignKeyConstraint(['escaneado_por'], ['usuarios.id']),
        sa.ForeignKeyConstraint(['proceso_diario_id'], ['proceso_diario.id']),
        sa.ForeignKeyConstraint(['linea_destino_id'], ['linea.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_registro_escaneo_qr_paciente_id', 'registro_escaneo_qr', ['paciente_id'])
    op.create_index('ix_registro_escaneo_qr_codigo_qr_id', 'registro_escaneo_qr', ['codigo_qr_id'])
    op.create_index('ix_registro_escaneo_qr_proceso_diario_id', 'registro_escaneo_qr', ['proceso_diario_id'])
    op.create_index('ix_registro_escaneo_qr_escaneado_en', 'registro_escaneo_qr', ['escaneado_en'])

    # Tabla Medicamento
    op.create_table(
        'medicamento',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('codigo_servinte', sa.String(), nullable=False),
        sa.Column('codigo_nuevo_estandar', sa.String(), nullable=True),
        sa.Column('cum_sin_ceros', sa.String(), nullable=True),
        sa.Column('cum_con_ceros', sa.String(), nullable=True),
        sa.Column('nombre_preciso', sa.String(), nullable=False),
        sa.Column('principio_activo', sa.String(), nullable=True),
        sa.Column('concentracion_estandarizada', sa.String(), nullable=True),
        sa.Column('forma_farmaceutica', sa.String(), nullable=True),
        sa.Column('marca_comercial', sa.String(), nullable=True),
        sa.Column('nueva_estructura_estandar_semantico', sa.String(), nullable=True),
        sa.Column('clasificacion_articulo', sa.String(), nullable=True),
        sa.Column('via_administracion', sa.String(), nullable=True),
        sa.Column('descripcion_cum', sa.String(), nullable=True),
        sa.Column('activo', sa.Boolean(), nullable=False, default=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_medicamento_codigo_servinte', 'medicamento', ['codigo_servinte'])
    op.create_index('ix_medicamento_codigo_nuevo_estandar', 'medicamento', ['codigo_nuevo_estandar'])
    op.create_index('ix_medicamento_nombre_preciso', 'medicamento', ['nombre_preciso'])

    # Tabla Causa Devolucion
    op.create_table(
        'causa_devolucion',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('codigo', sa.Integer(), nullable=False),
        sa.Column('descripcion', sa.String(), nullable=False),
        sa.Column('activa', sa.Boolean(), nullable=False, default=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_causa_devolucion_codigo', 'causa_devolucion', ['codigo'], unique=True)

    # Tabla Devolucion Manual
    op.create_table(
        'devolucion_manual',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('paciente_id', sa.String(), nullable=False),
        sa.Column('generado_por', sa.String(), nullable=False),
        sa.Column('revisado_por', sa.String(), nullable=True),
        sa.Column('estado', sa.String(), nullable=False),
        sa.Column('fecha_aprobacion', sa.DateTime(), nullable=True),
        sa.Column('causa', sa.String(), nullable=True),
        sa.Column('comentarios', sa.String(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['paciente_id'], ['paciente.id']),
        sa.ForeignKeyConstraint(['generado_por'], ['usuarios.id']),
        sa.ForeignKeyConstraint(['revisado_por'], ['usuarios.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_devolucion_manual_paciente_id', 'devolucion_manual', ['paciente_id'])
    op.create_index('ix_devolucion_manual_generado_por', 'devolucion_manual', ['generado_por'])
    op.create_index('ix_devolucion_manual_revisado_por', 'devolucion_manual', ['revisado_por'])
    op.create_index('ix_devolucion_manual_estado', 'devolucion_manual', ['estado'])

    # Tabla Insumo Devolucion
    op.create_table(
        'insumo_devolucion',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('devolucion_id', sa.String(), nullable=False),
        sa.Column('medicamento_id', sa.String(), nullable=True),
        sa.Column('codigo_insumo', sa.String(), nullable=False),
        sa.Column('nombre_insumo', sa.String(), nullable=False),
        sa.Column('cantidad_devuelta', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['devolucion_id'], ['devolucion_manual.id']),
        sa.ForeignKeyConstraint(['medicamento_id'], ['medicamento.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_insumo_devolucion_devolucion_id', 'insumo_devolucion', ['devolucion_id'])

    # Tabla Registro Error Proceso
    op.create_table(
        'registro_error_proceso',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('paciente_id', sa.String(), nullable=False),
        sa.Column('proceso_medicacion_id', sa.String(), nullable=True),
        sa.Column('paso', sa.String(), nullable=False),
        sa.Column('tipo', sa.String(), nullable=False),
        sa.Column('mensaje', sa.String(), nullable=False),
        sa.Column('reportado_por', sa.String(), nullable=False),
        sa.Column('rol_reportante', sa.String(), nullable=False),
        sa.Column('reportado_en', sa.DateTime(), nullable=False),
        sa.Column('resuelto_en', sa.DateTime(), nullable=True),
        sa.Column('resuelto_por', sa.String(), nullable=True),
        sa.ForeignKeyConstraint(['paciente_id'], ['paciente.id']),
        sa.ForeignKeyConstraint(['proceso_medicacion_id'], ['proceso_medicacion.id']),
        sa.ForeignKeyConstraint(['reportado_por'], ['usuarios.id']),
        sa.ForeignKeyConstraint(['resuelto_por'], ['usuarios.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_registro_error_proceso_paciente_id', 'registro_error_proceso', ['paciente_id'])
    op.create_index('ix_registro_error_proceso_proceso_medicacion_id', 'registro_error_proceso', ['proceso_medicacion_id'])
    op.create_index('ix_registro_error_proceso_reportado_en', 'registro_error_proceso', ['reportado_en'])


def downgrade() -> None:
    """Elimina todas las tablas."""
    op.drop_table('registro_error_proceso')
    op.drop_table('insumo_devolucion')
    op.drop_table('devolucion_manual')
    op.drop_table('causa_devolucion')
    op.drop_table('medicamento')
    op.drop_table('registro_escaneo_qr')
    op.drop_table('codigo_qr')
    op.drop_table('proceso_medicacion')
    op.drop_table('proceso_diario')
    op.drop_table('paciente')
    op.drop_table('cama')
    op.drop_table('servicio')
    op.drop_table('linea')
    op.drop_table('refresh_tokens')
    op.drop_table('usuarios')
