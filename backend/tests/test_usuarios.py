"""
Tests para administración de usuarios y perfiles.
"""
from fastapi import status

from kumpels.models.usuario import RolEnum


NUEVO_USUARIO = {
    "email": "Nuevo.Validador@kumpels.co",
    "password": "Segura123!",
    "nombre": "Pedro",
    "apellido": "Ruiz",
    "rol": "PHARMACY_VALIDATOR",
}


class TestAdminUsuarios:
    """Tests de /auth/usuarios (solo SUPERADMIN)."""

    def test_crear_usuario(self, client, admin_headers):
        response = client.post("/api/auth/usuarios", json=NUEVO_USUARIO, headers=admin_headers)
        assert response.status_code == status.HTTP_201_CREATED

        result = response.json()
        assert result["email"] == "nuevo.validador@kumpels.co"
        assert result["rol"] == "PHARMACY_VALIDATOR"
        assert result["is_active"] is True

    def test_crear_usuario_email_duplicado(self, client, admin_headers):
        client.post("/api/auth/usuarios", json=NUEVO_USUARIO, headers=admin_headers)
        response = client.post("/api/auth/usuarios", json=NUEVO_USUARIO, headers=admin_headers)
        assert response.status_code == status.HTTP_409_CONFLICT

    def test_regente_no_gestiona_usuarios(self, client, regente_headers):
        response = client.post("/api/auth/usuarios", json=NUEVO_USUARIO, headers=regente_headers)
        assert response.status_code == status.HTTP_403_FORBIDDEN

        response = client.get("/api/auth/usuarios", headers=regente_headers)
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_listar_con_busqueda(self, client, admin_headers, crear_usuario):
        crear_usuario(RolEnum.ENFERMERA, email="lucia@kumpels.co", nombre="Lucía")
        crear_usuario(RolEnum.ENFERMERA, email="carla@kumpels.co", nombre="Carla")

        response = client.get(
            "/api/auth/usuarios",
            params={"search": "lucia"},
            headers=admin_headers
        )
        assert response.status_code == status.HTTP_200_OK

        result = response.json()
        assert result["total"] == 1
        assert result["users"][0]["email"] == "lucia@kumpels.co"

    def test_listar_paginado(self, client, admin_headers, crear_usuario):
        for i in range(4):
            crear_usuario(RolEnum.ENFERMERA, email=f"enf{i}@kumpels.co")

        result = client.get(
            "/api/auth/usuarios",
            params={"page": 2, "page_size": 2},
            headers=admin_headers
        ).json()

        # 4 enfermeras + el administrador
        assert result["total"] == 5
        assert result["page"] == 2
        assert result["total_pages"] == 3
        assert len(result["users"]) == 2

    def test_desactivar_usuario(self, client, admin_headers, enfermera):
        response = client.put(
            f"/api/auth/usuarios/{enfermera.id}",
            json={"is_active": False},
            headers=admin_headers
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["is_active"] is False

    def test_eliminar_usuario(self, client, admin_headers, enfermera):
        response = client.delete(f"/api/auth/usuarios/{enfermera.id}", headers=admin_headers)
        assert response.status_code == status.HTTP_200_OK

        response = client.get(f"/api/auth/usuarios/{enfermera.id}", headers=admin_headers)
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_no_puede_eliminarse_a_si_mismo(self, client, admin, admin_headers):
        response = client.delete(f"/api/auth/usuarios/{admin.id}", headers=admin_headers)
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_restablecer_password(self, client, admin_headers, crear_usuario):
        usuario = crear_usuario(email="olvido@kumpels.co", password="Vieja123!")

        response = client.put(
            f"/api/auth/usuarios/{usuario.id}/reset-password",
            json={"password": "Nueva123!"},
            headers=admin_headers
        )
        assert response.status_code == status.HTTP_200_OK

        response = client.post(
            "/api/auth/login",
            json={"email": "olvido@kumpels.co", "password": "Nueva123!"}
        )
        assert response.status_code == status.HTTP_200_OK


class TestPerfil:
    """Tests de /perfil."""

    def test_ver_perfil_propio(self, client, enfermera, enfermera_headers):
        response = client.get(f"/api/perfil/{enfermera.id}", headers=enfermera_headers)
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["email"] == enfermera.email

    def test_ver_perfil_ajeno(self, client, regente, enfermera_headers):
        response = client.get(f"/api/perfil/{regente.id}", headers=enfermera_headers)
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_superadmin_ve_cualquier_perfil(self, client, enfermera, admin_headers):
        response = client.get(f"/api/perfil/{enfermera.id}", headers=admin_headers)
        assert response.status_code == status.HTTP_200_OK

    def test_actualizar_perfil_propio(self, client, enfermera, enfermera_headers):
        response = client.put(
            f"/api/perfil/{enfermera.id}",
            json={"nombre": "Marta", "avatar_url": "https://cdn.kumpels.co/a.png"},
            headers=enfermera_headers
        )
        assert response.status_code == status.HTTP_200_OK

        result = response.json()
        assert result["nombre"] == "Marta"
        assert result["avatar_url"] == "https://cdn.kumpels.co/a.png"

    def test_no_puede_cambiar_su_rol(self, client, enfermera, enfermera_headers):
        response = client.put(
            f"/api/perfil/{enfermera.id}",
            json={"rol": "SUPERADMIN"},
            headers=enfermera_headers
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_superadmin_cambia_rol(self, client, enfermera, admin_headers):
        response = client.put(
            f"/api/perfil/{enfermera.id}",
            json={"rol": "PHARMACY_REGENT"},
            headers=admin_headers
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["rol"] == "PHARMACY_REGENT"
        assert "devolucion:aprobar" in response.json()["permisos"]
