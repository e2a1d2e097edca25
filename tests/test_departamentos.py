from __future__ import annotations

from sqlalchemy import func, select

from app.crud import departamentos as departamentos_crud
from app.models.ciudades import Ciudad
from app.models.departamentos import Departamento


def _seed_departamento(db_session, idx: int, nombre: str) -> Departamento:
    obj = Departamento(id_departamento=idx, nombre=nombre)
    db_session.add(obj)
    db_session.commit()
    return obj


def _seed_ciudad(db_session, idx: int, nombre: str, id_departamento: int | None) -> Ciudad:
    obj = Ciudad(id_ciudad=idx, nombre=nombre, id_departamento=id_departamento)
    db_session.add(obj)
    db_session.commit()
    return obj


def _count(db_session, model) -> int:
    return db_session.execute(select(func.count()).select_from(model)).scalar_one()


def test_list_departamentos_ordered_by_nombre(client, db_session):
    _seed_departamento(db_session, 1, "Cundinamarca")
    _seed_departamento(db_session, 2, "Antioquia")
    _seed_departamento(db_session, 3, "Boyacá")

    response = client.get("/api/departamentos")
    assert response.status_code == 200
    assert [row["nombre"] for row in response.json()] == ["Antioquia", "Boyacá", "Cundinamarca"]
    assert response.json()[0] == {"id_departamento": 2, "nombre": "Antioquia"}


def test_list_departamentos_empty(client):
    response = client.get("/api/departamentos")
    assert response.status_code == 200
    assert response.json() == []


def test_create_then_get_returns_same_nombre(client):
    created = client.post("/api/departamentos", json={"nombre": "Santander"})
    assert created.status_code == 201
    body = created.json()
    assert body["nombre"] == "Santander"
    assert body["message"] == "Departamento creado exitosamente"

    fetched = client.get(f"/api/departamentos/{body['id_departamento']}")
    assert fetched.status_code == 200
    assert fetched.json() == {"id_departamento": body["id_departamento"], "nombre": "Santander"}


def test_create_requires_nombre(client, db_session):
    for payload in ({}, {"nombre": ""}, {"nombre": None}):
        response = client.post("/api/departamentos", json=payload)
        assert response.status_code == 400
        assert response.json() == {"error": "El nombre es requerido"}

    response = client.post("/api/departamentos")
    assert response.status_code == 400
    assert response.json() == {"error": "El nombre es requerido"}

    assert _count(db_session, Departamento) == 0


def test_create_rejects_non_string_nombre(client):
    response = client.post("/api/departamentos", json={"nombre": 42})
    assert response.status_code == 400
    assert "nombre" in response.json()["error"]


def test_get_departamento_not_found(client):
    response = client.get("/api/departamentos/999")
    assert response.status_code == 404
    assert response.json() == {"error": "Departamento no encontrado"}


def test_non_numeric_id_fails_fast(client):
    for method in ("get", "delete"):
        response = getattr(client, method)("/api/departamentos/abc")
        assert response.status_code == 400
        assert response.json() == {"error": "El id debe ser un número entero"}

    response = client.put("/api/departamentos/1.5", json={"nombre": "X"})
    assert response.status_code == 400
    assert response.json() == {"error": "El id debe ser un número entero"}


def test_update_departamento(client, db_session):
    _seed_departamento(db_session, 1, "Cundinamarca")

    response = client.put("/api/departamentos/1", json={"nombre": "Cundinamarca D.C."})
    assert response.status_code == 200
    assert response.json() == {
        "id_departamento": 1,
        "nombre": "Cundinamarca D.C.",
        "message": "Departamento actualizado exitosamente",
    }
    assert client.get("/api/departamentos/1").json()["nombre"] == "Cundinamarca D.C."


def test_update_departamento_not_found(client):
    response = client.put("/api/departamentos/77", json={"nombre": "Nariño"})
    assert response.status_code == 404
    assert response.json() == {"error": "Departamento no encontrado"}


def test_update_departamento_requires_nombre(client, db_session):
    _seed_departamento(db_session, 1, "Cundinamarca")

    response = client.put("/api/departamentos/1", json={})
    assert response.status_code == 400
    assert response.json() == {"error": "El nombre es requerido"}
    assert client.get("/api/departamentos/1").json()["nombre"] == "Cundinamarca"


def test_delete_departamento_with_ciudades_is_blocked(client, db_session):
    _seed_departamento(db_session, 1, "Cundinamarca")
    _seed_ciudad(db_session, 1, "Bogotá", 1)

    response = client.delete("/api/departamentos/1")
    assert response.status_code == 400
    assert response.json() == {
        "error": "No se puede eliminar el departamento porque tiene ciudades asociadas"
    }
    assert _count(db_session, Departamento) == 1
    assert _count(db_session, Ciudad) == 1


def test_delete_departamento_without_ciudades(client, db_session):
    _seed_departamento(db_session, 1, "Amazonas")

    response = client.delete("/api/departamentos/1")
    assert response.status_code == 200
    assert response.json() == {"message": "Departamento eliminado exitosamente"}

    assert client.get("/api/departamentos/1").status_code == 404


def test_delete_departamento_not_found(client):
    response = client.delete("/api/departamentos/5")
    assert response.status_code == 404
    assert response.json() == {"error": "Departamento no encontrado"}


def test_delete_blocked_by_foreign_key_when_check_is_raced(client, db_session, monkeypatch):
    # A city created after the count check still blocks the delete: the
    # RESTRICT foreign key fails the statement and the transaction rolls back.
    _seed_departamento(db_session, 1, "Cundinamarca")
    _seed_ciudad(db_session, 1, "Bogotá", 1)
    monkeypatch.setattr(departamentos_crud, "count_ciudades", lambda db, id_departamento: 0)

    response = client.delete("/api/departamentos/1")
    assert response.status_code == 400
    assert response.json() == {
        "error": "No se puede eliminar el departamento porque tiene ciudades asociadas"
    }
    assert _count(db_session, Departamento) == 1
    assert _count(db_session, Ciudad) == 1


def test_search_departamentos_substring_case_insensitive(client, db_session):
    _seed_departamento(db_session, 1, "Valle del Cauca")
    _seed_departamento(db_session, 2, "Cauca")
    _seed_departamento(db_session, 3, "Meta")

    response = client.get("/api/departamentos/buscar/cauca")
    assert response.status_code == 200
    assert [row["nombre"] for row in response.json()] == ["Cauca", "Valle del Cauca"]


def test_search_departamentos_no_match_is_empty_list(client, db_session):
    _seed_departamento(db_session, 1, "Meta")

    response = client.get("/api/departamentos/buscar/xyz")
    assert response.status_code == 200
    assert response.json() == []


def test_search_term_is_bound_not_interpolated(client, db_session):
    _seed_departamento(db_session, 1, "Meta")

    response = client.get("/api/departamentos/buscar/' OR '1'='1")
    assert response.status_code == 200
    assert response.json() == []
    assert _count(db_session, Departamento) == 1


def test_count_ciudades(db_session):
    _seed_departamento(db_session, 1, "Cundinamarca")
    _seed_departamento(db_session, 2, "Meta")
    _seed_ciudad(db_session, 1, "Bogotá", 1)
    _seed_ciudad(db_session, 2, "Soacha", 1)

    assert departamentos_crud.count_ciudades(db_session, 1) == 2
    assert departamentos_crud.count_ciudades(db_session, 2) == 0


def test_out_of_range_id_fails_fast(client):
    for path in ("/api/departamentos/" + "9" * 30, "/api/departamentos/0", "/api/departamentos/-3"):
        response = client.get(path)
        assert response.status_code == 400
        assert response.json() == {"error": "El id debe ser un número entero"}

    response = client.delete("/api/departamentos/2147483648")
    assert response.status_code == 400
    assert response.json() == {"error": "El id debe ser un número entero"}
