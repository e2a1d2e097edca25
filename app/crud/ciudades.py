from __future__ import annotations

import logging

from sqlalchemy import delete, insert, select, update
from sqlalchemy.orm import Session

from app.core.flow_logging import flow_info
from app.models.ciudades import Ciudad
from app.models.departamentos import Departamento

logger = logging.getLogger(__name__)

ciudades = Ciudad.__table__
departamentos = Departamento.__table__


def _select_ciudades():
    # LEFT JOIN: cities without a department still come back,
    # with nombre_departamento = NULL.
    return select(
        ciudades.c.id_ciudad,
        ciudades.c.nombre,
        ciudades.c.id_departamento,
        departamentos.c.nombre.label("nombre_departamento"),
    ).select_from(
        ciudades.outerjoin(
            departamentos,
            ciudades.c.id_departamento == departamentos.c.id_departamento,
        )
    )


def list_ciudades(db: Session) -> list[dict]:
    stmt = _select_ciudades().order_by(ciudades.c.nombre.asc())
    return [dict(row._mapping) for row in db.execute(stmt)]


def get_ciudad(db: Session, id_ciudad: int) -> dict | None:
    stmt = _select_ciudades().where(ciudades.c.id_ciudad == id_ciudad)
    row = db.execute(stmt).first()
    return dict(row._mapping) if row is not None else None


def list_ciudades_by_departamento(db: Session, id_departamento: int) -> list[dict]:
    stmt = (
        _select_ciudades()
        .where(ciudades.c.id_departamento == id_departamento)
        .order_by(ciudades.c.nombre.asc())
    )
    return [dict(row._mapping) for row in db.execute(stmt)]


def search_ciudades(db: Session, nombre: str) -> list[dict]:
    stmt = (
        _select_ciudades()
        .where(ciudades.c.nombre.ilike(f"%{nombre}%"))
        .order_by(ciudades.c.nombre.asc())
    )
    return [dict(row._mapping) for row in db.execute(stmt)]


def create_ciudad(db: Session, nombre: str, id_departamento: int | None) -> int:
    result = db.execute(
        insert(ciudades).values(nombre=nombre, id_departamento=id_departamento)
    )
    db.commit()
    new_id = result.inserted_primary_key[0]
    flow_info(
        logger,
        "ciudad_created id=%s nombre=%s id_departamento=%s",
        new_id,
        nombre,
        id_departamento,
        category="ciudades",
    )
    return new_id


def update_ciudad(db: Session, id_ciudad: int, nombre: str, id_departamento: int | None) -> bool:
    stmt = (
        update(ciudades)
        .where(ciudades.c.id_ciudad == id_ciudad)
        .values(nombre=nombre, id_departamento=id_departamento)
    )
    result = db.execute(stmt)
    db.commit()
    if result.rowcount == 0:
        return False
    flow_info(
        logger,
        "ciudad_updated id=%s nombre=%s id_departamento=%s",
        id_ciudad,
        nombre,
        id_departamento,
        category="ciudades",
    )
    return True


def delete_ciudad(db: Session, id_ciudad: int) -> bool:
    result = db.execute(delete(ciudades).where(ciudades.c.id_ciudad == id_ciudad))
    db.commit()
    if result.rowcount == 0:
        return False
    flow_info(logger, "ciudad_deleted id=%s", id_ciudad, category="ciudades")
    return True
