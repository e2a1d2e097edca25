from __future__ import annotations

import logging

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.flow_logging import flow_info
from app.models.ciudades import Ciudad
from app.models.departamentos import Departamento

logger = logging.getLogger(__name__)

departamentos = Departamento.__table__
ciudades = Ciudad.__table__


class InUseError(Exception):
    """Raised when a department still has cities pointing at it."""


def _select_departamentos():
    return select(departamentos.c.id_departamento, departamentos.c.nombre)


def list_departamentos(db: Session) -> list[dict]:
    stmt = _select_departamentos().order_by(departamentos.c.nombre.asc())
    return [dict(row._mapping) for row in db.execute(stmt)]


def get_departamento(db: Session, id_departamento: int) -> dict | None:
    stmt = _select_departamentos().where(departamentos.c.id_departamento == id_departamento)
    row = db.execute(stmt).first()
    return dict(row._mapping) if row is not None else None


def search_departamentos(db: Session, nombre: str) -> list[dict]:
    stmt = (
        _select_departamentos()
        .where(departamentos.c.nombre.ilike(f"%{nombre}%"))
        .order_by(departamentos.c.nombre.asc())
    )
    return [dict(row._mapping) for row in db.execute(stmt)]


def create_departamento(db: Session, nombre: str) -> int:
    result = db.execute(insert(departamentos).values(nombre=nombre))
    db.commit()
    new_id = result.inserted_primary_key[0]
    flow_info(logger, "departamento_created id=%s nombre=%s", new_id, nombre, category="departamentos")
    return new_id


def update_departamento(db: Session, id_departamento: int, nombre: str) -> bool:
    stmt = (
        update(departamentos)
        .where(departamentos.c.id_departamento == id_departamento)
        .values(nombre=nombre)
    )
    result = db.execute(stmt)
    db.commit()
    if result.rowcount == 0:
        return False
    flow_info(logger, "departamento_updated id=%s nombre=%s", id_departamento, nombre, category="departamentos")
    return True


def count_ciudades(db: Session, id_departamento: int) -> int:
    stmt = (
        select(func.count())
        .select_from(ciudades)
        .where(ciudades.c.id_departamento == id_departamento)
    )
    return db.execute(stmt).scalar_one()


def delete_departamento(db: Session, id_departamento: int) -> bool:
    """
    Delete a department that no city references.

    The count and the delete share one transaction. A city inserted between
    them trips the RESTRICT foreign key and is reported the same way as the
    count check.
    """
    try:
        if count_ciudades(db, id_departamento) > 0:
            db.rollback()
            flow_info(logger, "departamento_delete_blocked id=%s", id_departamento, category="departamentos")
            raise InUseError(
                "No se puede eliminar el departamento porque tiene ciudades asociadas"
            )
        result = db.execute(
            delete(departamentos).where(departamentos.c.id_departamento == id_departamento)
        )
        db.commit()
    except IntegrityError as e:
        db.rollback()
        flow_info(logger, "departamento_delete_fk_blocked id=%s", id_departamento, category="departamentos")
        raise InUseError(
            "No se puede eliminar el departamento porque tiene ciudades asociadas"
        ) from e

    if result.rowcount == 0:
        return False
    flow_info(logger, "departamento_deleted id=%s", id_departamento, category="departamentos")
    return True
