from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.crud.ciudades import (
    create_ciudad,
    delete_ciudad,
    get_ciudad,
    list_ciudades,
    list_ciudades_by_departamento,
    search_ciudades,
    update_ciudad,
)
from app.db.session import get_db
from app.schemas.base import MessageOut, RowId
from app.schemas.ciudades import CiudadIn, CiudadOut, CiudadWriteOut

router = APIRouter(prefix="/api/ciudades", tags=["ciudades"])

NOT_FOUND = "Ciudad no encontrada"


def _required_nombre(payload: CiudadIn | None) -> str:
    nombre = payload.nombre if payload is not None else None
    if not nombre:
        raise HTTPException(status_code=400, detail="El nombre es requerido")
    return nombre


@router.get("", response_model=list[CiudadOut])
def list_ciudades_api(db: Session = Depends(get_db)):
    return list_ciudades(db)


@router.get("/departamento/{id_departamento}", response_model=list[CiudadOut])
def list_ciudades_by_departamento_api(id_departamento: RowId, db: Session = Depends(get_db)):
    return list_ciudades_by_departamento(db, id_departamento)


@router.get("/buscar/{nombre}", response_model=list[CiudadOut])
def search_ciudades_api(nombre: str, db: Session = Depends(get_db)):
    return search_ciudades(db, nombre)


@router.get("/{id_ciudad}", response_model=CiudadOut)
def get_ciudad_api(id_ciudad: RowId, db: Session = Depends(get_db)):
    obj = get_ciudad(db, id_ciudad)
    if obj is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return obj


@router.post("", response_model=CiudadWriteOut, status_code=status.HTTP_201_CREATED)
def create_ciudad_api(payload: CiudadIn | None = None, db: Session = Depends(get_db)):
    nombre = _required_nombre(payload)
    new_id = create_ciudad(db, nombre, payload.id_departamento)
    return {
        "id_ciudad": new_id,
        "nombre": nombre,
        "id_departamento": payload.id_departamento,
        "message": "Ciudad creada exitosamente",
    }


@router.put("/{id_ciudad}", response_model=CiudadWriteOut)
def update_ciudad_api(
    id_ciudad: RowId,
    payload: CiudadIn | None = None,
    db: Session = Depends(get_db),
):
    nombre = _required_nombre(payload)
    if not update_ciudad(db, id_ciudad, nombre, payload.id_departamento):
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return {
        "id_ciudad": id_ciudad,
        "nombre": nombre,
        "id_departamento": payload.id_departamento,
        "message": "Ciudad actualizada exitosamente",
    }


@router.delete("/{id_ciudad}", response_model=MessageOut)
def delete_ciudad_api(id_ciudad: RowId, db: Session = Depends(get_db)):
    if not delete_ciudad(db, id_ciudad):
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return {"message": "Ciudad eliminada exitosamente"}
