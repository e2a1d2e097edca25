from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.crud.departamentos import (
    InUseError,
    create_departamento,
    delete_departamento,
    get_departamento,
    list_departamentos,
    search_departamentos,
    update_departamento,
)
from app.db.session import get_db
from app.schemas.base import MessageOut, RowId
from app.schemas.departamentos import DepartamentoIn, DepartamentoOut, DepartamentoWriteOut

router = APIRouter(prefix="/api/departamentos", tags=["departamentos"])

NOT_FOUND = "Departamento no encontrado"


def _required_nombre(payload: DepartamentoIn | None) -> str:
    nombre = payload.nombre if payload is not None else None
    if not nombre:
        raise HTTPException(status_code=400, detail="El nombre es requerido")
    return nombre


@router.get("", response_model=list[DepartamentoOut])
def list_departamentos_api(db: Session = Depends(get_db)):
    return list_departamentos(db)


@router.get("/buscar/{nombre}", response_model=list[DepartamentoOut])
def search_departamentos_api(nombre: str, db: Session = Depends(get_db)):
    return search_departamentos(db, nombre)


@router.get("/{id_departamento}", response_model=DepartamentoOut)
def get_departamento_api(id_departamento: RowId, db: Session = Depends(get_db)):
    obj = get_departamento(db, id_departamento)
    if obj is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return obj


@router.post("", response_model=DepartamentoWriteOut, status_code=status.HTTP_201_CREATED)
def create_departamento_api(payload: DepartamentoIn | None = None, db: Session = Depends(get_db)):
    nombre = _required_nombre(payload)
    new_id = create_departamento(db, nombre)
    return {
        "id_departamento": new_id,
        "nombre": nombre,
        "message": "Departamento creado exitosamente",
    }


@router.put("/{id_departamento}", response_model=DepartamentoWriteOut)
def update_departamento_api(
    id_departamento: RowId,
    payload: DepartamentoIn | None = None,
    db: Session = Depends(get_db),
):
    nombre = _required_nombre(payload)
    if not update_departamento(db, id_departamento, nombre):
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return {
        "id_departamento": id_departamento,
        "nombre": nombre,
        "message": "Departamento actualizado exitosamente",
    }


@router.delete("/{id_departamento}", response_model=MessageOut)
def delete_departamento_api(id_departamento: RowId, db: Session = Depends(get_db)):
    try:
        ok = delete_departamento(db, id_departamento)
    except InUseError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if not ok:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return {"message": "Departamento eliminado exitosamente"}
