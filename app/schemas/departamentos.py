from typing import Optional

from pydantic import BaseModel, ConfigDict


class DepartamentoIn(BaseModel):
    # Presence is checked by the router so a missing name maps to
    # "El nombre es requerido" instead of a generic validation message.
    nombre: Optional[str] = None


class DepartamentoOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id_departamento: int
    nombre: str


class DepartamentoWriteOut(DepartamentoOut):
    message: str
