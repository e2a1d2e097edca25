from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.base import MAX_ID


class CiudadIn(BaseModel):
    nombre: Optional[str] = None
    id_departamento: Optional[int] = Field(default=None, ge=1, le=MAX_ID)

    @field_validator("id_departamento", mode="before")
    @classmethod
    def _falsy_means_no_department(cls, value: Any) -> Any:
        # 0, "", false and null all mean "no department".
        # Department id 0 is therefore not addressable from this API.
        if not value:
            return None
        return value


class CiudadOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id_ciudad: int
    nombre: str
    id_departamento: Optional[int] = None
    nombre_departamento: Optional[str] = None


class CiudadWriteOut(BaseModel):
    id_ciudad: int
    nombre: str
    id_departamento: Optional[int] = None
    message: str
