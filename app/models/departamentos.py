from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class Departamento(Base):
    __tablename__ = "departamentos"

    id_departamento: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    # Not unique: two departments may share a name.
    nombre: Mapped[str] = mapped_column(String(120), nullable=False)
