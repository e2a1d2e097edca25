from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class Ciudad(Base):
    __tablename__ = "ciudades"

    id_ciudad: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    nombre: Mapped[str] = mapped_column(String(120), nullable=False)

    # RESTRICT backs the "no delete while referenced" rule at the store level.
    id_departamento: Mapped[int | None] = mapped_column(
        ForeignKey("departamentos.id_departamento", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )
