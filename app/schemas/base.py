from typing import Annotated

from fastapi import Path
from pydantic import BaseModel

# Ids are MySQL INT AUTO_INCREMENT columns.
MAX_ID = 2**31 - 1

RowId = Annotated[int, Path(ge=1, le=MAX_ID)]


class MessageOut(BaseModel):
    message: str
