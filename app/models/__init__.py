from .departamentos import Departamento  # noqa: F401
from .ciudades import Ciudad  # noqa: F401
