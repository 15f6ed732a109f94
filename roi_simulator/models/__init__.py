from .base import Base
from .scenario import Scenario

__all__ = [
    "Base",
    "Scenario",
]
