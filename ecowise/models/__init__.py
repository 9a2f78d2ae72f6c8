# SQLAlchemy models
from ecowise.models.trip import Trip

__all__ = ["Trip"]
