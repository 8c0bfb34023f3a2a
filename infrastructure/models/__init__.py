"""Infrastructure models package exports."""
from .base import Base, metadata
from .person import PersonModel, person_seq

__all__ = [
    "Base",
    "metadata",
    "PersonModel",
    "person_seq",
]
