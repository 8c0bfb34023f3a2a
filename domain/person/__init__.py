"""Person domain exports."""
from .entity import Person
from .repository import PersonRepository

__all__ = ["Person", "PersonRepository"]
