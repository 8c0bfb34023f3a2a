from __future__ import annotations

from typing import Iterable, Optional

from application.dto import PersonDTO
from grpc_app.protos import person_pb2


def person_dto_to_proto(dto: PersonDTO) -> person_pb2.Person:
    return person_pb2.Person(id=int(dto.id), name=dto.name)


def person_response(dto: Optional[PersonDTO]) -> person_pb2.PersonResponse:
    """Wrap an optional person; ``None`` leaves the field unset (HasField is False)."""
    if dto is None:
        return person_pb2.PersonResponse()
    return person_pb2.PersonResponse(person=person_dto_to_proto(dto))


def people_response(dtos: Iterable[PersonDTO]) -> person_pb2.PeopleResponse:
    return person_pb2.PeopleResponse(people=[person_dto_to_proto(d) for d in dtos])
