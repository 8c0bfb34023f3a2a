from __future__ import annotations

from typing import Optional

import grpc

from application.services.person_service import PersonApplicationService
from core.config import settings
from core.logging_config import get_logger
from domain.common.exceptions import InvalidPersonNameException
from infrastructure.unit_of_work import SQLAlchemyUnitOfWork
from grpc_app.protos import person_pb2, person_pb2_grpc
from grpc_app.mappers.person import person_response, people_response


logger = get_logger(__name__)


class PersonService(person_pb2_grpc.PersonServiceServicer):
    """Thin adapter from PersonService RPCs to the person application service.

    Blank names on Create/Update yield an empty PersonResponse unless
    ``strict_validation`` is on, in which case the validation exception is
    left to ExceptionMappingInterceptor (-> INVALID_ARGUMENT).
    """

    def __init__(
        self,
        svc: Optional[PersonApplicationService] = None,
        *,
        strict_validation: Optional[bool] = None,
    ) -> None:
        self._svc = svc or PersonApplicationService(uow_factory=SQLAlchemyUnitOfWork)
        self._strict = settings.grpc.strict_validation if strict_validation is None else strict_validation

    async def CreatePerson(self, request: person_pb2.CreatePersonRequest, context: grpc.aio.ServicerContext) -> person_pb2.PersonResponse:  # type: ignore[override]
        logger.info("create_person", name=request.name)
        try:
            person = await self._svc.create_person(request.name)
        except InvalidPersonNameException:
            if self._strict:
                raise
            logger.warning("create_person_rejected", reason="blank_name")
            return person_pb2.PersonResponse()
        return person_response(person)

    async def FindById(self, request: person_pb2.PersonByIdRequest, context: grpc.aio.ServicerContext) -> person_pb2.PersonResponse:  # type: ignore[override]
        person = await self._svc.find_by_id(int(request.id))
        return person_response(person)

    async def FindByName(self, request: person_pb2.PersonByNameRequest, context: grpc.aio.ServicerContext) -> person_pb2.PeopleResponse:  # type: ignore[override]
        people = await self._svc.find_by_name(request.name)
        return people_response(people)

    async def GetAll(self, request: person_pb2.GetAllPeopleRequest, context: grpc.aio.ServicerContext) -> person_pb2.PeopleResponse:  # type: ignore[override]
        people = await self._svc.list_all()
        return people_response(people)

    async def UpdatePerson(self, request: person_pb2.UpdatePersonRequest, context: grpc.aio.ServicerContext) -> person_pb2.PersonResponse:  # type: ignore[override]
        logger.info("update_person", person_id=int(request.id), name=request.name)
        try:
            person = await self._svc.update_person(int(request.id), request.name)
        except InvalidPersonNameException:
            if self._strict:
                raise
            logger.warning("update_person_rejected", person_id=int(request.id), reason="blank_name")
            return person_pb2.PersonResponse()
        return person_response(person)

    async def DeletePerson(self, request: person_pb2.DeletePersonRequest, context: grpc.aio.ServicerContext) -> person_pb2.DeletePersonResponse:  # type: ignore[override]
        deleted = await self._svc.delete_person(int(request.id))
        return person_pb2.DeletePersonResponse(success=deleted)
