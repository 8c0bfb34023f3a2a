import asyncio

import pytest

from application.dto import PersonDTO
from domain.common.exceptions import InvalidPersonNameException
from domain.person.entity import Person
from infrastructure.database import SEED_NAMES, bootstrap_database, unit_of_work_lock


async def test_bootstrap_seeds_four_people_in_order(person_service):
    people = await person_service.list_all()
    assert [(p.id, p.name) for p in people] == [
        (1, "Alice"),
        (2, "Bob"),
        (3, "Charlie"),
        (4, "Alice"),
    ]


async def test_bootstrap_wipes_previous_state(db_engine, person_service):
    await person_service.create_person("David")
    await person_service.delete_person(1)

    seeded = await bootstrap_database(db_engine)

    assert seeded == len(SEED_NAMES)
    people = await person_service.list_all()
    assert [p.id for p in people] == [1, 2, 3, 4]
    # sequence restarts with the table
    created = await person_service.create_person("Eve")
    assert created.id == 5


async def test_bootstrap_without_seed(db_engine, person_service):
    assert await bootstrap_database(db_engine, seed=False) == 0
    assert await person_service.list_all() == []


async def test_create_then_find_by_id(person_service):
    created = await person_service.create_person("Zoe")
    found = await person_service.find_by_id(created.id)
    assert found == created
    assert isinstance(found, PersonDTO)


async def test_lifecycle_scenario(person_service):
    created = await person_service.create_person("David")
    assert created == PersonDTO(id=5, name="David")

    updated = await person_service.update_person(5, "Dave")
    assert updated == PersonDTO(id=5, name="Dave")
    assert await person_service.find_by_id(5) == PersonDTO(id=5, name="Dave")

    assert await person_service.delete_person(5) is True
    assert await person_service.find_by_id(5) is None


@pytest.mark.parametrize("name", ["", "   "])
async def test_blank_create_does_not_insert_or_advance_sequence(person_service, name):
    with pytest.raises(InvalidPersonNameException):
        await person_service.create_person(name)

    assert len(await person_service.list_all()) == 4
    created = await person_service.create_person("David")
    assert created.id == 5


async def test_blank_update_rejected_and_row_untouched(person_service):
    with pytest.raises(InvalidPersonNameException):
        await person_service.update_person(2, " ")
    assert await person_service.find_by_id(2) == PersonDTO(id=2, name="Bob")


async def test_missing_ids_are_absent_not_errors(person_service):
    for missing in (0, -1, 99, 2**62):
        assert await person_service.find_by_id(missing) is None
        assert await person_service.update_person(missing, "Nobody") is None
        assert await person_service.delete_person(missing) is False


async def test_delete_twice(person_service):
    assert await person_service.delete_person(3) is True
    assert await person_service.delete_person(3) is False


async def test_ids_not_reused_after_delete(person_service):
    created = await person_service.create_person("David")
    assert await person_service.delete_person(created.id) is True
    again = await person_service.create_person("David")
    assert again.id == created.id + 1


async def test_create_is_not_idempotent(person_service):
    a = await person_service.create_person("Bob")
    b = await person_service.create_person("Bob")
    assert a.id != b.id
    assert [p.id for p in await person_service.find_by_name("Bob")] == [2, a.id, b.id]


async def test_find_by_name_exact_and_ordered(person_service):
    alices = await person_service.find_by_name("Alice")
    assert [(p.id, p.name) for p in alices] == [(1, "Alice"), (4, "Alice")]

    assert await person_service.find_by_name("alice") == []
    assert await person_service.find_by_name("Ali%") == []
    assert await person_service.find_by_name("Nobody") == []


async def test_find_by_name_tracks_updates(person_service):
    await person_service.update_person(2, "Alice")
    assert [p.id for p in await person_service.find_by_name("Alice")] == [1, 2, 4]
    assert await person_service.find_by_name("Bob") == []


async def test_update_keeps_id_and_other_rows(person_service):
    await person_service.update_person(3, "Charles")
    people = await person_service.list_all()
    assert [(p.id, p.name) for p in people] == [
        (1, "Alice"),
        (2, "Bob"),
        (3, "Charles"),
        (4, "Alice"),
    ]


async def test_unit_of_work_rolls_back_on_error(uow_factory, person_service):
    with pytest.raises(RuntimeError):
        async with uow_factory() as uow:
            await uow.person_repository.create(Person(id=None, name="Ghost"))
            raise RuntimeError("boom")

    assert await person_service.find_by_name("Ghost") == []


async def test_readonly_unit_of_work_discards_writes(uow_factory, person_service):
    async with uow_factory(readonly=True) as uow:
        await uow.person_repository.update_name(1, "Changed")

    assert await person_service.find_by_id(1) == PersonDTO(id=1, name="Alice")


async def test_concurrent_creates_get_distinct_persisted_ids(person_service):
    names = [f"Person-{i}" for i in range(50)]
    results = await asyncio.gather(
        *(person_service.create_person(n) for n in names),
        *(person_service.find_by_id(1) for _ in names),
    )
    created, reads = results[:50], results[50:]

    ids = [p.id for p in created]
    assert len(set(ids)) == len(ids)
    assert sorted(ids) == list(range(5, 55))
    assert all(r == PersonDTO(id=1, name="Alice") for r in reads)

    for person in created:
        assert await person_service.find_by_id(person.id) == person
    assert len(await person_service.list_all()) == 4 + len(names)


async def test_concurrent_mixed_writes_are_isolated(person_service):
    await asyncio.gather(
        person_service.update_person(1, "Ann"),
        person_service.delete_person(2),
        person_service.create_person("David"),
        person_service.update_person(3, "Chuck"),
    )
    people = await person_service.list_all()
    assert [(p.id, p.name) for p in people] == [
        (1, "Ann"),
        (3, "Chuck"),
        (4, "Alice"),
        (5, "David"),
    ]


async def test_failed_unit_of_work_does_not_discard_concurrent_write(uow_factory, person_service):
    started = asyncio.Event()

    async def failing():
        async with uow_factory() as uow:
            started.set()
            await uow.person_repository.create(Person(id=None, name="Ghost"))
            await asyncio.sleep(0)
            raise RuntimeError("boom")

    async def succeeding():
        await started.wait()
        return await person_service.create_person("Kept")

    failed, kept = await asyncio.gather(failing(), succeeding(), return_exceptions=True)

    assert isinstance(failed, RuntimeError)
    assert await person_service.find_by_id(kept.id) == kept
    assert await person_service.find_by_name("Ghost") == []


async def test_shared_memory_engine_serializes_units_of_work(db_engine, uow_factory):
    lock = unit_of_work_lock(db_engine)
    assert lock is not None and not lock.locked()

    async with uow_factory(readonly=True):
        assert lock.locked()
    assert not lock.locked()

    with pytest.raises(RuntimeError):
        async with uow_factory():
            raise RuntimeError("boom")
    assert not lock.locked()
