from datetime import date

import pytest

from content.infrastructure.item_repository import DbSectionItemRepository
from content.infrastructure.kinds import EDUCATIONS, SKILLS
from documents.infrastructure.document_repository import DbDocumentRepository
from relationships.domain.entities import DocumentXEducation
from relationships.infrastructure.kinds import DOCUMENT_EDUCATIONS, DOCUMENT_SKILLS
from relationships.infrastructure.relationship_repository import DbRelationshipRepository
from shared.exceptions import (
    BadRequestError,
    DuplicateEntryError,
    NotFoundError,
    ServerError,
)


@pytest.fixture
def links(db):
    return DbRelationshipRepository(db, DOCUMENT_EDUCATIONS)


@pytest.fixture
async def educations(db, user):
    repo = DbSectionItemRepository(db, EDUCATIONS)
    return [
        await repo.add(
            {
                "owner": user.username,
                "school": school,
                "location": "Boston, MA",
                "start_date": date(2015, 9, 1),
                "end_date": date(2019, 6, 1),
                "degree": "BSc",
            }
        )
        for school in ("A", "B", "C")
    ]


@pytest.fixture
async def attached(links, master, educations):
    """Educations A, B and C attached to the master at positions 0, 1 and 2."""
    for position, education in enumerate(educations):
        await links.add(
            {"document_id": master.id, "education_id": education.id, "position": position}
        )
    return [e.id for e in educations]


def _order(rows):
    return [(row.education_id, row.position) for row in rows]


async def test_add_returns_entity(links, master, educations):
    link = await links.add(
        {"document_id": master.id, "education_id": educations[0].id, "position": 0}
    )
    assert link == DocumentXEducation(
        document_id=master.id, education_id=educations[0].id, position=0
    )


async def test_add_ignores_unknown_props(links, master, educations):
    link = await links.add(
        {
            "document_id": master.id,
            "education_id": educations[0].id,
            "position": 0,
            "owner": "alice",
        }
    )
    assert link.position == 0


async def test_add_missing_container_is_not_found(links, educations):
    with pytest.raises(NotFoundError, match="Document 999 is gone"):
        await links.add(
            {"document_id": 999, "education_id": educations[0].id, "position": 0},
            not_found_message="Document 999 is gone",
        )


async def test_add_missing_content_is_not_found(links, master):
    with pytest.raises(NotFoundError):
        await links.add({"document_id": master.id, "education_id": 999, "position": 0})


async def test_add_duplicate_relationship(links, master, attached):
    with pytest.raises(DuplicateEntryError):
        await links.add({"document_id": master.id, "education_id": attached[0], "position": 7})


async def test_add_negative_position(links, master, educations):
    with pytest.raises(BadRequestError, match="Position can not be less than 0."):
        await links.add(
            {"document_id": master.id, "education_id": educations[0].id, "position": -1}
        )
    assert await links.get_all(master.id) == []


async def test_get_all_empty_container(links, master):
    assert await links.get_all(master.id) == []


async def test_get_all_ordered_by_position(links, master, educations):
    a, b, c = (e.id for e in educations)
    await links.add({"document_id": master.id, "education_id": a, "position": 2})
    await links.add({"document_id": master.id, "education_id": b, "position": 0})
    await links.add({"document_id": master.id, "education_id": c, "position": 1})

    assert _order(await links.get_all(master.id)) == [(b, 0), (c, 1), (a, 2)]


async def test_get(links, master, attached):
    link = await links.get(master.id, attached[1])
    assert link.position == 1


async def test_get_missing(links, master):
    with pytest.raises(NotFoundError, match="Can not find document-education relation"):
        await links.get(master.id, 999)


async def test_get_missing_with_custom_message(links, master):
    with pytest.raises(NotFoundError, match="nothing here"):
        await links.get(master.id, 999, not_found_message="nothing here")


async def test_count(links, master, attached):
    assert await links.count(master.id) == 3
    assert await links.count(master.id + 1000) == 0


async def test_update_position(links, master, attached):
    link = await links.get(master.id, attached[0])
    updated = await links.update(link, 10)
    assert updated.position == 10
    assert (await links.get(master.id, attached[0])).position == 10


async def test_update_negative_position(links, master, attached):
    link = await links.get(master.id, attached[0])
    with pytest.raises(BadRequestError, match="Position can not be less than 0."):
        await links.update(link, -1)
    assert (await links.get(master.id, attached[0])).position == 0


async def test_update_vanished_row(links, master, attached):
    link = await links.get(master.id, attached[0])
    await links.delete(master.id, attached[0])
    with pytest.raises(ServerError):
        await links.update(link, 5)


async def test_reorder_permutation(links, master, attached):
    a, b, c = attached
    result = await links.update_all_positions(master.id, [c, a, b])

    assert _order(result) == [(c, 0), (a, 1), (b, 2)]
    assert _order(await links.get_all(master.id)) == [(c, 0), (a, 1), (b, 2)]
    assert _order(await links.get_all(master.id)) == [(c, 0), (a, 1), (b, 2)]


@pytest.mark.parametrize("permutation", [(0, 1, 2), (2, 1, 0), (1, 2, 0), (0, 2, 1)])
async def test_reorder_any_permutation(links, master, attached, permutation):
    ordered = [attached[i] for i in permutation]
    await links.update_all_positions(master.id, ordered)

    rows = await links.get_all(master.id)
    assert [row.education_id for row in rows] == ordered
    assert [row.position for row in rows] == [0, 1, 2]


async def test_reorder_missing_id_leaves_positions(links, master, attached):
    a, b, c = attached
    with pytest.raises(ServerError, match="must be total number in container"):
        await links.update_all_positions(master.id, [a, b])

    assert _order(await links.get_all(master.id)) == [(a, 0), (b, 1), (c, 2)]


async def test_reorder_extra_id_leaves_positions(links, master, attached):
    a, b, c = attached
    with pytest.raises(ServerError):
        await links.update_all_positions(master.id, [c, b, a, 999])

    assert _order(await links.get_all(master.id)) == [(a, 0), (b, 1), (c, 2)]


async def test_reorder_foreign_id_rolls_back(links, master, attached):
    a, b, c = attached
    with pytest.raises(ServerError):
        await links.update_all_positions(master.id, [c, a, 999])

    assert _order(await links.get_all(master.id)) == [(a, 0), (b, 1), (c, 2)]


async def test_reorder_empty_container(links, master):
    assert await links.update_all_positions(master.id, []) == []


async def test_delete(links, master, attached):
    assert await links.delete(master.id, attached[1]) == 1
    assert [row.education_id for row in await links.get_all(master.id)] == [
        attached[0],
        attached[2],
    ]


async def test_delete_absent_row(links, master, attached):
    assert await links.delete(master.id, 999) == 0
    await links.delete(master.id, attached[0])
    assert await links.delete(master.id, attached[0]) == 0


async def test_container_delete_cascades(db, links, master, attached):
    await DbDocumentRepository(db).delete(master.id)
    assert await links.get_all(master.id) == []


async def test_unpositioned_kind(db, master, user):
    skills = DbSectionItemRepository(db, SKILLS)
    links = DbRelationshipRepository(db, DOCUMENT_SKILLS)
    python = await skills.add({"owner": user.username, "name": "Python"})
    sql = await skills.add({"owner": user.username, "name": "SQL"})

    await links.add({"document_id": master.id, "skill_id": sql.id, "position": 3})
    await links.add({"document_id": master.id, "skill_id": python.id})

    rows = await links.get_all(master.id)
    assert [row.skill_id for row in rows] == sorted([python.id, sql.id])

    with pytest.raises(BadRequestError):
        await links.update_all_positions(master.id, [sql.id, python.id])
