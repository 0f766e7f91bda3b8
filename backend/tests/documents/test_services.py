import pytest

from documents.application.services import (
    create_document,
    delete_document,
    get_document,
    get_owned_document,
    list_documents,
    update_document,
)
from documents.infrastructure.composed_document_reader import DbComposedDocumentReader
from shared.exceptions import (
    AuthorizationError,
    BadRequestError,
    ConflictError,
    NotFoundError,
)


async def test_create_document(documents, user):
    doc = await create_document(documents, owner=user.username, name="Backend roles")
    assert doc.id is not None
    assert doc.name == "Backend roles"
    assert doc.owner == "alice"
    assert not doc.is_master
    assert not doc.is_template
    assert not doc.is_locked
    assert doc.created_on is not None
    assert doc.last_updated is None


async def test_create_template(documents, user):
    doc = await create_document(documents, owner=user.username, name="Template", is_template=True)
    assert doc.is_template


async def test_create_document_duplicate_name(documents, user):
    await create_document(documents, owner=user.username, name="Resume")
    with pytest.raises(ConflictError):
        await create_document(documents, owner=user.username, name="Resume")


async def test_same_name_for_different_owners(documents, user, other_user):
    await create_document(documents, owner=user.username, name="Resume")
    doc = await create_document(documents, owner=other_user.username, name="Resume")
    assert doc.owner == "bob"


async def test_list_documents(documents, user, other_user):
    await create_document(documents, owner=user.username, name="Doc 1")
    await create_document(documents, owner=user.username, name="Doc 2")
    await create_document(documents, owner=other_user.username, name="Doc 3")

    docs = await list_documents(documents, owner=user.username)
    assert [d.name for d in docs] == ["Master", "Doc 1", "Doc 2"]


async def test_get_owned_document_not_found(documents, user):
    with pytest.raises(NotFoundError, match="Can not find document with ID 999"):
        await get_owned_document(documents, user.username, 999)


async def test_get_owned_document_wrong_owner(documents, master, other_user):
    with pytest.raises(AuthorizationError, match="another user's document"):
        await get_owned_document(documents, other_user.username, master.id)


async def test_get_document_returns_composed_view(db, documents, master):
    composed = await get_document(
        documents, DbComposedDocumentReader(db), owner="alice", document_id=master.id
    )
    assert composed.id == master.id
    assert composed.name == "Master"
    assert composed.is_master
    assert composed.sections == []


async def test_update_document(documents, user):
    doc = await create_document(documents, owner=user.username, name="Old")
    updated = await update_document(
        documents,
        owner=user.username,
        document_id=doc.id,
        props={"name": "New", "is_template": True, "is_locked": True},
    )
    assert updated.name == "New"
    assert updated.is_template
    assert updated.is_locked
    assert updated.last_updated is not None


async def test_update_master_name(documents, master):
    updated = await update_document(
        documents, owner="alice", document_id=master.id, props={"name": "Everything"}
    )
    assert updated.name == "Everything"
    assert updated.is_master


async def test_update_master_other_fields_rejected(documents, master):
    with pytest.raises(BadRequestError, match="Only document name can be updated"):
        await update_document(
            documents,
            owner="alice",
            document_id=master.id,
            props={"name": "Everything", "is_template": True},
        )

    with pytest.raises(BadRequestError):
        await update_document(
            documents, owner="alice", document_id=master.id, props={"is_locked": True}
        )

    unchanged = await documents.get_by_id(master.id)
    assert unchanged.name == "Master"
    assert not unchanged.is_locked


async def test_update_document_wrong_owner(documents, user, other_user):
    doc = await create_document(documents, owner=user.username, name="Mine")
    with pytest.raises(AuthorizationError):
        await update_document(
            documents, owner=other_user.username, document_id=doc.id, props={"name": "Stolen"}
        )


async def test_update_document_to_taken_name(documents, user):
    await create_document(documents, owner=user.username, name="First")
    doc = await create_document(documents, owner=user.username, name="Second")
    with pytest.raises(ConflictError):
        await update_document(
            documents, owner=user.username, document_id=doc.id, props={"name": "First"}
        )


async def test_delete_document(documents, user):
    doc = await create_document(documents, owner=user.username, name="To Delete")
    await delete_document(documents, owner=user.username, document_id=doc.id)
    assert await documents.get_by_id(doc.id) is None


async def test_delete_missing_document_is_noop(documents, user):
    await delete_document(documents, owner=user.username, document_id=999)


async def test_delete_master_document(documents, master):
    with pytest.raises(AuthorizationError, match="Can not delete master resume."):
        await delete_document(documents, owner="alice", document_id=master.id)
    assert await documents.get_by_id(master.id) is not None


async def test_delete_document_wrong_owner(documents, user, other_user):
    doc = await create_document(documents, owner=user.username, name="Mine")
    with pytest.raises(AuthorizationError):
        await delete_document(documents, owner=other_user.username, document_id=doc.id)
    assert await documents.get_by_id(doc.id) is not None


async def test_delete_returns_zero_for_missing_row(documents):
    assert await documents.delete(12345) == 0
