from uuid import uuid4

import pytest

from domain.entities.tag import TagEntity
from domain.services.tag_service import TagAssignmentPolicy, TagNotFoundError, TagService
from infrastructure.repositories.sqlalchemy_tag_repository import SqlAlchemyTagRepository


def test_get_tags_ordered_by_name(client):
    response = client.get("/api/tags")

    assert response.status_code == 200
    assert [tag["name"] for tag in response.json()] == ["Ideas", "Personal", "Work"]
    work = response.json()[2]
    assert work["icon"] == "Briefcase"
    assert work["color"] == "#3b82f6"


def test_get_tags_requires_a_session(client, session_state):
    session_state.user = None

    assert client.get("/api/tags").status_code == 401


def test_get_tag_by_id(client, tags):
    response = client.get(f"/api/tags/{tags['Ideas']}")

    assert response.status_code == 200
    assert response.json()["name"] == "Ideas"
    assert response.json()["color"] is None


def test_get_unknown_tag(client):
    assert client.get(f"/api/tags/{uuid4()}").status_code == 404
    assert client.get("/api/tags/invalid-id").status_code == 400


def test_policy_collapses_duplicates():
    tag_id = uuid4()

    assert TagAssignmentPolicy().validate([tag_id, tag_id]) == [tag_id]
    assert TagAssignmentPolicy().validate(None) == []


def test_policy_rejects_a_second_tag():
    with pytest.raises(ValueError, match="Only one tag can be assigned"):
        TagAssignmentPolicy().validate([uuid4(), uuid4()])


def test_tag_entity_rejects_blank_name():
    with pytest.raises(ValueError):
        TagEntity(id=uuid4(), name="  ")


@pytest.mark.anyio
async def test_resolve_assignment_reports_unknown_tags(db_session, tags):
    service = TagService(SqlAlchemyTagRepository())

    resolved = await service.resolve_assignment(db_session, [tags["Work"]])
    assert [tag.name for tag in resolved] == ["Work"]

    with pytest.raises(TagNotFoundError):
        await service.resolve_assignment(db_session, [uuid4()])
