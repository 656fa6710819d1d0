from uuid import uuid4

import pytest

from domain.entities.checklist import ChecklistItem
from domain.entities.common import next_order_index
from domain.entities.note import Note
from domain.entities.share import NoteShare, normalize_email
from domain.entities.task import UserTask, total_progress
from domain.entities.upload import ImageUpload


def make_task(checked, total, completed=False):
    task = UserTask.create_new(
        owner_id=uuid4(), title="Task", checklist_titles=[f"Item {i}" for i in range(total)]
    )
    for item in task.checklist[:checked]:
        item.toggle()
    task.completed = completed
    return task


@pytest.mark.parametrize(
    "checked, total, completed, expected",
    [
        (0, 0, False, 0),
        (0, 0, True, 100),
        (1, 2, False, 50),
        (2, 3, False, 67),
        (1, 8, False, 13),
        (3, 3, False, 100),
        (0, 3, True, 0),
    ],
)
def test_task_progress(checked, total, completed, expected):
    assert make_task(checked, total, completed).progress == expected


def test_total_progress_averages_tasks():
    assert total_progress([]) == 0
    assert total_progress([make_task(1, 1), make_task(1, 2)]) == 75
    # (0 + 25) / 2
    assert total_progress([make_task(0, 4), make_task(1, 4)]) == 13


def test_next_order_index():
    assert next_order_index([]) == 0
    assert next_order_index([0, 1, 4]) == 5


def test_normalize_email():
    assert normalize_email("  Someone@Example.COM ") == "someone@example.com"
    for invalid in ["", "someone", "@example.com", "someone@"]:
        with pytest.raises(ValueError, match="A valid email address is required"):
            normalize_email(invalid)


def test_share_recipient_by_id_or_email():
    recipient_id = uuid4()
    share = NoteShare.create_new(uuid4(), uuid4(), "Friend@Example.com")

    assert share.is_recipient(recipient_id, "friend@example.com")
    assert not share.is_recipient(recipient_id, "other@example.com")

    share.shared_with_user_id = recipient_id
    assert share.is_recipient(recipient_id, None)


def test_checklist_item_title_is_required():
    with pytest.raises(ValueError, match="Checklist item title cannot be empty"):
        ChecklistItem.create_new(uuid4(), "   ", 0)


def test_note_update_content():
    note = Note.create_new(title="Draft", content=None, owner_id=uuid4())
    created = note.updated_at

    note.update_content(" Final ", "Body", "")

    assert note.title == "Final"
    assert note.content == "Body"
    assert note.cover_image_url is None
    assert note.updated_at >= created

    with pytest.raises(ValueError, match="Note title is required"):
        note.update_content("", "Body", None)


def test_image_upload_data_uri():
    assert ImageUpload("a", "", b"abc").to_data_uri() == "data:image/jpeg;base64,YWJj"
    assert ImageUpload("a", "image/gif", b"abc").to_data_uri() == "data:image/gif;base64,YWJj"
    assert ImageUpload("a", "IMAGE/PNG", b"").is_image()
    assert not ImageUpload("a", "text/plain", b"").is_image()
