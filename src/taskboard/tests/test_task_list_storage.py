"""Unit tests for the TaskListStorage class."""

import pytest
from sqlmodel import select

from taskboard.errors import ValidationError
from taskboard.models import TaskList, new_id


def test_create_task_list(list_storage, alice):
    """Test creating a task list with all fields."""
    task_list = list_storage.create_task_list(
        alice.id, "Groceries", description="Weekly shopping", color="#22c55e"
    )

    assert task_list.id
    assert task_list.user_id == alice.id
    assert task_list.name == "Groceries"
    assert task_list.description == "Weekly shopping"
    assert task_list.color == "#22c55e"
    assert task_list.order == 0
    assert task_list.created_at == task_list.updated_at


def test_default_order_is_monotonic(list_storage, alice):
    """Test lists created without an order get 0, 1, 2, ..."""
    orders = [list_storage.create_task_list(alice.id, f"List {i}").order for i in range(4)]
    assert orders == [0, 1, 2, 3]


def test_default_order_is_per_user(list_storage, alice, bob):
    """Test that each user has an independent order counter."""
    list_storage.create_task_list(alice.id, "A1")
    list_storage.create_task_list(alice.id, "A2")

    assert list_storage.create_task_list(bob.id, "B1").order == 0


def test_default_order_follows_max_not_count(list_storage, alice):
    """Test that gaps are kept: the next order is one past the maximum."""
    list_storage.create_task_list(alice.id, "First", order=10)

    assert list_storage.create_task_list(alice.id, "Second").order == 11


@pytest.mark.parametrize("name", ["", "   ", None, 42])
def test_create_rejects_invalid_name(list_storage, session, alice, name):
    """Test that empty or non-string names are rejected before writing."""
    with pytest.raises(ValidationError):
        list_storage.create_task_list(alice.id, name)

    assert session.exec(select(TaskList)).all() == []


def test_create_rejects_negative_order(list_storage, alice):
    with pytest.raises(ValidationError):
        list_storage.create_task_list(alice.id, "Bad", order=-1)


def test_lists_sorted_by_order_then_creation(list_storage, alice, bob):
    """Test list ordering and that only the owner's lists come back."""
    third = list_storage.create_task_list(alice.id, "Third", order=5)
    first = list_storage.create_task_list(alice.id, "First", order=1)
    second = list_storage.create_task_list(alice.id, "Second", order=1)
    list_storage.create_task_list(bob.id, "Bob's")

    lists = list_storage.get_task_lists_by_user(alice.id)

    assert [l.id for l in lists] == [first.id, second.id, third.id]


def test_get_task_list_by_id(list_storage, alice):
    created = list_storage.create_task_list(alice.id, "Inbox")

    assert list_storage.get_task_list_by_id(created.id).name == "Inbox"
    assert list_storage.get_task_list_by_id(new_id()) is None


def test_update_task_list(list_storage, alice):
    """Test that only supplied fields change and updated_at advances."""
    created = list_storage.create_task_list(alice.id, "Inbox", description="Keep")
    before = created.updated_at

    updated = list_storage.update_task_list(created.id, alice.id, {"name": "Later", "color": "red"})

    assert updated.name == "Later"
    assert updated.color == "red"
    assert updated.description == "Keep"
    assert updated.updated_at > before


def test_update_can_clear_description(list_storage, alice):
    created = list_storage.create_task_list(alice.id, "Inbox", description="Old")

    updated = list_storage.update_task_list(created.id, alice.id, {"description": None})

    assert updated.description is None


def test_update_requires_fields(list_storage, alice):
    created = list_storage.create_task_list(alice.id, "Inbox")

    with pytest.raises(ValidationError):
        list_storage.update_task_list(created.id, alice.id, {})


def test_update_rejects_blank_name(list_storage, alice):
    created = list_storage.create_task_list(alice.id, "Inbox")

    with pytest.raises(ValidationError):
        list_storage.update_task_list(created.id, alice.id, {"name": ""})


def test_update_by_other_user_returns_none(list_storage, alice, bob):
    """Test that another user cannot update the list."""
    created = list_storage.create_task_list(alice.id, "Private")

    assert list_storage.update_task_list(created.id, bob.id, {"name": "Hijacked"}) is None
    assert list_storage.get_task_list_by_id(created.id).name == "Private"


def test_delete_task_list(list_storage, alice, bob):
    created = list_storage.create_task_list(alice.id, "Temp")

    assert list_storage.delete_task_list(created.id, bob.id) is False
    assert list_storage.delete_task_list(created.id, alice.id) is True
    assert list_storage.get_task_list_by_id(created.id) is None
    assert list_storage.delete_task_list(created.id, alice.id) is False


def test_reorder_task_lists(list_storage, alice):
    a = list_storage.create_task_list(alice.id, "A")
    b = list_storage.create_task_list(alice.id, "B")
    c = list_storage.create_task_list(alice.id, "C")

    result = list_storage.reorder_task_lists(alice.id, [(c.id, 0), (a.id, 1), (b.id, 2)])

    assert result.updated_count == 3
    assert result.skipped_ids == []
    assert [l.name for l in list_storage.get_task_lists_by_user(alice.id)] == ["C", "A", "B"]


def test_reorder_skips_foreign_and_missing_lists(list_storage, alice, bob):
    """Test that entries not owned by the caller are skipped, not failed."""
    mine = list_storage.create_task_list(alice.id, "Mine")
    theirs = list_storage.create_task_list(bob.id, "Theirs")
    missing = new_id()

    result = list_storage.reorder_task_lists(alice.id, [(mine.id, 7), (theirs.id, 9), (missing, 3)])

    assert result.updated_count == 1
    assert result.skipped_ids == [theirs.id, missing]
    assert list_storage.get_task_list_by_id(theirs.id).order == 0
    assert list_storage.get_task_list_by_id(mine.id).order == 7


def test_reorder_validates_before_writing(list_storage, alice):
    """Test that a bad order value rejects the whole batch up front."""
    a = list_storage.create_task_list(alice.id, "A")

    with pytest.raises(ValidationError):
        list_storage.reorder_task_lists(alice.id, [(a.id, 4), (a.id, -1)])

    assert list_storage.get_task_list_by_id(a.id).order == 0
