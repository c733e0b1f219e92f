from __future__ import annotations

import pytest

from catalist.schema.lists import Privacy
from catalist.schema.results import ContentType
from catalist.services.draft_service import DraftList, DraftValidationError
from catalist.tests.utils import make_item


def test_toggle_twice_restores_selection() -> None:
    item = make_item("movie-1")
    draft = DraftList().toggle_select(item)

    assert [entry.id for entry in draft.items] == ["movie-1"]
    assert draft.toggle_select(item).items == ()


def test_reselecting_appends_at_end_and_positions_follow_insertion() -> None:
    a, b = make_item("movie-a"), make_item("movie-b")
    draft = DraftList().toggle_select(a).toggle_select(b).toggle_select(a).with_metadata(title="Mine")

    submission = draft.commit()

    assert [(item.id, item.position) for item in submission.items] == [("movie-b", 1)]
    assert [(item.id, item.position) for item in draft.toggle_select(a).commit().items] == [
        ("movie-b", 1),
        ("movie-a", 2),
    ]


def test_operations_never_mutate_original() -> None:
    original = DraftList().toggle_select(make_item("book-1", ContentType.BOOK))
    changed = original.remove("book-1").with_metadata(title="Other")

    assert len(original.items) == 1
    assert original.metadata.title == ""
    assert changed.items == ()


def test_commit_rejects_empty_draft() -> None:
    draft = DraftList().with_metadata(title="Empty")

    with pytest.raises(DraftValidationError) as excinfo:
        draft.commit()

    assert "at least one item" in excinfo.value.reason


def test_commit_rejects_blank_title() -> None:
    draft = DraftList().toggle_select(make_item("movie-1")).with_metadata(title="   ")

    with pytest.raises(DraftValidationError) as excinfo:
        draft.commit()

    assert "title" in excinfo.value.reason
    assert len(draft.items) == 1


def test_tags_are_trimmed_and_deduplicated() -> None:
    draft = DraftList().add_tag(" cozy ").add_tag("cozy").add_tag("rainy").remove_tag("rainy")

    assert draft.metadata.tags == ("cozy",)


def test_metadata_text_is_sanitized() -> None:
    draft = DraftList().with_metadata(
        title="Best <script>alert(1)</script>cafes",
        description='<a href="javascript:go()" onclick=x>link</a>',
        privacy=Privacy.FRIENDS,
    )

    assert draft.metadata.title == "Best cafes"
    assert "javascript:" not in draft.metadata.description
    assert "onclick" not in draft.metadata.description
    assert draft.metadata.privacy is Privacy.FRIENDS
    assert draft.metadata.allow_comments is True
    assert draft.metadata.allow_collaboration is False


def test_select_is_idempotent_and_keeps_first_copy() -> None:
    first = make_item("movie-1", title="First")
    draft = DraftList().select(first).select(make_item("movie-2")).select(make_item("movie-1", title="Second"))

    assert [(item.id, item.title) for item in draft.items] == [("movie-1", "First"), ("movie-2", "Item movie-2")]
    assert draft.select(first) is draft
