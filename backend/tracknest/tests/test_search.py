"""
Tests for search field mapping and pattern building.
"""
import pytest
from tracknest.core.exceptions import ValidationFailed
from tracknest.models.entry import Entry
from tracknest.services.search_service import (
    contains_pattern,
    group_name_filter,
    resolve_entry_field,
)


def test_resolve_allowed_fields():
    assert resolve_entry_field("title") is Entry.title
    assert resolve_entry_field("description") is Entry.description
    assert resolve_entry_field("type") is Entry.type


@pytest.mark.parametrize("field", ["Title", "id", "created_by", "1=1", "title OR 1=1"])
def test_resolve_rejects_unknown_fields(field):
    with pytest.raises(ValidationFailed):
        resolve_entry_field(field)


def test_contains_pattern():
    assert contains_pattern("Run") == "%Run%"


def test_contains_pattern_escapes_wildcards():
    assert contains_pattern("50%_off") == "%50\\%\\_off%"
    assert contains_pattern("a\\b") == "%a\\\\b%"


def test_blank_group_search_is_no_filter():
    assert group_name_filter(None) is None
    assert group_name_filter("  ") is None
    assert group_name_filter("run") is not None


def test_contains_match_folds_both_sides_in_sql():
    from tracknest.services.search_service import contains_match

    sql = str(contains_match(Entry.title, "Run"))
    assert sql.count("lower(") == 2
    assert "ESCAPE" in sql
