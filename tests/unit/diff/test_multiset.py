"""Unit tests for multiset row comparison."""

import pytest

from treediff.diff.multiset import MultisetResult, diff_multiset, is_empty_row, prepare_rows, row_key
from treediff.diff.records import DiffKind, Side


@pytest.mark.unit
class TestRowKey:
    """Test row_key()."""

    def test_embedded_delimiters_do_not_collide(self):
        assert row_key(("a,b", "c")) != row_key(("a", "b,c"))

    def test_quotes_do_not_collide(self):
        assert row_key(('a","b',)) != row_key(("a", "b"))

    def test_equal_rows_share_a_key(self):
        assert row_key(["x", "y"]) == row_key(("x", "y"))


@pytest.mark.unit
class TestPrepareRows:
    """Test header and empty-row filtering."""

    def test_defaults_drop_blank_rows_only(self):
        rows = [("h",), ("a",), ("", " "), ("b",)]
        assert prepare_rows(rows) == [("h",), ("a",), ("b",)]

    def test_ignore_header(self):
        assert prepare_rows([("h",), ("a",)], ignore_header=True) == [("a",)]

    def test_ignore_header_on_empty_input(self):
        assert prepare_rows([], ignore_header=True) == []

    def test_keep_empty_rows(self):
        assert prepare_rows([("",), ("a",)], ignore_empty_rows=False) == [("",), ("a",)]

    def test_is_empty_row(self):
        assert is_empty_row(("", "  ", "\t"))
        assert is_empty_row(())
        assert not is_empty_row(("", "x"))


@pytest.mark.unit
class TestDiffMultiset:
    """Test diff_multiset()."""

    def test_duplicates_are_counted(self):
        result = diff_multiset([("A",), ("A",), ("B",)], [("A",), ("B",), ("B",)])
        assert result.only_in_first == (("A",),)
        assert result.only_in_second == (("B",),)

    def test_order_does_not_matter(self):
        result = diff_multiset([("1",), ("2",), ("3",)], [("3",), ("1",), ("2",)])
        assert result.is_empty()

    def test_each_extra_copy_is_reported(self):
        result = diff_multiset([("x",)] * 3, [("x",)])
        assert result.only_in_first == (("x",), ("x",))
        assert result.only_in_second == ()

    def test_header_difference_ignored(self):
        result = diff_multiset([("id", "name"), ("1", "a")], [("ID", "NAME"), ("1", "a")], ignore_header=True)
        assert result.is_empty()

    def test_header_difference_reported_by_default(self):
        result = diff_multiset([("id",), ("1",)], [("ID",), ("1",)])
        assert result.only_in_first == (("id",),)
        assert result.only_in_second == (("ID",),)

    def test_blank_rows_counted_when_kept(self):
        result = diff_multiset([("a",), ("",)], [("a",)], ignore_empty_rows=False)
        assert result.only_in_first == (("",),)

    def test_first_seen_order(self):
        result = diff_multiset([("c",), ("a",)], [("b",)])
        assert result.only_in_first == (("c",), ("a",))

    def test_accepts_lists(self):
        result = diff_multiset([["a", "b"]], [["a", "b"]])
        assert result.is_empty()


@pytest.mark.unit
class TestMultisetRecords:
    """Test record conversion of a MultisetResult."""

    def test_records(self):
        result = MultisetResult(only_in_first=(("a", "1"),), only_in_second=(("b", "2"), ("c", "3")))
        records = result.records().to_list()
        assert [r.kind for r in records] == [DiffKind.ROW_ONLY_IN] * 3
        assert [r.side for r in records] == [Side.FIRST, Side.SECOND, Side.SECOND]
        assert records[0].message == 'Row ["a", "1"] only in first file.'
        assert records[2].message == 'Row ["c", "3"] only in second file.'
        assert records[2].path == "row:1"

    def test_empty_result_has_no_records(self):
        assert MultisetResult().records().is_empty()
