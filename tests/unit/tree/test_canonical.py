"""Unit tests for canonicalization and the structural sort key."""

import pytest

from treediff.tree.canonical import canonical_key, canonicalize
from treediff.tree.nodes import Keyed, LabeledElement, Scalar, Sequence, TextLeaf, from_python


@pytest.mark.unit
class TestCanonicalKey:
    """Tests for canonical_key()."""

    def test_type_is_part_of_the_key(self):
        keys = {canonical_key(Scalar(v)) for v in ("1", 1, True, None)}
        assert len(keys) == 4

    def test_equal_nodes_share_a_key(self):
        assert canonical_key(from_python({"a": [1, 2]})) == canonical_key(from_python({"a": [1, 2]}))

    def test_concatenation_ambiguity_is_avoided(self):
        """Naive joining would encode both of these as "ab" + "c"."""
        first = Sequence((Scalar("ab"), Scalar("c")))
        second = Sequence((Scalar("a"), Scalar("bc")))
        assert canonical_key(first) != canonical_key(second)

    def test_separator_characters_in_values(self):
        first = Keyed((("a", Scalar("1:x")),))
        second = Keyed((("a:1", Scalar("x")),))
        assert canonical_key(first) != canonical_key(second)

    def test_elements_with_same_tag_and_attributes_but_different_children(self):
        first = LabeledElement("item", (("id", "1"),), (TextLeaf("a"),))
        second = LabeledElement("item", (("id", "1"),), (TextLeaf("b"),))
        assert canonical_key(first) != canonical_key(second)

    def test_distinct_sample_nodes_have_distinct_keys(self):
        samples = [
            Scalar(""),
            Scalar(None),
            TextLeaf(""),
            Sequence(),
            Keyed(),
            Sequence((Scalar(None),)),
            Sequence((Sequence(),)),
            Keyed((("", Scalar(None)),)),
            LabeledElement("a"),
            LabeledElement("a", (("b", ""),)),
            LabeledElement("a", (), (TextLeaf("b"),)),
            LabeledElement("a", (), (LabeledElement("b"),)),
        ]
        assert len({canonical_key(node) for node in samples}) == len(samples)


@pytest.mark.unit
class TestCanonicalizeKeyed:
    """Key order is never significant."""

    @pytest.mark.parametrize("mode", ["full", "ordered"])
    def test_keys_are_sorted(self, mode):
        node = canonicalize(from_python({"b": 1, "a": 2, "c": 3}), mode)
        assert node.keys() == ["a", "b", "c"]

    def test_exact_mode_returns_input_untouched(self):
        node = from_python({"b": 1, "a": 2})
        assert canonicalize(node, "exact") is node

    def test_input_is_not_modified(self):
        node = from_python({"b": [3, 1], "a": 2})
        canonicalize(node, "full")
        assert node.keys() == ["b", "a"]
        assert node.as_dict()["b"].items == (Scalar(3), Scalar(1))


@pytest.mark.unit
class TestCanonicalizeSequences:
    """Sequence order depends on mode."""

    def test_full_mode_sorts(self):
        assert canonicalize(from_python([3, 1, 2]), "full") == canonicalize(from_python([1, 2, 3]), "full")

    def test_ordered_mode_keeps_order(self):
        node = canonicalize(from_python([3, 1, 2]), "ordered")
        assert node.items == (Scalar(3), Scalar(1), Scalar(2))

    def test_full_mode_sorts_nested_objects_after_canonicalizing_them(self):
        first = from_python([{"b": 1, "a": [2, 1]}, {"z": 0}])
        second = from_python([{"z": 0}, {"a": [1, 2], "b": 1}])
        assert canonicalize(first, "full") == canonicalize(second, "full")

    def test_duplicates_are_kept(self):
        node = canonicalize(from_python([2, 1, 2]), "full")
        assert node.items == (Scalar(1), Scalar(2), Scalar(2))

    def test_sort_is_deterministic(self):
        data = [{"x": 1}, "a", None, [1], True, 2]
        results = {canonical_key(canonicalize(from_python(data), "full")) for _ in range(5)}
        assert len(results) == 1


@pytest.mark.unit
class TestCanonicalizeElements:
    """Elements: attributes sorted, text trimmed, children optionally sorted."""

    def _element(self):
        return LabeledElement(
            "root",
            (("z", "1"), ("a", "2")),
            (
                TextLeaf("\n  "),
                LabeledElement("b"),
                TextLeaf("  hello  "),
                LabeledElement("a"),
                TextLeaf("   "),
            ),
        )

    @pytest.mark.parametrize("mode", ["full", "ordered"])
    def test_attributes_are_sorted(self, mode):
        assert canonicalize(self._element(), mode).attributes == (("a", "2"), ("z", "1"))

    def test_whitespace_text_is_dropped_and_text_trimmed(self):
        node = canonicalize(self._element(), "ordered")
        assert node.children == (LabeledElement("b"), TextLeaf("hello"), LabeledElement("a"))

    def test_full_mode_sorts_children(self):
        node = canonicalize(self._element(), "full")
        ordered = canonicalize(
            LabeledElement("root", (("a", "2"), ("z", "1")), (LabeledElement("a"), TextLeaf("hello"), LabeledElement("b"))),
            "full",
        )
        assert node == ordered

    def test_whitespace_only_root_text(self):
        assert canonicalize(TextLeaf("   "), "full") == TextLeaf("")


@pytest.mark.unit
class TestDeepTrees:
    """Canonicalization and keys work on trees deeper than the recursion limit."""

    def _chain(self, depth):
        node = Sequence(items=(Scalar("a"), Scalar(1)))
        for _ in range(depth):
            node = Sequence(items=(Keyed(entries=(("k", node),)),))
        return node

    @pytest.mark.parametrize("mode", ["full", "ordered"])
    def test_deep_canonicalize(self, mode):
        node = canonicalize(self._chain(5000), mode)
        for _ in range(5000):
            node = node.items[0].as_dict()["k"]
        expected = (Scalar(1), Scalar("a")) if mode == "full" else (Scalar("a"), Scalar(1))
        assert node.items == expected

    def test_deep_canonical_key(self):
        key = canonical_key(self._chain(5000))
        assert key.startswith("L1:M1:1:kL1:M1:1:k")
        assert key.endswith("L2:S8:string:aS8:number:1")

    def test_sort_order_matches_canonical_key(self):
        items = (
            Keyed(entries=(("b", TextLeaf("  ")), ("a", Scalar(1)))),
            LabeledElement("x", (("n", "1"),), (TextLeaf(" t "),)),
            Sequence(items=(Scalar(2), Scalar(1))),
            Scalar("s"),
            TextLeaf("  "),
            Scalar(None),
        )
        node = canonicalize(Sequence(items=items), "full")
        keys = [canonical_key(item) for item in node.items]
        assert keys == sorted(keys)
        assert len(node.items) == 5
        assert Keyed(entries=(("a", Scalar(1)), ("b", TextLeaf("")))) in node.items

    def test_unknown_node_type(self):
        with pytest.raises(TypeError):
            canonical_key(object())
        with pytest.raises(TypeError):
            canonicalize(Sequence(items=(object(),)), "full")
