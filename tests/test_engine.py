"""
Unit tests for the duplicate detection engine.
"""

import itertools
import threading

import pytest
from dedupifyr.errors import ComparisonCancelled
from dedupifyr.models import ComparisonOptions, LocalImage
from dedupifyr.scanner import (
    compare_against,
    find_duplicates,
    find_duplicates_of,
    is_byte_identical,
    score_pair,
)


def _pairs(results):
    """Every (base, duplicate) pair reported, as unordered pairs."""
    return [
        frozenset((result.base_image.identifier, match.image.identifier))
        for result in results
        for match in result.duplicates
    ]


class TestScorePair:
    """Test score_pair function."""

    @staticmethod
    def _on_disk(temp_dir, name, data):
        path = temp_dir / name
        path.write_bytes(data)
        return LocalImage(name=name, full_path=str(path), digest="same", file_size=len(data))

    def test_byte_identical_files_short_circuit(self, temp_dir, score_table):
        calculator = score_table()
        first = self._on_disk(temp_dir, "a.png", b"x" * 4096)
        second = self._on_disk(temp_dir, "b.png", b"x" * 4096)

        assert is_byte_identical(first, second)
        assert score_pair(first, second, calculator) == 1.0
        assert calculator.calls == []

    def test_shared_prefix_different_tail_uses_calculator(self, temp_dir, score_table):
        first = self._on_disk(temp_dir, "a.png", b"x" * 256 + b"y" * 3840)
        second = self._on_disk(temp_dir, "b.png", b"x" * 256 + b"z" * 3840)
        calculator = score_table({(first.full_path, second.full_path): 0.3})

        assert not is_byte_identical(first, second)
        assert score_pair(first, second, calculator) == 0.3
        assert len(calculator.calls) == 1

    def test_matching_digest_different_size_uses_calculator(self, image_factory, score_table):
        calculator = score_table({("a.png", "b.png"): 0.4})
        first = image_factory("a.png", digest="same", file_size=4096)
        second = image_factory("b.png", digest="same", file_size=8192)

        assert score_pair(first, second, calculator) == 0.4

    def test_different_digest_uses_calculator(self, image_factory, score_table):
        calculator = score_table({("a.png", "b.png"): 0.2})
        first = image_factory("a.png", file_size=10)
        second = image_factory("b.png", file_size=10)

        assert score_pair(first, second, calculator) == 0.2


class TestCompareAgainst:
    """Test compare_against function."""

    def test_matches_in_candidate_order(self, image_factory, score_table):
        a, b, c, d = (image_factory(n) for n in ("a", "b", "c", "d"))
        calculator = score_table({("a", "b"): 0.5, ("a", "c"): 0.1, ("a", "d"): 0.9})
        options = ComparisonOptions(bias_percent=0.5)

        matches = compare_against(a, [b, c, d], calculator, options)
        assert [m.image.name for m in matches] == ["b", "d"]
        assert [m.similarity_percent for m in matches] == [0.5, 0.9]

    def test_with_executor(self, image_factory, score_table):
        from concurrent.futures import ThreadPoolExecutor

        images = [image_factory(f"img{i}") for i in range(10)]
        scores = {("img0", f"img{i}"): i / 10 for i in range(1, 10)}
        calculator = score_table(scores)
        options = ComparisonOptions(bias_percent=0.5)

        with ThreadPoolExecutor(max_workers=4) as executor:
            matches = compare_against(images[0], images[1:], calculator, options, executor)
        assert [m.image.name for m in matches] == ["img5", "img6", "img7", "img8", "img9"]

    def test_no_candidates(self, image_factory, score_table):
        assert compare_against(image_factory("a"), [], score_table(), ComparisonOptions()) == []

    def test_cancelled(self, image_factory, score_table):
        cancel_event = threading.Event()
        cancel_event.set()
        with pytest.raises(ComparisonCancelled):
            compare_against(
                image_factory("a"), [image_factory("b")], score_table(),
                ComparisonOptions(), cancel_event=cancel_event,
            )


class TestFindDuplicates:
    """Test find_duplicates function."""

    def test_three_image_scenario(self, image_factory, score_table):
        """a~b at 0.95, c unlike both, bias 0.9: one result a -> [b]."""
        a, b, c = image_factory("a.png"), image_factory("b.png"), image_factory("c.jpg")
        calculator = score_table({
            ("a.png", "b.png"): 0.95,
            ("a.png", "c.jpg"): 0.10,
            ("b.png", "c.jpg"): 0.12,
        })

        results = find_duplicates([a, b, c], ComparisonOptions(bias_percent=0.9), calculator, show_progress=False)

        assert len(results) == 1
        assert results[0].base_image == a
        assert [m.image for m in results[0].duplicates] == [b]
        assert results[0].duplicates[0].similarity_percent == 0.95

    def test_transitive_chain_collapses_to_one_star(self, image_factory, score_table):
        a, b, c = image_factory("a"), image_factory("b"), image_factory("c")
        calculator = score_table({("a", "b"): 0.9, ("a", "c"): 0.9, ("b", "c"): 0.9})

        results = find_duplicates([a, b, c], ComparisonOptions(bias_percent=0.5), calculator, show_progress=False)

        assert len(results) == 1
        assert results[0].base_image == a
        assert [m.image for m in results[0].duplicates] == [b, c]

    def test_visited_images_not_compared_again(self, image_factory, score_table):
        a, b, c = image_factory("a"), image_factory("b"), image_factory("c")
        calculator = score_table({("a", "b"): 0.9})

        find_duplicates([a, b, c], ComparisonOptions(bias_percent=0.5), calculator, max_workers=1, show_progress=False)

        compared = {frozenset(call) for call in calculator.calls}
        assert compared == {frozenset(("a", "b")), frozenset(("a", "c"))}

    def test_bias_tie_counts(self, image_factory, score_table):
        a, b = image_factory("a"), image_factory("b")
        calculator = score_table({("a", "b"): 0.5})

        results = find_duplicates([a, b], ComparisonOptions(bias_percent=0.5), calculator, show_progress=False)
        assert len(results) == 1

    def test_zero_bias_groups_everything(self, image_factory, score_table):
        images = [image_factory(n) for n in "abcd"]
        results = find_duplicates(images, ComparisonOptions(bias_percent=0.0), score_table(), show_progress=False)

        assert len(results) == 1
        assert [m.image.name for m in results[0].duplicates] == ["b", "c", "d"]

    def test_full_bias_requires_identity(self, image_factory, score_table):
        a, b, c = image_factory("a"), image_factory("b"), image_factory("c")
        calculator = score_table({("a", "b"): 0.999, ("a", "c"): 1.0})

        results = find_duplicates([a, b, c], ComparisonOptions(bias_percent=1.0), calculator, show_progress=False)
        assert [m.image for m in results[0].duplicates] == [c]

    def test_no_matches(self, image_factory, score_table):
        images = [image_factory(n) for n in "abc"]
        assert find_duplicates(images, ComparisonOptions(bias_percent=0.5), score_table(), show_progress=False) == []

    def test_empty(self, score_table):
        assert find_duplicates([], ComparisonOptions(), score_table(), show_progress=False) == []

    def test_never_lists_itself(self, image_factory, score_table):
        images = [image_factory(n) for n in "abc"]
        images.append(image_factory("a"))  # same identifier twice
        results = find_duplicates(images, ComparisonOptions(bias_percent=0.0), score_table(), show_progress=False)

        for result in results:
            assert result.base_image.identifier not in result.duplicate_paths

    def test_base_never_a_member_and_pairs_once(self, image_factory, score_table):
        names = ["a", "b", "c", "d", "e", "f"]
        images = [image_factory(n) for n in names]
        calculator = score_table({
            ("a", "c"): 0.9, ("b", "c"): 0.9, ("b", "d"): 0.8,
            ("d", "e"): 0.95, ("e", "f"): 0.7, ("c", "f"): 0.6,
        })
        options = ComparisonOptions(bias_percent=0.65)

        for order in itertools.permutations(images):
            results = find_duplicates(list(order), options, calculator, show_progress=False)

            bases = {r.base_image.identifier for r in results}
            members = [m.image.identifier for r in results for m in r.duplicates]
            assert bases.isdisjoint(members)
            assert len(members) == len(set(members))

            pairs = _pairs(results)
            assert len(pairs) == len(set(pairs))
            for pair in pairs:
                assert calculator.scores[pair] >= options.bias_percent

    def test_repeatable(self, image_factory, score_table):
        images = [image_factory(n) for n in "abcde"]
        calculator = score_table({("a", "c"): 0.9, ("b", "d"): 0.9, ("c", "e"): 0.9})
        options = ComparisonOptions(bias_percent=0.5)

        first = find_duplicates(images, options, calculator, show_progress=False)
        second = find_duplicates(images, options, calculator, show_progress=False)
        assert first == second

    def test_cancelled(self, image_factory, score_table):
        cancel_event = threading.Event()
        cancel_event.set()
        with pytest.raises(ComparisonCancelled):
            find_duplicates(
                [image_factory("a"), image_factory("b")],
                ComparisonOptions(),
                score_table(),
                cancel_event=cancel_event,
                show_progress=False,
            )

    def test_calculator_error_propagates(self, image_factory):
        class Exploding:
            def similarity(self, a, b):
                raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            find_duplicates([image_factory("a"), image_factory("b")], ComparisonOptions(), Exploding(), show_progress=False)


class TestFindDuplicatesOf:
    """Test find_duplicates_of function."""

    def test_single_result(self, image_factory, score_table):
        base = image_factory("x")
        images = [image_factory(n) for n in "abc"]
        calculator = score_table({("x", "a"): 0.9, ("x", "c"): 0.8, ("a", "c"): 1.0})

        results = find_duplicates_of(base, images, ComparisonOptions(bias_percent=0.5), calculator)

        assert len(results) == 1
        assert results[0].base_image == base
        assert [m.image.name for m in results[0].duplicates] == ["a", "c"]

    def test_excludes_base_from_candidates(self, image_factory, score_table):
        base = image_factory("a")
        images = [image_factory(n) for n in "ab"]

        results = find_duplicates_of(base, images, ComparisonOptions(bias_percent=0.0), score_table())
        assert [m.image.name for m in results[0].duplicates] == ["b"]

    def test_no_match(self, image_factory, score_table):
        results = find_duplicates_of(
            image_factory("x"), [image_factory("a")], ComparisonOptions(bias_percent=0.5), score_table()
        )
        assert results == []

    def test_pair_returns_at_most_one(self, image_factory, score_table):
        first, second = image_factory("a"), image_factory("b")
        results = find_duplicates_of(first, [second], ComparisonOptions(bias_percent=0.0), score_table())
        assert len(results) == 1
