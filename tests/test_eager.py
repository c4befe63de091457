"""
Tests for the eager operators and Gatherable families.
"""

import threading

import pytest

from seqflow import FrozenVec, Vec, count_from, seq


class TestGatherable:
    """Tests for building containers from sequences."""

    def test_from_sequence_of_view(self):
        """Test draining a view chain into a Vec."""
        view = seq(range(10)).filter(lambda x: x % 2 == 0).map(str)
        result = Vec.from_sequence(view)
        assert isinstance(result, Vec)
        assert result == ["0", "2", "4", "6", "8"]

    def test_from_sequence_of_generator(self):
        """Test draining a one-shot iterator into a FrozenVec."""
        result = FrozenVec.from_sequence(x + 1 for x in range(3))
        assert result == (1, 2, 3)

    def test_gather(self):
        """Test View.gather with both families."""
        view = count_from(1).take(3)
        assert view.gather(Vec) == [1, 2, 3]
        frozen = view.gather(FrozenVec)
        assert isinstance(frozen, FrozenVec)
        assert frozen == (1, 2, 3)

    def test_gathered_copy_ignores_source_mutation(self):
        """Test that a gathered container owns its storage."""
        source = [1, 2, 3]
        gathered = seq(source).map(lambda x: x * 2).gather(Vec)
        source.append(4)
        source[0] = 100
        assert gathered == [2, 4, 6]

    def test_container_is_a_sequence(self):
        """Test that a Vec hands out independent cursors."""
        data = Vec([1, 2])
        first = data.cursor()
        second = data.cursor()
        assert first.advance().value == 1
        assert second.advance().value == 1
        assert first.advance().value == 2
        assert first.advance().done

    def test_repr(self):
        """Test the family name shows up in the repr."""
        assert repr(Vec([1])) == "Vec([1])"
        assert repr(FrozenVec([1])) == "FrozenVec((1,))"


class TestEagerOperators:
    """Tests for eager operators on Vec and FrozenVec."""

    def test_map_matches_lazy(self):
        """Test eager map equals collecting the lazy map."""
        data = Vec(range(20))
        assert data.map(lambda x: x * x) == seq(data).map(
            lambda x: x * x
        ).collect()

    def test_runs_on_calling_thread(self):
        """Test that eager operators run user functions in order on the caller's thread."""
        seen = []

        def record(x):
            seen.append((threading.get_ident(), x))
            return x

        Vec(range(50_000)).map(record).filter(record)
        assert {ident for ident, _ in seen} == {threading.get_ident()}
        assert [x for _, x in seen] == list(range(50_000)) * 2

    def test_filter(self):
        """Test eager filter keeps order."""
        assert Vec([5, 2, 8, 1]).filter(lambda x: x > 1) == [5, 2, 8]

    def test_until_take_rest_drop(self):
        """Test the remaining container-producing operators."""
        data = FrozenVec([1, 2, 3, 4, 5])
        assert data.until(lambda x: x == 4) == (1, 2, 3)
        assert data.take(2) == (1, 2)
        assert data.rest() == (2, 3, 4, 5)
        assert data.drop(3) == (4, 5)
        assert isinstance(data.rest(), FrozenVec)

    def test_results_are_new_instances(self):
        """Test that operators never return the receiver."""
        data = Vec([1, 2, 3])
        result = data.filter(lambda x: True)
        assert result == data
        assert result is not data
        data.append(4)
        assert result == [1, 2, 3]

    def test_reduce_and_find_are_scalar(self):
        """Test reduce and find return plain values."""
        data = Vec([3, 4, 5])
        assert data.reduce(lambda acc, x: acc + x, 0) == 12
        assert data.find(lambda x: x > 3) == 4
        assert data.find(lambda x: x > 10) is None
        assert data.find(lambda x: x > 10, default=-1) == -1

    def test_chaining_stays_in_family(self):
        """Test chained eager operators."""
        result = Vec(range(10)).filter(lambda x: x % 2).map(lambda x: x * 10)
        assert isinstance(result, Vec)
        assert result == [10, 30, 50, 70, 90]

    def test_lazy_view_shares_storage(self):
        """Test lazy() observes later changes to the container."""
        data = Vec([1])
        view = data.lazy()
        data.append(2)
        assert view.collect() == [1, 2]

    def test_take_negative(self):
        """Test argument validation carries over."""
        with pytest.raises(ValueError):
            Vec([1]).take(-1)
