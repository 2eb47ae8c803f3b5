import pytest
from lazyseq import IllegalStateError, source


class TestFilter:
    """Test the filter (where) decorator"""

    def test_where_predicate(self):
        """Test keeping even numbers"""
        result = source([1, 2, 3, 4, 4]).where(lambda x: x % 2 == 0).to_collection()
        assert result == [2, 4, 4], f"Unexpected result: {result}"

    def test_where_eq(self):
        """Test keeping one value"""
        assert source([4, 2, 3, 4, 4, 5]).where_eq(4).to_collection() == [4, 4, 4]

    def test_where_neq(self):
        """Test dropping one value"""
        assert source([4, 2, 3, 4, 4, 5]).filter_neq(4).to_collection() == [2, 3, 5]

    def test_no_matches(self):
        """Test a predicate that never holds"""
        assert source([1, 2, 3]).filter(lambda x: x > 10).to_collection() == []

    def test_skips_ahead_at_construction(self, spy):
        """Test that the first qualifying element is located on construction"""
        upstream = spy([1, 3, 5, 6, 7])
        cursor = upstream.filter(lambda x: x % 2 == 0)
        assert upstream.advance_calls == 3
        assert cursor.current() == 6

    def test_predicate_once_per_element(self, recorder):
        """Test that every element is tested exactly once"""
        pred = recorder(lambda x: x % 2 == 1)
        cursor = source([1, 2, 3, 4, 5]).filter(pred)
        assert cursor.current() == 1
        assert cursor.current() == 1
        assert cursor.has_current()
        assert pred.calls == [1]
        assert cursor.to_collection() == [1, 3, 5]
        assert pred.calls == [1, 2, 3, 4, 5]

    def test_empty_upstream_never_evaluates_predicate(self, recorder):
        """Test that the predicate is not called on a missing element"""
        pred = recorder(lambda x: True)
        assert source([]).filter(pred).to_collection() == []
        assert pred.call_count == 0

    def test_advance_when_exhausted_is_noop(self, spy):
        """Test that an exhausted filter never pulls upstream again"""
        upstream = spy([1, 2])
        cursor = upstream.filter(lambda x: x > 5)
        advances = upstream.advance_calls
        cursor.advance()
        assert upstream.advance_calls == advances

    def test_exceptions_propagate(self):
        """Test that predicate errors reach the caller"""
        def pred(x):
            if x == 3:
                raise ValueError("bad element")
            return True

        cursor = source([1, 2, 3]).filter(pred)
        with pytest.raises(ValueError):
            cursor.to_collection()

    def test_exhausted_current_raises(self):
        """Test that reading an exhausted filter fails loudly"""
        with pytest.raises(IllegalStateError):
            source([1, 3]).filter(lambda x: x % 2 == 0).current()

    @pytest.mark.parametrize("xs", [[], [0], list(range(20)), [5, 10, 15, 20, 25, 30]])
    def test_filter_fusion(self, xs):
        """filter(p).filter(q) == filter(p and q)"""
        p = lambda x: x % 2 == 0
        q = lambda x: x % 3 == 0
        chained = source(xs).filter(p).filter(q).to_collection()
        fused = source(xs).filter(lambda x: p(x) and q(x)).to_collection()
        assert chained == fused
