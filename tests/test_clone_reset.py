import math

from sequence import sequence


class TestReset:
    """Test that reset() rewinds the whole chain"""

    def test_reset_after_full_consumption(self):
        chain = sequence(0, 10).filter(lambda x: x % 2 == 1).map(lambda x: x * 2)
        original = chain.to_list()
        chain.reset()
        assert chain.to_list() == original == [2, 6, 10, 14, 18]

    def test_reset_after_partial_consumption(self):
        chain = sequence(10, 0, -2).map(lambda x: x // 2)
        assert next(chain) == 5
        assert next(chain) == 4
        chain.reset()
        assert chain.to_list() == [5, 4, 3, 2, 1]

    def test_reset_clears_counters(self):
        chain = sequence(3, 10).filter(lambda x: x % 2 == 0)
        assert [next(chain) for _ in range(3)] == [4, 6, 8]
        assert chain.index == 3
        assert chain.produced == 3
        assert chain.current_value == 8

        chain.reset()
        assert chain.index == 0
        assert chain.produced == 0
        assert chain.current_value == 3

    def test_reset_take(self):
        limited = sequence(0, math.inf).take(3)
        assert list(limited) == [0, 1, 2]
        limited.reset()
        assert list(limited) == [0, 1, 2]

    def test_reset_after_length(self):
        chain = sequence(0, 10).filter(lambda x: x > 6)
        assert chain.length == 3
        chain.reset()
        assert chain.to_list() == [7, 8, 9]
        assert chain.length == 3


class TestClone:
    """Test that clone() copies position without sharing state"""

    def test_clone_root_mid_way(self):
        original = sequence(0, 10, 2)
        next(original)
        next(original)

        twin = original.clone()
        assert twin.to_list() == [4, 6, 8]
        assert original.to_list() == [4, 6, 8], "Consuming the clone must not affect the original"

    def test_clone_chain_is_disjoint(self):
        original = sequence(0, 10).map(lambda x: x * x)
        assert next(original) == 0

        twin = original.clone()
        assert twin is not original
        assert twin.parent is not original.parent

        assert list(twin) == [1, 4, 9, 16, 25, 36, 49, 64, 81]
        assert original.to_list() == [1, 4, 9, 16, 25, 36, 49, 64, 81]

    def test_clone_copies_pending_buffer(self):
        evens = sequence(0, 10).filter(lambda x: x % 2 == 0)
        assert evens.length == 5

        twin = evens.clone()
        assert twin.length == 5
        assert twin.to_list() == [0, 2, 4, 6, 8]
        assert evens.to_list() == [0, 2, 4, 6, 8]

    def test_clone_infinite_sequence(self):
        naturals = sequence(0, math.inf)
        for _ in range(3):
            next(naturals)

        twin = naturals.clone()
        assert next(twin) == 3
        assert next(twin) == 4
        assert next(naturals) == 3

    def test_clone_keeps_index(self):
        chain = sequence(0, 10).enumerate()
        next(chain)
        next(chain)
        twin = chain.clone()
        assert twin.index == 2
        assert next(twin) == (3, 2)

    def test_clone_then_reset(self):
        chain = sequence(0, 5).map(lambda x: x + 1)
        chain.to_list()
        twin = chain.clone()
        assert twin.to_list() == []
        twin.reset()
        assert twin.to_list() == [1, 2, 3, 4, 5]
        assert chain.to_list() == [], "Resetting the clone must not rewind the original"

    def test_clone_reversed_chain(self):
        reversed_chain = sequence(0, 5).filter(lambda x: x != 2).reverse()
        assert next(reversed_chain) == 4

        twin = reversed_chain.clone()
        assert twin.to_list() == [3, 1, 0]
        twin.reset()
        assert twin.to_list() == [4, 3, 1, 0]
        assert reversed_chain.to_list() == [3, 1, 0]
