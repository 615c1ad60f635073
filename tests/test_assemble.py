"""
Unit tests for final assembly and the secondary swap.
"""

from sprite_palette.selection.assemble import assemble, pad_selection, secondary_swap

RED = (255, 0, 0)
RED_2 = (250, 5, 0)  # same RGB sum and hue group as RED
RED_3 = (253, 2, 0)
GREEN = (0, 255, 0)
BLUE = (0, 0, 255)
GREY = (128, 128, 128)
GREY_2 = (130, 128, 128)


class TestPadSelection:
    def test_pads_from_front_of_rest(self):
        assert pad_selection([0], [1, 2, 3], 3) == ([0, 1, 2], [3])

    def test_short_rest(self):
        assert pad_selection([], [4], 3) == ([4], [])

    def test_full_selection_unchanged(self):
        assert pad_selection([2, 0, 1], [3], 3) == ([2, 0, 1], [3])

    def test_default_size_is_three(self):
        assert pad_selection([0], [1, 2, 3, 4]) == ([0, 1, 2], [3, 4])


class TestSecondarySwap:
    """At most one swap of a same-shade pair"""

    def test_weaker_member_swapped_out(self, arena_from):
        arena = arena_from([(RED, 100), (RED_2, 50), (BLUE, 40), (GREEN, 30), (GREY, 20)])
        top, rest, swapped = secondary_swap(arena, [0, 1, 2], [3, 4])
        assert swapped
        assert top == [0, 3, 2]
        assert rest == [4, 1]

    def test_low_saturation_pair_not_swapped(self, arena_from):
        arena = arena_from([(GREY, 100), (GREY_2, 50), (BLUE, 40), (GREEN, 30)])
        assert secondary_swap(arena, [0, 1, 2], [3]) == ([0, 1, 2], [3], False)

    def test_stops_after_first_swap(self, arena_from):
        arena = arena_from(
            [(RED, 100), (RED_2, 90), (RED_3, 80), (GREEN, 30), (BLUE, 20)]
        )
        top, rest, swapped = secondary_swap(arena, [0, 1, 2], [3, 4])
        assert swapped
        assert top == [0, 3, 2]
        assert rest == [4, 1]

    def test_empty_rest_never_swaps(self, arena_from):
        arena = arena_from([(RED, 100), (RED_2, 50)])
        assert secondary_swap(arena, [0, 1], []) == ([0, 1], [], False)


class TestAssemble:
    def test_rest_sorted_by_count(self, arena_from):
        arena = arena_from([(RED, 100), (GREEN, 10), (BLUE, 50), (GREY, 30)])
        assert assemble(arena, [0], [1, 2, 3]) == [0, 1, 2, 3]
        assert assemble(arena, [0, 2], [1, 3]) == [0, 2, 1, 3]
        assert assemble(arena, [0, 2, 3], [1]) == [0, 2, 3, 1]

    def test_swapped_member_joins_sorted_rest(self, arena_from):
        arena = arena_from([(RED, 100), (RED_2, 50), (BLUE, 40), (GREEN, 30), (GREY, 20)])
        assert assemble(arena, [0, 1, 2], [3, 4]) == [0, 3, 2, 1, 4]

    def test_every_id_once(self, arena_from):
        arena = arena_from([(RED, 100), (RED_2, 50), (BLUE, 40), (GREEN, 30), (GREY, 20)])
        out = assemble(arena, [1], [0, 2, 3, 4])
        assert sorted(out) == [0, 1, 2, 3, 4]

    def test_head_padded_to_three_with_small_pick_count(self, arena_from):
        """Swap window is two wide but the head still holds three"""
        arena = arena_from([(RED, 100), (RED_2, 90), (BLUE, 80), (GREEN, 70)])
        assert assemble(arena, [0, 1], [2, 3], pick_count=2) == [0, 3, 2, 1]
