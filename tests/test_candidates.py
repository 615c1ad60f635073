"""
Unit tests for the candidate reducer.
"""

from sprite_palette.core_types import DEFAULT_CONFIG, PaletteConfig, SpecialCaseRule
from sprite_palette.selection.candidates import (
    effective_top_n,
    hand_picked_order,
    reduce_candidates,
)

RED = (255, 0, 0)
GREEN = (0, 255, 0)
BLUE = (0, 0, 255)
WHITE = (255, 255, 255)
GREY = (128, 128, 128)


class TestReduceCandidates:
    """Top-N by count with a minimum count"""

    def test_drops_rare_colours(self, arena_from):
        arena = arena_from([(RED, 100), (GREEN, 50), (BLUE, 20), (WHITE, 16), (GREY, 10)])
        assert reduce_candidates(arena, None, DEFAULT_CONFIG) == [0, 1, 2]

    def test_top_n_caps_the_list(self, arena_from):
        arena = arena_from([((i * 10, 100, 100), 100 - i) for i in range(10)])
        assert reduce_candidates(arena, None, DEFAULT_CONFIG) == [0, 1, 2, 3, 4, 5]

    def test_top_n_rule_overrides(self, arena_from):
        arena = arena_from([(RED, 100), (GREEN, 50), (BLUE, 20)])
        rule = SpecialCaseRule(mode="topNColors", parameter=2)
        assert effective_top_n(rule, DEFAULT_CONFIG) == 2
        assert reduce_candidates(arena, rule, DEFAULT_CONFIG) == [0, 1]

    def test_other_rules_keep_default_top_n(self):
        rule = SpecialCaseRule(mode="mostFrequent", parameter=50)
        assert effective_top_n(rule, DEFAULT_CONFIG) == DEFAULT_CONFIG.top_n

    def test_min_count_from_config(self, arena_from):
        arena = arena_from([(RED, 100), (GREEN, 50), (BLUE, 20)])
        config = PaletteConfig(min_count=60)
        assert reduce_candidates(arena, None, config) == [0]

    def test_can_be_empty(self, arena_from):
        arena = arena_from([(RED, 3)])
        assert reduce_candidates(arena, None, DEFAULT_CONFIG) == []


class TestHandPickedOrder:
    """Configured colours first, the rest after, both in arena order"""

    def test_matches_lead(self, arena_from):
        arena = arena_from([(WHITE, 50), (RED, 40), (GREY, 30), (BLUE, 20)])
        picked = [BLUE, RED, (1, 2, 3)]
        assert hand_picked_order(arena, picked) == [1, 3, 0, 2]

    def test_no_match_keeps_arena_order(self, arena_from):
        arena = arena_from([(WHITE, 50), (RED, 40)])
        assert hand_picked_order(arena, [(9, 9, 9)]) == [0, 1]

    def test_string_channels_accepted(self, arena_from):
        arena = arena_from([(WHITE, 50), (RED, 40)])
        assert hand_picked_order(arena, [("255", "0", "0")]) == [1, 0]
