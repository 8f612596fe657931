"""Selector — tests for interleaved, streak-limited picking within a cycle.

Tests cover:
    - None on missing/exhausted state
    - Determinism and no-repeat within a cycle
    - Interleave window eligibility and deck rotation
    - Anti-streak cap and its starvation-avoidance fallback
    - Strict-max fallback when deck and eligible set never meet
    - remove_from_cycle bookkeeping
"""

from feedqueue.core.cycle_builder import CycleState, ScoredEntry, create_cycle_state
from feedqueue.core.domain_types import Priority
from feedqueue.core.queue_config import QueueConfig
from feedqueue.core.selector import (
    bucket_top_score, pick_next_from_cycle, remove_from_cycle, select_next_priority,
)
from tests.helpers import NOW, make_item

U, H, M, L = Priority.URGENT, Priority.HIGH, Priority.MEDIUM, Priority.LOW


def _drain(state) -> list:
    picked = []
    while (item := pick_next_from_cycle(state)) is not None:
        picked.append(item)
    return picked


def _mixed_pool() -> list:
    priorities = ["urgent", "high", "medium", "low"] * 3
    return [
        make_item(f"i{n}", p, created_days_ago=n + 1, activity_days_ago=(n % 5,))
        for n, p in enumerate(priorities)
    ]


# --- Empty / exhausted ----------------------------------------------------------

def test_none_state_yields_none():
    assert pick_next_from_cycle(None) is None


def test_exhausted_state_yields_none():
    state = create_cycle_state([make_item("a")], now=NOW)
    assert pick_next_from_cycle(state).id == "a"
    assert pick_next_from_cycle(state) is None
    assert state.remaining == 0


def test_bucket_top_score_reads_tail():
    assert bucket_top_score([]) is None
    entries = [ScoredEntry(item=None, score=s, last_activity_at=0, created_at=0) for s in (1, 5)]
    assert bucket_top_score(entries) == 5


# --- Determinism / no-repeat ------------------------------------------------------

def test_same_inputs_same_sequence():
    first = [i.id for i in _drain(create_cycle_state(_mixed_pool(), now=NOW))]
    second = [i.id for i in _drain(create_cycle_state(_mixed_pool(), now=NOW))]
    assert first == second


def test_cycle_yields_every_item_exactly_once():
    pool = _mixed_pool()
    picked = _drain(create_cycle_state(pool, now=NOW))
    assert len(picked) == len(pool)
    assert len({i.id for i in picked}) == len(pool)


def test_remaining_tracks_bucket_sizes_while_picking():
    state = create_cycle_state(_mixed_pool(), now=NOW)
    while pick_next_from_cycle(state) is not None:
        assert state.remaining == sum(len(b) for b in state.buckets.values())


# --- Interleaving ----------------------------------------------------------------

def test_three_priorities_picked_in_urgency_order():
    pool = [
        make_item("u", "urgent", created_days_ago=1),
        make_item("h", "high", created_days_ago=2),
        make_item("m", "medium", created_days_ago=3),
    ]
    state = create_cycle_state(pool, now=NOW)
    assert [i.id for i in _drain(state)] == ["u", "h", "m"]


def test_low_waits_for_urgent_bucket_to_drain():
    pool = [make_item("u1", "urgent"), make_item("u2", "urgent"), make_item("l", "low")]
    picked = [i.id for i in _drain(create_cycle_state(pool, now=NOW))]
    assert picked[-1] == "l"


def test_deck_cursor_rotates_between_eligible_priorities():
    # urgent 200 vs high 140: both within the 0.4 window
    pool = [make_item(f"u{n}", "urgent") for n in range(5)] + \
        [make_item(f"h{n}", "high") for n in range(5)]
    state = create_cycle_state(pool, now=NOW)
    priorities = [i.priority for i in _drain(state)][:7]
    # deck U U U U H H H: the run cap of 3 hands the 4th slot to high
    assert priorities == [U, U, U, H, H, H, U]


def test_deck_index_persists_across_picks():
    state = create_cycle_state([make_item("u", "urgent"), make_item("h", "high")], now=NOW)
    pick_next_from_cycle(state)
    assert state.deck_index == 1
    pick_next_from_cycle(state)
    assert state.deck_index == 5


def test_wide_window_lets_weighted_deck_decide():
    config = QueueConfig(interleave_window=1.0, max_run_length=10)
    pool = [make_item(f"u{n}", "urgent") for n in range(5)] + \
        [make_item(f"l{n}", "low") for n in range(2)]
    priorities = [i.priority for i in _drain(create_cycle_state(pool, now=NOW, config=config))]
    assert priorities == [U, U, U, U, L, U, L]


def test_narrow_window_holds_low_back():
    config = QueueConfig(max_run_length=10)
    pool = [make_item(f"u{n}", "urgent") for n in range(5)] + \
        [make_item(f"l{n}", "low") for n in range(2)]
    priorities = [i.priority for i in _drain(create_cycle_state(pool, now=NOW, config=config))]
    assert priorities == [U, U, U, U, U, L, L]


# --- Anti-streak -------------------------------------------------------------------

def test_four_urgent_two_high_never_four_in_a_row():
    pool = [make_item(f"u{n}", "urgent", activity_days_ago=(30,)) for n in range(4)] + \
        [make_item(f"h{n}", "high", activity_days_ago=(30,)) for n in range(2)]
    priorities = [i.priority for i in _drain(create_cycle_state(pool, now=NOW))]
    assert len(priorities) == 6
    for start in range(len(priorities) - 3):
        assert len(set(priorities[start:start + 4])) > 1
    assert priorities == [U, U, U, H, H, U]


def test_run_length_tracking():
    state = create_cycle_state([make_item(f"u{n}", "urgent") for n in range(2)], now=NOW)
    pick_next_from_cycle(state)
    assert (state.last_priority_picked, state.current_run_length) == (U, 1)
    pick_next_from_cycle(state)
    assert (state.last_priority_picked, state.current_run_length) == (U, 2)


def test_run_resets_on_priority_change():
    state = create_cycle_state([make_item("u", "urgent"), make_item("h", "high")], now=NOW)
    pick_next_from_cycle(state)
    pick_next_from_cycle(state)
    assert (state.last_priority_picked, state.current_run_length) == (H, 1)


def test_run_cap_falls_back_when_only_capped_bucket_remains():
    # Starvation avoidance: urgent keeps going past the cap because nothing else is left
    pool = [make_item(f"u{n}", "urgent") for n in range(5)]
    state = create_cycle_state(pool, now=NOW)
    picked = _drain(state)
    assert len(picked) == 5
    assert state.current_run_length == 5


def test_run_cap_respected_for_any_config():
    config = QueueConfig(max_run_length=1)
    pool = [make_item(f"u{n}", "urgent") for n in range(3)] + \
        [make_item(f"m{n}", "medium") for n in range(3)]
    priorities = [i.priority for i in _drain(create_cycle_state(pool, now=NOW, config=config))]
    assert priorities == [U, M, U, M, U, M]


# --- Strict-max fallback -------------------------------------------------------------

def test_strict_max_fallback_when_deck_misses_eligible():
    entry = ScoredEntry(item=make_item("u", "urgent"), score=200, last_activity_at=0, created_at=0)
    state = CycleState(
        buckets={U: [entry], H: [], M: [], L: []},
        remaining=1,
        deck=(L,),
        priority_order=(U, H, M, L),
        interleave_window=0.4,
        max_run_length=3,
    )
    assert select_next_priority(state) == U
    assert state.deck_index == 0


def test_empty_deck_uses_strict_max():
    entries = {
        U: [ScoredEntry(item=make_item("u", "urgent"), score=10, last_activity_at=0, created_at=0)],
        H: [ScoredEntry(item=make_item("h", "high"), score=90, last_activity_at=0, created_at=0)],
        M: [], L: [],
    }
    state = CycleState(
        buckets=entries, remaining=2, deck=(), priority_order=(U, H, M, L),
        interleave_window=0.4, max_run_length=3,
    )
    assert pick_next_from_cycle(state).id == "h"


# --- remove_from_cycle -------------------------------------------------------------

def test_remove_from_cycle_drops_entry():
    state = create_cycle_state([make_item("a", "high"), make_item("b", "high")], now=NOW)
    remove_from_cycle(state, "a")
    assert state.remaining == 1
    assert [i.id for i in _drain(state)] == ["b"]


def test_remove_absent_id_is_noop():
    state = create_cycle_state([make_item("a")], now=NOW)
    remove_from_cycle(state, "missing")
    assert state.remaining == 1


def test_remove_from_none_state_is_noop():
    remove_from_cycle(None, "a")


def test_remove_after_pick_is_noop():
    state = create_cycle_state([make_item("a"), make_item("b", created_days_ago=3)], now=NOW)
    first = pick_next_from_cycle(state)
    remove_from_cycle(state, first.id)
    assert state.remaining == 1
