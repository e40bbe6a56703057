"""Asynchronous multi-step search: phases, top solutions and cancellation."""

import asyncio
import random

import pytest

from blendfit.logic.blend.engine import optimize_all_modes
from blendfit.logic.sequence import candidates, engine
from blendfit.logic.sequence.engine import (
    CancelToken,
    MultiStepSearch,
    cancel_multi_step_search,
    is_search_running,
    resolve_budget,
    resolve_opacity_bounds,
    scale_budget,
    start_multi_step_search,
)
from blendfit.logic.sequence.steps import describe_step

PAIRS = [
    {"source": "C04020", "target": "9A5A30"},
    {"source": "80A0E0", "target": "7A8CA0"},
]

SMALL_BUDGET = {
    "greedy_trials": 2,
    "max_sequences": 4,
    "restarts_with_guess": 1,
    "restarts_without_guess": 1,
    "basin_hops": 1,
}


@pytest.fixture(autouse=True)
def no_active_search():
    engine._current_search = None
    yield
    engine._current_search = None


def _fake_result(hex_code, avg_error):
    return {
        "steps": [describe_step("Normal", tuple(int(hex_code[i:i + 2], 16) / 255 for i in (0, 2, 4)), 1.0)],
        "avg_error": avg_error,
    }


def test_opacity_bounds_are_fractions():
    assert resolve_opacity_bounds(10, 100) == pytest.approx((0.1, 1.0))
    assert resolve_opacity_bounds(80, 20) == pytest.approx((0.2, 0.8))
    assert resolve_opacity_bounds(0, 500) == pytest.approx((0.01, 1.0))


def test_budget_overrides():
    assert resolve_budget()["greedy_trials"] == 40
    assert resolve_budget(extensive=True)["greedy_trials"] == 200
    assert resolve_budget(budget={"basin_hops": 0})["basin_hops"] == 0
    with pytest.raises(ValueError):
        resolve_budget(budget={"speed": 3})
    assert scale_budget(0.01)["basin_hops"] == 1


def test_top_solutions_are_capped_sorted_and_distinct():
    search = MultiStepSearch()
    for i, err in enumerate([5.0, 3.0, 8.0, 1.0, 4.0, 7.0, 2.0, 6.0]):
        search.update_top_solutions(_fake_result(f"{i * 16:02X}0000", err))
    errors = [r["avg_error"] for r in search.top_solutions]
    assert errors == [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]
    assert search.best_result["avg_error"] == 1.0


def test_duplicate_solution_replaced_only_when_better():
    search = MultiStepSearch()
    search.update_top_solutions(_fake_result("102030", 4.0))
    search.update_top_solutions(_fake_result("102030", 6.0))
    assert [r["avg_error"] for r in search.top_solutions] == [4.0]
    search.update_top_solutions(_fake_result("102030", 2.0))
    assert [r["avg_error"] for r in search.top_solutions] == [2.0]


def test_search_returns_sorted_distinct_results():
    events = []
    search = MultiStepSearch(on_progress=events.append)
    results = asyncio.run(search.run(PAIRS, 1, budget=SMALL_BUDGET, rng=random.Random(0)))

    assert 1 <= len(results) <= 6
    errors = [r["avg_error"] for r in results]
    assert errors == sorted(errors)
    assert len({engine.solution_key(r) for r in results}) == len(results)

    phases = [e["phase"] for e in events]
    assert phases[0] == "single"
    assert phases[-1] == "done"
    for phase in ("greedy", "generating", "optimizing"):
        assert phase in phases

    best = results[0]
    assert best["single_best_mode"] is not None
    assert best["improvement"] >= 0.0
    assert len(best["steps"]) == 1


def test_one_step_matches_best_single_mode():
    best_single = optimize_all_modes(PAIRS)[0]["avg_error"]
    results = asyncio.run(MultiStepSearch().run(PAIRS, 1, budget=SMALL_BUDGET, rng=random.Random(0)))
    assert results[0]["avg_error"] <= best_single + 1e-9


def test_invalid_input():
    search = MultiStepSearch()
    assert asyncio.run(search.run([{"source": "nope", "target": "000000"}], 2)) is None
    with pytest.raises(ValueError):
        asyncio.run(search.run(PAIRS, 0))


def test_precancelled_search_returns_existing_best():
    token = CancelToken()
    token.cancel()
    existing = _fake_result("336699", 9.0)
    results = asyncio.run(MultiStepSearch(token).run(PAIRS, 2, existing_best=existing))
    assert results == [existing]


def test_cancel_during_optimizing_keeps_partial_results():
    token = CancelToken()
    found = []

    def on_best_found(top):
        found.append(top)
        token.cancel()

    search = MultiStepSearch(token, on_best_found=on_best_found)
    results = asyncio.run(search.run(PAIRS, 1, budget=SMALL_BUDGET, rng=random.Random(0)))
    assert len(found) == 1
    assert len(results) == 1
    assert search.cancelled


def test_new_search_cancels_previous():
    first_token = CancelToken()

    async def scenario():
        first = asyncio.ensure_future(
            start_multi_step_search(PAIRS, 1, token=first_token, budget=SMALL_BUDGET, rng=random.Random(0))
        )
        await asyncio.sleep(0)
        assert is_search_running()
        second = await start_multi_step_search(PAIRS, 1, budget=SMALL_BUDGET, rng=random.Random(1))
        return await first, second

    first_result, second_result = asyncio.run(scenario())
    assert first_token.cancelled
    assert not first_result
    assert second_result
    assert not is_search_running()


def test_cancel_without_active_search():
    assert cancel_multi_step_search() is False
    assert not is_search_running()


def _counting(monkeypatch, module):
    calls = []
    real = module.optimize_prepared

    def counted(mode, prepared):
        calls.append(mode.name)
        return real(mode, prepared)

    monkeypatch.setattr(module, "optimize_prepared", counted)
    return calls


def _cancel_on_phase(token, phase, phases):
    def on_progress(update):
        phases.append(update["phase"])
        if update["phase"] == phase:
            asyncio.get_running_loop().call_soon(token.cancel)
    return on_progress


def test_cancel_during_single_phase_stops_after_one_mode(monkeypatch):
    calls = _counting(monkeypatch, engine)
    token, phases = CancelToken(), []
    search = MultiStepSearch(token, on_progress=_cancel_on_phase(token, "single", phases))
    results = asyncio.run(search.run(PAIRS, 2, budget=SMALL_BUDGET, rng=random.Random(0)))
    assert results is None
    assert phases == ["single"]
    assert len(calls) == 1


def test_cancel_during_greedy_phase_stops_after_one_mode(monkeypatch):
    calls = _counting(monkeypatch, candidates)
    token, phases = CancelToken(), []
    search = MultiStepSearch(token, on_progress=_cancel_on_phase(token, "greedy", phases))
    results = asyncio.run(search.run(PAIRS, 2, budget=SMALL_BUDGET, rng=random.Random(0)))
    assert results is None
    assert phases == ["single", "greedy"]
    assert len(calls) == 1
