#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: blendfit/logic/sequence/engine.py

import asyncio
import random
from typing import Callable, Iterable, List, Optional

from blendfit.core import config as c
from blendfit.core.blend_modes import BLEND_MODES
from blendfit.core.pairs import prepare_pairs
from blendfit.logic.blend.engine import optimize_prepared
from blendfit.shared.logger import log
from .candidates import generate_mode_sequences, greedy_search_sequences
from .joint import joint_optimize_sequence
from .steps import available_modes, step_signature


class CancelToken:
    """Cooperative cancellation flag checked at every yield point of a search."""

    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


def resolve_opacity_bounds(min_opacity: float, max_opacity: float):
    """Percentages to fractions, clamped to [1, 100] and ordered."""
    lo = max(c.OPACITY_PERCENT_MIN, min(c.OPACITY_PERCENT_MAX, float(min_opacity)))
    hi = max(c.OPACITY_PERCENT_MIN, min(c.OPACITY_PERCENT_MAX, float(max_opacity)))
    if lo > hi:
        lo, hi = hi, lo
    return lo / 100, hi / 100


def resolve_budget(extensive: bool = False, budget: Optional[dict] = None) -> dict:
    resolved = dict(c.SEARCH_BUDGETS["extensive" if extensive else "standard"])
    if budget:
        unknown = set(budget) - set(resolved)
        if unknown:
            raise ValueError(f"unknown budget keys: {', '.join(sorted(unknown))}")
        resolved.update({k: int(v) for k, v in budget.items()})
    return resolved


def scale_budget(scale: float, extensive: bool = False) -> dict:
    base = c.SEARCH_BUDGETS["extensive" if extensive else "standard"]
    return {k: max(1, int(round(v * scale))) for k, v in base.items()}


def solution_key(result: dict) -> str:
    return "|".join(step_signature(step) for step in result["steps"])


class MultiStepSearch:
    """
    Asynchronous multi-step sequence search.

    Phases run in order (single, greedy, generating, optimizing, done). The
    coroutine yields to the event loop after every mode tried in the single
    and greedy phases and after every candidate, and returns the best
    solutions found so far when cancelled.
    """

    def __init__(
        self,
        token: Optional[CancelToken] = None,
        on_progress: Optional[Callable[[dict], None]] = None,
        on_best_found: Optional[Callable[[List[dict]], None]] = None,
    ) -> None:
        self.token = token or CancelToken()
        self.on_progress = on_progress
        self.on_best_found = on_best_found
        self.best_result: Optional[dict] = None
        self.top_solutions: List[dict] = []

    def cancel(self) -> None:
        self.token.cancel()

    @property
    def cancelled(self) -> bool:
        return self.token.cancelled

    def _emit(self, phase: str, message: str, current: int = 0, total: int = 0, current_sequence=None) -> None:
        if self.on_progress is None:
            return
        self.on_progress({
            "phase": phase,
            "current": current,
            "total": total,
            "message": message,
            "current_sequence": list(current_sequence) if current_sequence else None,
        })

    def _partial(self):
        if self.top_solutions:
            return list(self.top_solutions)
        return self.best_result

    def update_top_solutions(self, result: dict) -> None:
        """Keep the best distinct solutions, ascending by average error."""
        key = solution_key(result)
        merged = list(self.top_solutions)
        for i, existing in enumerate(merged):
            if solution_key(existing) == key:
                if result["avg_error"] < existing["avg_error"]:
                    merged[i] = result
                break
        else:
            merged.append(result)
        merged.sort(key=lambda r: r["avg_error"])
        self.top_solutions = merged[:c.MAX_TOP_SOLUTIONS]
        if self.best_result is None or result["avg_error"] < self.best_result["avg_error"]:
            self.best_result = result

    async def _best_single_mode(self, prepared):
        """Best single blend mode and its error; stops early once cancelled."""
        best_mode, best_error = None, float("inf")
        for mode in BLEND_MODES:
            if self.cancelled:
                break
            result = optimize_prepared(mode, prepared)
            if result is not None and result["avg_error"] < best_error:
                best_mode, best_error = mode.name, result["avg_error"]
            await asyncio.sleep(0)
        return best_mode, best_error

    async def run(
        self,
        pairs: Iterable[dict],
        num_steps: int,
        min_opacity: float = c.DEFAULT_MIN_OPACITY,
        max_opacity: float = c.DEFAULT_MAX_OPACITY,
        allow_hsl: bool = False,
        allow_levels: bool = False,
        extensive: bool = False,
        existing_best: Optional[dict] = None,
        budget: Optional[dict] = None,
        rng=None,
    ):
        """
        Search sequences of `num_steps` steps. Returns the top solutions list,
        or None when no pair survives validation. Opacities are percentages.
        """
        if num_steps < 1:
            raise ValueError("num_steps must be at least 1")
        rng = rng or random
        lo, hi = resolve_opacity_bounds(min_opacity, max_opacity)
        limits = resolve_budget(extensive, budget)
        modes = available_modes(allow_hsl, allow_levels)
        label = "[extensive] " if extensive else ""

        self.best_result = existing_best
        self.top_solutions = [existing_best] if existing_best else []

        prepared = prepare_pairs(pairs)
        if not prepared:
            return None

        if self.cancelled:
            return self._partial()
        self._emit("single", "finding best single-mode solution...")
        single_mode, single_error = await self._best_single_mode(prepared)

        if self.cancelled:
            return self._partial()
        self._emit("greedy", f"{label}running greedy search for promising sequences...")
        greedy = await greedy_search_sequences(
            prepared, num_steps, limits["greedy_trials"], hi, modes, rng, self.token
        )

        if self.cancelled:
            return self._partial()
        self._emit("generating", "generating additional candidate sequences...")
        enumerated = generate_mode_sequences(num_steps, limits["max_sequences"], modes, rng)

        candidates, seen = [], set()
        for cand in greedy:
            key = tuple(cand["mode_sequence"])
            if key not in seen:
                seen.add(key)
                candidates.append(cand)
        for seq in enumerated:
            key = tuple(seq)
            if key not in seen:
                seen.add(key)
                candidates.append({"mode_sequence": seq, "initial_blends": None, "greedy_error": None})
        await asyncio.sleep(0)

        total = len(candidates)
        for index, cand in enumerate(candidates, start=1):
            if self.cancelled:
                return self._partial()
            sequence = cand["mode_sequence"]
            self._emit(
                "optimizing",
                f"{label}optimizing {index}/{total}: {' -> '.join(sequence)}",
                current=index,
                total=total,
                current_sequence=sequence,
            )
            restarts = (
                limits["restarts_with_guess"] if cand["initial_blends"] else limits["restarts_without_guess"]
            )
            try:
                result = joint_optimize_sequence(
                    prepared,
                    sequence,
                    cand["initial_blends"],
                    num_restarts=restarts,
                    basin_hops=limits["basin_hops"],
                    min_opacity=lo,
                    max_opacity=hi,
                    rng=rng,
                )
            except (ArithmeticError, ValueError) as e:
                log("warning", f"skipping sequence {' -> '.join(sequence)}: {e}")
                result = None

            if result is not None:
                improvement = 0.0
                if single_error > 0 and single_error != float("inf"):
                    improvement = (single_error - result["avg_error"]) / single_error * 100
                result.update({
                    "single_best_mode": single_mode,
                    "single_best_error": single_error,
                    "improvement": max(0.0, improvement),
                })
                self.update_top_solutions(result)
                if self.on_best_found is not None:
                    self.on_best_found(list(self.top_solutions))

            await asyncio.sleep(0)

        self._emit("done", "optimization complete", current=total, total=total)
        return list(self.top_solutions)


# ==========================================
# Single active search
# ==========================================

_current_search: Optional[MultiStepSearch] = None


async def start_multi_step_search(
    pairs: Iterable[dict],
    num_steps: int,
    on_progress: Optional[Callable[[dict], None]] = None,
    on_best_found: Optional[Callable[[List[dict]], None]] = None,
    token: Optional[CancelToken] = None,
    **options,
):
    """Run a search as the only active one, cancelling any search already in flight."""
    global _current_search
    if _current_search is not None:
        _current_search.cancel()

    search = MultiStepSearch(token, on_progress, on_best_found)
    _current_search = search
    try:
        return await search.run(pairs, num_steps, **options)
    finally:
        if _current_search is search:
            _current_search = None


def cancel_multi_step_search() -> bool:
    global _current_search
    if _current_search is None:
        return False
    _current_search.cancel()
    _current_search = None
    return True


def is_search_running() -> bool:
    return _current_search is not None
