# maplabel/core/labeler.py
"""
Simulated-annealing label placement.

Labeler owns one PlacementState and runs the sweep loop: per sweep, N iterations
of (pick move kind, pick label, energy before, move, energy after, accept or
revert), then linear cooling. Labels passed in are mutated in place; run()
returns only bookkeeping (RunStats).
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Sequence

import numpy as np

from maplabel.core.acceptance import accept_move, within_bounds
from maplabel.core.config import (
    INITIAL_TEMPERATURE,
    MAX_ANGLE,
    MAX_MOVE,
    REFERENCE_CORNER,
    ROTATE_PROBABILITY,
    SEED,
)
from maplabel.core.energy import OrientationRule, energy
from maplabel.core.moves import pick_label, revert, rotate_move, translate_move
from maplabel.core.schedule import cooling_step
from maplabel.core.types import (
    Anchor,
    Extent,
    Label,
    Obstacle,
    PlacementState,
    RunState,
    RunStats,
    Weights,
)
from maplabel.core.validate import validate_move_options, validate_nsweeps, validate_setup

logger = logging.getLogger(__name__)


class Labeler:
    """
    Place labels next to their anchors by simulated annealing.

    anchors[i] pairs with labels[i]. bounds, when given, is a hard wall: moves
    leaving it are always rejected. rng may be any numpy Generator (or an object
    with the same random()/integers() methods); when None one is seeded from seed.
    """

    def __init__(
        self,
        labels: Sequence[Label],
        anchors: Sequence[Anchor],
        bounds: Extent | None = None,
        obstacles: Sequence[Obstacle] | None = None,
        weights: Weights | None = None,
        max_move: float = MAX_MOVE,
        max_angle: float = MAX_ANGLE,
        initial_temperature: float = INITIAL_TEMPERATURE,
        rng: np.random.Generator | None = None,
        seed: int | None = SEED,
        orientation_rule: OrientationRule | None = None,
        corner: str = REFERENCE_CORNER,
        rotate_probability: float = ROTATE_PROBABILITY,
    ) -> None:
        weights = weights if weights is not None else Weights()
        obstacle_list = list(obstacles) if obstacles else []
        validate_setup(
            labels, anchors, bounds, obstacle_list, weights,
            max_move, max_angle, initial_temperature,
        )
        validate_move_options(corner, rotate_probability)

        self.state = PlacementState(
            labels=labels if isinstance(labels, list) else list(labels),
            anchors=list(anchors),
            bounds=tuple(float(v) for v in bounds) if bounds is not None else None,  # type: ignore[arg-type]
            obstacles=obstacle_list,
        )
        self.weights = weights
        self.max_move = float(max_move)
        self.max_angle = float(max_angle)
        self.initial_temperature = float(initial_temperature)
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.orientation_rule = orientation_rule
        self.corner = corner
        self.rotate_probability = rotate_probability
        self.temperature = self.initial_temperature
        self.run_state = RunState.IDLE

    @property
    def labels(self) -> list[Label]:
        return self.state.labels

    def energy(self, index: int) -> float:
        """Energy of labels[index] in the current state."""
        return energy(self.state, index, self.weights, self.orientation_rule, self.corner)

    def step(self, temperature: float, stats: RunStats | None = None) -> bool:
        """
        One Monte Carlo iteration at the given temperature.
        Returns True if the move was kept, False if it was reverted.
        """
        rotate = bool(self.state.anchors) and self.rng.random() < self.rotate_probability
        index = pick_label(self.state, self.rng)
        old_energy = self.energy(index)
        if rotate:
            record = rotate_move(self.state, self.rng, self.max_angle, index=index)
        else:
            record = translate_move(self.state, self.rng, self.max_move, index=index)
        new_extent = self.state.labels[index].extent
        new_energy = self.energy(index)
        delta = new_energy - old_energy

        in_bounds = within_bounds(new_extent, self.state.bounds)
        draw = self.rng.random() if in_bounds and delta > 0 else 0.0
        accepted = accept_move(delta, temperature, draw, new_extent, self.state.bounds)
        if not accepted:
            revert(self.state, record)

        if stats is not None:
            if accepted:
                stats.accepted += 1
            else:
                stats.rejected += 1
                if not in_bounds:
                    stats.rejected_out_of_bounds += 1
        return accepted

    def sweep(self, temperature: float, stats: RunStats | None = None) -> None:
        """N iterations, N = label count. A label may be picked zero or many times."""
        for _ in range(len(self.state.labels)):
            self.step(temperature, stats)

    def run(
        self,
        nsweeps: int,
        should_stop: Callable[[], bool] | None = None,
        deadline_s: float | None = None,
    ) -> RunStats:
        """
        Anneal for nsweeps sweeps starting at initial_temperature, cooling linearly.
        should_stop and deadline_s (wall-clock seconds from start) are checked once
        per sweep, before it begins. Labels hold the final placement on return.
        """
        validate_nsweeps(nsweeps)
        stats = RunStats(nsweeps=nsweeps)
        self.temperature = self.initial_temperature
        self.run_state = RunState.RUNNING
        logger.info(
            "Annealing %d labels for %d sweeps (T0=%.3g, max_move=%.3g, max_angle=%.3g)",
            len(self.state.labels), nsweeps, self.initial_temperature, self.max_move, self.max_angle,
        )
        t0 = time.perf_counter()
        try:
            for i in range(nsweeps):
                if should_stop is not None and should_stop():
                    stats.cancelled = True
                    logger.info("Annealing stopped by caller after %d sweeps", i)
                    break
                if deadline_s is not None and time.perf_counter() - t0 >= deadline_s:
                    stats.cancelled = True
                    logger.info("Annealing deadline %.3gs reached after %d sweeps", deadline_s, i)
                    break
                self.sweep(self.temperature, stats)
                stats.sweeps_completed += 1
                logger.debug(
                    "sweep %d T=%.4g accepted=%d rejected=%d",
                    i, self.temperature, stats.accepted, stats.rejected,
                )
                self.temperature = cooling_step(self.temperature, self.initial_temperature, nsweeps)
        finally:
            self.run_state = RunState.DONE
        stats.final_temperature = self.temperature
        logger.info(
            "Annealing done: %d sweeps, %d accepted, %d rejected (%d out of bounds), T=%.3g",
            stats.sweeps_completed, stats.accepted, stats.rejected,
            stats.rejected_out_of_bounds, stats.final_temperature,
        )
        return stats
