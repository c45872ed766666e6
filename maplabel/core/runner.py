# maplabel/core/runner.py
"""
CLI entrypoint: load a problem JSON, anneal, write placements.json and
run_metadata.json, print the written paths.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from maplabel.core.config import LOG_LEVEL, MAX_ANGLE, MAX_MOVE, N_SWEEPS, SEED
from maplabel.core.energy import prefer_above_right
from maplabel.core.io import load_problem
from maplabel.core.labeler import Labeler
from maplabel.core.reporting import (
    ensure_report_dir,
    write_placements_json,
    write_run_metadata_json,
)
from maplabel.core.scoring import placement_metrics
from maplabel.core.validate import LabelerConfigError

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Simulated-annealing label placement.")
    p.add_argument("problem", type=str, help="Problem JSON path (repo-relative or absolute)")
    p.add_argument("--sweeps", type=int, default=N_SWEEPS, help="Number of annealing sweeps")
    p.add_argument("--seed", type=int, default=SEED, help="Random seed")
    p.add_argument("--max-move", type=float, default=MAX_MOVE, dest="max_move", help="Max translation per move")
    p.add_argument("--max-angle", type=float, default=MAX_ANGLE, dest="max_angle", help="Max rotation (rad) per move")
    p.add_argument("--deadline-s", type=float, default=None, dest="deadline_s", help="Stop after this many seconds")
    p.add_argument("--above-right", action="store_true", dest="above_right", help="Penalize labels left of or below their anchor")
    p.add_argument("--run-name", type=str, default="run", dest="run_name", help="Reports subdir name")
    p.add_argument("--output-dir", type=str, default="reports", dest="output_dir", help="Output directory (repo-relative)")
    p.add_argument("--repo-root", type=str, default=None, dest="repo_root", help="Repo root (default: cwd)")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO))
    args = _parse_args(argv)
    repo_root = Path(args.repo_root).resolve() if args.repo_root else Path.cwd().resolve()

    try:
        problem = load_problem(args.problem, repo_root=repo_root)
        labeler = Labeler(
            problem.labels,
            problem.anchors,
            bounds=problem.bounds,
            obstacles=problem.obstacles,
            weights=problem.weights,
            max_move=args.max_move,
            max_angle=args.max_angle,
            seed=args.seed,
            orientation_rule=prefer_above_right if args.above_right else None,
        )
        before = placement_metrics(labeler.state, labeler.weights, labeler.orientation_rule)
        stats = labeler.run(args.sweeps, deadline_s=args.deadline_s)
    except LabelerConfigError as e:
        logger.error("%s [%s]", e, e.code)
        return 2

    report_dir = ensure_report_dir(repo_root, args.run_name, output_dir=args.output_dir)
    placements_path = write_placements_json(
        report_dir, labeler.state, labeler.weights, stats,
        initial_metrics=before, orientation_rule=labeler.orientation_rule,
    )
    metadata_path = write_run_metadata_json(
        report_dir, args.run_name, args.problem, args.sweeps, args.seed,
        max_move=args.max_move, max_angle=args.max_angle,
    )
    for p in (placements_path, metadata_path):
        print(p)
    return 0


if __name__ == "__main__":
    sys.exit(main())
