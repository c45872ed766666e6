# maplabel/core/schedule.py
"""
Linear cooling: T drops by T_initial / nsweeps after every sweep.
"""

from __future__ import annotations


def cooling_step(current_t: float, initial_t: float, nsweeps: int) -> float:
    return current_t - (initial_t / nsweeps)
