"""DAS/ARR controller for horizontal movement"""
from typing import Any, Dict


class ShiftRepeat:
    """One step on press, then after DAS_MS a step every ARR_MS (0 glides every update)."""

    def __init__(self, config: Dict[str, Any]):
        self.config = config
        self.dir = 0
        self.held_ms = 0.0
        self.since_step_ms = 0.0
        self.did_initial = False

    def update(self, dt_ms: float, left_held: bool, right_held: bool) -> int:
        ndir = (-1 if left_held else 0) + (1 if right_held else 0)
        if ndir != self.dir:
            self.dir = ndir
            self.held_ms = 0.0
            self.since_step_ms = 0.0
            self.did_initial = False
        if self.dir == 0:
            return 0
        self.held_ms += dt_ms
        if not self.did_initial:
            self.did_initial = True
            return self.dir
        if self.held_ms < self.config["DAS_MS"]:
            return 0
        arr = self.config["ARR_MS"]
        if arr == 0:
            return self.dir
        self.since_step_ms += dt_ms
        if self.since_step_ms >= arr:
            self.since_step_ms = 0.0
            return self.dir
        return 0
