"""Run orchestration for architect-linter."""

from engine.runner import RunResult, check_one, print_violation, run

__all__ = ["RunResult", "check_one", "print_violation", "run"]
