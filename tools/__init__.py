"""
Tools Package
Utility tools for the DoseKeeper system
"""

from .history_simulator import (
    DEMO_MEDICATIONS,
    simulate_history,
    seed_demo_state,
)


__all__ = [
    "DEMO_MEDICATIONS",
    "simulate_history",
    "seed_demo_state",
]
