"""Evaluation: per-run metrics, seeded batches, plots."""

from eval.metrics import aggregate_metrics, episode_metrics

__all__ = [
    "aggregate_metrics",
    "episode_metrics",
]
