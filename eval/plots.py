"""Generate figures for a batch run: queue lengths and service per tick."""

from __future__ import annotations

from pathlib import Path

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt


def plot_queue_lengths(
    history: list[dict[str, int]],
    output_path: str | Path,
) -> Path:
    """Plot urgent/normal queue lengths and served/stale counts per tick."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    ticks = [row["tick"] for row in history]
    fig, (ax_q, ax_s) = plt.subplots(2, 1, sharex=True, figsize=(8, 6))
    ax_q.step(ticks, [row["urgent_waiting"] for row in history], where="post", label="urgent")
    ax_q.step(ticks, [row["normal_waiting"] for row in history], where="post", label="normal")
    ax_q.set_ylabel("Waiting after serve")
    ax_q.set_title("Queue lengths per tick")
    ax_q.legend()

    ax_s.bar(ticks, [row["served"] for row in history], label="served")
    ax_s.bar(
        ticks,
        [row["stale"] for row in history],
        bottom=[row["served"] for row in history],
        label="stale",
        color="tab:red",
    )
    ax_s.set_xlabel("Tick")
    ax_s.set_ylabel("Patients")
    ax_s.legend()

    fig.tight_layout()
    fig.savefig(output_path, dpi=150)
    plt.close(fig)
    return output_path
