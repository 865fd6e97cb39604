# qstatelab/report.py
from __future__ import annotations

import numpy as np
from rich.console import Console
from rich.table import Table
from rich.text import Text

from qstatelab.families import DiscriminationTask, TASKS
from qstatelab.kets import ket_label
from qstatelab.quantum_backend import QuantumState
from qstatelab.trials import TrialStats

console = Console()


# ---------- Coloring helper for probabilities ----------
def prob_style(p: float) -> str:
    v = min(max(p, 0.0), 1.0)
    g = int(255 * v)
    return f"rgb({255 - g},{g},0)"


def render_amplitudes(state: QuantumState, *, cutoff: float = 1e-9, prec: int = 4) -> None:
    """Print the non-negligible amplitudes of `state`."""
    amps = state.amplitudes()
    table = Table(show_header=True, header_style="bold cyan", box=None, padding=(0, 1))
    table.add_column("ket", justify="left")
    table.add_column("amplitude", justify="right")
    table.add_column("probability", justify="right")

    for idx in np.flatnonzero(np.abs(amps) > cutoff):
        a = complex(amps[idx])
        p = abs(a) ** 2
        table.add_row(
            ket_label(int(idx), state.n),
            f"{a.real:+.{prec}f}{a.imag:+.{prec}f}i",
            Text(f"{p:.{prec}f}", style=prob_style(p)),
        )
    console.print(table)


def render_stats(stats: TrialStats, task: DiscriminationTask) -> None:
    """Print accuracy figures for one batch of trials."""
    kind = "exact" if task.exact else "statistical"
    console.print(f"[bold magenta]{task.name}[/bold magenta] ({kind}): {task.description}\n")

    table = Table(show_header=True, header_style="bold cyan", box=None, padding=(0, 1))
    table.add_column("metric")
    table.add_column("value", justify="right")
    table.add_row("trials", str(stats.trials))
    table.add_row("accuracy", Text(f"{stats.accuracy:.4f}", style=prob_style(stats.accuracy)))
    table.add_row("errors", Text(str(stats.wrong), style="bold red" if stats.wrong else "green"))
    table.add_row("inconclusive", f"{stats.inconclusive_rate:.4f}")
    for label in sorted(set(task.expected)):
        table.add_row(f"correct '{label}'", f"{stats.conclusive_rate(label):.4f}")
    console.print(table)


def render_tasks() -> None:
    table = Table(show_header=True, header_style="bold cyan", box=None, padding=(0, 1))
    table.add_column("task")
    table.add_column("qubits", justify="right")
    table.add_column("kind")
    table.add_column("stim")
    table.add_column("family")
    for task in TASKS.values():
        table.add_row(
            task.name,
            str(task.n_qubits),
            "exact" if task.exact else "statistical",
            "yes" if task.clifford else "no",
            task.description,
        )
    console.print(table)
