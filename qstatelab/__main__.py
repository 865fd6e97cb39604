# qstatelab/__main__.py
from __future__ import annotations

import numpy as np
import typer

from qstatelab.families import PREPARATIONS, get_preparation, get_task
from qstatelab.logging_config import setup_logging
from qstatelab.qiskit_backend import QiskitBackend
from qstatelab.quantum_backend import QuantumBackend
from qstatelab.report import render_amplitudes, render_stats, render_tasks
from qstatelab.settings import get_settings
from qstatelab.stim_backend import StimBackend
from qstatelab.trials import prepare, run_trials

# Initialize logging once
setup_logging()

app = typer.Typer(help="Quantum state preparation and discrimination CLI")


def _backend(name: str | None) -> tuple[str, QuantumBackend]:
    chosen = (name or get_settings().BACKEND).strip().lower()
    if chosen == "stim":
        return chosen, StimBackend()
    if chosen == "qiskit":
        return chosen, QiskitBackend()
    raise typer.BadParameter("Invalid backend, choose 'stim' or 'qiskit'")


@app.command("prepare")
def prepare_cmd(
    name: str = typer.Argument(..., help=f"One of: {', '.join(PREPARATIONS)}"),
    n: int | None = typer.Option(None, help="Register size (sized preparations only)"),
    backend: str | None = typer.Option(None, help="Backend: stim or qiskit"),
):
    """
    Prepare a named state on a fresh register and print its amplitudes.
    """
    chosen, be = _backend(backend)
    try:
        task = get_preparation(name)
    except ValueError as e:
        raise typer.BadParameter(str(e))
    if chosen == "stim" and not task.clifford:
        raise typer.BadParameter(f"{name} needs non-Clifford rotations; use --backend qiskit")

    try:
        state = prepare(be, task, n)
    except ValueError as e:
        raise typer.BadParameter(str(e))
    render_amplitudes(state)


@app.command()
def trials(
    task: str = typer.Argument(..., help="Discrimination task name (see `tasks`)"),
    trials: int | None = typer.Option(None, help="Number of trials (default: settings.TRIALS)"),
    seed: int | None = typer.Option(None, help="Seed for the hidden choices"),
    backend: str | None = typer.Option(None, help="Backend: stim or qiskit"),
):
    """
    Run hidden-choice trials for a discrimination task and print accuracy.
    """
    settings = get_settings()
    chosen, be = _backend(backend)
    try:
        dtask = get_task(task)
    except ValueError as e:
        raise typer.BadParameter(str(e))
    if chosen == "stim" and not dtask.clifford:
        raise typer.BadParameter(f"{task} needs non-Clifford rotations; use --backend qiskit")

    rng = np.random.default_rng(seed if seed is not None else settings.SEED)
    count = trials if trials is not None else settings.TRIALS
    if count < 1:
        raise typer.BadParameter("--trials must be positive")
    stats = run_trials(be, dtask, count, rng=rng)
    render_stats(stats, dtask)


@app.command()
def tasks():
    """List the registered discrimination tasks."""
    render_tasks()


if __name__ == "__main__":
    app()
