# qstatelab/trials.py
"""
Repeated hidden-choice trials for the discrimination routines.

Each trial draws a candidate uniformly at random, prepares it on a fresh
backend state, hands the register to the routine and scores the label it
returns. Statistical accuracy contracts are checked on the aggregate.
"""
from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from qstatelab.families import DiscriminationTask, PreparationTask
from qstatelab.quantum_backend import QuantumBackend, QuantumState
from qstatelab.statistical import INCONCLUSIVE

log = logging.getLogger("qstatelab.trials")


@dataclass
class TrialStats:
    """
    Aggregated outcome of a batch of trials.

    Attributes
    ----------
    task : str
        Name of the task that was run.
    expected : tuple[int, ...]
        Correct label per candidate index.
    confusion : Counter[tuple[int, int]]
        Counts of (candidate index, returned label).
    """
    task: str
    expected: tuple[int, ...]
    confusion: Counter = field(default_factory=Counter)

    def record(self, truth: int, result: int) -> None:
        self.confusion[(truth, result)] += 1

    @property
    def trials(self) -> int:
        return sum(self.confusion.values())

    @property
    def correct(self) -> int:
        return sum(n for (t, r), n in self.confusion.items() if r == self.expected[t])

    @property
    def inconclusive(self) -> int:
        return sum(n for (_, r), n in self.confusion.items() if r == INCONCLUSIVE)

    @property
    def wrong(self) -> int:
        return self.trials - self.correct - self.inconclusive

    def _rate(self, count: int) -> float:
        return count / self.trials if self.trials else 0.0

    @property
    def accuracy(self) -> float:
        return self._rate(self.correct)

    @property
    def error_rate(self) -> float:
        return self._rate(self.wrong)

    @property
    def inconclusive_rate(self) -> float:
        return self._rate(self.inconclusive)

    def conclusive_rate(self, label: int) -> float:
        """Fraction of all trials that correctly returned `label`."""
        hits = sum(
            n for (t, r), n in self.confusion.items() if r == label and self.expected[t] == label
        )
        return self._rate(hits)


def run_trials(
    backend: QuantumBackend,
    task: DiscriminationTask,
    trials: int,
    *,
    rng: Optional[np.random.Generator] = None,
) -> TrialStats:
    """
    Run `trials` hidden-choice rounds of `task` on `backend`.

    Parameters
    ----------
    backend : QuantumBackend
        Factory for a fresh state per trial.
    task : DiscriminationTask
        Candidate family and routine under test.
    trials : int
        Number of rounds.
    rng : numpy.random.Generator, optional
        Source of the hidden choices.

    Returns
    -------
    TrialStats
        Confusion counts and derived rates.
    """
    if trials < 1:
        raise ValueError("trials must be positive")
    rng = rng if rng is not None else np.random.default_rng()

    stats = TrialStats(task=task.name, expected=task.expected)
    qs = list(range(task.n_qubits))
    for _ in range(trials):
        k = int(rng.integers(len(task.candidates)))
        state = backend.generate_state(task.n_qubits)
        task.candidates[k](state, qs)
        stats.record(k, int(task.discriminate(state, qs)))

    log.info(
        "%s: %d trials, accuracy=%.4f, errors=%d, inconclusive=%d",
        task.name, stats.trials, stats.accuracy, stats.wrong, stats.inconclusive,
    )
    return stats


def prepare(backend: QuantumBackend, task: PreparationTask, n_qubits: Optional[int] = None) -> QuantumState:
    """Run a preparation on a fresh register and return the state."""
    n = n_qubits if n_qubits is not None else task.default_n
    if n != task.default_n and not task.sized:
        raise ValueError(f"{task.name} is defined for {task.default_n} qubits only")
    state = backend.generate_state(n)
    task.prepare(state, list(range(n)))
    return state
