# qstatelab/families.py
"""
Named candidate families for the discrimination routines, plus the
preparations exposed on the command line.

A `DiscriminationTask` bundles the hidden reference generators (one
preparer per candidate), the routine under test and the label it must
return for each candidate.
"""
from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Callable, Dict, List, Tuple

import numpy as np

from qstatelab import discrimination as disc
from qstatelab import preparation as prep
from qstatelab import statistical as stat
from qstatelab.quantum_backend import QuantumGate, QuantumState

Preparer = Callable[[QuantumState, List[int]], None]
Discriminator = Callable[[QuantumState, List[int]], "int | bool"]


@dataclass(frozen=True)
class DiscriminationTask:
    """
    Attributes
    ----------
    name : str
        Registry key.
    n_qubits : int
        Register size.
    candidates : tuple[Preparer, ...]
        One preparer per candidate state, applied to |0...0⟩.
    discriminate : Discriminator
        Routine under test, called with the full register.
    expected : tuple[int, ...]
        Label the routine must return for each candidate.
    exact : bool
        False for non-orthogonal families with statistical contracts.
    clifford : bool
        True if candidates and routine stay within Clifford operations.
    """
    name: str
    n_qubits: int
    candidates: Tuple[Preparer, ...]
    discriminate: Discriminator
    expected: Tuple[int, ...]
    exact: bool = True
    clifford: bool = True
    description: str = ""


# ---------- single-qubit adapters ----------

def _on_first(fn: Callable[..., object]) -> Callable[[QuantumState, List[int]], object]:
    """Lift a single-qubit routine to a one-wire register."""
    def wrapped(state: QuantumState, qs: List[int], *args, **kwargs):
        return fn(state, qs[0], *args, **kwargs)
    wrapped.__name__ = fn.__name__
    return wrapped


def _zero(state: QuantumState, qs: List[int]) -> None:
    """Leave the register in |0...0⟩."""


def _one(state: QuantumState, qs: List[int]) -> None:
    state.apply_gate(QuantumGate.X, qs)


def _hadamard_family(state: QuantumState, qs: List[int], k: int) -> None:
    """(H ⊗ H)|k⟩ with k read as |q0 q1⟩."""
    prep.basis_state(state, qs, [bool(k & 2), bool(k & 1)])
    state.apply_gate(QuantumGate.H, qs)


def _reflected_family(state: QuantumState, qs: List[int], k: int) -> None:
    """|k⟩ - |++⟩, i.e. (2|++⟩⟨++| - I)|k⟩ up to sign."""
    prep.basis_state(state, qs, [bool(k & 2), bool(k & 1)])
    state.apply_gate(QuantumGate.H, qs)
    state.apply_gate(QuantumGate.X, qs)
    state.apply_gate(QuantumGate.CZ, qs)
    state.apply_gate(QuantumGate.X, qs)
    state.apply_gate(QuantumGate.H, qs)


TWO_BITSTRINGS = ([False, True, False], [False, False, True])
IS_QUBIT_A_ALPHA = np.pi / 5


def _build_tasks() -> Dict[str, DiscriminationTask]:
    two_bits = [
        DiscriminationTask(
            name="basis_state_measurement",
            n_qubits=2,
            candidates=tuple(partial(prep.basis_state, bits=[bool(k & 2), bool(k & 1)]) for k in range(4)),
            discriminate=disc.basis_state_measurement,
            expected=(0, 1, 2, 3),
            description="|00⟩, |01⟩, |10⟩, |11⟩",
        ),
        DiscriminationTask(
            name="zero_zero_or_one_one",
            n_qubits=2,
            candidates=(_zero, _one),
            discriminate=disc.zero_zero_or_one_one,
            expected=(0, 1),
            description="|00⟩ vs |11⟩",
        ),
        DiscriminationTask(
            name="bell_state_measurement",
            n_qubits=2,
            candidates=tuple(partial(prep.all_bell_states, index=k) for k in range(4)),
            discriminate=disc.bell_state_measurement,
            expected=(0, 1, 2, 3),
            description="Φ+, Φ-, Ψ+, Ψ- with two ancillas",
        ),
        DiscriminationTask(
            name="two_qubit_state",
            n_qubits=2,
            candidates=tuple(partial(_hadamard_family, k=k) for k in range(4)),
            discriminate=disc.two_qubit_state,
            expected=(0, 1, 2, 3),
            description="(H⊗H)|k⟩",
        ),
        DiscriminationTask(
            name="two_qubit_state_part_two",
            n_qubits=2,
            candidates=tuple(partial(_reflected_family, k=k) for k in range(4)),
            discriminate=disc.two_qubit_state_part_two,
            expected=(0, 1, 2, 3),
            description="|k⟩ - |++⟩",
        ),
    ]

    single = [
        DiscriminationTask(
            name="is_qubit_one",
            n_qubits=1,
            candidates=(_zero, _one),
            discriminate=_on_first(disc.is_qubit_one),
            expected=(0, 1),
            description="|0⟩ vs |1⟩",
        ),
        DiscriminationTask(
            name="is_qubit_plus",
            n_qubits=1,
            candidates=(_on_first(prep.minus_state), _on_first(prep.plus_state)),
            discriminate=_on_first(disc.is_qubit_plus),
            expected=(0, 1),
            description="|-⟩ vs |+⟩",
        ),
        DiscriminationTask(
            name="is_qubit_a",
            n_qubits=1,
            candidates=(
                partial(_on_first(prep.unequal_superposition), alpha=IS_QUBIT_A_ALPHA + np.pi / 2),
                partial(_on_first(prep.unequal_superposition), alpha=IS_QUBIT_A_ALPHA),
            ),
            discriminate=partial(_on_first(disc.is_qubit_a), alpha=IS_QUBIT_A_ALPHA),
            expected=(0, 1),
            clifford=False,
            description="|B⟩ vs |A⟩ at alpha = π/5",
        ),
    ]

    multi = [
        DiscriminationTask(
            name="two_bitstrings_measurement",
            n_qubits=3,
            candidates=tuple(partial(prep.basis_state, bits=b) for b in TWO_BITSTRINGS),
            discriminate=partial(disc.two_bitstrings_measurement, bits1=TWO_BITSTRINGS[0], bits2=TWO_BITSTRINGS[1]),
            expected=(0, 1),
            description="|010⟩ vs |001⟩",
        ),
        DiscriminationTask(
            name="all_zeros_or_w_state",
            n_qubits=3,
            candidates=(_zero, prep.w_state_arbitrary),
            discriminate=disc.all_zeros_or_w_state,
            expected=(0, 1),
            clifford=False,
            description="|000⟩ vs W3",
        ),
        DiscriminationTask(
            name="ghz_or_w_state",
            n_qubits=3,
            candidates=(prep.ghz_state, prep.w_state_arbitrary),
            discriminate=disc.ghz_or_w_state,
            expected=(0, 1),
            clifford=False,
            description="GHZ3 vs W3",
        ),
    ]

    non_orthogonal = [
        DiscriminationTask(
            name="is_qubit_plus_or_zero",
            n_qubits=1,
            candidates=(_zero, _on_first(prep.plus_state)),
            discriminate=_on_first(stat.is_qubit_plus_or_zero),
            expected=(0, 1),
            exact=False,
            clifford=False,
            description="|0⟩ vs |+⟩, minimum error",
        ),
        DiscriminationTask(
            name="is_qubit_plus_zero_or_inconclusive",
            n_qubits=1,
            candidates=(_zero, _on_first(prep.plus_state)),
            discriminate=_on_first(stat.is_qubit_plus_zero_or_inconclusive),
            expected=(0, 1),
            exact=False,
            clifford=False,
            description="|0⟩ vs |+⟩, unambiguous",
        ),
    ]

    return {t.name: t for t in single + two_bits + multi + non_orthogonal}


TASKS: Dict[str, DiscriminationTask] = _build_tasks()


def get_task(name: str) -> DiscriminationTask:
    try:
        return TASKS[name]
    except KeyError:
        raise ValueError(f"Unknown discrimination task: {name}")


# ---------- preparations ----------

@dataclass(frozen=True)
class PreparationTask:
    """A named preparation; `sized` ones accept any register length."""
    name: str
    prepare: Preparer
    default_n: int
    sized: bool = False
    clifford: bool = True


PREPARATIONS: Dict[str, PreparationTask] = {
    p.name: p
    for p in [
        PreparationTask("plus_state", _on_first(prep.plus_state), 1),
        PreparationTask("minus_state", _on_first(prep.minus_state), 1),
        PreparationTask("all_basis_vectors", prep.all_basis_vectors_superposition, 2, sized=True),
        PreparationTask("all_basis_vectors_with_phases", prep.all_basis_vectors_with_phases_two_qubits, 2),
        PreparationTask("even_numbers", partial(prep.even_odd_numbers_superposition, is_even=True), 3, sized=True),
        PreparationTask("odd_numbers", partial(prep.even_odd_numbers_superposition, is_even=False), 3, sized=True),
        PreparationTask("bell_state", prep.bell_state, 2),
        PreparationTask("ghz_state", prep.ghz_state, 3, sized=True),
        PreparationTask(
            "two_bitstring_superposition",
            partial(prep.two_bitstring_superposition, bits1=[True, False, True], bits2=[True, True, False]),
            3,
        ),
        PreparationTask("w_state", prep.w_state_arbitrary, 3, sized=True, clifford=False),
        PreparationTask("w_state_power_of_two", prep.w_state_power_of_two, 4, sized=True, clifford=False),
    ]
}


def get_preparation(name: str) -> PreparationTask:
    try:
        return PREPARATIONS[name]
    except KeyError:
        raise ValueError(f"Unknown preparation: {name}")
