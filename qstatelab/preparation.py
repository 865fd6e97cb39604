# qstatelab/preparation.py
"""
Unitary state preparation on a register that starts in |0...0⟩.

Kets are written in register order, |q0 q1 ...⟩. Every routine leaves the
register in its target state up to a global phase and performs no
measurement.
"""
from __future__ import annotations

import math
from typing import List, Sequence

from qstatelab.quantum_backend import QuantumGate, QuantumState


def _check_bits(qs: Sequence[int], bits: Sequence[bool], name: str = "bits") -> None:
    if len(bits) != len(qs):
        raise ValueError(f"{name} has length {len(bits)}, register has {len(qs)} qubits")


# ---------- single qubit ----------

def plus_state(state: QuantumState, q: int) -> None:
    """|0⟩ -> |+⟩."""
    state.apply_gate(QuantumGate.H, [q])


def minus_state(state: QuantumState, q: int) -> None:
    """|0⟩ -> |-⟩."""
    state.apply_gate(QuantumGate.X, [q])
    state.apply_gate(QuantumGate.H, [q])


def unequal_superposition(state: QuantumState, q: int, alpha: float) -> None:
    """|0⟩ -> cos(alpha)|0⟩ + sin(alpha)|1⟩."""
    state.apply_gate(QuantumGate.RY, [q], [2.0 * alpha])


# ---------- product states ----------

def basis_state(state: QuantumState, qs: List[int], bits: Sequence[bool]) -> None:
    """|0...0⟩ -> |bits⟩."""
    _check_bits(qs, bits)
    flips = [q for q, b in zip(qs, bits) if b]
    if flips:
        state.apply_gate(QuantumGate.X, flips)


def all_basis_vectors_superposition(state: QuantumState, qs: List[int]) -> None:
    """
    Equal superposition of all 2^N basis vectors.

    The target is |+⟩ on every wire, so one H per qubit suffices.
    """
    state.apply_gate(QuantumGate.H, qs)


def all_basis_vectors_with_phases_two_qubits(state: QuantumState, qs: List[int]) -> None:
    """
    Prepare (|00⟩ + i|01⟩ - |10⟩ - i|11⟩) / 2.

    The amplitudes factor as |-⟩ ⊗ (|0⟩ + i|1⟩)/√2.
    """
    if len(qs) != 2:
        raise ValueError("Expected a two-qubit register")
    state.apply_gate(QuantumGate.H, [qs[0]])
    state.apply_gate(QuantumGate.Z, [qs[0]])
    state.apply_gate(QuantumGate.H, [qs[1]])
    state.apply_gate(QuantumGate.S, [qs[1]])


def even_odd_numbers_superposition(state: QuantumState, qs: List[int], is_even: bool) -> None:
    """
    Equal superposition of all even (or all odd) integers in [0, 2^N).

    Integers are read with qs[0] as the most significant bit, so the
    parity lives on the last wire.
    """
    state.apply_gate(QuantumGate.H, qs[:-1])
    if not is_even:
        state.apply_gate(QuantumGate.X, [qs[-1]])


# ---------- Bell / GHZ ----------

def bell_state(state: QuantumState, qs: List[int]) -> None:
    """|Φ+⟩ = (|00⟩ + |11⟩)/√2."""
    all_bell_states(state, qs, 0)


def all_bell_states(state: QuantumState, qs: List[int], index: int) -> None:
    """
    Prepare one of the four Bell states.

    Parameters
    ----------
    state : QuantumState
        Backend state holding the register.
    qs : list[int]
        Two-qubit register.
    index : int
        0: |Φ+⟩, 1: |Φ-⟩, 2: |Ψ+⟩, 3: |Ψ-⟩. Bit 1 selects Ψ, bit 0 the
        minus sign.
    """
    if len(qs) != 2:
        raise ValueError("Expected a two-qubit register")
    if not 0 <= index <= 3:
        raise ValueError(f"Bell state index must be in 0..3, got {index}")

    state.apply_gate(QuantumGate.H, [qs[0]])
    state.apply_gate(QuantumGate.CX, [qs[0], qs[1]])
    if index & 2:
        state.apply_gate(QuantumGate.X, [qs[1]])
    if index & 1:
        state.apply_gate(QuantumGate.Z, [qs[0]])


def ghz_state(state: QuantumState, qs: List[int]) -> None:
    """(|0...0⟩ + |1...1⟩)/√2 via H on qs[0] and a CX fan-out."""
    state.apply_gate(QuantumGate.H, [qs[0]])
    for q in qs[1:]:
        state.apply_gate(QuantumGate.CX, [qs[0], q])


# ---------- bitstring superpositions ----------

def zero_and_bitstring_superposition(state: QuantumState, qs: List[int], bits: Sequence[bool]) -> None:
    """
    Prepare (|0...0⟩ + |bits⟩)/√2.

    Requires bits[0] to be set: qs[0] is the branch qubit and every other
    set bit copies it.
    """
    _check_bits(qs, bits)
    if not bits[0]:
        raise ValueError("bits[0] must be True")

    state.apply_gate(QuantumGate.H, [qs[0]])
    for q, b in zip(qs[1:], bits[1:]):
        if b:
            state.apply_gate(QuantumGate.CX, [qs[0], q])


def two_bitstring_superposition(
    state: QuantumState, qs: List[int], bits1: Sequence[bool], bits2: Sequence[bool]
) -> None:
    """
    Prepare (|bits1⟩ + |bits2⟩)/√2 for two distinct bitstrings.

    The first index where the bitstrings differ is the pivot; H on the
    pivot opens the two branches. Every other differing index copies the
    pivot with a CX, followed by an X when it must hold the opposite value.
    Shared ones get an unconditional X and shared zeros are left alone.

    Raises
    ------
    ValueError
        If the lengths do not match the register or the bitstrings are equal.
    """
    _check_bits(qs, bits1, "bits1")
    _check_bits(qs, bits2, "bits2")
    diff = [i for i in range(len(qs)) if bool(bits1[i]) != bool(bits2[i])]
    if not diff:
        raise ValueError("bits1 and bits2 must differ in at least one position")

    pivot = diff[0]
    state.apply_gate(QuantumGate.H, [qs[pivot]])
    for i, q in enumerate(qs):
        if i == pivot:
            continue
        if bool(bits1[i]) == bool(bits2[i]):
            if bits1[i]:
                state.apply_gate(QuantumGate.X, [q])
            continue
        state.apply_gate(QuantumGate.CX, [qs[pivot], q])
        if bool(bits1[i]) != bool(bits1[pivot]):
            state.apply_gate(QuantumGate.X, [q])


# ---------- W states ----------

def w_state_arbitrary(state: QuantumState, qs: List[int]) -> None:
    """
    Prepare the N-qubit W state (|10...0⟩ + |01...0⟩ + ... + |0...01⟩)/√N.

    Iterative cascade: qubit i receives the excitation with amplitude
    1/√(N-i) of whatever weight is still on the all-zero prefix. The
    "all previous qubits are 0" condition is turned into an all-ones control
    by flipping the prefix around a multi-controlled RY.
    """
    n = len(qs)
    if n == 0:
        raise ValueError("Register must not be empty")

    state.apply_gate(QuantumGate.RY, [qs[0]], [2.0 * math.asin(1.0 / math.sqrt(n))])
    for i in range(1, n):
        prefix = qs[:i]
        # remaining unplaced weight on the zero prefix is (N-i)/N
        theta = 2.0 * math.asin(1.0 / math.sqrt(n - i))
        state.apply_gate(QuantumGate.X, prefix)
        state.apply_controlled_gate(QuantumGate.RY, prefix, qs[i], [theta])
        state.apply_gate(QuantumGate.X, prefix)


def w_state_power_of_two(state: QuantumState, qs: List[int]) -> None:
    """W state on N = 2^k qubits."""
    n = len(qs)
    if n == 0 or n & (n - 1):
        raise ValueError(f"Register size must be a power of two, got {n}")
    w_state_arbitrary(state, qs)
