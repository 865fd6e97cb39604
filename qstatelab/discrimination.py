# qstatelab/discrimination.py
"""
Exact discrimination of orthogonal state families.

Each routine acts on a register holding an unknown member of a known
orthogonal family and returns its label. The register is left in an
unspecified state; ancillas are always handed back to the backend.
"""
from __future__ import annotations

from typing import List, Sequence

from qstatelab.quantum_backend import QuantumGate, QuantumState, ancillas


def measure_all(state: QuantumState, qs: List[int]) -> List[int]:
    """Measure every wire of `qs` in order."""
    return [state.measure(q) for q in qs]


def _first_difference(bits1: Sequence[bool], bits2: Sequence[bool]) -> int:
    for i, (a, b) in enumerate(zip(bits1, bits2)):
        if bool(a) != bool(b):
            return i
    raise ValueError("bits1 and bits2 must differ in at least one position")


# ---------- single qubit ----------

def is_qubit_one(state: QuantumState, q: int) -> bool:
    """|0⟩ -> False, |1⟩ -> True."""
    return state.measure(q) == 1


def is_qubit_plus(state: QuantumState, q: int) -> bool:
    """|+⟩ -> True, |-⟩ -> False."""
    state.apply_gate(QuantumGate.H, [q])
    return state.measure(q) == 0


def is_qubit_a(state: QuantumState, q: int, alpha: float) -> bool:
    """
    Distinguish |A⟩ = cos(a)|0⟩ + sin(a)|1⟩ from |B⟩ = -sin(a)|0⟩ + cos(a)|1⟩.

    |A⟩ = RY(2a)|0⟩, so RY(-2a) maps |A⟩ to |0⟩ and |B⟩ to |1⟩.
    """
    state.apply_gate(QuantumGate.RY, [q], [-2.0 * alpha])
    return state.measure(q) == 0


# ---------- basis states ----------

def zero_zero_or_one_one(state: QuantumState, qs: List[int]) -> int:
    """|00⟩ -> 0, |11⟩ -> 1. One wire decides."""
    if len(qs) != 2:
        raise ValueError("Expected a two-qubit register")
    return state.measure(qs[0])


def basis_state_measurement(state: QuantumState, qs: List[int]) -> int:
    """|00⟩ -> 0, |01⟩ -> 1, |10⟩ -> 2, |11⟩ -> 3."""
    if len(qs) != 2:
        raise ValueError("Expected a two-qubit register")
    m0, m1 = measure_all(state, qs)
    return 2 * m0 + m1


def two_bitstrings_measurement(
    state: QuantumState, qs: List[int], bits1: Sequence[bool], bits2: Sequence[bool]
) -> int:
    """
    |bits1⟩ -> 0, |bits2⟩ -> 1.

    Only the first index where the bitstrings differ is measured.
    """
    if len(bits1) != len(qs) or len(bits2) != len(qs):
        raise ValueError("Bitstrings must match the register length")
    i = _first_difference(bits1, bits2)
    outcome = state.measure(qs[i])
    return 0 if outcome == int(bool(bits1[i])) else 1


# ---------- GHZ / W ----------

def all_zeros_or_w_state(state: QuantumState, qs: List[int]) -> int:
    """
    |0...0⟩ -> 0, W state -> 1.

    The W state always yields exactly one 1, the zero state never does;
    measurement stops at the first 1.
    """
    for q in qs:
        if state.measure(q) == 1:
            return 1
    return 0


def ghz_or_w_state(state: QuantumState, qs: List[int]) -> int:
    """
    GHZ -> 0, W -> 1.

    GHZ outcomes are all equal; W outcomes contain exactly one 1 (N >= 2).
    """
    outcomes = measure_all(state, qs)
    return 0 if len(set(outcomes)) == 1 else 1


# ---------- Bell states ----------

def bell_state_measurement(state: QuantumState, qs: List[int]) -> int:
    """
    Identify a Bell state: |Φ+⟩ -> 0, |Φ-⟩ -> 1, |Ψ+⟩ -> 2, |Ψ-⟩ -> 3.

    Two ancillas pick up the joint parities without collapsing the pair:
    the first collects Z⊗Z (Φ vs Ψ); after H on both wires the second
    collects X⊗X (+ vs -). The code is 2 * zz + xx.
    """
    if len(qs) != 2:
        raise ValueError("Expected a two-qubit register")

    with ancillas(state, 2) as (zz_anc, xx_anc):
        state.apply_gate(QuantumGate.CX, [qs[0], zz_anc])
        state.apply_gate(QuantumGate.CX, [qs[1], zz_anc])

        state.apply_gate(QuantumGate.H, qs)
        state.apply_gate(QuantumGate.CX, [qs[0], xx_anc])
        state.apply_gate(QuantumGate.CX, [qs[1], xx_anc])

        zz = state.measure(zz_anc)
        xx = state.measure(xx_anc)
    return 2 * zz + xx


# ---------- Hadamard-like families ----------

def two_qubit_state(state: QuantumState, qs: List[int]) -> int:
    """
    Distinguish
        S0 = (|00⟩ + |01⟩ + |10⟩ + |11⟩)/2
        S1 = (|00⟩ - |01⟩ + |10⟩ - |11⟩)/2
        S2 = (|00⟩ + |01⟩ - |10⟩ - |11⟩)/2
        S3 = (|00⟩ - |01⟩ - |10⟩ + |11⟩)/2

    S_k = (H ⊗ H)|k⟩, so H on both wires turns the family into basis states.
    """
    if len(qs) != 2:
        raise ValueError("Expected a two-qubit register")
    state.apply_gate(QuantumGate.H, qs)
    m0, m1 = measure_all(state, qs)
    return 2 * m0 + m1


def two_qubit_state_part_two(state: QuantumState, qs: List[int]) -> int:
    """
    Distinguish
        S0 = ( |00⟩ - |01⟩ - |10⟩ - |11⟩)/2
        S1 = (-|00⟩ + |01⟩ - |10⟩ - |11⟩)/2
        S2 = (-|00⟩ - |01⟩ + |10⟩ - |11⟩)/2
        S3 = (-|00⟩ - |01⟩ - |10⟩ + |11⟩)/2

    S_k = |k⟩ - |++⟩ = -R|k⟩ with R = 2|++⟩⟨++| - I, a self-inverse
    reflection. Applying R maps S_k to -|k⟩. R is H⊗H around a sign flip
    of |00⟩, and the flip is X⊗X around CZ (up to global phase).
    """
    if len(qs) != 2:
        raise ValueError("Expected a two-qubit register")
    state.apply_gate(QuantumGate.H, qs)
    state.apply_gate(QuantumGate.X, qs)
    state.apply_gate(QuantumGate.CZ, qs)
    state.apply_gate(QuantumGate.X, qs)
    state.apply_gate(QuantumGate.H, qs)
    m0, m1 = measure_all(state, qs)
    return 2 * m0 + m1
