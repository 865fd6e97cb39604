# qstatelab/statistical.py
"""
Discrimination of the non-orthogonal pair |0⟩, |+⟩ with equal priors.

No measurement separates the pair perfectly. The minimum-error strategy
always answers and is right with probability cos²(π/8) ≈ 0.854; the
unambiguous strategy never errs but may answer INCONCLUSIVE.
"""
from __future__ import annotations

import math

from qstatelab.quantum_backend import QuantumGate, QuantumState, ancillas

INCONCLUSIVE = -1

# |0⟩ and |+⟩ sit at RY angles 0 and π/2; their bisector is at π/4
BISECTOR_ANGLE = math.pi / 4

# Filter rotation on the ancilla: cos(β/2) = tan(π/8)
USD_FILTER_ANGLE = 2.0 * math.acos(math.tan(math.pi / 8))


def is_qubit_plus_or_zero(state: QuantumState, q: int) -> bool:
    """
    Minimum-error guess: True for |+⟩, False for |0⟩.

    RY(π/4) moves the pair to RY angles π/4 and 3π/4, symmetric about the
    equator, so a Z measurement is the Helstrom measurement.
    """
    state.apply_gate(QuantumGate.RY, [q], [BISECTOR_ANGLE])
    return state.measure(q) == 1


def is_qubit_plus_zero_or_inconclusive(state: QuantumState, q: int) -> int:
    """
    Unambiguous discrimination: |0⟩ -> 0, |+⟩ -> 1, or INCONCLUSIVE (-1).

    RY(-π/4) maps the pair to cos(π/8)|0⟩ ∓ sin(π/8)|1⟩. An ancilla
    rotation controlled on the register being |0⟩ scales the |0⟩ component
    by tan(π/8); on the ancilla-|0⟩ branch the pair becomes |-⟩ and |+⟩,
    which an X measurement separates exactly. The ancilla-|1⟩ branch holds
    the same state for both inputs and is reported as INCONCLUSIVE, with
    probability 1/√2.
    """
    state.apply_gate(QuantumGate.RY, [q], [-BISECTOR_ANGLE])

    with ancillas(state, 1) as (anc,):
        state.apply_gate(QuantumGate.X, [q])
        state.apply_controlled_gate(QuantumGate.RY, [q], anc, [USD_FILTER_ANGLE])
        state.apply_gate(QuantumGate.X, [q])

        if state.measure(anc) == 1:
            return INCONCLUSIVE

    state.apply_gate(QuantumGate.H, [q])
    return 1 if state.measure(q) == 0 else 0
