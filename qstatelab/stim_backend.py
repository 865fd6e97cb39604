# qstatelab/stim_backend.py
from __future__ import annotations

import math
from typing import List, Optional, Sequence

import numpy as np
import stim

from qstatelab.quantum_backend import (
    ROTATION_GATES,
    QuantumBackend,
    QuantumGate,
    QuantumState,
    rotation_angle,
    to_gate,
)

# Quarter turns (angle / (pi/2) mod 4) -> Stim op, equal up to global phase
_QUARTER_TURNS = {
    QuantumGate.RX: {0: None, 1: "SQRT_X", 2: "X", 3: "SQRT_X_DAG"},
    QuantumGate.RY: {0: None, 1: "SQRT_Y", 2: "Y", 3: "SQRT_Y_DAG"},
    QuantumGate.RZ: {0: None, 1: "S", 2: "Z", 3: "S_DAG"},
}

_ONE_QUBIT = {
    QuantumGate.X: "X",
    QuantumGate.Y: "Y",
    QuantumGate.Z: "Z",
    QuantumGate.H: "H",
    QuantumGate.S: "S",
    QuantumGate.Sdg: "S_DAG",
}

_TWO_QUBIT = {
    QuantumGate.CX: "CX",
    QuantumGate.CY: "CY",
    QuantumGate.CZ: "CZ",
    QuantumGate.SWAP: "SWAP",
}

_CONTROLLED = {
    QuantumGate.X: "CX",
    QuantumGate.Y: "CY",
    QuantumGate.Z: "CZ",
}


def _clifford_rotation(gate: QuantumGate, angle: float) -> Optional[str]:
    """Map a rotation to a Stim op, or raise if the angle is not Clifford."""
    turns = angle / (math.pi / 2)
    k = round(turns)
    if abs(turns - k) > 1e-9:
        raise ValueError(f"Stim backend only supports Clifford rotations, got {gate}({angle})")
    return _QUARTER_TURNS[gate][k % 4]


class StimState(QuantumState):
    """
    Stim-based stabilizer simulation backend.

    Restricted to Clifford operations; amplitudes are single precision.
    """

    AMPLITUDE_TOLERANCE = 1e-6

    def __init__(self, n_qubits: int):
        super().__init__(n_qubits)
        self._init_state()

    # ---------- internal helpers ----------

    def _init_state(self) -> None:
        """Initialize tableau to |0>^n."""
        self.tab = stim.TableauSimulator()
        self.tab.set_num_qubits(self.n)

    def _do1(self, opname: str, t: int) -> None:
        """Apply a single-qubit op by name to target index."""
        self.tab.do(stim.Circuit(f"{opname} {t}"))

    def _do2(self, opname: str, t0: int, t1: int) -> None:
        """Apply a two-qubit op by name to (t0, t1)."""
        self.tab.do(stim.Circuit(f"{opname} {t0} {t1}"))

    def _grow(self, count: int) -> None:
        self.tab.set_num_qubits(self.n + count)

    # ---------- public API ----------

    def reset(self, idx: Optional[int] = None) -> None:
        """Reset one wire (or all of them) to |0>."""
        if idx is None:
            self._init_state()
            return
        self.tab.reset(idx)

    def amplitudes(self) -> np.ndarray:
        return np.asarray(self.tab.state_vector(endian="little"), dtype=complex)

    def measure(self, idx: int) -> int:
        return int(self.tab.measure(idx))

    def apply_gate(
        self, gate: QuantumGate | str, targets: List[int], params: Optional[Sequence[float]] = None
    ) -> None:
        """
        Apply a supported Clifford gate.

        Parameters
        ----------
        gate : QuantumGate | str
            Gate name or QuantumGate enum.
        targets : list[int]
            Target indices.
        params : Sequence[float], optional
            Rotation angle; must be a multiple of pi/2.
        """
        gate_enum = to_gate(gate)

        if gate_enum in _ONE_QUBIT:
            for t in targets:
                self._do1(_ONE_QUBIT[gate_enum], t)
            return

        if gate_enum in ROTATION_GATES:
            opname = _clifford_rotation(gate_enum, rotation_angle(gate_enum, params))
            if opname is None:
                return
            for t in targets:
                self._do1(opname, t)
            return

        if gate_enum in _TWO_QUBIT:
            if len(targets) != 2:
                raise ValueError(f"{gate_enum} expects 2 targets")
            self._do2(_TWO_QUBIT[gate_enum], targets[0], targets[1])
            return

        raise ValueError(f"Unsupported gate for Stim: {gate_enum}")

    def apply_controlled_gate(
        self,
        gate: QuantumGate | str,
        controls: List[int],
        target: int,
        params: Optional[Sequence[float]] = None,
    ) -> None:
        """
        Controlled Paulis with a single control map onto CX/CY/CZ; an empty
        control list applies the bare gate. Everything else is rejected.
        """
        gate_enum = to_gate(gate)
        if not controls:
            self.apply_gate(gate_enum, [target], params)
            return
        if len(controls) != 1 or gate_enum not in _CONTROLLED:
            raise ValueError(
                f"Stim backend cannot apply {gate_enum} with {len(controls)} controls"
            )
        if target == controls[0]:
            raise ValueError(f"Target {target} is also a control")
        self._do2(_CONTROLLED[gate_enum], controls[0], target)


class StimBackend(QuantumBackend):
    """Factory that creates Stim stabilizer states."""

    def generate_state(self, n_qubits: int) -> QuantumState:
        return StimState(n_qubits)
