# qstatelab/qiskit_backend.py
from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np
from qiskit.circuit import Gate
from qiskit.circuit.library import (
    CXGate,
    CYGate,
    CZGate,
    HGate,
    RXGate,
    RYGate,
    RZGate,
    SdgGate,
    SGate,
    SwapGate,
    XGate,
    YGate,
    ZGate,
)
from qiskit.quantum_info import Statevector

from qstatelab.quantum_backend import (
    ROTATION_GATES,
    SINGLE_QUBIT_GATES,
    QuantumBackend,
    QuantumGate,
    QuantumState,
    rotation_angle,
    to_gate,
)

_FIXED = {
    QuantumGate.X: XGate,
    QuantumGate.Y: YGate,
    QuantumGate.Z: ZGate,
    QuantumGate.H: HGate,
    QuantumGate.S: SGate,
    QuantumGate.Sdg: SdgGate,
    QuantumGate.CX: CXGate,
    QuantumGate.CY: CYGate,
    QuantumGate.CZ: CZGate,
    QuantumGate.SWAP: SwapGate,
}

_ROTATIONS = {
    QuantumGate.RX: RXGate,
    QuantumGate.RY: RYGate,
    QuantumGate.RZ: RZGate,
}


def _qiskit_gate(gate: QuantumGate, params: Optional[Sequence[float]]) -> Gate:
    if gate in _ROTATIONS:
        return _ROTATIONS[gate](rotation_angle(gate, params))
    return _FIXED[gate]()


class QiskitState(QuantumState):
    """
    Dense state-vector implementation using Qiskit's `Statevector`.

    Qiskit is little-endian: wire 0 is the least significant bit of the
    amplitude index, which is also the convention of `amplitudes()`.
    """

    AMPLITUDE_TOLERANCE = 1e-9

    def __init__(self, n_qubits: int):
        super().__init__(n_qubits)
        self._init_state()

    def _init_state(self) -> None:
        """Initialize the state vector to |0...0⟩."""
        self.state = Statevector.from_label("0" * self.n)

    def _evolve(self, gate: Gate, qargs: List[int]) -> None:
        self.state = self.state.evolve(gate, qargs)

    def _grow(self, count: int) -> None:
        # new wires become the most significant ones
        self.state = Statevector.from_label("0" * count).tensor(self.state)

    # ---------- public API ----------

    def reset(self, idx: Optional[int] = None) -> None:
        """Reset one wire (or the whole state) to |0⟩."""
        if idx is None:
            self._init_state()
            return
        self.state = self.state.reset([idx])

    def amplitudes(self) -> np.ndarray:
        return np.asarray(self.state.data, dtype=complex)

    def measure(self, idx: int) -> int:
        """
        Perform a projective Z measurement on qubit `idx`.

        Parameters
        ----------
        idx : int
            Index of the qubit to measure.

        Returns
        -------
        int
            The measurement outcome (0 or 1).
        """
        outcome, self.state = self.state.measure([idx])
        return int(outcome)

    def apply_gate(
        self, gate: QuantumGate | str, targets: List[int], params: Optional[Sequence[float]] = None
    ) -> None:
        """
        Apply a supported gate.

        Parameters
        ----------
        gate : QuantumGate | str
            The gate to apply. Can be passed as a QuantumGate enum or as a string
            (e.g. "X", "RY").
        targets : list[int]
            Indices of the target qubits.
        params : Sequence[float], optional
            Rotation angle for RX/RY/RZ.

        Raises
        ------
        ValueError
            If the gate is unsupported or applied to the wrong number of qubits.
        """
        gate_enum = to_gate(gate)
        op = _qiskit_gate(gate_enum, params)

        if gate_enum in SINGLE_QUBIT_GATES or gate_enum in ROTATION_GATES:
            for t in targets:
                self._evolve(op, [t])
            return

        if op.num_qubits != len(targets):
            raise ValueError(f"Gate {gate_enum} expects {op.num_qubits} qubits, got {len(targets)}")
        self._evolve(op, list(targets))

    def apply_controlled_gate(
        self,
        gate: QuantumGate | str,
        controls: List[int],
        target: int,
        params: Optional[Sequence[float]] = None,
    ) -> None:
        """
        Apply a single-qubit gate to `target`, conditioned on all `controls`.

        An empty control list applies the bare gate.
        """
        gate_enum = to_gate(gate)
        if gate_enum not in SINGLE_QUBIT_GATES and gate_enum not in ROTATION_GATES:
            raise ValueError(f"Only single-qubit gates can be controlled, got {gate_enum}")
        if target in controls:
            raise ValueError(f"Target {target} is also a control")

        op = _qiskit_gate(gate_enum, params)
        if controls:
            op = op.control(len(controls))
        self._evolve(op, list(controls) + [target])


class QiskitBackend(QuantumBackend):
    """
    Qiskit state-vector backend.
    """

    def generate_state(self, n_qubits: int) -> QuantumState:
        """Initialize a fresh state with `n_qubits`."""
        return QiskitState(n_qubits)
