# qstatelab/quantum_backend.py
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from enum import StrEnum
from typing import Iterator, List, Optional, Sequence

import numpy as np

log = logging.getLogger("qstatelab.backend")


class QuantumGate(StrEnum):
    """
    Backend-agnostic gate vocabulary
    """

    # Single-qubit
    X = "X"
    Y = "Y"
    Z = "Z"
    H = "H"
    S = "S"
    Sdg = "Sdg"

    # Parametric rotations (one angle, radians)
    RX = "RX"
    RY = "RY"
    RZ = "RZ"

    # Two-qubit
    CX = "CX"
    CY = "CY"
    CZ = "CZ"
    SWAP = "SWAP"


SINGLE_QUBIT_GATES = frozenset(
    {QuantumGate.X, QuantumGate.Y, QuantumGate.Z, QuantumGate.H, QuantumGate.S, QuantumGate.Sdg}
)
ROTATION_GATES = frozenset({QuantumGate.RX, QuantumGate.RY, QuantumGate.RZ})
TWO_QUBIT_GATES = frozenset({QuantumGate.CX, QuantumGate.CY, QuantumGate.CZ, QuantumGate.SWAP})


def to_gate(gate: QuantumGate | str) -> QuantumGate:
    """Normalize a gate name or enum to `QuantumGate`."""
    if isinstance(gate, QuantumGate):
        return gate
    try:
        return QuantumGate[gate]
    except KeyError:
        raise ValueError(f"Unsupported gate string: {gate}")


def rotation_angle(gate: QuantumGate, params: Optional[Sequence[float]]) -> float:
    """Return the single angle parameter of a rotation gate."""
    if not params or len(params) != 1:
        raise ValueError(f"Gate {gate} expects exactly one angle parameter, got {params!r}")
    return float(params[0])


class QuantumState(ABC):
    """
    Runtime handle on a qubit register held by a backend.

    Wires are plain integer indices. Wires handed out by `allocate_ancilla`
    live in the same state as the register and are recycled through a pool
    once released.
    """

    #: absolute tolerance for amplitude comparisons on this backend
    AMPLITUDE_TOLERANCE: float = 1e-9

    def __init__(self, n_qubits: int):
        if n_qubits < 1:
            raise ValueError("A state needs at least one qubit")
        self.n = n_qubits
        self._free: List[int] = []

    # ---------- gates ----------

    @abstractmethod
    def apply_gate(
        self, gate: QuantumGate | str, targets: List[int], params: Optional[Sequence[float]] = None
    ) -> None:
        """
        Apply a named gate. Single-qubit gates and rotations are applied to
        every target; two-qubit gates take exactly two targets.
        """
        ...

    @abstractmethod
    def apply_controlled_gate(
        self,
        gate: QuantumGate | str,
        controls: List[int],
        target: int,
        params: Optional[Sequence[float]] = None,
    ) -> None:
        """Apply a single-qubit gate to `target` if every control is |1⟩."""
        ...

    # ---------- measurement ----------

    @abstractmethod
    def measure(self, idx: int) -> int:
        """Projectively measure qubit `idx` in the Z basis and return 0/1."""
        ...

    @abstractmethod
    def reset(self, idx: Optional[int] = None) -> None:
        """Reset qubit `idx` to |0⟩, or every wire when `idx` is None."""
        ...

    @abstractmethod
    def amplitudes(self) -> np.ndarray:
        """Return the little-endian amplitude vector over all wires."""
        ...

    @abstractmethod
    def _grow(self, count: int) -> None:
        """Append `count` fresh wires in |0⟩ to the state."""
        ...

    # ---------- ancillas ----------

    def allocate_ancilla(self, count: int) -> List[int]:
        """
        Hand out `count` wires in |0⟩.

        Released wires are reused first; the state grows only when the
        pool runs dry.
        """
        if count < 0:
            raise ValueError("Ancilla count must be non-negative")
        out: List[int] = []
        while self._free and len(out) < count:
            out.append(self._free.pop())
        missing = count - len(out)
        if missing:
            start = self.n
            self._grow(missing)
            self.n += missing
            out.extend(range(start, start + missing))
        log.debug("allocated ancillas %s (n=%d)", out, self.n)
        return out

    def release_ancilla(self, qubits: Sequence[int]) -> None:
        """Reset `qubits` to |0⟩ and return them to the pool."""
        qubits = list(qubits)
        for q in qubits:
            if q in self._free or qubits.count(q) > 1:
                raise ValueError(f"Ancilla {q} released twice")
            if not self.n > q >= 0:
                raise ValueError(f"Ancilla {q} is not a wire of this state")
        for q in qubits:
            self.reset(q)
            self._free.append(q)
        log.debug("released ancillas %s", list(qubits))


@contextmanager
def ancillas(state: QuantumState, count: int) -> Iterator[List[int]]:
    """Borrow `count` ancillas for the duration of a `with` block."""
    qs = state.allocate_ancilla(count)
    try:
        yield qs
    finally:
        state.release_ancilla(qs)


class QuantumBackend(ABC):
    """Factory that creates a fresh register state for n qubits."""

    @abstractmethod
    def generate_state(self, n_qubits: int) -> QuantumState:
        """Create a new state with `n_qubits` wires in |0...0⟩."""
        ...
