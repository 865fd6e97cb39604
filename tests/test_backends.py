import math

import numpy as np
import pytest

from qstatelab.kets import ket, matches_up_to_global_phase
from qstatelab.qiskit_backend import QiskitBackend
from qstatelab.quantum_backend import QuantumBackend, QuantumGate, ancillas
from qstatelab.stim_backend import StimBackend


@pytest.mark.parametrize("Backend", [StimBackend, QiskitBackend])
def test_fresh_state_is_all_zero(Backend: type[QuantumBackend]):
    st = Backend().generate_state(3)
    assert st.n == 3
    assert matches_up_to_global_phase(st.amplitudes(), ket("000"), st.AMPLITUDE_TOLERANCE)


@pytest.mark.parametrize("Backend", [StimBackend, QiskitBackend])
def test_measure_z_eigenstates(Backend: type[QuantumBackend]):
    """
    |0> measured in Z -> 0 deterministically
    X|0>=|1> measured in Z -> 1 deterministically
    """
    st = Backend().generate_state(1)
    assert st.measure(0) == 0

    st.reset()
    st.apply_gate("X", [0])
    assert st.measure(0) == 1
    # collapse is stable
    assert st.measure(0) == 1


@pytest.mark.parametrize("Backend", [StimBackend, QiskitBackend])
def test_single_qubit_gates_broadcast(Backend: type[QuantumBackend]):
    st = Backend().generate_state(3)
    st.apply_gate(QuantumGate.X, [0, 2])
    assert matches_up_to_global_phase(st.amplitudes(), ket("101"), st.AMPLITUDE_TOLERANCE)


@pytest.mark.parametrize("Backend", [StimBackend, QiskitBackend])
def test_wire_order_is_little_endian(Backend: type[QuantumBackend]):
    """Wire i is bit i of the amplitude index."""
    st = Backend().generate_state(2)
    st.apply_gate("X", [1])
    amps = st.amplitudes()
    assert abs(abs(amps[2]) - 1.0) < st.AMPLITUDE_TOLERANCE


@pytest.mark.parametrize("Backend", [StimBackend, QiskitBackend])
def test_reset_single_wire(Backend: type[QuantumBackend]):
    st = Backend().generate_state(2)
    st.apply_gate("X", [0, 1])
    st.reset(1)
    assert st.measure(0) == 1
    assert st.measure(1) == 0


@pytest.mark.parametrize("Backend", [StimBackend, QiskitBackend])
def test_unknown_gate_rejected(Backend: type[QuantumBackend]):
    st = Backend().generate_state(1)
    with pytest.raises(ValueError):
        st.apply_gate("T", [0])


@pytest.mark.parametrize("Backend", [StimBackend, QiskitBackend])
def test_two_qubit_gate_arity(Backend: type[QuantumBackend]):
    st = Backend().generate_state(3)
    with pytest.raises(ValueError):
        st.apply_gate("CX", [0, 1, 2])


@pytest.mark.parametrize("Backend", [StimBackend, QiskitBackend])
def test_rotation_requires_angle(Backend: type[QuantumBackend]):
    st = Backend().generate_state(1)
    with pytest.raises(ValueError):
        st.apply_gate("RY", [0])


@pytest.mark.parametrize("Backend", [StimBackend, QiskitBackend])
def test_quarter_turn_rotation(Backend: type[QuantumBackend]):
    """RY(pi/2)|0> = |+> on both backends."""
    st = Backend().generate_state(1)
    st.apply_gate("RY", [0], [math.pi / 2])
    plus = np.array([1, 1], dtype=complex) / math.sqrt(2)
    assert matches_up_to_global_phase(st.amplitudes(), plus, st.AMPLITUDE_TOLERANCE)


@pytest.mark.parametrize("Backend", [StimBackend, QiskitBackend])
def test_controlled_pauli(Backend: type[QuantumBackend]):
    st = Backend().generate_state(2)
    st.apply_gate("X", [0])
    st.apply_controlled_gate("X", [0], 1)
    assert matches_up_to_global_phase(st.amplitudes(), ket("11"), st.AMPLITUDE_TOLERANCE)


def test_stim_rejects_non_clifford_rotation():
    st = StimBackend().generate_state(1)
    with pytest.raises(ValueError):
        st.apply_gate("RY", [0], [0.3])


def test_stim_rejects_multi_controlled_gate():
    st = StimBackend().generate_state(3)
    with pytest.raises(ValueError):
        st.apply_controlled_gate("X", [0, 1], 2)


def test_qiskit_multi_controlled_rotation():
    st = QiskitBackend().generate_state(3)
    st.apply_gate("X", [0, 1])
    st.apply_controlled_gate("RY", [0, 1], 2, [math.pi])
    assert matches_up_to_global_phase(st.amplitudes(), ket("111"))


def test_qiskit_controlled_target_overlap_rejected():
    st = QiskitBackend().generate_state(2)
    with pytest.raises(ValueError):
        st.apply_controlled_gate("X", [0, 1], 1)


@pytest.mark.parametrize("Backend", [StimBackend, QiskitBackend])
def test_ancilla_grows_state_then_recycles(Backend: type[QuantumBackend]):
    st = Backend().generate_state(2)
    a = st.allocate_ancilla(2)
    assert a == [2, 3]
    assert st.n == 4

    st.apply_gate("X", a)
    st.release_ancilla(a)
    again = st.allocate_ancilla(2)
    assert sorted(again) == [2, 3]
    assert st.n == 4
    assert [st.measure(q) for q in again] == [0, 0]


@pytest.mark.parametrize("Backend", [StimBackend, QiskitBackend])
def test_ancillas_released_on_exception(Backend: type[QuantumBackend]):
    st = Backend().generate_state(1)
    with pytest.raises(RuntimeError):
        with ancillas(st, 1) as (a,):
            st.apply_gate("X", [a])
            raise RuntimeError("boom")

    [b] = st.allocate_ancilla(1)
    assert b == a
    assert st.measure(b) == 0


@pytest.mark.parametrize("Backend", [StimBackend, QiskitBackend])
def test_double_release_rejected(Backend: type[QuantumBackend]):
    st = Backend().generate_state(1)
    a = st.allocate_ancilla(1)
    st.release_ancilla(a)
    with pytest.raises(ValueError):
        st.release_ancilla(a)


@pytest.mark.parametrize("Backend", [StimBackend, QiskitBackend])
def test_failed_release_leaves_batch_untouched(Backend: type[QuantumBackend]):
    st = Backend().generate_state(1)
    a, b = st.allocate_ancilla(2)
    st.apply_gate("X", [a])
    st.release_ancilla([b])

    with pytest.raises(ValueError):
        st.release_ancilla([a, b])

    # `a` was neither reset nor pooled
    assert st.allocate_ancilla(1) == [b]
    assert st.measure(a) == 1


@pytest.mark.parametrize("Backend", [StimBackend, QiskitBackend])
def test_release_rejects_duplicates_and_foreign_wires(Backend: type[QuantumBackend]):
    st = Backend().generate_state(1)
    [a] = st.allocate_ancilla(1)
    with pytest.raises(ValueError):
        st.release_ancilla([a, a])
    with pytest.raises(ValueError):
        st.release_ancilla([7])
    st.release_ancilla([a])
    assert st.allocate_ancilla(1) == [a]
