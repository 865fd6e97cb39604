from collections import Counter

import numpy as np
import pytest
from typer.testing import CliRunner

from qstatelab.__main__ import app
from qstatelab.families import PREPARATIONS, TASKS, get_preparation, get_task
from qstatelab.kets import ket, ket_label, matches_up_to_global_phase
from qstatelab.qiskit_backend import QiskitBackend
from qstatelab.statistical import INCONCLUSIVE
from qstatelab.stim_backend import StimBackend
from qstatelab.trials import TrialStats, prepare, run_trials

runner = CliRunner()


def test_trial_stats_rates():
    stats = TrialStats(task="demo", expected=(0, 1))
    stats.confusion = Counter({(0, 0): 3, (0, INCONCLUSIVE): 4, (1, 1): 2, (1, 0): 1})
    assert stats.trials == 10
    assert stats.correct == 5
    assert stats.inconclusive == 4
    assert stats.wrong == 1
    assert stats.accuracy == pytest.approx(0.5)
    assert stats.error_rate == pytest.approx(0.1)
    assert stats.inconclusive_rate == pytest.approx(0.4)
    assert stats.conclusive_rate(0) == pytest.approx(0.3)
    assert stats.conclusive_rate(1) == pytest.approx(0.2)


def test_empty_stats():
    stats = TrialStats(task="demo", expected=(0, 1))
    assert stats.trials == 0
    assert stats.accuracy == 0.0


def test_run_trials_rejects_zero_trials():
    with pytest.raises(ValueError):
        run_trials(StimBackend(), TASKS["is_qubit_one"], 0)


def test_run_trials_is_reproducible_in_hidden_choices():
    a = run_trials(StimBackend(), TASKS["basis_state_measurement"], 200, rng=np.random.default_rng(1))
    b = run_trials(StimBackend(), TASKS["basis_state_measurement"], 200, rng=np.random.default_rng(1))
    assert a.confusion == b.confusion


def test_registry_lookup():
    assert get_task("ghz_or_w_state").n_qubits == 3
    with pytest.raises(ValueError):
        get_task("nope")
    with pytest.raises(ValueError):
        get_preparation("nope")


@pytest.mark.parametrize("name", sorted(PREPARATIONS))
def test_registered_preparations_are_normalized(name: str):
    task = PREPARATIONS[name]
    backend = StimBackend() if task.clifford else QiskitBackend()
    st = prepare(backend, task)
    assert np.linalg.norm(st.amplitudes()) == pytest.approx(1.0, abs=1e-6)


def test_prepare_fixed_size_rejects_other_sizes():
    with pytest.raises(ValueError):
        prepare(QiskitBackend(), PREPARATIONS["bell_state"], 3)


def test_kets_helpers():
    assert ket_label(1, 3) == "|100⟩"
    assert matches_up_to_global_phase(1j * ket("01"), ket("01"))
    assert not matches_up_to_global_phase(ket("01"), ket("10"))
    assert not matches_up_to_global_phase(ket("01"), ket("010"))


# ---------- CLI ----------

def test_cli_tasks():
    result = runner.invoke(app, ["tasks"])
    assert result.exit_code == 0
    assert "bell_state_measurement" in result.output


def test_cli_trials():
    result = runner.invoke(
        app, ["trials", "bell_state_measurement", "--trials", "50", "--seed", "1", "--backend", "stim"]
    )
    assert result.exit_code == 0, result.output
    assert "accuracy" in result.output


def test_cli_prepare():
    result = runner.invoke(app, ["prepare", "ghz_state", "--n", "2", "--backend", "qiskit"])
    assert result.exit_code == 0, result.output
    assert "|11⟩" in result.output


def test_cli_rejects_non_clifford_on_stim():
    result = runner.invoke(app, ["prepare", "w_state", "--backend", "stim"])
    assert result.exit_code != 0


def test_cli_rejects_unknown_backend():
    result = runner.invoke(app, ["tasks"])
    assert result.exit_code == 0
    result = runner.invoke(app, ["trials", "is_qubit_one", "--backend", "cirq"])
    assert result.exit_code != 0


@pytest.mark.parametrize("lead", [1.0, -1.0, 1j, -1j, np.exp(0.7j)])
def test_global_phase_independent_of_leading_amplitude(lead: complex):
    """The phase is read relative to the expected amplitude, whatever its sign."""
    expected = lead * (np.sqrt(0.8) * ket("01") + np.sqrt(0.2) * ket("10"))
    assert matches_up_to_global_phase(expected, expected)
    assert matches_up_to_global_phase(np.exp(1.3j) * expected, expected)
    other = lead * (np.sqrt(0.8) * ket("01") + 1j * np.sqrt(0.2) * ket("10"))
    assert not matches_up_to_global_phase(other, expected)


def test_global_phase_detects_relative_sign():
    expected = -(ket("01") + ket("10")) / np.sqrt(2)
    flipped = -(ket("01") - ket("10")) / np.sqrt(2)
    assert not matches_up_to_global_phase(flipped, expected)


def test_cli_prepare_rejects_wrong_size():
    result = runner.invoke(app, ["prepare", "bell_state", "--n", "3", "--backend", "stim"])
    assert result.exit_code == 2
    assert not isinstance(result.exception, ValueError)


def test_cli_prepare_rejects_empty_register():
    result = runner.invoke(app, ["prepare", "ghz_state", "--n", "0", "--backend", "stim"])
    assert result.exit_code == 2


def test_cli_trials_rejects_zero_trials():
    result = runner.invoke(app, ["trials", "is_qubit_one", "--trials", "0", "--backend", "stim"])
    assert result.exit_code == 2
    assert "accuracy" not in result.output
