# qstatelab/__init__.py
import importlib.metadata

from .quantum_backend import QuantumBackend, QuantumGate, QuantumState, ancillas
from .statistical import INCONCLUSIVE
from .trials import TrialStats, run_trials

__version__ = importlib.metadata.version("qstatelab")
