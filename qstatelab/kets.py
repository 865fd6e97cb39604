# qstatelab/kets.py
"""Reference amplitude vectors in the backends' little-endian layout."""
from __future__ import annotations

from typing import Iterable, Sequence, Tuple

import numpy as np


def basis_index(bits: Sequence[bool | int]) -> int:
    """Amplitude index of |bits⟩, with bits[i] on wire i."""
    return sum(int(bool(b)) << i for i, b in enumerate(bits))


def ket_label(index: int, n: int) -> str:
    """Register-order label |q0 q1 ...⟩ for an amplitude index."""
    return "|" + "".join(str((index >> q) & 1) for q in range(n)) + "⟩"


def ket(bits: Sequence[bool | int] | str) -> np.ndarray:
    """Basis vector |bits⟩; a string like "0110" is read in register order."""
    if isinstance(bits, str):
        bits = [c == "1" for c in bits]
    vec = np.zeros(2 ** len(bits), dtype=complex)
    vec[basis_index(bits)] = 1.0
    return vec


def superposition(terms: Iterable[Tuple[complex, Sequence[bool | int] | str]]) -> np.ndarray:
    """Normalized sum of coefficient * |bits⟩."""
    vec = sum(coef * ket(bits) for coef, bits in terms)
    return vec / np.linalg.norm(vec)


def w_vector(n: int) -> np.ndarray:
    """(|10..0⟩ + |01..0⟩ + ... + |0..01⟩)/√N."""
    return superposition((1.0, [i == j for j in range(n)]) for i in range(n))


def ghz_vector(n: int) -> np.ndarray:
    return superposition([(1.0, [0] * n), (1.0, [1] * n)])


def matches_up_to_global_phase(actual: np.ndarray, expected: np.ndarray, atol: float = 1e-9) -> bool:
    """
    True if `actual` equals e^{iφ} * `expected` for some φ.

    The phase is read off the largest expected amplitude.
    """
    actual = np.asarray(actual, dtype=complex)
    expected = np.asarray(expected, dtype=complex)
    if actual.shape != expected.shape:
        return False
    i = int(np.argmax(np.abs(expected)))
    if abs(actual[i]) <= atol:
        return False
    ratio = actual[i] * np.conj(expected[i])
    phase = ratio / abs(ratio)
    return bool(np.allclose(actual, phase * expected, atol=atol, rtol=0.0))
