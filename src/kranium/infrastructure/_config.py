"""
Environment-variable configuration.

All settings are read at lookup time (not import time) so tests and host
applications can adjust them with ``os.environ`` before constructing tensors.

Variables
---------
KRANIUM_BACKEND
    Backend used by tensors constructed without an explicit backend.
    ``"cpu"`` (default) or ``"cpu_parallel"``.
KRANIUM_NUM_THREADS
    Worker count used by the parallel CPU backend when it is not given one
    explicitly. Positive integer; defaults to ``os.cpu_count()``.
KRANIUM_DEFAULT_DTYPE
    Element dtype used when an allocation does not name one. Defaults to
    ``"float32"``.

Invalid values emit a ``RuntimeWarning`` and fall back to the default.
"""

from __future__ import annotations

import os
import warnings

import numpy as np

from ..domain._backend import BackendKind

ENV_BACKEND = "KRANIUM_BACKEND"
ENV_NUM_THREADS = "KRANIUM_NUM_THREADS"
ENV_DEFAULT_DTYPE = "KRANIUM_DEFAULT_DTYPE"

DEFAULT_BACKEND = BackendKind.CPU.value
DEFAULT_DTYPE = "float32"


def _warn_invalid(var: str, value: str, fallback: object) -> None:
    warnings.warn(
        f"Ignoring invalid {var}={value!r}; using {fallback!r} instead.",
        RuntimeWarning,
        stacklevel=3,
    )


def default_backend_name() -> str:
    """
    Return the configured default backend name.

    Returns
    -------
    str
        One of the `BackendKind` values.
    """
    raw = os.environ.get(ENV_BACKEND, "").strip().lower()
    if not raw:
        return DEFAULT_BACKEND
    known = {k.value for k in BackendKind}
    if raw not in known:
        _warn_invalid(ENV_BACKEND, raw, DEFAULT_BACKEND)
        return DEFAULT_BACKEND
    return raw


def num_threads() -> int:
    """
    Return the worker count for the parallel backend.

    Returns
    -------
    int
        ``KRANIUM_NUM_THREADS`` if set to a positive integer, otherwise the
        number of available CPUs (at least 1).
    """
    fallback = os.cpu_count() or 1
    raw = os.environ.get(ENV_NUM_THREADS, "").strip()
    if not raw:
        return fallback
    try:
        n = int(raw)
    except ValueError:
        _warn_invalid(ENV_NUM_THREADS, raw, fallback)
        return fallback
    if n <= 0:
        _warn_invalid(ENV_NUM_THREADS, raw, fallback)
        return fallback
    return n


def default_dtype_name() -> str:
    """Return the configured default element dtype name."""
    raw = os.environ.get(ENV_DEFAULT_DTYPE, "").strip()
    if not raw:
        return DEFAULT_DTYPE
    try:
        dt = np.dtype(raw)
    except TypeError:
        _warn_invalid(ENV_DEFAULT_DTYPE, raw, DEFAULT_DTYPE)
        return DEFAULT_DTYPE
    if dt.kind not in ("i", "u", "f"):
        _warn_invalid(ENV_DEFAULT_DTYPE, raw, DEFAULT_DTYPE)
        return DEFAULT_DTYPE
    return dt.name
