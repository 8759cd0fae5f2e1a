"""
Backend resolution by name.

Tensors take their backend as an injected value. When a caller does not
supply one, the backend named by ``KRANIUM_BACKEND`` (default ``"cpu"``) is
built here.
"""

from __future__ import annotations

from typing import Any, Optional, Union

from ...domain._backend import BackendKind, IBackend
from ...domain._errors import UnknownBackendError
from .._config import default_backend_name
from ._cpu import CpuBackend
from ._parallel_cpu import ParallelCpuBackend

_BACKENDS: dict[BackendKind, type] = {
    BackendKind.CPU: CpuBackend,
    BackendKind.CPU_PARALLEL: ParallelCpuBackend,
}


def _resolve_kind(name: Union[str, BackendKind]) -> BackendKind:
    if isinstance(name, BackendKind):
        return name
    key = str(name).strip().lower()
    try:
        return BackendKind(key)
    except ValueError as e:
        raise UnknownBackendError(key, [k.value for k in BackendKind]) from e


def get_backend(name: Optional[Union[str, BackendKind]] = None, **options: Any) -> IBackend:
    """
    Build a backend value.

    Parameters
    ----------
    name : str or BackendKind, optional
        ``"cpu"`` or ``"cpu_parallel"``. ``None`` uses ``KRANIUM_BACKEND``.
    **options : Any
        Forwarded to the backend constructor (e.g., ``num_workers`` for
        ``"cpu_parallel"``).

    Returns
    -------
    IBackend
        A fresh backend value.

    Raises
    ------
    UnknownBackendError
        If ``name`` does not identify a built-in backend.
    """
    kind = _resolve_kind(default_backend_name() if name is None else name)
    return _BACKENDS[kind](**options)
