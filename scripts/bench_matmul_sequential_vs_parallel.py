"""
scripts/bench_matmul_sequential_vs_parallel.py

Matmul microbenchmark (NOT a unit test): `CpuBackend` vs `ParallelCpuBackend`.

Input tensors are built once per shape; each timed call includes the output
allocation `Tensor.matmul` always performs. The reported time is the median
over ``--repeats`` runs.

Usage
-----
python scripts/bench_matmul_sequential_vs_parallel.py --presets
python scripts/bench_matmul_sequential_vs_parallel.py --shape 256 256 256 --workers 4 --check
"""

from __future__ import annotations

import argparse
import statistics
import timeit

import numpy as np

from kranium import CpuBackend, ParallelCpuBackend, Tensor

PRESETS = [(64, 64, 64), (128, 128, 128), (256, 256, 256), (1024, 64, 64), (256, 512, 128)]


def _median_ms(fn, repeats: int) -> float:
    fn()  # warm the shared worker pool
    return statistics.median(timeit.repeat(fn, number=1, repeat=repeats)) * 1e3


def bench_shape(m: int, k: int, n: int, *, dtype: np.dtype, workers: int, repeats: int, check: bool) -> None:
    rng = np.random.default_rng(0)
    a_np = rng.standard_normal((m, k)).astype(dtype)
    b_np = rng.standard_normal((k, n)).astype(dtype)

    seq = (Tensor.from_numpy(a_np, CpuBackend()), Tensor.from_numpy(b_np, CpuBackend()))
    par_backend = ParallelCpuBackend(num_workers=workers)
    par = (Tensor.from_numpy(a_np, par_backend), Tensor.from_numpy(b_np, par_backend))

    if check and not (seq[0] @ seq[1]).equal(par[0] @ par[1]):
        raise SystemExit(f"{m}x{k}x{n}: cpu_parallel result differs from cpu")

    seq_ms = _median_ms(lambda: seq[0] @ seq[1], repeats)
    par_ms = _median_ms(lambda: par[0] @ par[1], repeats)
    print(f"{m:>5} x {k:>5} x {n:>5}   cpu {seq_ms:9.2f} ms   cpu_parallel {par_ms:9.2f} ms   x{seq_ms / par_ms:5.2f}")


def main() -> None:
    ap = argparse.ArgumentParser(description="kranium matmul: cpu vs cpu_parallel")
    ap.add_argument("--shape", type=int, nargs=3, metavar=("M", "K", "N"), default=(256, 256, 256))
    ap.add_argument("--presets", action="store_true", help="Run every preset shape.")
    ap.add_argument("--dtype", choices=["float32", "float64"], default="float32")
    ap.add_argument("--workers", type=int, default=None, help="Default: KRANIUM_NUM_THREADS or CPU count.")
    ap.add_argument("--repeats", type=int, default=10)
    ap.add_argument("--check", action="store_true", help="Require bit-identical results first.")
    args = ap.parse_args()

    workers = args.workers or ParallelCpuBackend().workers
    print(f"dtype={args.dtype} workers={workers} repeats={args.repeats}")
    for m, k, n in PRESETS if args.presets else [tuple(args.shape)]:
        bench_shape(m, k, n, dtype=np.dtype(args.dtype), workers=workers, repeats=args.repeats, check=args.check)


if __name__ == "__main__":
    main()
