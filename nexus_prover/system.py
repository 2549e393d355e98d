"""System information and performance measurements."""

from __future__ import annotations

import functools
import math
import os
import platform
import sys
import time

import psutil

NUM_TESTS = 1_000_000
OPERATIONS_PER_ITERATION = 4  # sin, add, multiply, divide
NUM_REPEATS = 5

_I32_MAX = 2**31 - 1
_GIB = 1024.0**3


def num_cores() -> int:
    """Number of logical cores, or 1 if it cannot be determined."""
    return os.cpu_count() or 1


def cpu_stats() -> tuple[int, int]:
    """Return (logical cores, frequency of the CPU in MHz); the frequency is 0 if unknown."""
    try:
        freq = psutil.cpu_freq()
    except (OSError, NotImplementedError, RuntimeError):
        freq = None
    mhz = int(freq.current) if freq is not None else 0
    return num_cores(), max(mhz, 0)


def _flops_per_cycle_per_core() -> int:
    # x86-64 always provides SSE2: 128-bit vectors, four FP64 operations per cycle.
    if platform.machine().lower() in {"x86_64", "amd64"}:
        return 4
    return 1


def estimate_peak_gflops(num_provers: int) -> float:
    """Estimate peak GFLOP/s from the number of prover threads and the clock speed."""
    _cores, mhz = cpu_stats()
    return num_provers * mhz * _flops_per_cycle_per_core() / 1000.0


def _measure_flops(num_tests: int, repeats: int, cores: int) -> float:
    """Average floating-point operations per second over ``repeats`` runs."""
    total = 0.0
    for _ in range(repeats):
        start = time.perf_counter()
        operations = 0
        for _ in range(cores):
            x = 1.0
            for _ in range(num_tests):
                x = (math.sin(x) + 1.0) * 0.5 / 1.1
            operations += num_tests * OPERATIONS_PER_ITERATION
        elapsed = time.perf_counter() - start
        total += operations / max(elapsed, sys.float_info.min)
    return total / repeats


@functools.lru_cache(maxsize=None)
def measure_gflops() -> float:
    """Measure GFLOP/s of this machine; the result is cached for the process lifetime."""
    cores = os.cpu_count()
    if cores is None:
        print(
            "Warning: Unable to determine the number of logical cores. Defaulting to 1.",
            file=sys.stderr,
        )
        cores = 1
    return _measure_flops(NUM_TESTS, NUM_REPEATS, cores) / 1e9


def bytes_to_mb(num_bytes: int) -> int:
    """Convert bytes to thousandths of a MiB, rounded half away from zero, as an i32."""
    value = num_bytes * 1000.0 / 1_048_576.0
    rounded = math.floor(value + 0.5)
    return min(rounded, _I32_MAX)


def get_memory_info() -> tuple[int, int]:
    """Memory of this process and total system memory, in thousandths of a MiB."""
    process_bytes = psutil.Process(os.getpid()).memory_info().rss
    total_bytes = psutil.virtual_memory().total
    return bytes_to_mb(process_bytes), bytes_to_mb(total_bytes)


def total_memory_gb() -> float:
    """Total memory of the machine in GiB."""
    return psutil.virtual_memory().total / _GIB


def process_memory_gb() -> float:
    """Memory used by the current process in GiB."""
    return psutil.Process(os.getpid()).memory_info().rss / _GIB