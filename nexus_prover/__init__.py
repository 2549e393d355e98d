"""Prover client pieces: tasks, task cache, version constraints, fetch backoff and system info."""

__version__ = "0.10.4"