"""Fibonacci-style program with configurable starting values and 32-bit wrapping."""

from __future__ import annotations

import re
import sys
from typing import Iterable, Iterator, Sequence

_U32_MASK = 0xFFFFFFFF
_U32_PATTERN = re.compile(r"\+?[0-9]+")


def _parse_u32(text: str) -> int:
    stripped = text.strip()
    if not _U32_PATTERN.fullmatch(stripped):
        raise ValueError(f"invalid digit in {stripped!r}")
    value = int(stripped)
    if value > _U32_MASK:
        raise ValueError(f"number too large to fit in target type: {stripped!r}")
    return value


def fibonacci(n: int, init_a: int, init_b: int) -> int:
    """Advance the pair (init_a, init_b) ``n`` steps with 32-bit wrapping; return the last."""
    for name, value in (("n", n), ("init_a", init_a), ("init_b", init_b)):
        if not 0 <= value <= _U32_MASK:
            raise ValueError(f"{name} must be an unsigned 32-bit integer")
    prev, curr = init_a, init_b
    for _ in range(n):
        prev, curr = curr, (prev + curr) & _U32_MASK
    return curr


def parse_inputs(lines: Iterable[str]) -> tuple[int, int, int]:
    """Read n and optional starting values from lines; the starting values default to 1."""
    it: Iterator[str] = iter(lines)
    first = next(it, None)
    if first is None:
        raise ValueError("No first input provided")
    try:
        n = _parse_u32(first)
    except ValueError as exc:
        raise ValueError(f"Failed to parse first input as u32: {exc}") from exc

    def optional(line: str | None) -> int:
        if line is None:
            return 1
        try:
            return _parse_u32(line)
        except ValueError:
            return 1

    init_a = optional(next(it, None))
    init_b = optional(next(it, None))
    return n, init_a, init_b


def main(argv: Sequence[str] | None = None) -> int:
    """Read inputs from standard input and print the result."""
    try:
        n, init_a, init_b = parse_inputs(line.rstrip("\n") for line in sys.stdin)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    print(fibonacci(n, init_a, init_b))
    return 0


if __name__ == "__main__":
    sys.exit(main())