"""Prover tasks as handed out by the orchestrator."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Sequence

from Crypto.Hash import keccak


class TaskType(enum.Enum):
    """Whether a task needs a full proof or only its hash."""

    PROOF_REQUIRED = "proof_required"
    PROOF_HASH = "proof_hash"


@dataclass
class Task:
    """A unit of proving work."""

    task_id: str
    program_id: str
    public_inputs: bytes
    task_type: TaskType = TaskType.PROOF_REQUIRED
    public_inputs_list: list[bytes] = field(default=None)  # type: ignore[assignment]

    def __post_init__(self) -> None:
        self.public_inputs = bytes(self.public_inputs)
        if self.public_inputs_list is None:
            self.public_inputs_list = [self.public_inputs]
        else:
            self.public_inputs_list = [bytes(item) for item in self.public_inputs_list]

    @staticmethod
    def combine_proof_hashes(hashes: Sequence[str]) -> str:
        """Keccak-256 of the concatenated hash strings, as lower-case hex; empty for no hashes."""
        if not hashes:
            return ""
        digest = keccak.new(digest_bits=256)
        digest.update("".join(hashes).encode("utf-8"))
        return digest.hexdigest()

    def all_inputs(self) -> tuple[bytes, ...]:
        """All public inputs of the task."""
        return tuple(self.public_inputs_list)

    def __str__(self) -> str:
        return (
            f"Task ID: {self.task_id}, Program ID: {self.program_id}, "
            f"Inputs: {len(self.public_inputs_list)}"
        )