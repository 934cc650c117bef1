"""
Move and MoveSet types.

A MoveSet is produced once per analysis pass and replaced wholesale
when the session or the detection settings change. Index 0 is always
the synthetic start move; detected moves are numbered from 1.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional

import polars as pl


class MoveType(str, Enum):
    START = "start"
    STATIC = "static"
    DYNAMIC = "dynamic"
    POWERFUL = "powerful"
    DYNO = "dyno"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Move:
    sequence_index: int
    time: float
    raw_magnitude: Optional[float]   # speed proxy; None when supplied externally without one
    dynamics: float                  # normalized [0, 1]
    is_crux: bool
    move_type: MoveType

    # Peak details (None on the start move)
    peak_acceleration: Optional[float] = None
    prominence: Optional[float] = None
    data_index: Optional[int] = None

    @classmethod
    def start(cls, time: float = 0.0) -> Move:
        return cls(
            sequence_index=0,
            time=float(time),
            raw_magnitude=0.0,
            dynamics=0.0,
            is_crux=False,
            move_type=MoveType.START,
        )

    @property
    def is_start(self) -> bool:
        return self.move_type == MoveType.START


@dataclass(frozen=True)
class MoveSet:
    """Ordered, immutable list of moves."""
    moves: tuple
    metadata: dict = field(default_factory=dict, compare=False)

    def __post_init__(self):
        moves = tuple(self.moves)
        object.__setattr__(self, 'moves', moves)
        for expected, move in enumerate(moves):
            if move.sequence_index != expected:
                raise ValueError(
                    f"sequence_index must be contiguous from 0; "
                    f"position {expected} has {move.sequence_index}"
                )
        for prev, curr in zip(moves, moves[1:]):
            if curr.time < prev.time:
                raise ValueError(
                    f"moves must be time-ordered; move {curr.sequence_index} "
                    f"at {curr.time} precedes {prev.time}"
                )

    def __len__(self) -> int:
        return len(self.moves)

    def __iter__(self) -> Iterator[Move]:
        return iter(self.moves)

    def __getitem__(self, index) -> Move:
        return self.moves[index]

    @property
    def detected(self) -> tuple:
        """Moves found in the signal (everything except the start move)."""
        return tuple(m for m in self.moves if not m.is_start)

    @property
    def crux_indices(self) -> list:
        return [m.sequence_index for m in self.moves if m.is_crux]

    @property
    def can_synthesize(self) -> bool:
        return len(self.moves) >= 2

    def to_frame(self) -> pl.DataFrame:
        """One row per move."""
        return pl.DataFrame(
            {
                "sequence_index": [m.sequence_index for m in self.moves],
                "time": [m.time for m in self.moves],
                "raw_magnitude": [m.raw_magnitude for m in self.moves],
                "dynamics": [m.dynamics for m in self.moves],
                "is_crux": [m.is_crux for m in self.moves],
                "move_type": [m.move_type.value for m in self.moves],
                "peak_acceleration": [m.peak_acceleration for m in self.moves],
                "prominence": [m.prominence for m in self.moves],
                "data_index": [m.data_index for m in self.moves],
            },
            schema={
                "sequence_index": pl.Int64,
                "time": pl.Float64,
                "raw_magnitude": pl.Float64,
                "dynamics": pl.Float64,
                "is_crux": pl.Boolean,
                "move_type": pl.Utf8,
                "peak_acceleration": pl.Float64,
                "prominence": pl.Float64,
                "data_index": pl.Int64,
            },
        )
