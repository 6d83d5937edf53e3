from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Tuple

from .config import AllocationConfig
from .enums import Outcome

if TYPE_CHECKING:
    from .graph import InterferenceGraph


@dataclass(frozen=True)
class ChannelOutcome:
    """Either an assigned channel or an explicit unassignable marker."""

    status: Outcome
    channel: int | None = None

    def __post_init__(self) -> None:
        if self.status is Outcome.ASSIGNED and self.channel is None:
            raise ValueError("assigned outcome requires a channel")
        if self.status is Outcome.UNASSIGNABLE and self.channel is not None:
            raise ValueError("unassignable outcome cannot carry a channel")

    @classmethod
    def assigned(cls, channel: int) -> ChannelOutcome:
        return cls(Outcome.ASSIGNED, channel)

    @classmethod
    def unassignable(cls) -> ChannelOutcome:
        return cls(Outcome.UNASSIGNABLE)

    @property
    def is_assigned(self) -> bool:
        return self.status is Outcome.ASSIGNED

    def __str__(self) -> str:
        return str(self.channel) if self.is_assigned else "UNASSIGNED"


@dataclass(frozen=True)
class AllocationStep:
    """One decision of the coloring pass."""

    cell_id: str
    degree: int
    used_channels: Tuple[int, ...]
    neighbor_ids: Tuple[str, ...]
    outcome: ChannelOutcome


@dataclass
class AllocationResult:
    """Everything produced by one allocation call."""

    config: AllocationConfig
    graph: InterferenceGraph
    order: List[int]
    steps: List[AllocationStep]
    assignments: Dict[str, ChannelOutcome] = field(default_factory=dict)

    @property
    def failed_ids(self) -> List[str]:
        return [cell_id for cell_id, outcome in self.assignments.items() if not outcome.is_assigned]

    @property
    def processing_order_ids(self) -> List[str]:
        return [self.graph.towers[index].cell_id for index in self.order]

