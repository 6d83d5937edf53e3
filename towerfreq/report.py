from __future__ import annotations

from typing import List, Mapping

from .config import AllocationConfig
from .results import AllocationResult, ChannelOutcome

TABLE_RULE = "---------------------------------------"


def format_header(config: AllocationConfig) -> str:
    return "\n".join(
        [
            f"Interference Radius: {config.interference_radius_m:,.0f} meters",
            "Available Frequencies: " + ", ".join(str(c) for c in config.palette),
        ]
    )


def format_processing_order(result: AllocationResult) -> str:
    lines = ["--- Processing Order (Sorted by Degree) ---"]
    for index in result.order:
        tower = result.graph.towers[index]
        lines.append(f"  - {tower.cell_id} (Neighbours: {result.graph.degree(index)})")
    return "\n".join(lines)


def format_allocation_log(result: AllocationResult) -> str:
    lines = ["--- Allocation Log ---"]
    for step in result.steps:
        if step.outcome.is_assigned:
            used = ", ".join(str(c) for c in step.used_channels)
            lines.append(
                f"Assigned {step.outcome.channel} to Cell {step.cell_id}. "
                f"(Neighbours used: [{used}])"
            )
        else:
            lines.append(f"WARNING: Could not assign frequency to {step.cell_id}.")
            lines.append(
                f"  Its neighbours {', '.join(step.neighbor_ids)} already use all available frequencies."
            )
    return "\n".join(lines)


def format_allocation_table(assignments: Mapping[str, ChannelOutcome]) -> str:
    """Render assignments as a table sorted by cell id."""

    width = max([7] + [len(cell_id) for cell_id in assignments])
    lines: List[str] = [
        "--- Final Frequency Allocation Plan ---",
        TABLE_RULE,
        f"| {'Cell ID':<{width}} | {'Assigned Frequency':<18} |",
        f"|{'-' * (width + 2)}|{'-' * 20}|",
    ]
    for cell_id in sorted(assignments):
        lines.append(f"| {cell_id:<{width}} | {str(assignments[cell_id]):<18} |")
    lines.append(TABLE_RULE)
    return "\n".join(lines)


def format_report(result: AllocationResult) -> str:
    parts = [
        format_processing_order(result),
        format_allocation_log(result),
        format_allocation_table(result.assignments),
    ]
    return "\n\n".join(parts)
