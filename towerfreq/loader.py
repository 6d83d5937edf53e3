"""Read cell tower records from CSV exports."""

from __future__ import annotations

import csv
import logging
import math
from pathlib import Path
from typing import Iterable, List

from .tower import CellTower

logger = logging.getLogger(__name__)

# "Cell ID","Easting","Northing","Long","Lat"
CELL_ID_COLUMN = 0
LONGITUDE_COLUMN = 3
LATITUDE_COLUMN = 4
MIN_COLUMNS = 5


def parse_tower_rows(rows: Iterable[List[str]]) -> List[CellTower]:
    """Convert data rows (header already removed) into towers.

    Short rows are ignored. Rows with unparseable or non-finite coordinates are
    skipped with a warning.
    """

    towers: List[CellTower] = []
    for line_number, row in enumerate(rows, start=2):
        fields = [field.strip().strip('"') for field in row]
        if not any(fields):
            continue
        if len(fields) < MIN_COLUMNS:
            continue
        try:
            latitude = float(fields[LATITUDE_COLUMN])
            longitude = float(fields[LONGITUDE_COLUMN])
        except ValueError as exc:
            logger.warning("skipping bad line %d: %s (%s)", line_number, ",".join(row), exc)
            continue
        if not (math.isfinite(latitude) and math.isfinite(longitude)):
            logger.warning("skipping bad line %d: %s (non-finite coordinate)", line_number, ",".join(row))
            continue
        cell_id = fields[CELL_ID_COLUMN]
        if not cell_id:
            logger.warning("skipping bad line %d: %s (empty cell id)", line_number, ",".join(row))
            continue
        towers.append(CellTower(cell_id=cell_id, latitude=latitude, longitude=longitude))
    return towers


def load_towers_csv(path: Path) -> List[CellTower]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Tower file not found: {path}")
    with path.open("r", newline="") as handle:
        reader = csv.reader(handle, skipinitialspace=True)
        next(reader, None)
        towers = parse_tower_rows(reader)
    logger.info("loaded %d towers from %s", len(towers), path)
    return towers
