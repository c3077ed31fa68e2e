"""Forklift inventory: typed records, boundary coercion and lookup.

Records arrive as untyped mappings from JSON or CSV. They are converted into
:class:`Forklift` values here, so nothing past this module ever handles raw
dictionaries.
"""

from __future__ import annotations

import csv
import io
import json
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple, Union

from loguru import logger

DEFAULT_STALE_AFTER = 60.0 * 5
DEFAULT_RETRIES = 1


@dataclass(frozen=True)
class Forklift:
    name: str
    model_number: str
    manufacturing_date: str

    def label(self) -> str:
        return f"{self.name} ({self.model_number})"


Snapshot = Tuple[Forklift, ...]


class InventoryError(Exception):
    """Inventory could not be loaded or a record was malformed"""
    pass


# (field, accepted source keys) - camelCase is what the HTTP API and the
# browser import files use.
_FIELD_KEYS = (
    ("name", ("name", "Name")),
    ("model_number", ("modelNumber", "model_number")),
    ("manufacturing_date", ("manufacturingDate", "manufacturing_date")),
)

MAX_FILE_BYTES = 5 * 1024 * 1024
FILE_SUFFIXES = (".json", ".csv")


def coerce_forklift(raw: Any, index: Optional[int] = None) -> Forklift:
    """Convert one untyped record into a :class:`Forklift`.

    ``index`` is the 1-based position of the record in its list; when given
    it prefixes every error message.
    """
    if isinstance(raw, Forklift):
        return raw

    where = f"item {index}: " if index is not None else ""

    if not isinstance(raw, Mapping):
        raise InventoryError(f"{where}forklift record must be an object, got {type(raw).__name__}")

    values = {}

    for field_name, keys in _FIELD_KEYS:
        found = next((k for k in keys if k in raw), None)

        if found is None:
            raise InventoryError(f"{where}forklift record is missing '{keys[0]}'")

        value = raw[found]

        if not isinstance(value, str):
            raise InventoryError(f"{where}'{found}' must be a string, got {type(value).__name__}")
        if not value.strip():
            raise InventoryError(f"{where}'{found}' must not be empty")

        values[field_name] = value

    return Forklift(**values)


def coerce_inventory(raw: Any) -> Snapshot:
    if not isinstance(raw, (list, tuple)):
        raise InventoryError(f"inventory must be a list of records, got {type(raw).__name__}")

    return tuple(coerce_forklift(item, index) for index, item in enumerate(raw, start=1))


def _parse_csv(text: str, source: Path) -> List[dict]:
    # Header row gives the keys; blank lines are skipped by DictReader.
    rows = []

    try:
        reader = csv.DictReader(io.StringIO(text))
        for row in reader:
            if None in row or None in row.values():
                raise InventoryError(f"inventory {source} line {reader.line_num} has the wrong number of fields")
            rows.append(row)
    except csv.Error as exc:
        raise InventoryError(f"inventory {source} is not valid CSV: {exc}") from exc

    return rows


def load_inventory_file(path: Union[str, Path]) -> Snapshot:
    """Read a ``.json`` array or a ``.csv`` table of forklift records."""
    p = Path(path)
    suffix = p.suffix.lower()

    if suffix not in FILE_SUFFIXES:
        raise InventoryError(f"inventory {p} must be a .json or .csv file")

    try:
        if p.stat().st_size > MAX_FILE_BYTES:
            raise InventoryError(f"inventory {p} exceeds {MAX_FILE_BYTES // (1024 * 1024)} MB")
        text = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise InventoryError(f"cannot read inventory {p}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise InventoryError(f"inventory {p} is not valid UTF-8: {exc}") from exc

    if suffix == ".csv":
        return coerce_inventory(_parse_csv(text, p))

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InventoryError(f"inventory {p} is not valid JSON: {exc}") from exc

    return coerce_inventory(data)


def resolve_equipment(model_number: str, snapshot: Sequence[Forklift]) -> Optional[Forklift]:
    """First record with a matching model number, or None when absent."""
    for forklift in snapshot:
        if forklift.model_number == model_number:
            return forklift

    return None


class CachedInventory:
    """
    Inventory collaborator with a freshness window and a single retry.

    ``snapshot()`` never raises: a failed refresh is logged and the last
    known snapshot (possibly empty) is served instead.
    """

    def __init__(
        self,
        loader: Callable[[], Any],
        stale_after: float = DEFAULT_STALE_AFTER,
        retries: int = DEFAULT_RETRIES,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.loader = loader
        self.stale_after = stale_after
        self.retries = retries
        self.clock = clock
        self._records: Snapshot = ()
        self._fetched_at: Optional[float] = None
        self.last_error: Optional[InventoryError] = None

    @classmethod
    def from_file(cls, path: Union[str, Path], **kwargs: Any) -> "CachedInventory":
        return cls(lambda: load_inventory_file(path), **kwargs)

    @classmethod
    def from_records(cls, records: Sequence[Any]) -> "CachedInventory":
        fixed = coerce_inventory(list(records))
        return cls(lambda: fixed, stale_after=float("inf"))

    def is_stale(self) -> bool:
        if self._fetched_at is None:
            return True
        return self.clock() - self._fetched_at >= self.stale_after

    def refresh(self) -> Snapshot:
        attempts = self.retries + 1
        last_exc: Optional[InventoryError] = None

        for attempt in range(1, attempts + 1):
            try:
                records = coerce_inventory(self.loader())
            except InventoryError as exc:
                last_exc = exc
            except Exception as exc:
                # Any loader failure counts as a failed fetch.
                last_exc = InventoryError(f"{type(exc).__name__}: {exc}")
                last_exc.__cause__ = exc
            else:
                self._records = records
                self._fetched_at = self.clock()
                self.last_error = None
                logger.debug("inventory refreshed: {} forklifts", len(records))
                return records

            logger.warning("inventory fetch attempt {}/{} failed: {}", attempt, attempts, last_exc)

        self.last_error = last_exc
        raise last_exc if last_exc is not None else InventoryError("Failed to fetch forklift data.")

    def snapshot(self) -> Snapshot:
        if self.is_stale():
            try:
                self.refresh()
            except InventoryError as exc:
                logger.error("serving last known inventory: {}", exc)

        return self._records

    def __call__(self) -> Snapshot:
        return self.snapshot()
