"""Id-indexed store of catalog entries."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from typebridge.diagnostics.errors import DiagnosticReport, ErrorCodes
from typebridge.ir.types import TypeEntry
from typebridge.models.config import BridgeConfig


@dataclass
class TypeCatalog:
    """All type entries of one run, keyed by model id.

    The catalog is filled once (registration and name propagation) and then
    read once (reachability and flattening). Reference counters are kept
    beside the entries so the entries themselves stay immutable.

    Attributes
    ----------
        config: Run configuration (id bound, export id settings).
        report: Diagnostic report shared by all phases.

    """

    config: BridgeConfig = field(default_factory=BridgeConfig)
    report: DiagnosticReport = field(default_factory=DiagnosticReport)

    _entries: dict[int, TypeEntry] = field(default_factory=dict, init=False, repr=False)
    _ref_counts: dict[int, int] = field(default_factory=dict, init=False, repr=False)

    @property
    def max_type_ids(self) -> int:
        return self.config.max_type_ids

    def in_range(self, type_id: int) -> bool:
        """Check that an id lies in 1 .. max_type_ids-1."""
        return 0 < type_id < self.config.max_type_ids

    def is_defined(self, type_id: int) -> bool:
        return type_id in self._entries

    def register(self, entry: TypeEntry, path: str = "model") -> bool:
        """Insert a new entry.

        Args:
        ----
            entry: The entry to add.
            path: Location used for diagnostics.

        Returns:
        -------
            True if inserted; False if out of range or already defined.

        """
        type_id = entry.type_id
        if not self.in_range(type_id):
            self.report.add_error(
                ErrorCodes.E001_ID_OUT_OF_RANGE,
                f"Model id {type_id} is off scope (1..{self.max_type_ids - 1})",
                path,
                type_id=type_id,
                kind=entry.kind.value,
            )
            return False

        if type_id in self._entries:
            self.report.add_critical(
                ErrorCodes.C001_REDEFINED_ID,
                f"Model id {type_id} not defined again",
                path,
                type_id=type_id,
                existing=self._entries[type_id].kind.value,
            )
            return False

        self._entries[type_id] = entry
        return True

    def get(self, type_id: int) -> TypeEntry | None:
        """Get an entry by id; None when out of range or not registered."""
        if not self.in_range(type_id):
            return None
        return self._entries.get(type_id)

    def replace(self, entry: TypeEntry) -> None:
        """Swap a registered entry for an updated copy.

        Raises
        ------
            KeyError: If the id was never registered.

        """
        if entry.type_id not in self._entries:
            raise KeyError(entry.type_id)
        self._entries[entry.type_id] = entry

    def mark_required(self, type_id: int) -> int:
        """Increment and return the reference counter of an id."""
        count = self._ref_counts.get(type_id, 0) + 1
        self._ref_counts[type_id] = count
        return count

    def ref_count(self, type_id: int) -> int:
        return self._ref_counts.get(type_id, 0)

    def ids(self) -> list[int]:
        """Registered ids in ascending order."""
        return sorted(self._entries)

    def __iter__(self) -> Iterator[TypeEntry]:
        for type_id in self.ids():
            yield self._entries[type_id]

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, type_id: object) -> bool:
        return type_id in self._entries
