"""Saved-case repositories: in-memory and JSON file backed."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from nutripro.domain.cases import CaseRecord
from nutripro.services.cases import CaseRepository

_logger = logging.getLogger(__name__)

_CASES_ADAPTER: TypeAdapter[list[CaseRecord]] = TypeAdapter(list[CaseRecord])


@dataclass
class InMemoryCaseRepository(CaseRepository):
    """Keeps saved cases for the lifetime of the process."""

    cases: list[CaseRecord] = field(default_factory=list)

    def list_cases(self) -> list[CaseRecord]:
        """Return all saved cases."""
        return list(self.cases)

    def get_case(self, case_id: str) -> CaseRecord | None:
        """Return a case by id, if present."""
        for case in self.cases:
            if case.id == case_id:
                return case
        return None

    def add_case(self, case: CaseRecord) -> None:
        """Store a case in front of the existing ones."""
        self.cases = [case, *self.cases]

    def delete_case(self, case_id: str) -> bool:
        """Delete a case and report whether it existed."""
        remaining = [case for case in self.cases if case.id != case_id]
        deleted = len(remaining) != len(self.cases)
        self.cases = remaining
        return deleted


@dataclass
class JsonCaseRepository(InMemoryCaseRepository):
    """Mirrors the saved-case list to a local JSON file."""

    path: Path = field(default_factory=lambda: Path("cases.json"))

    @classmethod
    def open(cls, path: Path) -> "JsonCaseRepository":
        """Create a repository, reading existing cases from disk."""
        repository = cls(path=path)
        repository.cases = _read_cases(path)
        return repository

    def add_case(self, case: CaseRecord) -> None:
        """Store a case and persist the list."""
        super().add_case(case)
        self._flush()

    def delete_case(self, case_id: str) -> bool:
        """Delete a case and persist the list."""
        deleted = super().delete_case(case_id)
        if deleted:
            self._flush()
        return deleted

    def _flush(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_bytes(_CASES_ADAPTER.dump_json(self.cases, indent=2))


def _read_cases(path: Path) -> list[CaseRecord]:
    if not path.exists():
        return []
    try:
        return _CASES_ADAPTER.validate_json(path.read_bytes())
    except ValidationError:
        _logger.exception("Ignoring unreadable case file: %s", path)
        return []
