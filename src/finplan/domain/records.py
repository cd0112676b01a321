"""Record domain service."""

import logging
from typing import Any, Optional, Union

from finplan.database.base import RecordStore
from finplan.database import mappers
from finplan.domain.entities import ClientSnapshot, RecordKey
from finplan.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    duplicate_record_name,
    not_a_list_key,
    record_not_found,
    unknown_record_key,
)

logger = logging.getLogger(__name__)


def resolve_record_key(key: Union[str, RecordKey]) -> RecordKey:
    """Resolve a record key name.

    Raises:
        ValidationError: If the key is unknown
    """
    try:
        return RecordKey(key)
    except ValueError:
        raise ValidationError(unknown_record_key(str(key)))


def _list_key(key: Union[str, RecordKey]) -> RecordKey:
    record_key = resolve_record_key(key)
    if not record_key.holds_list:
        raise ValidationError(not_a_list_key(record_key.value))
    return record_key


class RecordService:
    """Service for reading and writing a client's records."""

    def __init__(self, store: RecordStore):
        """Initialize record service.

        Args:
            store: Record store scoped to one client
        """
        self.store = store

    def list_records(self, key: Union[str, RecordKey]) -> list[Any]:
        """List the named records stored under a list key.

        Args:
            key: List record key

        Returns:
            List of record entities, in stored order

        Raises:
            ValidationError: If the key is unknown, holds a single value, or
                the stored data is invalid
        """
        record_key = _list_key(key)
        return mappers.records_from_value(record_key, self.store.get(record_key.value))

    def upsert_record(self, key: Union[str, RecordKey], record: Any) -> bool:
        """Add a record, replacing any existing record with the same name.

        Args:
            key: List record key
            record: Record entity

        Returns:
            True if an existing record was replaced
        """
        record_key = _list_key(key)
        records = self.list_records(record_key)
        replaced = False
        for index, existing in enumerate(records):
            if existing.name == record.name:
                records[index] = record
                replaced = True
                break
        if not replaced:
            records.append(record)
        self._save_list(record_key, records)
        return replaced

    def delete_record(self, key: Union[str, RecordKey], name: str) -> None:
        """Delete a named record.

        Raises:
            NotFoundError: If no record with that name exists under the key
        """
        record_key = _list_key(key)
        records = self.list_records(record_key)
        remaining = [record for record in records if record.name != name]
        if len(remaining) == len(records):
            raise NotFoundError(record_not_found(record_key.value, name))
        self._save_list(record_key, remaining)

    def clear(self, key: Union[str, RecordKey]) -> bool:
        """Remove everything stored under a key.

        Returns:
            True if the key held a value
        """
        record_key = resolve_record_key(key)
        return self.store.delete(record_key.value)

    def get_value(self, key: Union[str, RecordKey]) -> Optional[Any]:
        """Get the entity stored under a single-value key, or None."""
        record_key = resolve_record_key(key)
        if record_key.holds_list:
            raise ValidationError(f"'{record_key.value}' holds a list of records")
        return mappers.entity_from_value(record_key, self.store.get(record_key.value))

    def set_value(self, key: Union[str, RecordKey], value: Any) -> None:
        """Replace the value stored under a single-value key."""
        record_key = resolve_record_key(key)
        if record_key.holds_list:
            raise ValidationError(f"'{record_key.value}' holds a list of records")
        if record_key == RecordKey.EXPENSE_PORTION:
            payload = mappers.expense_portion_from_value(value)
        else:
            payload = mappers.record_to_dict(value)
        self.store.set(record_key.value, payload)

    def import_document(self, document: dict[str, Any]) -> dict[str, int]:
        """Import a JSON document keyed by record key.

        The whole document is validated before anything is written. List keys
        are upserted record by record; single-value keys are replaced.

        Args:
            document: Mapping of record key to stored JSON value

        Returns:
            Number of records imported per key

        Raises:
            ValidationError: If a key is unknown or a record is invalid
            ConflictError: If a list repeats a record name
        """
        if not isinstance(document, dict):
            raise ValidationError("Import document must be a JSON object")

        parsed: list[tuple[RecordKey, Any]] = []
        for raw_key, value in document.items():
            record_key = resolve_record_key(raw_key)
            if record_key.holds_list:
                records = mappers.records_from_value(record_key, value)
                seen: set[str] = set()
                for record in records:
                    if record.name in seen:
                        raise ConflictError(duplicate_record_name(record_key.value, record.name))
                    seen.add(record.name)
                parsed.append((record_key, records))
            else:
                parsed.append((record_key, mappers.entity_from_value(record_key, value)))

        counts: dict[str, int] = {}
        for record_key, value in parsed:
            if record_key.holds_list:
                for record in value:
                    self.upsert_record(record_key, record)
                counts[record_key.value] = len(value)
            elif value is None:
                self.store.delete(record_key.value)
                counts[record_key.value] = 0
            else:
                self.set_value(record_key, value)
                counts[record_key.value] = 1
        logger.debug("Imported %s for %s", counts, self.store.owner)
        return counts

    def load_snapshot(self) -> ClientSnapshot:
        """Load every record of the client; absent keys read as empty."""
        expense_portion = self.get_value(RecordKey.EXPENSE_PORTION)
        return ClientSnapshot(
            incomes=tuple(self.list_records(RecordKey.INCOMES)),
            expenses=tuple(self.list_records(RecordKey.EXPENSES)),
            assets=tuple(self.list_records(RecordKey.ASSETS)),
            debts=tuple(self.list_records(RecordKey.DEBTS)),
            holdings=tuple(self.list_records(RecordKey.HOLDINGS)),
            goals=tuple(self.list_records(RecordKey.GOALS)),
            general_goal=self.get_value(RecordKey.GENERAL_GOAL),
            retirement_goal=self.get_value(RecordKey.RETIREMENT_GOAL),
            expense_portion=1.0 if expense_portion is None else expense_portion,
            tax_deduction=self.get_value(RecordKey.TAX_DEDUCTION),
            tax_plan=self.get_value(RecordKey.TAX_PLAN),
        )

    def _save_list(self, key: RecordKey, records: list[Any]) -> None:
        self.store.set(key.value, [mappers.record_to_dict(record) for record in records])
