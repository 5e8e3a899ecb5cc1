"""Library records: shared Book metadata interned by ISBN, per-copy checkout state broadcast to observers."""

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from internhub.config import DispatchPolicy
from internhub.errors import RecordNotFoundError
from internhub.intern_table import InternTable
from internhub.subject import Subject


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


@dataclass(frozen=True)
class Book:
    """Intrinsic book data shared between every copy with the same ISBN."""

    title: str
    author: str
    genre: str
    page_count: int
    publisher_id: str
    isbn: str


class BookFactory:
    """Hands out one Book instance per ISBN."""

    def __init__(self, table: Optional[InternTable[str, Book]] = None) -> None:
        self._table: InternTable[str, Book] = table if table is not None else InternTable("books")

    @property
    def table(self) -> InternTable[str, Book]:
        return self._table

    def create_book(
        self,
        title: str,
        author: str,
        genre: str,
        page_count: int,
        publisher_id: str,
        isbn: str,
    ) -> Book:
        # First registration of an ISBN wins; later metadata for the same ISBN is ignored.
        return self._table.get_or_create(
            isbn,
            lambda: Book(title, author, genre, page_count, publisher_id, isbn),
        )

    def total_books_made(self) -> int:
        return self._table.size()


@dataclass(frozen=True)
class BookRecord:
    """Extrinsic state for one physical copy."""

    record_id: str
    book: Book
    checkout_member: Optional[str] = None
    checkout_date: Optional[datetime] = None
    due_return_date: Optional[datetime] = None
    availability: bool = True


@dataclass(frozen=True)
class RecordEvent:
    """Context passed to observers: action is added, checkout_updated or checkout_extended."""

    action: str
    record: BookRecord


class BookRecordManager(Subject):
    """Keeps checkout records keyed by record id and notifies observers of every change."""

    def __init__(
        self,
        factory: BookFactory,
        policy: "DispatchPolicy | str | None" = None,
    ) -> None:
        super().__init__("book_records", policy=policy)
        self._factory = factory
        self._records: Dict[str, BookRecord] = {}

    def add_book_record(
        self,
        record_id: str,
        title: str,
        author: str,
        genre: str,
        page_count: int,
        publisher_id: str,
        isbn: str,
        checkout_date: Optional[datetime] = None,
        checkout_member: Optional[str] = None,
        due_return_date: Optional[datetime] = None,
        availability: bool = True,
    ) -> BookRecord:
        book = self._factory.create_book(title, author, genre, page_count, publisher_id, isbn)
        record = BookRecord(
            record_id=record_id,
            book=book,
            checkout_member=checkout_member,
            checkout_date=checkout_date,
            due_return_date=due_return_date,
            availability=availability,
        )
        self._records[record_id] = record
        self.notify(RecordEvent("added", record))
        return record

    def get_record(self, record_id: str) -> BookRecord:
        try:
            return self._records[record_id]
        except KeyError:
            raise RecordNotFoundError(record_id) from None

    def update_checkout_status(
        self,
        record_id: str,
        availability: bool,
        checkout_date: Optional[datetime],
        checkout_member: Optional[str],
        due_return_date: Optional[datetime],
    ) -> BookRecord:
        record = replace(
            self.get_record(record_id),
            availability=availability,
            checkout_date=checkout_date,
            checkout_member=checkout_member,
            due_return_date=due_return_date,
        )
        return self._store(record, "checkout_updated")

    def extend_checkout_period(self, record_id: str, due_return_date: datetime) -> BookRecord:
        record = replace(self.get_record(record_id), due_return_date=due_return_date)
        return self._store(record, "checkout_extended")

    def is_past_due(self, record_id: str, now: Optional[datetime] = None) -> bool:
        """True when the record has a due date earlier than now (UTC by default). Naive datetimes are read as UTC."""
        due = self.get_record(record_id).due_return_date
        if due is None:
            return False
        if now is None:
            now = datetime.now(timezone.utc)
        return _as_utc(now) > _as_utc(due)

    def record_count(self) -> int:
        return len(self._records)

    def _store(self, record: BookRecord, action: str) -> BookRecord:
        self._records[record.record_id] = record
        self.notify(RecordEvent(action, record))
        return record

    def summary(self) -> Dict[str, Any]:
        return {
            "records": len(self._records),
            "distinct_books": self._factory.total_books_made(),
            "checked_out": sum(1 for r in self._records.values() if not r.availability),
        }
