"""Book direction rules and inventory reconciliation.

Pure functions only; persistence lives in the scan service. A book moves
through these states, one transition per scan::

    no record -> unknown direction -> asc/desc active -> asc/desc finished

The stored ``current_count`` is the last observed ticket number. A scan of
ticket ``t`` means ``t`` is the next ticket on the roll, so the tickets sold
are the distance from the start boundary to ``t``. Scanning the terminal ticket
(``max`` for ascending books, ``min`` for descending ones) closes the book, and
that scan counts the terminal ticket itself as sold.
"""

from __future__ import annotations

from dataclasses import dataclass

from lotto_pro.errors import (
    BackwardMovementError,
    BookExhaustedError,
    DirectionConflictError,
    DirectionRequiredError,
    ForwardMovementError,
    OutOfRangeError,
)
from lotto_pro.models.enums import BookStatus, Direction


@dataclass(frozen=True)
class TicketRange:
    """Inclusive numeric range of a game; bounds may be given in either order."""

    start_number: int
    end_number: int

    @property
    def min_ticket(self) -> int:
        return min(self.start_number, self.end_number)

    @property
    def max_ticket(self) -> int:
        return max(self.start_number, self.end_number)

    @property
    def total_count(self) -> int:
        return abs(self.end_number - self.start_number) + 1

    def contains(self, ticket_number: int) -> bool:
        return self.min_ticket <= ticket_number <= self.max_ticket


@dataclass(frozen=True)
class BookSnapshot:
    """What the engine needs to know about an existing book."""

    current_count: int | None
    direction: Direction


@dataclass(frozen=True)
class Reconciliation:
    direction: Direction
    current_count: int
    total_count: int
    remaining: int
    status: BookStatus
    tickets_sold_this_scan: int


def check_in_range(ticket_number: int, ticket_range: TicketRange) -> None:
    if not ticket_range.contains(ticket_number):
        raise OutOfRangeError(
            details={
                "ticket_number": ticket_number,
                "min_ticket": ticket_range.min_ticket,
                "max_ticket": ticket_range.max_ticket,
            }
        )


def resolve_direction(book: BookSnapshot | None, requested: Direction | None) -> Direction:
    """Direction to use for this scan.

    A book without a known direction takes the requested one, which then
    becomes permanent. A known direction can only be confirmed, never changed.
    """

    stored = book.direction if book is not None else Direction.UNKNOWN

    if stored is Direction.UNKNOWN:
        if requested is None or requested is Direction.UNKNOWN:
            if book is None:
                raise DirectionRequiredError()
            raise DirectionRequiredError("Direction is required for this book before scanning")
        return requested

    if requested is not None and requested is not stored:
        raise DirectionConflictError(
            f'Book direction already set to "{stored.value}".',
            details={"direction": stored.value},
        )
    return stored


def check_direction_bounds(ticket_number: int, direction: Direction, ticket_range: TicketRange) -> None:
    check_in_range(ticket_number, ticket_range)
    if direction is Direction.ASC and ticket_number > ticket_range.max_ticket:
        raise OutOfRangeError("Ascending books cannot scan past the end number")
    if direction is Direction.DESC and ticket_number < ticket_range.min_ticket:
        raise OutOfRangeError("Descending books cannot scan below the start number")


def is_exhausted(ticket_number: int | None, direction: Direction, ticket_range: TicketRange) -> bool:
    """True once the terminal ticket of the book has been scanned."""

    if ticket_number is None:
        return False
    if direction is Direction.ASC:
        return ticket_number >= ticket_range.max_ticket
    if direction is Direction.DESC:
        return ticket_number <= ticket_range.min_ticket
    return False


def check_not_exhausted(previous_ticket: int | None, direction: Direction, ticket_range: TicketRange) -> None:
    if is_exhausted(previous_ticket, direction, ticket_range):
        raise BookExhaustedError()


def compute_ticket_delta(previous_ticket: int | None, current_ticket: int, direction: Direction) -> int:
    """Tickets sold between two consecutive scans of the same book."""

    if previous_ticket is None:
        return 0

    if direction is Direction.ASC:
        if current_ticket < previous_ticket:
            raise BackwardMovementError(
                details={"previous_ticket": previous_ticket, "ticket_number": current_ticket}
            )
        return current_ticket - previous_ticket

    if current_ticket > previous_ticket:
        raise ForwardMovementError(
            details={"previous_ticket": previous_ticket, "ticket_number": current_ticket}
        )
    return previous_ticket - current_ticket


def sold_tickets(current_ticket: int, direction: Direction, ticket_range: TicketRange) -> int:
    """Tickets gone from the book once ``current_ticket`` is the last one seen."""

    total = ticket_range.total_count
    if is_exhausted(current_ticket, direction, ticket_range):
        return total

    if direction is Direction.DESC:
        sold = ticket_range.max_ticket - current_ticket
    else:
        sold = current_ticket - ticket_range.min_ticket
    return min(max(sold, 0), total)


def remaining_tickets(current_ticket: int, direction: Direction, ticket_range: TicketRange) -> int:
    return max(ticket_range.total_count - sold_tickets(current_ticket, direction, ticket_range), 0)


def tickets_sold_between(
    previous_ticket: int | None, current_ticket: int, direction: Direction, ticket_range: TicketRange
) -> int:
    """Sold-count change between two scans of one book.

    Measured with ``sold_tickets`` so the per-scan amounts of a book always add
    up to the drop in ``remaining_tickets``, the closing scan included.
    """

    compute_ticket_delta(previous_ticket, current_ticket, direction)
    if previous_ticket is None:
        return 0
    return sold_tickets(current_ticket, direction, ticket_range) - sold_tickets(previous_ticket, direction, ticket_range)


def resolve_status(remaining: int) -> BookStatus:
    if remaining <= 0:
        return BookStatus.FINISHED
    return BookStatus.ACTIVE


def reconcile(
    ticket_range: TicketRange,
    ticket_number: int,
    requested_direction: Direction | None,
    book: BookSnapshot | None,
) -> Reconciliation:
    """Validate a scan against the book and compute its new state.

    ``book`` is None when this serial number has never been scanned.

    Raises:
        OutOfRangeError, DirectionRequiredError, DirectionConflictError,
        BookExhaustedError, BackwardMovementError, ForwardMovementError
    """

    check_in_range(ticket_number, ticket_range)
    direction = resolve_direction(book, requested_direction)
    check_direction_bounds(ticket_number, direction, ticket_range)

    delta = 0
    if book is not None:
        check_not_exhausted(book.current_count, direction, ticket_range)
        delta = tickets_sold_between(book.current_count, ticket_number, direction, ticket_range)

    remaining = remaining_tickets(ticket_number, direction, ticket_range)
    return Reconciliation(
        direction=direction,
        current_count=ticket_number,
        total_count=ticket_range.total_count,
        remaining=remaining,
        status=resolve_status(remaining),
        tickets_sold_this_scan=delta,
    )
