from enum import Enum


class BookingStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# Moves allowed through update_status; everything else is terminal.
# Cancelling goes through the owner-only cancel path.
TRANSITIONS = {
    BookingStatus.PENDING: {BookingStatus.APPROVED, BookingStatus.REJECTED},
    BookingStatus.APPROVED: {BookingStatus.COMPLETED},
}

REVENUE_STATUSES = {BookingStatus.APPROVED, BookingStatus.COMPLETED}
