"""
Library lending core.

Books, users, membership tiers and late fees, with a Library that tracks
which user holds which book.
"""

from .event_logger import EventLogger, ConsoleLogger
from .exceptions import (
    LibraryError,
    DuplicateBookError,
    InconsistentLoanStateError,
)
from .fine_manager import FineManager
from .library_system import Library
from .membership import Membership
from .models import Book, BookCategory, LoanRecord, MembershipType, User

__all__ = [
    "EventLogger",
    "ConsoleLogger",
    "LibraryError",
    "DuplicateBookError",
    "InconsistentLoanStateError",
    "FineManager",
    "Library",
    "Membership",
    "Book",
    "BookCategory",
    "LoanRecord",
    "MembershipType",
    "User",
]
