from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta
from typing import Optional

from .models import Book

logger = logging.getLogger("library_lending.fines")


class FineManager:
    """
    Late fee calculator.

    Fine rule:
        A loan is due STANDARD_LOAN_DAYS after it starts. Every started day
        past the due date costs FINE_PER_DAY. Returning exactly at the due
        date is on time.
    """

    STANDARD_LOAN_DAYS = 7
    FINE_PER_DAY = 1

    def __init__(
        self,
        loan_days: Optional[int] = None,
        fine_per_day: Optional[int] = None,
    ) -> None:
        if loan_days is None:
            loan_days = self.STANDARD_LOAN_DAYS
        if fine_per_day is None:
            fine_per_day = self.FINE_PER_DAY
        if loan_days <= 0:
            raise ValueError("loan_days must be positive")
        if fine_per_day < 0:
            raise ValueError("fine_per_day cannot be negative")

        self.loan_days = loan_days
        self.fine_per_day = fine_per_day

    def dueDate(self, book: Book) -> Optional[datetime]:
        """
        Returns when the current loan of a book is due, or None if it is on the shelf.
        """
        if book.isAvailable or book.borrowedDate is None:
            return None
        return book.borrowedDate + timedelta(days=self.loan_days)

    def daysLate(self, book: Book, on_date: Optional[datetime] = None) -> int:
        due = self.dueDate(book)
        if due is None:
            return 0

        if on_date is None:
            on_date = datetime.now(due.tzinfo)

        if on_date <= due:
            return 0
        # a partial day counts as a full one
        return math.ceil((on_date - due) / timedelta(days=1))

    def calculateFine(self, book: Book, on_date: Optional[datetime] = None) -> int:
        """
        Calculates the fine owed for a book's current loan as of on_date.

        Returns:
            int: 0 for an available book or a loan that is not yet late.
        """
        days = self.daysLate(book, on_date)
        fine = days * self.fine_per_day
        logger.debug(
            "calculateFine | title=%s daysLate=%s fine=%s", book.title, days, fine
        )
        return fine
