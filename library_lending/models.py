from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional


class MembershipType(Enum):
    BASIC = "Basic"
    PREMIUM = "Premium"
    PLATINUM = "Platinum"


class BookCategory(Enum):
    FICTION = "Fiction"
    NON_FICTION = "NonFiction"
    REFERENCE = "Reference"


# Domain Models
@dataclass
class Book:
    """
    Represents a catalog item.

    Attributes:
        title (str): Catalog key; unique within a Library.
        author (str): Author name.
        category (BookCategory): Fiction, NonFiction or Reference.
        isAvailable (bool): True while the book is on the shelf.
        borrowedDate (Optional[datetime]): Set only while the book is on loan.
    """
    title: str
    author: str
    category: BookCategory = BookCategory.FICTION
    isAvailable: bool = True
    borrowedDate: Optional[datetime] = None

    def isOnLoan(self) -> bool:
        return not self.isAvailable


@dataclass
class LoanRecord:
    """
    One borrow lifecycle in a user's history.

    Attributes:
        bookTitle (str): Title of the borrowed book.
        borrowedDate (datetime): When the loan started.
        returnedDate (Optional[datetime]): When the book came back, if it has.
    """
    bookTitle: str
    borrowedDate: datetime
    returnedDate: Optional[datetime] = None

    def isOpen(self) -> bool:
        """
        Returns True if the book has not yet been returned.
        """
        return self.returnedDate is None


@dataclass
class User:
    """
    Represents a library user.

    Attributes:
        userId (str): Unique user identifier.
        name (str): Display name used in event messages.
        membership (Optional[MembershipType]): Tier that caps concurrent loans.
        loanHistory (List[LoanRecord]): Every loan, open or closed, in order.
    """
    userId: str
    name: str
    membership: Optional[MembershipType] = MembershipType.BASIC
    loanHistory: List[LoanRecord] = field(default_factory=list)

    def openLoans(self) -> List[LoanRecord]:
        return [rec for rec in self.loanHistory if rec.isOpen()]

    def activeLoanCount(self) -> int:
        return len(self.openLoans())

    def findOpenLoan(self, title: str) -> Optional[LoanRecord]:
        """
        Finds the open loan record for a title, most recent first.
        """
        for rec in reversed(self.loanHistory):
            if rec.bookTitle == title and rec.isOpen():
                return rec
        return None
