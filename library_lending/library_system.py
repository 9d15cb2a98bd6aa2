from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Dict, List, Optional

from .event_logger import ConsoleLogger, EventLogger
from .exceptions import (
    DuplicateBookError,
    InconsistentLoanStateError,
)
from .fine_manager import FineManager
from .membership import Membership
from .models import Book, BookCategory, LoanRecord, MembershipType, User

logger = logging.getLogger("library_lending.library")


# Library Core
class Library:
    """
    Lending core that manages the catalog and active loans.

    Rules enforced:
        (1) A book is held by at most one user at a time
        (2) A user may only borrow while their membership allows one more book
        (3) Late fees are computed at return time by the FineManager

    Refusals are reported to the event logger and through return values.
    Only bookkeeping inconsistencies and invalid input raise.
    """

    def __init__(
        self,
        eventLogger: EventLogger,
        fineManager: Optional[FineManager] = None,
        membership: Optional[Membership] = None,
        enforce_membership: bool = True,
    ) -> None:
        """
        Initializes an empty library with no books and no active loans.
        """
        self.eventLogger = eventLogger
        self.fineManager = fineManager or FineManager()
        self.membership = membership or Membership()
        self.enforce_membership = enforce_membership

        self.books: Dict[str, Book] = {}
        self.activeLoans: Dict[str, User] = {}
        self._lock = threading.RLock()

    # Public API

    def addBook(self, book: Book) -> None:
        """
        Adds a book to the catalog.

        Raises:
            DuplicateBookError: If a book with the same title already exists.
            ValueError: If the title is empty or the book is flagged as on loan.
        """
        logger.info("addBook called | title=%s author=%s", book.title, book.author)

        if not book.title:
            raise ValueError("title cannot be empty")
        if book.isOnLoan() or book.borrowedDate is not None:
            raise ValueError(f"Book must be available when added: title={book.title}")

        with self._lock:
            if book.title in self.books:
                raise DuplicateBookError(f"Book already exists: title={book.title}")
            self.books[book.title] = book

        self.eventLogger.log(f"Added book '{book.title}'.")

    def loadBook(
        self,
        book: Book,
        user: User,
        loan_date: Optional[datetime] = None
    ) -> bool:
        """
        Lends a book to a user.

        Returns:
            bool: True if the loan was made, False if it was refused because
            the book is already out, is not the catalog copy for its title,
            or the user's membership is at its cap.
        """
        logger.info("loadBook called | title=%s userId=%s", book.title, user.userId)

        with self._lock:
            if not self._is_catalog_copy(book):
                return False

            if book.isOnLoan():
                self.eventLogger.log(f"Book '{book.title}' is not available for loan.")
                return False

            if self.enforce_membership and not self.canBorrow(user):
                tier = user.membership.value if user.membership else "none"
                self.eventLogger.log(
                    f"User {user.name} ({tier} membership) cannot borrow "
                    f"'{book.title}': loan limit reached."
                )
                return False

            if loan_date is None:
                loan_date = datetime.now()

            book.isAvailable = False
            book.borrowedDate = loan_date
            self.activeLoans[book.title] = user
            user.loanHistory.append(
                LoanRecord(bookTitle=book.title, borrowedDate=loan_date)
            )

        self.eventLogger.log(f"User {user.name} borrowed '{book.title}'.")
        logger.info("Loan successful | title=%s userId=%s", book.title, user.userId)
        return True

    def returnBook(
        self,
        book: Book,
        return_date: Optional[datetime] = None
    ) -> int:
        """
        Takes a book back from its borrower.

        The fine is computed before the book is put back on the shelf, while
        borrowedDate still describes the loan that is ending.

        Returns:
            int: Fine owed for the loan, 0 if on time or nothing was returned.

        Raises:
            InconsistentLoanStateError: If the book is on loan but no borrower is recorded.
            ValueError: If return_date is before the borrow date.
        """
        logger.info("returnBook called | title=%s", book.title)

        with self._lock:
            if not self._is_catalog_copy(book):
                return 0

            if book.isAvailable:
                self.eventLogger.log(f"Book '{book.title}' is already available.")
                return 0

            user = self.activeLoans.get(book.title)
            if user is None:
                self.eventLogger.log(f"User not found for loaned book '{book.title}'.")
                raise InconsistentLoanStateError(
                    f"No borrower recorded for loaned book: title={book.title}"
                )

            if return_date is None:
                return_date = datetime.now(
                    book.borrowedDate.tzinfo if book.borrowedDate else None
                )
            if book.borrowedDate is not None and return_date < book.borrowedDate:
                raise ValueError("return_date cannot be before the borrow date")

            fine = self.fineManager.calculateFine(book, on_date=return_date)

            del self.activeLoans[book.title]
            rec = user.findOpenLoan(book.title)
            if rec is not None:
                rec.returnedDate = return_date
            book.isAvailable = True
            book.borrowedDate = None

        self.eventLogger.log(f"User {user.name} returned '{book.title}'.")
        if fine > 0:
            self.eventLogger.log(f"Fine generated: {fine}")
        logger.info(
            "Return successful | title=%s userId=%s fine=%s",
            book.title, user.userId, fine,
        )
        return fine

    def findBookByTitle(self, title: str) -> Optional[Book]:
        book = self.books.get(title)
        if book is None:
            self.eventLogger.log(f"Book '{title}' not found.")
        return book

    def validateBookTitle(self, book: Book, expectedTitle: str) -> None:
        if book.title != expectedTitle:
            self.eventLogger.log("Book does not have the correct title.")
        else:
            self.eventLogger.log("Book has the correct title.")

    def canBorrow(self, user: User) -> bool:
        """
        Returns True if the user's membership allows one more book.
        """
        return self.membership.canBorrow(user.membership, user.activeLoanCount() + 1)

    def currentFine(self, book: Book, on_date: Optional[datetime] = None) -> int:
        """
        Returns the fine a loaned book would carry if returned at on_date.
        """
        return self.fineManager.calculateFine(book, on_date=on_date)

    def getBorrower(self, book: Book) -> Optional[User]:
        return self.activeLoans.get(book.title)

    def getAvailableBooks(self) -> List[Book]:
        """
        Returns all books currently on the shelf.
        """
        return [b for b in self.books.values() if b.isAvailable]

    def getLoanedBooks(self) -> List[Book]:
        return [b for b in self.books.values() if b.isOnLoan()]

    def getUserLoanHistory(self, user: User) -> List[dict]:
        """
        Returns the loan history for a user.

        Each record includes:
            - bookTitle
            - borrowedDate
            - returnedDate
        """
        return [
            {
                "bookTitle": rec.bookTitle,
                "borrowedDate": rec.borrowedDate,
                "returnedDate": rec.returnedDate,
            }
            for rec in user.loanHistory
        ]

    # Internal Helpers
    def _is_catalog_copy(self, book: Book) -> bool:
        """
        Returns True if book is the object the catalog holds for its title.
        """
        if self.books.get(book.title) is book:
            return True
        self.eventLogger.log(f"Book '{book.title}' is not in the catalog.")
        return False


# Main Program
def main() -> None:
    """
    Demo that lends and returns a few books.

    Demonstrated scenarios:
        - adding books to the catalog
        - lending one book to each membership tier
        - refusing a second loan of the same book
        - refusing a loan past the Basic membership cap
        - a late return that generates a fine
        - loan history
    """
    from datetime import timedelta

    print("\n=== Library Lending Demo ===\n")

    library = Library(ConsoleLogger())

    gatsby = Book("The Great Gatsby", "F. Scott Fitzgerald", BookCategory.FICTION)
    sapiens = Book("Sapiens", "Yuval Noah Harari", BookCategory.NON_FICTION)
    encyclopedia = Book("Encyclopedia", "Various Authors", BookCategory.REFERENCE)
    dune = Book("Dune", "Frank Herbert", BookCategory.FICTION)
    for b in (gatsby, sapiens, encyclopedia, dune):
        library.addBook(b)

    basic = User("1", "Ana", MembershipType.BASIC)
    premium = User("2", "Ben", MembershipType.PREMIUM)
    platinum = User("3", "Cleo", MembershipType.PLATINUM)

    day0 = datetime(2025, 1, 1, 10, 0)

    print("\nLending one book to each user...")
    library.loadBook(gatsby, basic, loan_date=day0)
    library.loadBook(sapiens, premium, loan_date=day0)
    library.loadBook(encyclopedia, platinum, loan_date=day0)

    print("\nLending an unavailable book (should be refused)...")
    library.loadBook(gatsby, premium, loan_date=day0)

    print("\nFilling the Basic membership cap...")
    library.loadBook(dune, basic, loan_date=day0)
    extra = Book("Refactoring", "Martin Fowler", BookCategory.REFERENCE)
    library.addBook(extra)
    library.loadBook(extra, basic, loan_date=day0)

    print("\nReturning books...")
    library.returnBook(gatsby, return_date=day0 + timedelta(days=10))
    library.returnBook(sapiens, return_date=day0 + timedelta(days=5))
    library.returnBook(encyclopedia, return_date=day0 + timedelta(days=7))
    library.returnBook(encyclopedia)

    print(f"\nLoan history for {basic.name}:")
    for h in library.getUserLoanHistory(basic):
        print(h)

    print("\n=== Demo Completed ===\n")

