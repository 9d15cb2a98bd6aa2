class LibraryError(Exception):
    """Base exception for library lending errors."""


class DuplicateBookError(LibraryError):
    """Trying to add a book whose title is already in the catalog."""


class InconsistentLoanStateError(LibraryError):
    """A book is flagged as on loan but no borrower is recorded for it."""
