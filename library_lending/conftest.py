import pytest

from library_lending.event_logger import EventLogger
from library_lending.library_system import Library
from library_lending.models import Book, BookCategory, MembershipType, User


class RecordingLogger(EventLogger):
    """Keeps every event message for assertions."""

    def __init__(self):
        self.messages = []

    def log(self, message: str) -> None:
        self.messages.append(message)


@pytest.fixture
def events():
    return RecordingLogger()


@pytest.fixture
def lib(events):
    """Fresh library with sample books."""
    l = Library(events)
    l.addBook(Book("The Great Gatsby", "F. Scott Fitzgerald", BookCategory.FICTION))
    l.addBook(Book("Sapiens", "Yuval Noah Harari", BookCategory.NON_FICTION))
    l.addBook(Book("Encyclopedia", "Various Authors", BookCategory.REFERENCE))
    l.addBook(Book("Dune", "Frank Herbert", BookCategory.FICTION))
    events.messages.clear()
    return l


@pytest.fixture
def ana():
    return User("1", "Ana", MembershipType.BASIC)


@pytest.fixture
def ben():
    return User("2", "Ben", MembershipType.PREMIUM)
