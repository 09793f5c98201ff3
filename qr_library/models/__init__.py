from qr_library.models.category import Category
from qr_library.models.author import Author, author_book
from qr_library.models.book import Book
from qr_library.models.student import Student
from qr_library.models.presence_log import PresenceLogEntry
from qr_library.models.borrow import Borrow
from qr_library.models.search_history import SearchHistory

__all__ = [
    "Author",
    "Book",
    "Borrow",
    "Category",
    "PresenceLogEntry",
    "SearchHistory",
    "Student",
    "author_book",
]
