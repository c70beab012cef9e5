"""
Library Records Package.

Tracks a library's book catalog, its registered readers and the loans
between them, and persists all three to JSON files.

Key Components:
- models: Pydantic models for books, readers and loans
- manager: The LibraryManager owning the collections and their invariants
- storage: JSON reading and writing of the three collection files
- config: Configuration management with pydantic-settings
- shell: Interactive text menu
"""

__version__ = "0.1.0"

from .manager import LibraryManager
from .models import Book, Loan, Reader
from .storage import CorruptDocumentError, StorageError, StorageLocations

__all__ = [
    "Book",
    "CorruptDocumentError",
    "LibraryManager",
    "Loan",
    "Reader",
    "StorageError",
    "StorageLocations",
    "__version__",
]
