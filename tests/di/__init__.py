"""Mock providers for testing."""

from .container import build_test_container
from .email import MockEmailProvider
from .persistence import MockPersistenceProvider

__all__ = [
    "MockEmailProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
