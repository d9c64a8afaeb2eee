"""Mock providers for testing."""

from .identity import MockIdentityProvider
from .media import MockMediaProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockIdentityProvider",
    "MockMediaProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
