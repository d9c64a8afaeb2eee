"""Infrastructure providers."""

# Import bases
from .identity import IdentityProvider
from .media import MediaProvider
from .persistence import PersistenceProvider

# Import implementations (needed for __subclasses__())
from .identity import ProdIdentityProvider  # noqa: F401
from .media import ProdMediaProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "IdentityProvider",
    "MediaProvider",
    "PersistenceProvider",
    "ProdIdentityProvider",
    "ProdMediaProvider",
    "ProdPersistenceProvider",
]
