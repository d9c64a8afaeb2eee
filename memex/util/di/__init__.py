"""Dependency injection wiring.

Core providers (settings, domain services, use cases) have a single
implementation. Each infrastructure component has a base provider whose
subclasses are the production and the mock implementation; which one is
used is decided per container.
"""

from typing import Collection, Type

from memex.util.di.application import ProdApplicationProvider
from memex.util.di.base import Component, ProviderBase
from memex.util.di.core import ProdConfigProvider
from memex.util.di.domain import ProdDomainProvider
from memex.util.di.infrastructure import (
    IdentityProvider,
    MediaProvider,
    PersistenceProvider,
    ProdIdentityProvider,
    ProdMediaProvider,
    ProdPersistenceProvider,
)

CORE_PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
]

COMPONENT_PROVIDERS: dict[Component, Type[ProviderBase]] = {
    "persistence": PersistenceProvider,
    "identity": IdentityProvider,
    "media": MediaProvider,
}


def implementation_of(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Pick the production or mock subclass of a component provider.

    Mock implementations only become visible once their module is imported,
    which the test package does.

    Raises:
        ValueError: If no subclass with the requested `__is_mock__` exists
    """
    impl = next(
        (c for c in base.__subclasses__() if c.__is_mock__ == use_mock),
        None,
    )
    if impl is None:
        kind = "mock" if use_mock else "production"
        raise ValueError(f"No {kind} implementation for {base.__mock_component__}")
    return impl


def select_providers(mocked: Collection[Component] = ()) -> list[ProviderBase]:
    """Instantiate every provider, using mocks for the `mocked` components.

    Raises:
        ValueError: If `mocked` names an unknown component
    """
    unknown = set(mocked) - COMPONENT_PROVIDERS.keys()
    if unknown:
        raise ValueError(f"Unknown components: {sorted(unknown)}")

    providers: list[ProviderBase] = [cls() for cls in CORE_PROVIDERS]
    for component, base in COMPONENT_PROVIDERS.items():
        providers.append(implementation_of(base, use_mock=component in mocked)())
    return providers


__all__ = [
    "Component",
    "ProviderBase",
    "CORE_PROVIDERS",
    "COMPONENT_PROVIDERS",
    "implementation_of",
    "select_providers",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "IdentityProvider",
    "MediaProvider",
    "PersistenceProvider",
    "ProdIdentityProvider",
    "ProdMediaProvider",
    "ProdPersistenceProvider",
]
