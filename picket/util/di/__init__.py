"""Dependency injection wiring.

Providers come in two kinds. Core providers (config, domain services, use
cases) have one implementation. Infrastructure components (persistence,
mail, push) have a base class naming the component and one production plus
one mock subclass, told apart by ``__is_mock__``. Mock subclasses live in
``tests/di`` and are only visible once that package is imported.
"""

from picket.util.di.application import ProdApplicationProvider
from picket.util.di.base import Component, ProviderBase
from picket.util.di.core import ProdConfigProvider
from picket.util.di.domain import ProdDomainProvider
from picket.util.di.infrastructure import (
    MailProvider,
    PersistenceProvider,
    ProdMailProvider,
    ProdPersistenceProvider,
    ProdPushProvider,
    PushProvider,
)

CORE_PROVIDERS: list[type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
]

COMPONENT_PROVIDERS: dict[Component, type[ProviderBase]] = {
    "persistence": PersistenceProvider,
    "mail": MailProvider,
    "push": PushProvider,
}


def get_provider(base: type[ProviderBase], use_mock: bool) -> type[ProviderBase]:
    """Pick the production or mock subclass of a component base.

    Raises:
        ValueError: If no subclass with the requested flag is loaded
    """
    for candidate in base.__subclasses__():
        if candidate.__is_mock__ == use_mock:
            return candidate
    kind = "mock" if use_mock else "production"
    raise ValueError(f"No {kind} provider loaded for {base.__mock_component__}")


def select_providers(mocked: set[Component] | None = None) -> list[ProviderBase]:
    """Instantiate every provider, mocking the named components.

    Args:
        mocked: Components to back with mock providers, none by default

    Raises:
        ValueError: If a component name is unknown or its provider missing
    """
    mocked = mocked or set()
    unknown = mocked - COMPONENT_PROVIDERS.keys()
    if unknown:
        raise ValueError(f"Unknown components: {sorted(unknown)}")

    providers = [provider() for provider in CORE_PROVIDERS]
    for name, base in COMPONENT_PROVIDERS.items():
        providers.append(get_provider(base, use_mock=name in mocked)())
    return providers


__all__ = [
    "COMPONENT_PROVIDERS",
    "CORE_PROVIDERS",
    "Component",
    "ProviderBase",
    "get_provider",
    "select_providers",
    "MailProvider",
    "PersistenceProvider",
    "PushProvider",
    "ProdMailProvider",
    "ProdPersistenceProvider",
    "ProdPushProvider",
]
