"""Test container builder with selective unmocking."""

from dishka import AsyncContainer

from picket.util.di import COMPONENT_PROVIDERS, Component
from picket.util.di.container import create_container


def build_test_container(unmock: set[Component] | None = None) -> AsyncContainer:
    """Build a container where every component is mocked unless unmocked.

    Settings are loaded from environment variables (tests/conftest.py sets
    test defaults).

    Examples:
        # Unit tests - all mocks
        container = build_test_container()

        # Integration tests - real persistence
        container = build_test_container(unmock={"persistence"})

    Raises:
        ValueError: If unknown components are requested
    """
    unmock = unmock or set()
    unknown = unmock - COMPONENT_PROVIDERS.keys()
    if unknown:
        raise ValueError(f"Unknown components: {sorted(unknown)}")
    return create_container(mocked=set(COMPONENT_PROVIDERS) - unmock)
