"""Test container: in-memory store and recording email client by default."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider

from singles.util.di import PROVIDERS, Component, get_provider


def swappable_components() -> set[str]:
    """Names of the components that ship a test double."""
    return {
        base.__mock_component__
        for base in PROVIDERS
        if base.__mock_component__ and base.__subclasses__()
    }


def build_test_container(unmock: set[Component] | None = None) -> AsyncContainer:
    """Build a container for tests.

    Every swappable component uses its test double unless named in
    ``unmock``. ``unmock={"persistence"}`` wires the real ``SqlStore``,
    which then needs ``DATABASE__URL`` to point at a live database.

    Raises:
        ValueError: If ``unmock`` names an unknown component
    """
    unmock = unmock or set()
    unknown = set(unmock) - swappable_components()
    if unknown:
        raise ValueError(f"Unknown components: {sorted(unknown)}")

    providers = []
    for base in PROVIDERS:
        component = base.__mock_component__
        use_mock = component is not None and component not in unmock
        providers.append(get_provider(base, use_mock=use_mock)())

    # FastapiProvider lets the same container back a TestClient app
    return make_async_container(*providers, FastapiProvider())
