"""Provider base class and the names of swappable components."""

from typing import ClassVar, Literal

from dishka import Provider

# Components with an in-process test double
Component = Literal["email", "persistence"]


class ProviderBase(Provider):
    """Base for every provider in ``PROVIDERS``.

    A swappable component declares a base carrying ``__mock_component__``
    and two subclasses, one with ``__is_mock__ = True``. Providers without
    subclasses are used as they are.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
