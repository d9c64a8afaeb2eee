"""Provider base class shared by every dishka provider in MemeX."""

from typing import ClassVar, Literal

from dishka import Provider

# Infrastructure that talks to something outside the process and so has an
# in-memory stand-in for tests
Component = Literal["persistence", "identity", "media"]


class ProviderBase(Provider):
    """A dishka provider tagged with the component it implements.

    Core providers leave `__mock_component__` unset. A component's base
    provider sets it, and its subclasses flip `__is_mock__` to mark the
    in-memory implementation.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
