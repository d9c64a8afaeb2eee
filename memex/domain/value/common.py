"""Immutable pydantic bases for MemeX value objects."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, RootModel

T = TypeVar("T")


class ValueObject(BaseModel):
    """Frozen model compared field by field.

    Used for document references, field transforms in a batch and the
    results handed back by the identity and media adapters.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class RootValueObject(RootModel[T], Generic[T]):
    """Frozen wrapper around one validated primitive, such as a community name.

    `str()` gives the bare value, which is what gets stored and logged.
    """

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.root)
