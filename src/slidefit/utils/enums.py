"""Module which contains enumerated variables shared across the project."""

from enum import IntEnum

__all__ = ["ShowerEdge", "enum_factory"]


class ShowerEdge(IntEnum):
    """Enumerates the two transverse edges of a shower-like cluster."""

    POSITIVE = 0
    NEGATIVE = 1


def enum_factory(enum, value):
    """Parses an enumerated object from a string name (or passes it through).

    Parameters
    ----------
    enum : IntEnum
        Enumerated type
    value : Union[str, int]
        Name or value of the enumerated object (from config)

    Returns
    -------
    IntEnum
        Enumerated object
    """
    if isinstance(value, str):
        if not hasattr(enum, value.upper()):
            raise ValueError(
                f"Enumerated object not recognized: {value}. Must be one "
                f"of {[e.name for e in enum]}."
            )

        return getattr(enum, value.upper())

    return enum(value)
