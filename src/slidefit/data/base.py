"""Module with a parent class of all data structures."""

from dataclasses import asdict, dataclass

import numpy as np

__all__ = ["DataBase"]


@dataclass(eq=False)
class DataBase:
    """Base class of all data structures.

    Defines basic methods shared by all data structures.
    """

    # Variable-length attributes as (key, dtype) or (key, (width, dtype)) pairs
    _var_length_attrs = ()

    # Euclidean axis labels
    _axes = ("x", "y", "z")

    def __post_init__(self):
        """Immediately called after building the class attributes.

        Gives default values to array-like attributes and casts the provided
        ones to their expected type. If a default value was provided in the
        attribute definition, all instances of this class would point to the
        same memory location.
        """
        for attr, dtype in self._var_length_attrs:
            width = None
            if isinstance(dtype, tuple):
                width, dtype = dtype

            value = getattr(self, attr)
            if value is None:
                shape = (0,) if width is None else (0, width)
                setattr(self, attr, np.empty(shape, dtype=dtype))
            else:
                value = np.asarray(value, dtype=dtype)
                if width is not None and (value.ndim != 2 or value.shape[1] != width):
                    raise ValueError(
                        f"The `{attr}` attribute must be of shape (N, {width}), "
                        f"got {value.shape}."
                    )
                setattr(self, attr, value)

    def __eq__(self, other):
        """Checks that all attributes of two class instances are the same.

        This overloads the default dataclass `__eq__` method to include an
        appropriate check for vector (numpy) attributes.

        Parameters
        ----------
        other : obj
            Other instance of the same object class

        Returns
        -------
        bool
            `True` if all attributes of both objects are identical
        """
        if self.__class__ != other.__class__:
            return False

        for k, v in self.__dict__.items():
            v_other = getattr(other, k)
            if np.isscalar(v):
                if v_other != v:
                    return False

            elif v.shape != v_other.shape or (v_other != v).any():
                return False

        return True

    def as_dict(self):
        """Returns the data class as dictionary of (key, value) pairs.

        Returns
        -------
        dict
            Dictionary of attribute names and their values
        """
        return asdict(self)
