"""Contains functions needed to instantiate a class from a dictionary.

This allows to generically convert a YAML block into an instantiated class
with all the appropriate checks that the class exists and is provided
with appropriate arguments.
"""

from copy import deepcopy
from warnings import warn

from .logger import logger

__all__ = ["module_dict", "instantiate"]


def module_dict(module, pattern=None):
    """Converts a module into a dictionary which maps class names onto classes.

    Each class is accessible through its python name, its `name` attribute
    and any of its (deprecated) `aliases`.

    Parameters
    ----------
    module : module
        Module from which to fetch the classes
    pattern : str, optional
        If specified, only keep classes which contain this pattern in their name

    Returns
    -------
    dict
        Dictionary which maps acceptable class names to classes themselves
    """
    classes = {}
    for cls_name in getattr(module, "__all__", dir(module)):
        if cls_name.startswith("_"):
            continue

        cls = getattr(module, cls_name)
        if not isinstance(cls, type):
            continue
        if pattern is not None and pattern not in cls.__name__:
            continue

        # Only consider classes which belong to the module of interest
        if module.__name__ not in cls.__module__:
            continue

        classes[cls_name] = cls
        if getattr(cls, "name", None):
            classes[cls.name] = cls
        for alias in getattr(cls, "aliases", ()):
            classes[alias] = cls

    return classes


def instantiate(classes, cfg, alt_name=None, **kwargs):
    """Instantiates a class based on a configuration dictionary.

    The configuration block is either a plain class name or a dictionary:

    .. code-block:: yaml

        fit:
          name: xz
          half_window: 10
          pitch: 0.3

    Parameters
    ----------
    classes : dict
        Dictionary which maps a class name onto an object class
    cfg : Union[str, dict]
        Configuration block
    alt_name : str, optional
        Key under which the class name can be specified, beside `name` itself
    **kwargs : dict, optional
        Additional parameters to pass to the class

    Returns
    -------
    object
        Instantiated object
    """
    if isinstance(cfg, str):
        cfg = {"name": cfg}

    config = deepcopy(cfg)
    name_key = "name"
    if alt_name is not None and alt_name in config:
        if "name" in config:
            raise KeyError(f"Should specify only one of `name` or `{alt_name}`.")
        name_key = alt_name
    if name_key not in config:
        raise KeyError("Could not find the name of the class under `name`.")

    class_name = config.pop(name_key)
    if class_name not in classes:
        raise ValueError(
            f"Could not find '{class_name}' in the dictionary which maps names "
            f"to classes. Available names: {list(classes.keys())}"
        )

    cls = classes[class_name]
    if class_name in getattr(cls, "aliases", ()):
        warn(
            f"This name ({class_name}) is deprecated. Use {cls.name} instead.",
            DeprecationWarning,
        )

    # Gather the keyword arguments, top-level keys and `kwargs` block alike
    args = config.pop("args", [])
    block_kwargs = config.pop("kwargs", {})
    for key in config:
        if key in block_kwargs:
            raise KeyError(
                f"The keyword argument {key} is provided at the top level "
                "and under `kwargs`. Ambiguous."
            )
    kwargs = {**block_kwargs, **config, **kwargs}

    try:
        return cls(*args, **kwargs)

    except Exception as err:
        logger.error(
            f"Failed to instantiate {cls.__name__} with these arguments:\n"
            f"  - args: {args}\n  - kwargs: {kwargs}"
        )

        raise err
