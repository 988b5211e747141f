"""Construct a sliding fit module class from its name."""

from slidefit.utils.factory import instantiate, module_dict

from . import fitters

# Build a dictionary of available fit modules
FITTER_DICT = module_dict(fitters)

__all__ = ["fitter_factory"]


def fitter_factory(cfg):
    """Instantiates a sliding fit module from a configuration block.

    Parameters
    ----------
    cfg : Union[str, dict]
        Fitter name or configuration dictionary

    Returns
    -------
    FitterBase
         Initialized fitter object
    """
    return instantiate(FITTER_DICT, cfg)
