"""Interactive comparison of flat, globe and hollow-Earth hypotheses."""
from earthcurve.model.earth import compute_parameters
from earthcurve.model.scale_rotate import ScaleRotateStep, scale_rotate

__version__ = "0.1.0"

__all__ = ["compute_parameters", "scale_rotate", "ScaleRotateStep", "__version__"]
