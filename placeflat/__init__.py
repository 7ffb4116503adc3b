"""Flatten placement designs into array-friendly lists and split rows into sub-rows."""

__version__ = "0.1.0"

__all__ = [
    "design",
    "geometry",
    "orient",
    "pyplacedb",
    "region",
    "routing",
    "rowmap",
]