"""Fixed-size DSP vectors with scalar helpers, projections, element-wise ops, row operations, routing and windows."""

__version__ = "0.1.0"
__all__ = ["scalar_math", "projections", "vector", "ops", "rows", "routing", "windows"]