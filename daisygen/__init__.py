"""Generate Phoenix.Component modules from DaisyUI documentation examples."""

__version__ = "0.1.0"
