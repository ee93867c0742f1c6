"""Bus crew scheduling by layered assignment and journey recombination."""

__version__ = "0.1.0"

__all__ = [
    "assignment",
    "cut",
    "instance",
    "journey",
    "layers",
    "pcr",
    "shake",
    "solution",
    "task",
    "timing",
]