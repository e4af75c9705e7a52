"""Step count, weekly distance and live compass dial on a single screen."""

__version__ = "1.0.0"
