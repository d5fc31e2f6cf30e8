"""relkit - release orchestration for versioned binary projects."""

__version__ = "0.1.0"
