"""surfacemap — static attack surface inventory for web codebases."""

__version__ = "0.1.0"
