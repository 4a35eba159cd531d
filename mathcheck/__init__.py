"""Worker/verifier reasoning pipeline with a calculator tool."""

__version__ = "0.1.0"
