"""Build, scan, push and sign container images in a CI pipeline."""

__version__ = "0.1.0"
