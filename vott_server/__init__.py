"""HTTP backend for the VoTT image-annotation client."""

__version__ = "0.1.0"
