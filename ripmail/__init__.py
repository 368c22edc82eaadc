"""Line reader, boundary stack, decoders, filename filters and logger for MIME mail."""

__version__ = "0.1.15"