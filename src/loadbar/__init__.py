"""loadbar: a bounded-latency loading indicator controller."""

__version__ = "0.1.0"
