"""Driver and HTTP gateway for the R-Call QR-screen."""

__version__ = "0.1.0"
