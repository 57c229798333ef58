"""HTTP API for the QR-screen gateway."""
