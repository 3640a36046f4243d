"""A small simulated bank: account file, user terminals, transaction logs and an anomaly monitor."""

__version__ = "0.1.0"