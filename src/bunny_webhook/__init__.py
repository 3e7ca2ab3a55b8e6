"""cert-manager DNS-01 webhook solver for bunny.net DNS."""

__version__ = "0.1.0"
