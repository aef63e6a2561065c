"""Concrete adapters for the interfaces in ``reelpick.interfaces``."""
