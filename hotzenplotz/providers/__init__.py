"""Concrete adapters for the interfaces in :mod:`hotzenplotz.interfaces`."""
