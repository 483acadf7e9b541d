"""Factorization backends."""

from pynumerics.factorization.backends.cpu import CPUGramSchmidtBackend

__all__ = ["CPUGramSchmidtBackend"]
