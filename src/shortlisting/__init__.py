"""Candidate evaluation and shortlisting engine."""

__version__ = "0.1.0"
