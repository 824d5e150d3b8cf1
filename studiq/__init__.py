"""Studiq: AI study companion service."""

__version__ = "0.1.0"
