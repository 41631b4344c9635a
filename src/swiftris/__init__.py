"""Swiftris: logic core of a falling-block puzzle game."""

__version__ = "0.1.0"
