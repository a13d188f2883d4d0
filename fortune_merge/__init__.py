"""Seeded power-of-two merge patience game with a fortune report."""

__version__ = "0.1.0"
