"""Gem Rush: a timed match-three game built on an esper world and a blinker event bus."""

__version__ = "0.1.0"
