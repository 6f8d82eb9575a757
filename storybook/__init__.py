"""Illustrated children's storybook generator."""

__version__ = "0.1.0"
