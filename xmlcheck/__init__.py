"""Find duplicate <game> names in menu XML files."""

__version__ = "1.0.0"
