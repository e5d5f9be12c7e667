"""gym-tracker: log weight x reps per exercise and track strength progress."""

__version__ = "1.0.0"
