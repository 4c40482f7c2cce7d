"""AI Studio - five simulated AI tools behind one task-with-progress engine."""

__version__ = "0.1.0"
