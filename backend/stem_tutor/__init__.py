"""STEM Tutor - flashcard, subject and progress service with a client-side cache."""

__version__ = "0.1.0"
