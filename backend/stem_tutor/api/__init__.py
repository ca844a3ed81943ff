"""STEM Tutor - API package."""
