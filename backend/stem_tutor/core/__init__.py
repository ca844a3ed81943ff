"""STEM Tutor - Core configuration, logging and storage."""
