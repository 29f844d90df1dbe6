"""Scoring, feedback, transcription parsing and results services."""
