"""Space-academy math quiz: a Gemini-backed question generator behind a small game state machine."""

__version__ = "0.1.0"
