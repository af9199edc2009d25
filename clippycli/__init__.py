"""
ClippyCLI: turn a natural-language request into a single shell command.

This package provides an interactive terminal front-end that sends the user's
request to Google's Gemini API, shows the generated command, and copies it to
the clipboard or runs it once the user confirms.
"""

__version__ = "0.1.0"
