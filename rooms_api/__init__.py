"""HTTP proxy for Twilio Video rooms, tokens and participants."""

__version__ = "0.1.0"
