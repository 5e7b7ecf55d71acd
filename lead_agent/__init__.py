"""Vapi Lead Nurture Agent - webhook bridge between Vapi calls and OpenAI."""

__version__ = "1.0.0"
