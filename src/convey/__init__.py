"""Convey: send conversational context to Google Gemini models."""
