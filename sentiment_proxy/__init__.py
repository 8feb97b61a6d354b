"""Sentiment analysis proxy for the Hugging Face Inference API."""

__version__ = "0.1.0"
