"""
mrwant - Ask a question, get a short answer streamed into your terminal
"""

__version__ = "0.1.0"
