"""Retrieval-augmented context injection for chat-completion requests.

The host entry point is :func:`rag_injector.pipeline.handle`.
"""

__version__ = "0.3.0"
