from .provider import DocumentProvider

__all__ = ["DocumentProvider"]
