from .provider import ProgramProvider

__all__ = ["ProgramProvider"]
