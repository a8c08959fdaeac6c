from .httpx_provider import HttpxProvider

__all__ = ["HttpxProvider"]
