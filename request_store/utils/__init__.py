from .evented_model import BatchedEventedModel

__all__ = ["BatchedEventedModel"]
