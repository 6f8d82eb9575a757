from .book_generator import BookGenerator

__all__ = ["BookGenerator"]
