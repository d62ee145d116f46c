from .webhook import router

__all__ = ["router"]
