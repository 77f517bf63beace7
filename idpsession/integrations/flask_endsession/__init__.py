from .server import EndSessionServer

__all__ = ["EndSessionServer"]
