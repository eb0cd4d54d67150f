from .console import ConsoleApp

__all__ = ["ConsoleApp"]
