from .controller import ViewStateController

__all__ = ["ViewStateController"]
