from uistep.screens.screen import Screen

__all__ = ["Screen"]
