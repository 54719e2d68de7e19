"""Frontend interfaces for the Game of Life."""

from .render import Renderer, TextRenderer
from .cli import CLIGameOfLife

__all__ = ["Renderer", "TextRenderer", "CLIGameOfLife"]
