from .color import PALETTE, color_enabled, colorize, palette_color
from .console import die, err_console, error, warn

__version__ = "1.0.0"

__all__ = ["PALETTE", "color_enabled", "colorize", "palette_color",
           "die", "err_console", "error", "warn", "__version__"]
