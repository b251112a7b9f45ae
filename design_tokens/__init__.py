"""Design token build pipeline: W3C/Figma token exports to Tailwind and CSS."""

__version__ = "0.1.0"
