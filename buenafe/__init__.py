"""Lista de Buena Fe — tournament player registration service."""

__version__ = "1.0.0"
