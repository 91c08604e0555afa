"""Run PHP Composer commands and edit a project's composer.json from Python."""

__version__ = "0.1.0"
__all__ = ["__version__"]