"""OAuth identity-provider store with client secrets encrypted at rest."""

__version__ = "0.1.0"
