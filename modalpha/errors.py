class CipherError(ValueError):
    """Base class for rejected keys and texts."""


class InvalidKey(CipherError):
    """Key is empty, reduces to zero, or holds letters outside the alphabet."""


class InvalidText(CipherError):
    """Text is empty, holds letters outside the alphabet, or has the wrong length."""
