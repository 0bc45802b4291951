"""Modified-alphabet (Vigenère family) cipher over the 33-letter Russian alphabet."""

__version__ = "1.0.0"

from modalpha.alphabet import RUSSIAN, Alphabet
from modalpha.errors import CipherError, InvalidKey, InvalidText
from modalpha.ciphers import (
    AlphabetCipher,
    ModAlphaCipher,
    ShiftCipher,
    shift_decode,
    shift_encode,
)

__all__ = [
    "RUSSIAN",
    "Alphabet",
    "CipherError",
    "InvalidKey",
    "InvalidText",
    "AlphabetCipher",
    "ModAlphaCipher",
    "ShiftCipher",
    "shift_decode",
    "shift_encode",
]
