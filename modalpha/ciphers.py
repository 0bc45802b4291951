from abc import abstractmethod
from typing import Iterable, List, Optional, Sequence

from modalpha.alphabet import RUSSIAN, Alphabet
from modalpha.engine import CipherStrategy, log_info, register_cipher
from modalpha.errors import InvalidKey, InvalidText

# ==========================================
#  CORE: Modular Shift
# ==========================================

def shift_encode(positions: Iterable[int], key_stream: Iterable[int], modulus: int) -> List[int]:
    """c = (p + k) mod N for each position/key pair."""
    return [(p + k) % modulus for p, k in zip(positions, key_stream)]

def shift_decode(positions: Iterable[int], key_stream: Iterable[int], modulus: int) -> List[int]:
    """p = (c - k + N) mod N for each position/key pair."""
    return [(c - k + modulus) % modulus for c, k in zip(positions, key_stream)]

# ==========================================
#  VALIDATION
# ==========================================

def _listed(chars: List[str]) -> str:
    return ", ".join(repr(c) for c in chars)

def valid_text(alphabet: Alphabet, text: str, label: str = "text") -> str:
    """Uppercased ``text``; InvalidText if it is empty or has foreign characters."""
    if not isinstance(text, str):
        raise InvalidText(f"Expected {label} as str, got {type(text).__name__}")
    normalized = alphabet.normalize(text)
    if not normalized:
        raise InvalidText(f"Empty {label}")
    bad = alphabet.invalid_chars(normalized)
    if bad:
        raise InvalidText(f"Invalid {label} {text!r}: characters not in alphabet: {_listed(bad)}")
    return normalized

def valid_key(alphabet: Alphabet, key: str) -> str:
    """Uppercased letter key; InvalidKey if it is empty or has foreign characters."""
    if not isinstance(key, str):
        raise InvalidKey(f"Expected key as str, got {type(key).__name__}")
    if not key:
        raise InvalidKey("Empty key")
    normalized = alphabet.normalize(key)
    bad = alphabet.invalid_chars(normalized)
    if bad:
        raise InvalidKey(f"Invalid key {key!r}: characters not in alphabet: {_listed(bad)}")
    return normalized

# ==========================================
#  BASE: Alphabet Cipher
# ==========================================

class AlphabetCipher(CipherStrategy):
    """
    Shift cipher over a fixed alphabet.

    Subclasses supply ``key_stream``; validation and the modular
    arithmetic live here. Instances hold no mutable state.
    """

    alphabet: Alphabet = RUSSIAN

    @abstractmethod
    def key_stream(self, length: int) -> Sequence[int]:
        """Shift amounts for text positions 0..length-1."""

    def _valid_text(self, text: str, label: str = "text") -> str:
        return valid_text(self.alphabet, text, label)

    def encrypt(self, text: str) -> str:
        positions = self.alphabet.to_positions(self._valid_text(text, "open text"))
        encoded = shift_encode(positions, self.key_stream(len(positions)), len(self.alphabet))
        return self.alphabet.to_letters(encoded)

    def decrypt(self, text: str) -> str:
        positions = self.alphabet.to_positions(self._valid_text(text, "cipher text"))
        decoded = shift_decode(positions, self.key_stream(len(positions)), len(self.alphabet))
        return self.alphabet.to_letters(decoded)

# ==========================================
#  METHOD 1: Modified Alphabet (text key)
# ==========================================

@register_cipher
class ModAlphaCipher(AlphabetCipher):
    name = "modalpha"
    description = "Vigenère shift over the 33-letter Russian alphabet with a repeating letter key."

    def __init__(self, key: str):
        self.key = tuple(self.alphabet.to_positions(valid_key(self.alphabet, key)))

    def key_stream(self, length: int) -> List[int]:
        return [self.key[i % len(self.key)] for i in range(length)]

# ==========================================
#  METHOD 2: Numeric Shift (number key)
# ==========================================

@register_cipher
class ShiftCipher(AlphabetCipher):
    """
    Constant shift by a numeric key.

    The reference text given at construction is only used by
    ``transcript`` to check that a cipher text has the expected length.
    """

    name = "shift"
    description = "Constant shift by a numeric key; transcript checks length against a reference text."

    def __init__(self, key: int, text: str):
        self.key = self._valid_key(key)
        self.open_text = self._valid_text(text, "reference text")

    @classmethod
    def create(cls, key: str, reference: Optional[str] = None) -> "ShiftCipher":
        try:
            number = int(key)
        except (TypeError, ValueError):
            raise InvalidKey(f"Numeric key expected, got {key!r}") from None
        return cls(number, reference)

    def _valid_key(self, key: int) -> int:
        if isinstance(key, bool) or not isinstance(key, int):
            raise InvalidKey(f"Numeric key expected, got {key!r}")
        reduced = key % len(self.alphabet)
        if reduced == 0:
            raise InvalidKey(f"Key {key} reduces to 0 modulo {len(self.alphabet)}")
        if reduced != key:
            log_info(f"Key {key} reduced to {reduced} modulo {len(self.alphabet)}.")
        return reduced

    def key_stream(self, length: int) -> List[int]:
        return [self.key] * length

    def transcript(self, text: str, open_text: Optional[str] = None) -> str:
        """Decrypt ``text`` after checking its length against the reference text."""
        normalized = self._valid_text(text, "cipher text")
        if open_text is None:
            reference = self.open_text
        else:
            reference = self._valid_text(open_text, "reference text")
        if len(normalized) != len(reference):
            raise InvalidText(
                f"Cipher text length {len(normalized)} does not match "
                f"reference text length {len(reference)}"
            )
        return self.decrypt(normalized)
