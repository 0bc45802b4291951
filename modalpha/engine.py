import sys
from abc import ABC, abstractmethod
from typing import Dict, Optional, Tuple, Type

# Set by the CLI from -v/--verbose
VERBOSE = False

def _emit(level: str, msg: str):
    if VERBOSE:
        print(f"[{level}] {msg}", file=sys.stderr)

def log_info(msg: str):
    _emit("INFO", msg)

def log_warn(msg: str):
    _emit("WARN", msg)

# ==========================================
#  FRAMEWORK: Cipher Base Class & Registry
# ==========================================

class CipherStrategy(ABC):
    """
    Common interface of every cipher the engine can run.

    Subclasses set ``name`` (the value accepted by ``-m/--method``) and a
    one-line ``description`` for ``--list``.
    """

    name: str = ""
    description: str = ""

    @classmethod
    def create(cls, key: str, reference: Optional[str] = None) -> "CipherStrategy":
        """
        Build an instance from command-line input.

        ``key`` arrives as a raw string; ciphers with non-textual keys
        override this to parse it. ``reference`` is ignored by default.
        """
        return cls(key)

    @abstractmethod
    def encrypt(self, text: str) -> str:
        """Open text in, cipher text out."""

    @abstractmethod
    def decrypt(self, text: str) -> str:
        """Cipher text in, open text out."""

CIPHER_REGISTRY: Dict[str, Type[CipherStrategy]] = {}

def register_cipher(cls):
    """Class decorator adding ``cls`` to CIPHER_REGISTRY under ``cls.name``."""
    if not cls.name:
        raise TypeError(f"{cls.__name__} has no cipher name")
    CIPHER_REGISTRY[cls.name] = cls
    return cls

# ==========================================
#  STEGANOGRAPHY: Method Watermark
# ==========================================

class WatermarkEngine:
    """
    Hides the cipher name in front of a text as zero-width characters.

    Layout: SENTINEL, one mark per bit of the UTF-8 encoded name
    (ZERO or ONE), SENTINEL, then the text itself. The CLI adds it only
    on request (``--watermark``); plain cipher text stays letters only.
    """

    SENTINEL = "\u2060"  # word joiner
    ZERO = "\u200B"      # zero width space
    ONE = "\u200C"       # zero width non-joiner

    _TO_MARKS = str.maketrans("01", ZERO + ONE)
    _FROM_MARKS = str.maketrans(ZERO + ONE, "01")

    @classmethod
    def inject(cls, text: str, cipher_name: str) -> str:
        bits = "".join(format(byte, "08b") for byte in cipher_name.encode("utf-8"))
        return cls.SENTINEL + bits.translate(cls._TO_MARKS) + cls.SENTINEL + text

    @classmethod
    def detect(cls, text: str) -> Tuple[Optional[str], str]:
        """Return ``(cipher_name, text_after_mark)``, or ``(None, text)`` if unmarked."""
        if not text.startswith(cls.SENTINEL):
            return None, text
        payload, found, rest = text[1:].partition(cls.SENTINEL)
        bits = payload.translate(cls._FROM_MARKS)
        if not found or not bits or len(bits) % 8 or set(bits) - {"0", "1"}:
            return None, text

        raw = int(bits, 2).to_bytes(len(bits) // 8, "big")
        try:
            return raw.decode("utf-8"), rest
        except UnicodeDecodeError as e:
            log_warn(f"Unreadable watermark ignored: {e}")
            return None, text
