"""
Autokey Cipher Plugin - Vigenère variant whose key stream extends itself

The letter key primes the stream; after it runs out, the plaintext
itself supplies the shifts. Uses the same 33-letter alphabet and the
same key/text validation as the built-in "modalpha" cipher.

Example with key "КЛЮЧ" on "ПРИВЕТМИР":
    key stream = К Л Ю Ч П Р И В Е
"""

# These are injected by the plugin loader - no explicit import needed
# from modalpha.ciphers import valid_key, valid_text, shift_encode, shift_decode
# from modalpha.engine import CipherStrategy, register_cipher
# from modalpha.alphabet import RUSSIAN


@register_cipher
class AutokeyCipher(CipherStrategy):
    name = "autokey"
    description = "Autokey Vigenère: the letter key is followed by the plaintext itself (plugin)."

    alphabet = RUSSIAN

    def __init__(self, key: str):
        self.key = tuple(self.alphabet.to_positions(valid_key(self.alphabet, key)))

    def key_stream(self, plain_positions: list) -> list:
        """Shift for each plaintext position: the key, then the plaintext."""
        return (list(self.key) + list(plain_positions))[:len(plain_positions)]

    def encrypt(self, text: str) -> str:
        positions = self.alphabet.to_positions(valid_text(self.alphabet, text, "open text"))
        encoded = shift_encode(positions, self.key_stream(positions), len(self.alphabet))
        return self.alphabet.to_letters(encoded)

    def decrypt(self, text: str) -> str:
        # Each recovered letter extends the stream for the letters after it
        stream = list(self.key)
        plain = []
        for i, c in enumerate(self.alphabet.to_positions(valid_text(self.alphabet, text, "cipher text"))):
            p = shift_decode([c], [stream[i]], len(self.alphabet))[0]
            plain.append(p)
            stream.append(p)
        return self.alphabet.to_letters(plain)
