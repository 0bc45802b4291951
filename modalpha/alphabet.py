from types import MappingProxyType
from typing import Iterable, List, Mapping

# Uppercase Russian alphabet, Ё included (А=0 ... Я=32)
RUSSIAN_LETTERS = "АБВГДЕЁЖЗИЙКЛМНОПРСТУФХЦЧШЩЪЫЬЭЮЯ"


class Alphabet:
    """
    Ordered letter table with a two-way lookup.

    Positions are indices into ``letters``; ``index`` maps each letter
    back to its position. Built once and never mutated.
    """

    def __init__(self, letters: str):
        if not letters:
            raise ValueError("Alphabet must contain at least one letter.")
        if len(set(letters)) != len(letters):
            raise ValueError("Alphabet letters must be unique.")
        self.letters = letters
        self.index: Mapping[str, int] = MappingProxyType({char: i for i, char in enumerate(letters)})

    def __len__(self) -> int:
        return len(self.letters)

    def __contains__(self, char: str) -> bool:
        return char in self.index

    def normalize(self, text: str) -> str:
        return text.upper()

    def invalid_chars(self, text: str) -> List[str]:
        """Characters of ``text`` missing from the table, in order of appearance."""
        seen = []
        for char in text:
            if char not in self.index and char not in seen:
                seen.append(char)
        return seen

    def to_positions(self, text: str) -> List[int]:
        return [self.index[char] for char in text]

    def to_letters(self, positions: Iterable[int]) -> str:
        return "".join(self.letters[p] for p in positions)


RUSSIAN = Alphabet(RUSSIAN_LETTERS)
