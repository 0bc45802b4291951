from concurrent.futures import ThreadPoolExecutor

import pytest

from modalpha import engine
from modalpha.ciphers import ModAlphaCipher, ShiftCipher, shift_decode, shift_encode
from modalpha.errors import CipherError, InvalidKey, InvalidText


# ---------- shared core ----------

def test_shift_encode_wraps_past_end():
    assert shift_encode([32, 0], [1, 1], 33) == [0, 1]


def test_shift_decode_never_goes_negative():
    assert shift_decode([0], [5], 33) == [28]


# ---------- ModAlphaCipher ----------

def test_identity_key():
    assert ModAlphaCipher("А").encrypt("СЛОВО") == "СЛОВО"


def test_single_letter_shift():
    cipher = ModAlphaCipher("Б")
    assert cipher.encrypt("А") == "Б"
    assert cipher.decrypt("Б") == "А"
    assert cipher.encrypt("Я") == "А"


def test_yo_is_a_regular_letter():
    assert ModAlphaCipher("Б").encrypt("е") == "Ё"
    assert ModAlphaCipher("Б").encrypt("Ё") == "Ж"


def test_decrypt_wraps_below_zero():
    # А (0) minus Е (5) lands on Ы (28)
    assert ModAlphaCipher("Е").decrypt("А") == "Ы"


def test_key_stream_repeats():
    cipher = ModAlphaCipher("АБВ")
    assert cipher.key_stream(7) == [0, 1, 2, 0, 1, 2, 0]
    assert cipher.encrypt("ААААААА") == "АБВАБВА"


def test_input_is_case_insensitive():
    assert ModAlphaCipher("б").encrypt("привет") == ModAlphaCipher("Б").encrypt("ПРИВЕТ") == "РСЙГЁУ"


@pytest.mark.parametrize("key, text", [
    ("КЛЮЧ", "ПРИВЕТМИР"),
    ("Я", "АБВГДЕЁЖЗИЙКЛМНОПРСТУФХЦЧШЩЪЫЬЭЮЯ"),
    ("ШИФРОВАНИЕ", "ЁЖ"),
])
def test_round_trip(key, text):
    cipher = ModAlphaCipher(key)
    encrypted = cipher.encrypt(text)
    assert len(encrypted) == len(text)
    assert all(c in cipher.alphabet for c in encrypted)
    assert cipher.decrypt(encrypted) == text


def test_deterministic():
    assert ModAlphaCipher("КЛЮЧ").encrypt("СЕКРЕТ") == ModAlphaCipher("КЛЮЧ").encrypt("СЕКРЕТ")


@pytest.mark.parametrize("key", ["", "КЛЮЧ1", "KEY", "КЛ ЮЧ", 5])
def test_rejects_bad_key(key):
    with pytest.raises(InvalidKey):
        ModAlphaCipher(key)


@pytest.mark.parametrize("text", ["ПРИВЕТ МИР", "ПРИВЕТ!", "1", "HELLO", ""])
def test_rejects_bad_text(text):
    cipher = ModAlphaCipher("КЛЮЧ")
    with pytest.raises(InvalidText):
        cipher.encrypt(text)
    with pytest.raises(InvalidText):
        cipher.decrypt(text)


def test_error_message_names_offending_character():
    with pytest.raises(InvalidText, match="'7'"):
        ModAlphaCipher("КЛЮЧ").encrypt("ДОМ7")


def test_errors_are_value_errors():
    assert issubclass(InvalidKey, CipherError)
    assert issubclass(InvalidText, ValueError)


def test_instance_shared_between_threads():
    cipher = ModAlphaCipher("КЛЮЧ")
    texts = ["ПРИВЕТ", "МИР", "ШИФР", "АБВГД"] * 10
    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(lambda t: cipher.decrypt(cipher.encrypt(t)), texts))
    assert results == texts


# ---------- ShiftCipher ----------

def test_numeric_shift():
    cipher = ShiftCipher(3, "ПРИВЕТ")
    assert cipher.encrypt("ПРИВЕТ") == "ТУЛЕЗХ"
    assert cipher.decrypt("ТУЛЕЗХ") == "ПРИВЕТ"


@pytest.mark.parametrize("key, reduced", [(1, 1), (34, 1), (35, 2), (-1, 32)])
def test_key_reduced_modulo_alphabet(key, reduced):
    assert ShiftCipher(key, "А").key == reduced


@pytest.mark.parametrize("key", [0, 33, -66, "3", 2.5, True])
def test_rejects_zero_or_non_integer_key(key):
    with pytest.raises(InvalidKey):
        ShiftCipher(key, "ТЕКСТ")


def test_rejects_bad_reference_text():
    with pytest.raises(InvalidText):
        ShiftCipher(3, "TEXT")


def test_transcript_uses_construction_text_length():
    cipher = ShiftCipher(3, "привет")
    assert cipher.transcript("тулезх") == "ПРИВЕТ"
    with pytest.raises(InvalidText, match="length"):
        cipher.transcript("ТУЛ")


def test_transcript_with_explicit_reference():
    cipher = ShiftCipher(1, "А")
    assert cipher.transcript("БВ", "АБ") == "АБ"
    with pytest.raises(InvalidText):
        cipher.transcript("БВ", "АБВ")
    with pytest.raises(InvalidText):
        cipher.transcript("БВ", "A1")


def test_transcript_rejects_bad_cipher_text():
    with pytest.raises(InvalidText):
        ShiftCipher(3, "ТЕКСТ").transcript("ТЕК.Т")


def test_create_parses_key_string():
    assert ShiftCipher.create("35", "ДОМ").key == 2
    with pytest.raises(InvalidKey):
        ShiftCipher.create("три", "ДОМ")


def test_create_for_letter_key_ignores_reference():
    assert ModAlphaCipher.create("Б", "ANYTHING").key == (1,)


def test_key_reduction_is_logged_when_verbose(capsys):
    engine.VERBOSE = True
    ShiftCipher(35, "А")
    assert "[INFO] Key 35 reduced to 2 modulo 33." in capsys.readouterr().err


def test_nothing_logged_when_quiet(capsys):
    ShiftCipher(35, "А")
    assert capsys.readouterr().err == ""


def test_bad_numeric_key_string_hides_parse_error():
    with pytest.raises(InvalidKey) as excinfo:
        ShiftCipher.create("три", "ДОМ")
    assert excinfo.value.__cause__ is None
    assert excinfo.value.__suppress_context__
