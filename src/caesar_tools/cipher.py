from enum import Enum
from functools import lru_cache
from numbers import Integral
from typing import Tuple, Union

Text = Union[str, bytes, bytearray, memoryview]

ALPHABET_SIZE = 26
UPPER_A, UPPER_Z = 65, 90
LOWER_A, LOWER_Z = 97, 122


class InvalidShift(ValueError):
    """Raised when a shift key falls outside [0, 26) or is not an integer."""

    def __init__(self, shift: object) -> None:
        super().__init__(
            f"Shift must be an integer in [0, {ALPHABET_SIZE}), got {shift!r}."
        )
        self.shift = shift


class Direction(Enum):
    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"

    @classmethod
    def parse(cls, value: Union["Direction", str]) -> "Direction":
        """
        Accept a Direction or one of its names.

        "plain" means the input is plaintext (encrypt it); "cipher" means the
        input is ciphertext (decrypt it).
        """
        if isinstance(value, cls):
            return value
        aliases = {
            "encrypt": cls.ENCRYPT,
            "plain": cls.ENCRYPT,
            "decrypt": cls.DECRYPT,
            "cipher": cls.DECRYPT,
        }
        key = str(value).strip().lower()
        if key not in aliases:
            raise ValueError(
                f"Unknown direction '{value}'. Use one of: {', '.join(sorted(aliases))}."
            )
        return aliases[key]


@lru_cache(maxsize=ALPHABET_SIZE)
def _tables(shift: int) -> Tuple[bytes, bytes]:
    """Build the (encrypt, decrypt) 256-byte translation tables for a shift."""
    enc = bytearray(range(256))
    dec = bytearray(range(256))
    for first, last in ((UPPER_A, UPPER_Z), (LOWER_A, LOWER_Z)):
        for b in range(first, last + 1):
            pos = b - first
            enc[b] = first + (pos + shift) % ALPHABET_SIZE
            dec[b] = last - ((ALPHABET_SIZE - 1 - pos) + shift) % ALPHABET_SIZE
    return bytes(enc), bytes(dec)


def _check_integer(shift: object) -> int:
    # bool is an Integral subclass but never a meaningful key.
    if isinstance(shift, bool) or not isinstance(shift, Integral):
        raise InvalidShift(shift)
    return int(shift)


class RotationCipher:
    """
    Caesar cipher over raw UTF-8 bytes.

    Only the ASCII letter ranges A-Z and a-z are rotated. Every other byte,
    including all bytes of multi-byte UTF-8 sequences (always >= 0x80), is
    copied unchanged, so the output has the same length as the input and
    stays valid UTF-8 whenever the input was.

    The constructor is strict: shifts outside [0, 26) raise InvalidShift.
    Use RotationCipher.normalized() to reduce arbitrary integers modulo 26.
    """

    __slots__ = ("_shift", "_encrypt_table", "_decrypt_table")

    def __init__(self, shift: int) -> None:
        value = _check_integer(shift)
        if not 0 <= value < ALPHABET_SIZE:
            raise InvalidShift(shift)
        self._shift = value
        self._encrypt_table, self._decrypt_table = _tables(value)

    @classmethod
    def normalized(cls, shift: int) -> "RotationCipher":
        """Build a cipher from any integer, reducing it modulo 26."""
        return cls(_check_integer(shift) % ALPHABET_SIZE)

    @property
    def shift(self) -> int:
        return self._shift

    def inverse(self) -> "RotationCipher":
        """Return the cipher whose encrypt() undoes this cipher's encrypt()."""
        return RotationCipher((ALPHABET_SIZE - self._shift) % ALPHABET_SIZE)

    def encrypt(self, text: Text) -> Text:
        return _apply(text, self._encrypt_table)

    def decrypt(self, text: Text) -> Text:
        return _apply(text, self._decrypt_table)

    def translate(self, text: Text, direction: Union[Direction, str]) -> Text:
        if Direction.parse(direction) is Direction.ENCRYPT:
            return self.encrypt(text)
        return self.decrypt(text)

    def encrypt_in_place(self, buffer: Union[bytearray, memoryview]) -> None:
        """Encrypt a writable byte buffer without allocating a new one."""
        _apply_in_place(buffer, self._encrypt_table)

    def decrypt_in_place(self, buffer: Union[bytearray, memoryview]) -> None:
        """Decrypt a writable byte buffer without allocating a new one."""
        _apply_in_place(buffer, self._decrypt_table)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RotationCipher):
            return NotImplemented
        return self._shift == other._shift

    def __hash__(self) -> int:
        return hash((RotationCipher, self._shift))

    def __repr__(self) -> str:
        return f"RotationCipher(shift={self._shift})"


def _apply(text: Text, table: bytes) -> Text:
    if isinstance(text, str):
        # Byte count and UTF-8 validity are preserved, so decoding cannot fail.
        return text.encode("utf-8").translate(table).decode("utf-8")
    if isinstance(text, (bytes, bytearray)):
        return bytes(text).translate(table)
    if isinstance(text, memoryview):
        return text.tobytes().translate(table)
    raise TypeError(f"Expected str or bytes-like text, got {type(text).__name__}.")


def _apply_in_place(buffer: Union[bytearray, memoryview], table: bytes) -> None:
    """
    Overwrite `buffer` with its translation.

    The caller's buffer is written through and never resized or replaced;
    the translated bytes are staged in a temporary copy of the same length.
    """
    if isinstance(buffer, str):
        raise TypeError("Strings are immutable; use encrypt()/decrypt() instead.")
    with memoryview(buffer) as view:
        if view.readonly:
            raise TypeError("Buffer is read-only; pass a bytearray or writable memoryview.")
        if not view.c_contiguous:
            raise TypeError("Buffer must be contiguous; strided memoryviews are not supported.")
        with view.cast("B") as flat:
            flat[:] = flat.tobytes().translate(table)


def caesar_shift(text: Text, shift: int) -> Text:
    """
    Shift alphabetic characters by `shift` positions (wraps through A-Z/a-z).
    Negative shifts rotate left. Non-alphabetic characters are left unchanged.
    """
    return RotationCipher.normalized(shift).encrypt(text)


def rot13(text: Text) -> Text:
    """ROT13 convenience wrapper around the Caesar shift."""
    return caesar_shift(text, 13)
