from dataclasses import dataclass
from typing import List, Tuple

from .cipher import ALPHABET_SIZE, LOWER_A, LOWER_Z, UPPER_A, UPPER_Z, RotationCipher, Text

# Relative frequency (percent) of a-z in English prose.
ENGLISH_FREQUENCIES: List[float] = [
    8.167, 1.492, 2.782, 4.253, 12.702, 2.228, 2.015, 6.094, 6.966,
    0.153, 0.772, 4.025, 2.406, 6.749, 7.507, 1.929, 0.095, 5.987,
    6.327, 9.056, 2.758, 0.978, 2.360, 0.150, 1.974, 0.074,
]


@dataclass
class CrackResult:
    shift: int
    plaintext: Text
    score: float


def _letter_counts(text: Text) -> List[int]:
    data = text.encode("utf-8") if isinstance(text, str) else bytes(text)
    counts = [0] * ALPHABET_SIZE
    for b in data:
        if UPPER_A <= b <= UPPER_Z:
            counts[b - UPPER_A] += 1
        elif LOWER_A <= b <= LOWER_Z:
            counts[b - LOWER_A] += 1
    return counts


def english_score(text: Text) -> float:
    """
    Chi-squared distance between the text's letter distribution and English.

    Lower means more English-like. Text without ASCII letters scores infinity.
    """
    counts = _letter_counts(text)
    total = sum(counts)
    if total == 0:
        return float("inf")
    score = 0.0
    for observed, freq in zip(counts, ENGLISH_FREQUENCIES):
        expected = total * freq / 100
        score += (observed - expected) ** 2 / expected
    return score


def brute_force(text: Text) -> List[Tuple[int, Text]]:
    """Decrypt `text` under every shift 0..25."""
    return [(shift, RotationCipher(shift).decrypt(text)) for shift in range(ALPHABET_SIZE)]


def crack(text: Text, top: int = 3) -> List[CrackResult]:
    """
    Rank every candidate shift by how English the decryption looks.
    """
    if top < 1:
        raise ValueError("top must be at least 1.")
    results = [
        CrackResult(shift=shift, plaintext=plain, score=english_score(plain))
        for shift, plain in brute_force(text)
    ]
    results.sort(key=lambda r: (r.score, r.shift))
    return results[:top]
