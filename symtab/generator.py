"""
Word file generation for demos and larger smoke runs.

Files hold one word per line, the format WordTable.ingest_file reads.
"""

import random
import string
from typing import List, Optional, Tuple

RADIO_ALPHABET = [
    "Alpha", "Bravo", "Charlie", "Delta", "Echo", "Foxtrot", "Golf", "Hotel",
    "India", "Juliett", "Kilo", "Lima", "Mike", "November", "Oscar", "Papa",
    "Quebec", "Romeo", "Sierra", "Tango", "Uniform", "Victor", "Whiskey",
    "Xray", "Yankee", "Zulu",
]


def random_words(count: int, seed: Optional[int] = None, length: Tuple[int, int] = (3, 8)) -> List[str]:
    rng = random.Random(seed)
    lo, hi = length
    if lo < 1 or hi < lo:
        raise ValueError(f"invalid word length range: {length}")
    return [
        "".join(rng.choice(string.ascii_lowercase) for _ in range(rng.randint(lo, hi)))
        for _ in range(count)
    ]


def write_words(path: str, words: List[str]) -> None:
    with open(path, mode='w', encoding='utf-8') as f:
        for w in words:
            f.write(w + "\n")


def generate(path: str, count: int, seed: Optional[int] = None, length: Tuple[int, int] = (3, 8)) -> List[str]:
    """Write count random lowercase words to path and return them."""
    words = random_words(count, seed=seed, length=length)
    write_words(path, words)
    return words
