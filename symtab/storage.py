import os
from typing import Any, Iterable, Optional

from symtab.indexing import AVLTreeST


class WordTable:
    # ------------------ Initialization ------------------

    def __init__(self, check_invariants: bool = False):
        """Initializes an empty word table backed by an AVL symbol table."""
        self.table: AVLTreeST = AVLTreeST(check_invariants=check_invariants)
        self.words_read: int = 0

    # ------------------ Accessors ------------------
    def __len__(self) -> int:
        """Return the number of distinct words in the table."""
        return len(self.table)

    def position(self, word: str) -> Optional[int]:
        """Return the position of the last occurrence of word, or None."""
        return self.table.get(word)

    # ------------------ Core mutations ------------------
    def add_word(self, word: str) -> int:
        """Store word at the next position and return that position."""
        if not word:
            raise ValueError("word must be a non-empty string")
        pos = self.words_read
        self.table.put(word, pos)
        self.words_read += 1
        return pos

    def remove(self, word: str) -> bool:
        """Remove word from the table. Returns False if it was not present."""
        if not word or not self.table.contains(word):
            return False
        self.table.delete(word)
        return True

    def load_words(self, words: Iterable[Any]) -> int:
        """Add every word of the iterable; returns how many were read."""
        count = 0
        for word in words:
            self.add_word(str(word))
            count += 1
            if count % 100000 == 0:
                print(f"Progress: {count:,} words loaded...")
        return count

    # ------------------ Data ingestion ------------------
    def ingest_file(self, file_path: str) -> bool:
        """
        Reads all whitespace-separated words from a text file and loads them
        into the symbol table, each mapped to its position in the file.

        Returns False if the file is missing or could not be read to the end;
        words read before a failure stay in the table.
        """
        if not os.path.exists(file_path):
            print(f"Error: File not found at {file_path}. Please check the 'data/' folder.")
            return False

        print(f"Ingesting words from: {file_path}")
        try:
            with open(file_path, mode='r', encoding='utf-8') as f:
                total = self.load_words(word for line in f for word in line.split())
        except (OSError, UnicodeDecodeError) as e:
            print(f"Could not read {file_path}: {e}")
            return False

        print("--- Ingestion Summary ---")
        print(f"Total words read: {total:,}")
        print(f"Distinct words: {len(self.table):,}")
        print(f"AVL height: {self.table.height()}")
        return True
