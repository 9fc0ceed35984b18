import argparse
import os
import time

from symtab.generator import generate
from symtab.render import render_text
from symtab.storage import WordTable

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
WORDS_FILE_PATH = os.environ.get("SYMTAB_WORDS_PATH", os.path.join(BASE_DIR, 'data', 'radio_alphabet.txt'))


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Load words into an AVL symbol table and draw it.")
    parser.add_argument("path", nargs="?", default=WORDS_FILE_PATH, help="whitespace-separated words file")
    parser.add_argument("-d", "--delete", action="append", default=[], metavar="WORD",
                        help="delete WORD after loading and draw again (repeatable)")
    parser.add_argument("--depth", type=int, default=10, help="deepest level to draw")
    parser.add_argument("--check", action="store_true", help="verify tree invariants after every mutation")
    parser.add_argument("--generate", type=int, metavar="N",
                        help="first write N random words to path (overwrites it)")
    parser.add_argument("--seed", type=int, default=None, help="random seed for --generate")
    return parser.parse_args(argv)


def run(argv=None) -> WordTable:
    args = parse_args(argv)
    print("--- AVL symbol table ---")
    words = WordTable(check_invariants=args.check)

    if args.generate is not None:
        generate(args.path, args.generate, seed=args.seed)
        print(f"Generated {args.generate:,} random words into {args.path}")

    start_time = time.time()
    loaded = words.ingest_file(args.path)
    end_time = time.time()
    print(f"Loaded {len(words)} words in {end_time - start_time:.3f}s")
    if not loaded:
        print(f"Ingestion of {args.path} did not complete.")

    if words.table.is_empty():
        print("No words loaded.")
        return words

    table = words.table
    print(f"min={table.min()} max={table.max()} height={table.height()}")
    print(render_text(table, max_depth=args.depth))

    for word in args.delete:
        if words.remove(word):
            print(f"\nDeleted {word}:")
            print(render_text(table, max_depth=args.depth))
        else:
            print(f"\n{word} not in table")
    return words


if __name__ == "__main__":
    run()
