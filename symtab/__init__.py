from symtab.indexing import AVLTreeST, EmptySymbolTableError, NodeInfo
from symtab.storage import WordTable
from symtab.query_engine import QueryEngine

__all__ = ["AVLTreeST", "EmptySymbolTableError", "NodeInfo", "WordTable", "QueryEngine"]
