"""
Naming Package
"""
from .name_tokenizer import tokenize
from .name_accumulator import NameAccumulator
from .name_sources import NameDataError, parse_ascii_nametable, read_names
from .name_index_format import Direct, Ambiguous
from .name_index_searcher import IndexLoadError, NameIndexSearcher

__all__ = [
    'tokenize',
    'NameAccumulator',
    'NameDataError',
    'parse_ascii_nametable',
    'read_names',
    'Direct',
    'Ambiguous',
    'IndexLoadError',
    'NameIndexSearcher'
]
