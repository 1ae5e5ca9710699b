from .embed import Embedding, Partition, embed, partition
from .error import PatternDefinitionError
from .permute import permute
from .search import deep_search, search_tree

__all__ = [
    "Embedding",
    "Partition",
    "PatternDefinitionError",
    "deep_search",
    "embed",
    "partition",
    "permute",
    "search_tree",
]
