"""Generate barrel/index files re-exporting the source files of a directory tree."""

from index_generator.config import CreateMode, HeaderMode, Options
from index_generator.generator import IndexGenerator
from index_generator.writer import MemorySink

__version__ = "0.1.0"

__all__ = [
    "CreateMode",
    "HeaderMode",
    "IndexGenerator",
    "MemorySink",
    "Options",
    "__version__",
]
