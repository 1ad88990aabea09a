"""Domain models for the translation <-> spreadsheet converter.

Value trees, tabular descriptors, config and result models, and the error
kinds shared by the services.
"""

from .config_models import ColumnWidths, ConvertConfig
from .conversion_result import ConversionResult
from .errors import (
    ConflictError,
    ConversionError,
    ExtractionError,
    ParseError,
    SourceFormatError,
    StructureError,
    TabularImportError,
)
from .tabular import (
    KEY_HEADER,
    ColumnDescriptor,
    FileDataset,
    SheetDescriptor,
    SheetStructure,
    TabularGrid,
    TranslationFile,
)
from .value_tree import Mapping, Placeholder, Scalar, Sequence, ValueTree

__all__ = [
    # Configuration models
    "ColumnWidths",
    "ConvertConfig",
    # Value tree
    "Mapping",
    "Placeholder",
    "Scalar",
    "Sequence",
    "ValueTree",
    # Tabular models
    "KEY_HEADER",
    "ColumnDescriptor",
    "FileDataset",
    "SheetDescriptor",
    "SheetStructure",
    "TabularGrid",
    "TranslationFile",
    "ConversionResult",
    # Errors
    "ConflictError",
    "ConversionError",
    "ExtractionError",
    "ParseError",
    "SourceFormatError",
    "StructureError",
    "TabularImportError",
]
