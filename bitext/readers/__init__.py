#!/usr/bin/env python3
"""
Format readers for translation interchange files.

Supported formats:
- TBX: TermBase eXchange term bases
- TMX: Translation Memory eXchange
- XLIFF 1.2: .xlf/.xliff and the .sdlxliff/.mqxliff/.txlf/.mxliff dialects
- XLZ: zipped XLIFF
- XLSX: bilingual spreadsheets (id, source, target)
"""

from .base import (
    ArchiveEntryError,
    FormatReader,
    MissingAttributeError,
    ReaderError,
    ReaderRegistry,
    RecordBuilder,
    UnsupportedFormatError,
    XmlRecordReader,
    read_document,
    read_xml,
)
from .tbx import TbxReader
from .tmx import TmxReader
from .xliff import XliffReader, XlzReader
from .xlsx import XlsxReader

# Register readers (order matters for extension conflicts)
ReaderRegistry.register(TbxReader)
ReaderRegistry.register(TmxReader)
ReaderRegistry.register(XliffReader)
ReaderRegistry.register(XlzReader)
ReaderRegistry.register(XlsxReader)

__all__ = [
    'ArchiveEntryError',
    'FormatReader',
    'MissingAttributeError',
    'ReaderError',
    'ReaderRegistry',
    'RecordBuilder',
    'UnsupportedFormatError',
    'XmlRecordReader',
    'read_document',
    'read_xml',
    'TbxReader',
    'TmxReader',
    'XliffReader',
    'XlzReader',
    'XlsxReader',
]
