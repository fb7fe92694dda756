"""
Drawing parser for XLS documents.

xlrd reads cells and formatting but ignores drawings, so this module walks
the BIFF records of the ``Workbook`` stream itself. The workbook globals
hold the drawing group (``MSODRAWINGGROUP``) with the picture store; each
worksheet substream holds its drawing (``MSODRAWING``) whose shapes refer
to the store by index and carry a cell anchor.

Both are OfficeArt (Escher) record trees: an 8-byte header (version and
instance packed in 16 bits, record type, body length) followed either by
child records (containers, version 0xF) or by an atom payload.
"""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from xlrd.compdoc import CompDoc, CompDocError

from ..exceptions import ParsingError
from ..models.image import AnchorPoint, Picture
from ..utils.enums import ImageFormat
from ..utils.logger import LogWriter

logger = logging.getLogger(__name__)

# BIFF record types
BIFF_BOF = 0x0809
BIFF_EOF = 0x000A
BIFF_BOUNDSHEET = 0x0085
BIFF_CONTINUE = 0x003C
BIFF_MSODRAWINGGROUP = 0x00EB
BIFF_MSODRAWING = 0x00EC

BOUNDSHEET_WORKSHEET = 0x00

# OfficeArt record types
ESCHER_CONTAINER_VERSION = 0xF
ESCHER_DGG_CONTAINER = 0xF000
ESCHER_BSTORE_CONTAINER = 0xF001
ESCHER_DG_CONTAINER = 0xF002
ESCHER_SPGR_CONTAINER = 0xF003
ESCHER_SP_CONTAINER = 0xF004
ESCHER_BSE = 0xF007
ESCHER_OPT = 0xF00B
ESCHER_CLIENT_ANCHOR = 0xF010
ESCHER_TERTIARY_OPT = 0xF122

BLIP_FORMATS = {
    0xF01A: ImageFormat.EMF,
    0xF01B: ImageFormat.WMF,
    0xF01C: ImageFormat.PICT,
    0xF01D: ImageFormat.JPEG,
    0xF01E: ImageFormat.PNG,
    0xF01F: ImageFormat.BMP,
    0xF029: ImageFormat.TIFF,
    0xF02A: ImageFormat.JPEG,
}
BLIP_DIB = 0xF01F

BSE_FIXED_SIZE = 36
BSE_NAME_LENGTH_OFFSET = 33
BLIP_UID_SIZE = 16
METAFILE_HEADER_SIZE = 34
PROPERTY_BLIP = 0x0104
PROPERTY_ID_MASK = 0x3FFF
CLIENT_ANCHOR_SIZE = 18
BMP_FILE_HEADER_SIZE = 14
BI_BITFIELDS = 3


@dataclass(slots=True)
class EscherRecord:
    """One OfficeArt record; containers hold children instead of a payload."""

    type: int
    version: int
    instance: int
    data: bytes = b""
    children: List["EscherRecord"] = field(default_factory=list)

    @property
    def is_container(self) -> bool:
        return self.version == ESCHER_CONTAINER_VERSION

    def find(self, record_type: int) -> Optional["EscherRecord"]:
        for child in self.children:
            if child.type == record_type:
                return child
        return None

    def walk(self) -> Iterator["EscherRecord"]:
        """Depth-first, document-order iteration over this record and its descendants."""
        yield self
        for child in self.children:
            yield from child.walk()


@dataclass(frozen=True, slots=True)
class Blip:
    """Picture payload from the drawing group's store."""

    format: ImageFormat
    data: bytes


def iter_biff_records(stream: bytes, offset: int = 0) -> Iterator[Tuple[int, int, bytes]]:
    """
    Iterate ``(position, record_type, payload)`` over a BIFF record stream.

    Raises:
        ParsingError: If a record runs past the end of the stream
    """
    position = offset
    end = len(stream)
    while position + 4 <= end:
        record_type, length = struct.unpack_from("<HH", stream, position)
        start = position + 4
        if start + length > end:
            raise ParsingError(
                "Truncated BIFF record",
                details=f"record 0x{record_type:04X} at offset {position} needs {length} bytes",
            )
        yield position, record_type, stream[start:start + length]
        position = start + length


def parse_escher(data: bytes, offset: int = 0, end: Optional[int] = None) -> List[EscherRecord]:
    """Parse a run of sibling OfficeArt records from ``data[offset:end]``."""
    end = len(data) if end is None else end
    records: List[EscherRecord] = []
    position = offset
    while position + 8 <= end:
        packed, record_type, length = struct.unpack_from("<HHI", data, position)
        body_start = position + 8
        body_end = body_start + length
        if body_end > end:
            logger.warning(
                f"OfficeArt record 0x{record_type:04X} at offset {position} overruns its parent; truncating"
            )
            body_end = end
        record = EscherRecord(type=record_type, version=packed & 0x000F, instance=packed >> 4)
        if record.is_container:
            record.children = parse_escher(data, body_start, body_end)
        else:
            record.data = data[body_start:body_end]
        records.append(record)
        position = body_end
    return records


def dib_to_bmp(dib: bytes) -> bytes:
    """Prefix a device-independent bitmap with the BMP file header Pillow expects."""
    if len(dib) < 12:
        raise ParsingError("DIB picture is too short", details=f"{len(dib)} bytes")
    header_size = struct.unpack_from("<I", dib, 0)[0]
    if header_size == 12:
        bit_count = struct.unpack_from("<H", dib, 10)[0]
        palette_size = (1 << bit_count) * 3 if bit_count <= 8 else 0
    else:
        if len(dib) < 36:
            raise ParsingError("DIB header is too short", details=f"{len(dib)} bytes")
        bit_count = struct.unpack_from("<H", dib, 14)[0]
        compression = struct.unpack_from("<I", dib, 16)[0]
        colours_used = struct.unpack_from("<I", dib, 32)[0]
        if not colours_used and bit_count <= 8:
            colours_used = 1 << bit_count
        palette_size = colours_used * 4
        if compression == BI_BITFIELDS and header_size == 40:
            palette_size += 12
    pixel_offset = BMP_FILE_HEADER_SIZE + header_size + palette_size
    file_header = struct.pack("<2sIHHI", b"BM", BMP_FILE_HEADER_SIZE + len(dib), 0, 0, pixel_offset)
    return file_header + dib


def decode_blip(record: EscherRecord) -> Optional[Blip]:
    """Extract the picture payload of a BLIP record; None for unknown record types."""
    image_format = BLIP_FORMATS.get(record.type)
    if image_format is None:
        logger.warning(f"Unknown picture record 0x{record.type:04X} in drawing group")
        return None

    uid_size = BLIP_UID_SIZE * 2 if record.instance & 1 else BLIP_UID_SIZE
    if image_format.is_raster:
        payload = record.data[uid_size + 1:]
    else:
        payload = record.data[uid_size + METAFILE_HEADER_SIZE:]

    if record.type == BLIP_DIB:
        payload = dib_to_bmp(payload)
    return Blip(format=image_format, data=payload)


class DrawingParser:
    """
    Parser for floating pictures of an XLS workbook.

    Provides functionality for:
    - Locating the BIFF substreams of the workbook globals and worksheets
    - Reading the picture store of the drawing group
    - Reading anchored picture shapes of a worksheet
    """

    def __init__(self, workbook_stream: bytes):
        """
        Initialize drawing parser.

        Args:
            workbook_stream: Raw ``Workbook`` stream of the compound document
        """
        self.stream = workbook_stream
        self._blips: Optional[List[Optional[Blip]]] = None

    @classmethod
    def from_document(cls, document: bytes) -> "DrawingParser":
        """
        Open the ``Workbook`` stream of an OLE2 compound document.

        Raises:
            ParsingError: If the container is invalid or has no workbook stream
        """
        try:
            compdoc = CompDoc(document, logfile=LogWriter(logger))
            stream = compdoc.get_named_stream("Workbook") or compdoc.get_named_stream("Book")
        except CompDocError as exc:
            raise ParsingError("Invalid compound document", details=str(exc)) from exc
        if not stream:
            raise ParsingError("Compound document has no workbook stream")
        return cls(bytes(stream))

    def _worksheet_offsets(self) -> List[int]:
        offsets: List[int] = []
        for _, record_type, payload in iter_biff_records(self.stream):
            if record_type == BIFF_BOUNDSHEET and len(payload) >= 6:
                offset, _visibility, sheet_type = struct.unpack_from("<IBB", payload, 0)
                if sheet_type == BOUNDSHEET_WORKSHEET:
                    offsets.append(offset)
            elif record_type == BIFF_EOF:
                break
        return offsets

    def _collect_drawing(self, offset: int, drawing_type: int) -> bytes:
        """Concatenate drawing records (and their CONTINUE records) of one substream."""
        chunks: List[bytes] = []
        depth = 0
        continuing = False
        for _, record_type, payload in iter_biff_records(self.stream, offset):
            if record_type == BIFF_BOF:
                depth += 1
                continuing = False
                continue
            if record_type == BIFF_EOF:
                depth -= 1
                if depth <= 0:
                    break
                continue
            if depth != 1:
                continue
            if record_type == drawing_type:
                chunks.append(payload)
                continuing = True
            elif record_type == BIFF_CONTINUE and continuing:
                chunks.append(payload)
            else:
                continuing = False
        return b"".join(chunks)

    def blips(self) -> List[Optional[Blip]]:
        """Picture store entries in store order; entries without a picture are None."""
        if self._blips is not None:
            return self._blips

        blips: List[Optional[Blip]] = []
        group = self._collect_drawing(0, BIFF_MSODRAWINGGROUP)
        for root in parse_escher(group):
            for record in root.walk():
                if record.type == ESCHER_BSTORE_CONTAINER:
                    blips.extend(self._read_store_entry(entry) for entry in record.children)
        logger.debug(f"Drawing group holds {len(blips)} store entries")
        self._blips = blips
        return blips

    def _read_store_entry(self, entry: EscherRecord) -> Optional[Blip]:
        if entry.type != ESCHER_BSE or len(entry.data) < BSE_FIXED_SIZE:
            return None
        name_length = entry.data[BSE_NAME_LENGTH_OFFSET]
        embedded = parse_escher(entry.data, BSE_FIXED_SIZE + name_length)
        if not embedded:
            return None
        return decode_blip(embedded[0])

    def pictures(self, sheet_index: int = 0) -> List[Picture]:
        """
        Read anchored pictures of a worksheet.

        Args:
            sheet_index: Worksheet index (worksheets only, in workbook order)

        Returns:
            Pictures in document order
        """
        offsets = self._worksheet_offsets()
        if sheet_index >= len(offsets):
            return []
        drawing = self._collect_drawing(offsets[sheet_index], BIFF_MSODRAWING)
        if not drawing:
            return []

        blips = self.blips()
        pictures: List[Picture] = []
        for root in parse_escher(drawing):
            for record in root.walk():
                if record.type != ESCHER_SP_CONTAINER:
                    continue
                picture = self._read_shape(record, blips, len(pictures))
                if picture is not None:
                    pictures.append(picture)
        logger.debug(f"Worksheet {sheet_index} has {len(pictures)} anchored pictures")
        return pictures

    def _read_shape(self, shape: EscherRecord, blips: List[Optional[Blip]], order: int) -> Optional[Picture]:
        anchor_record = shape.find(ESCHER_CLIENT_ANCHOR)
        blip_index = self._blip_property(shape)
        if anchor_record is None or blip_index is None:
            return None
        if len(anchor_record.data) < CLIENT_ANCHOR_SIZE:
            logger.warning(f"Skipping picture with a short client anchor ({len(anchor_record.data)} bytes)")
            return None
        if not 1 <= blip_index <= len(blips) or blips[blip_index - 1] is None:
            logger.warning(f"Skipping picture referring to missing store entry {blip_index}")
            return None

        _flags, col1, dx1, row1, dy1, col2, dx2, row2, dy2 = struct.unpack_from("<9H", anchor_record.data, 0)
        blip = blips[blip_index - 1]
        return Picture(
            anchor=AnchorPoint(row=row1, col=col1, dx=dx1, dy=dy1),
            end=AnchorPoint(row=row2, col=col2, dx=dx2, dy=dy2),
            data=blip.data,
            format=blip.format,
            order=order,
        )

    @staticmethod
    def _blip_property(shape: EscherRecord) -> Optional[int]:
        for record_type in (ESCHER_OPT, ESCHER_TERTIARY_OPT):
            options = shape.find(record_type)
            if options is None:
                continue
            count = min(options.instance, len(options.data) // 6)
            for index in range(count):
                property_id, value = struct.unpack_from("<HI", options.data, index * 6)
                if property_id & PROPERTY_ID_MASK == PROPERTY_BLIP:
                    return value
        return None

