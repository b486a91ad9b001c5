"""Extension-based file type classification."""

from typing import Dict, NamedTuple, Tuple


class FileTypeChip(NamedTuple):
    """Label and colour shown next to a file name."""
    label: str
    color: str


SPREADSHEET_EXTENSIONS: Tuple[str, ...] = ("xlsx", "xls", "csv")
GEOSPATIAL_EXTENSIONS: Tuple[str, ...] = ("kmz", "kml")

ACCEPTED_EXTENSIONS: Tuple[str, ...] = (".xlsx", ".xls", ".csv", ".kmz", ".kml")

ACCEPTED_MIME_TYPES: Dict[str, Tuple[str, ...]] = {
    "application/vnd.ms-excel": (".xls",),
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": (".xlsx",),
    "application/vnd.google-earth.kmz": (".kmz",),
    "application/vnd.google-earth.kml+xml": (".kml",),
    "text/csv": (".csv",),
    "application/csv": (".csv",),
}

TYPE_CHIPS: Dict[str, FileTypeChip] = {
    "xlsx": FileTypeChip("Excel", "#1976d2"),
    "xls": FileTypeChip("Excel", "#1976d2"),
    "csv": FileTypeChip("CSV", "#ff9800"),
    "kmz": FileTypeChip("Google Earth", "#4caf50"),
    "kml": FileTypeChip("KML", "#4caf50"),
}

DEFAULT_CHIP_COLOR = "#666"

_SIZE_UNITS = ("Bytes", "KB", "MB", "GB")


def file_extension(filename: str) -> str:
    """Lower-cased text after the last dot (the whole name if there is none)."""
    return filename.rsplit(".", 1)[-1].lower()


def type_chip(filename: str) -> FileTypeChip:
    """Get the type chip for a file name."""
    extension = file_extension(filename)
    return TYPE_CHIPS.get(extension, FileTypeChip(extension.upper(), DEFAULT_CHIP_COLOR))


def file_category(filename: str) -> str:
    """Classify a file as spreadsheet, geospatial or other."""
    extension = file_extension(filename)
    if extension in SPREADSHEET_EXTENSIONS:
        return "spreadsheet"
    if extension in GEOSPATIAL_EXTENSIONS:
        return "geospatial"
    return "other"


def is_accepted(filename: str) -> bool:
    """Check if a file name has an accepted upload extension."""
    return any(filename.lower().endswith(ext) for ext in ACCEPTED_EXTENSIONS)


def format_file_size(size: int) -> str:
    """Human-readable size, e.g. ``1.5 KB``."""
    if size <= 0:
        return "0 Bytes"
    index = 0
    while size >= 1024 ** (index + 1) and index < len(_SIZE_UNITS) - 1:
        index += 1
    value = round(size / 1024 ** index, 2)
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {_SIZE_UNITS[index]}"
