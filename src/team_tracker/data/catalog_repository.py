"""Location catalog loader: KML, CSV or Excel file into the locations table."""

from __future__ import annotations

import csv
import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Iterator, Optional

from openpyxl import load_workbook

from ..config import settings
from ..db.session import unit_of_work
from ..models.domain import CatalogEntry
from ..persistence.locations import count_locations, insert_catalog

logger = logging.getLogger(__name__)

_NAME_COLUMNS = ("name", "location", "location_name")
_LATITUDE_COLUMNS = ("latitude", "lat")
_LONGITUDE_COLUMNS = ("longitude", "lon", "lng")


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _child(element: ET.Element, name: str) -> Optional[ET.Element]:
    for child in element:
        if _local_name(child.tag) == name:
            return child
    return None


def _descend(element: ET.Element, *names: str) -> Optional[ET.Element]:
    current: Optional[ET.Element] = element
    for name in names:
        if current is None:
            return None
        current = _child(current, name)
    return current


def _coerce_float(value: object) -> Optional[float]:
    if isinstance(value, (int, float)):
        return float(value)
    text = str(value or "").strip()
    if not text:
        return None
    try:
        return float(text.replace(",", ""))
    except ValueError as exc:
        raise ValueError(f"Unable to parse float from value '{value}'") from exc


def parse_kml_coordinate(text: str) -> Optional[tuple[float, float]]:
    """Parse the first ``lon,lat[,alt]`` tuple of a KML coordinates string into (lat, lon)."""
    tokens = text.split()
    if not tokens:
        return None
    parts = tokens[0].split(",")
    if len(parts) < 2:
        return None
    try:
        lon = float(parts[0])
        lat = float(parts[1])
    except ValueError:
        return None
    return lat, lon


def _placemark_coordinate(placemark: ET.Element) -> Optional[tuple[float, float]]:
    point = _descend(placemark, "Point", "coordinates")
    if point is not None and (point.text or "").strip():
        return parse_kml_coordinate(point.text or "")
    # Polygons are represented by the first vertex of their outer ring.
    ring = _descend(placemark, "Polygon", "outerBoundaryIs", "LinearRing", "coordinates")
    if ring is not None and (ring.text or "").strip():
        return parse_kml_coordinate(ring.text or "")
    return None


def _iter_kml(path: Path) -> Iterator[CatalogEntry]:
    try:
        root = ET.parse(path).getroot()
    except ET.ParseError as exc:
        raise ValueError(f"Catalog file '{path}' is not valid KML: {exc}") from exc

    for element in root.iter():
        if _local_name(element.tag) != "Placemark":
            continue
        name_element = _child(element, "name")
        name = (name_element.text or "").strip() if name_element is not None else ""
        if not name:
            continue
        coordinate = _placemark_coordinate(element)
        if coordinate is None:
            logger.warning("Skipping placemark '%s' without usable coordinates", name)
            continue
        lat, lon = coordinate
        yield CatalogEntry(name=name, latitude=lat, longitude=lon)


def _resolve_columns(header: list[str], source: Path) -> tuple[int, int, int]:
    normalized = {str(name).strip().lower(): idx for idx, name in enumerate(header) if name is not None}

    def _pick(candidates: tuple[str, ...]) -> Optional[int]:
        for candidate in candidates:
            if candidate in normalized:
                return normalized[candidate]
        return None

    name_idx = _pick(_NAME_COLUMNS)
    lat_idx = _pick(_LATITUDE_COLUMNS)
    lon_idx = _pick(_LONGITUDE_COLUMNS)
    missing = [
        label
        for label, idx in (("Name", name_idx), ("Latitude", lat_idx), ("Longitude", lon_idx))
        if idx is None
    ]
    if missing:
        raise ValueError(f"Catalog file '{source}' missing columns: {', '.join(missing)}")
    return name_idx, lat_idx, lon_idx  # type: ignore[return-value]


def _entries_from_rows(rows: Iterator[tuple], header: list[str], source: Path) -> Iterator[CatalogEntry]:
    name_idx, lat_idx, lon_idx = _resolve_columns(header, source)
    for row in rows:
        if not row or len(row) <= max(name_idx, lat_idx, lon_idx):
            continue
        name = str(row[name_idx] or "").strip()
        lat = _coerce_float(row[lat_idx])
        lon = _coerce_float(row[lon_idx])
        if not name or lat is None or lon is None:
            continue  # ignore records without a name or coordinates
        yield CatalogEntry(name=name, latitude=lat, longitude=lon)


def _iter_csv(path: Path) -> Iterator[CatalogEntry]:
    with path.open(mode="r", encoding="utf-8-sig", newline="") as handle:
        reader = csv.reader(handle)
        header = next(reader, None)
        if not header:
            raise ValueError(f"Catalog file '{path}' is missing a header row.")
        yield from _entries_from_rows((tuple(row) for row in reader), header, path)


def _iter_xlsx(path: Path) -> Iterator[CatalogEntry]:
    wb = load_workbook(path, data_only=True, read_only=True)
    try:
        sheet = wb.active
        rows = sheet.iter_rows(min_row=1, values_only=True)
        header = next(rows, None)
        if header is None:
            raise ValueError(f"Catalog workbook '{path}' is empty.")
        yield from _entries_from_rows(rows, list(header), path)
    finally:
        wb.close()


def load_catalog(source: Path | None = None) -> tuple[CatalogEntry, ...]:
    """Parse the catalog file; the format follows the file extension."""

    path = source or settings.catalog_file
    if not path.exists():
        raise FileNotFoundError(f"Location catalog not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".kml":
        entries = tuple(_iter_kml(path))
    elif suffix == ".csv":
        entries = tuple(_iter_csv(path))
    elif suffix == ".xlsx":
        entries = tuple(_iter_xlsx(path))
    else:
        raise ValueError(f"Unsupported catalog format '{suffix}' (expected .kml, .csv or .xlsx)")

    logger.info("Parsed %d locations from %s", len(entries), path)
    return entries


def seed_catalog(source: Path | None = None) -> int:
    """Insert the catalog into an empty locations table. Returns the number of rows inserted."""

    entries = load_catalog(source)
    with unit_of_work(write=True) as session:
        existing = count_locations(session)
        if existing:
            logger.info("Location catalog already present (%d locations); not seeding", existing)
            return 0
        inserted = insert_catalog(session, entries)
    logger.info("Seeded %d locations", inserted)
    return inserted


def seed_catalog_if_present(source: Path | None = None) -> int:
    path = source or settings.catalog_file
    if not path.exists():
        logger.warning("Location catalog %s not found; starting without seeding", path)
        return 0
    return seed_catalog(path)
