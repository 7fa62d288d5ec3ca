#!/filepath: src/DataWrangler.py
"""
DataWrangler module for loading dispensing records from the published sheet.

This module fetches the sheet's CSV export over HTTP, tokenizes it and maps
each row onto the fixed Record schema, discarding rows that lack a valid
surgery date or a pharmacy.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple
from urllib.parse import quote

import httpx

from src.Config import Config
from src.csv_tokenizer import parse_csv
from src.models import LoadResult, Record, SkippedRow
from src.normalize import (
    normalize_string,
    parse_day_date,
    parse_number,
    parse_timestamp,
    to_date_key,
)

GVIZ_CSV_URL = (
    "https://docs.google.com/spreadsheets/d/{sheet_id}/gviz/tq?tqx=out:csv&sheet={sheet}"
)

# Sheet column names
COL_DATE = "Fecha"
COL_PHARMACY = "Farmacia"
COL_SHIFT = "Turno"
COL_KIND = "Tipo"
COL_PERSON = "Nombre"
COL_OPERATING_ROOM = "Quirófano Nro"
COL_KIT_CODE = "Codigo_kit"
COL_KIT_NAME = "Nombre_kit"
COL_QUANTITY = "Cantidad"
COL_NOTES = "Observaciones"
COL_USER = "Usuario"
COL_TIMESTAMP = "Timestamp"

# Record field <- sheet column, for the plain text fields
TEXT_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("pharmacy", COL_PHARMACY),
    ("shift", COL_SHIFT),
    ("kind", COL_KIND),
    ("person_name", COL_PERSON),
    ("operating_room_no", COL_OPERATING_ROOM),
    ("kit_code", COL_KIT_CODE),
    ("kit_name", COL_KIT_NAME),
    ("notes", COL_NOTES),
    ("user", COL_USER),
)

REASON_INVALID_DATE = "invalid date"
REASON_MISSING_PHARMACY = "missing pharmacy"


class DataSourceError(RuntimeError):
    """The published CSV could not be downloaded."""


def build_csv_url(sheet_id: str, sheet_name: str) -> str:
    """Build the public CSV export URL for one sheet of a spreadsheet."""
    return GVIZ_CSV_URL.format(sheet_id=sheet_id, sheet=quote(sheet_name, safe=""))


def row_to_mapping(header: Sequence[str], row: Sequence[str]) -> Dict[str, str]:
    """
    Map header names onto a row's cells by position.

    Missing trailing cells map to "" and cells beyond the header are ignored.
    With duplicate header names the right-most column wins.
    """
    mapping: Dict[str, str] = {}
    for index, column in enumerate(header):
        mapping[column] = row[index] if index < len(row) else ""
    return mapping


def record_from_mapping(raw: Dict[str, Any]) -> Record:
    """
    Project a header-keyed row onto the Record schema.

    Missing columns normalize to empty text or zero.
    """
    date_raw = normalize_string(raw.get(COL_DATE))
    timestamp_raw = normalize_string(raw.get(COL_TIMESTAMP))
    surgery_date = parse_day_date(date_raw)

    fields: Dict[str, Any] = {
        name: normalize_string(raw.get(column)) for name, column in TEXT_FIELDS
    }
    return Record(
        surgery_date=surgery_date,
        surgery_date_raw=date_raw,
        surgery_date_key=to_date_key(surgery_date),
        quantity=parse_number(raw.get(COL_QUANTITY)),
        timestamp=parse_timestamp(timestamp_raw),
        timestamp_raw=timestamp_raw,
        **fields,
    )


class DataWrangler:
    """
    Loads dispensing records from the published spreadsheet.

    Attributes:
        config: Configuration object holding the data source settings
        logger: Logger instance for this class
        client: Optional httpx client, mainly for tests
    """

    def __init__(
        self,
        config: Config,
        logger: logging.Logger,
        client: Optional[httpx.Client] = None,
    ):
        """
        Initialize the DataWrangler with configuration and logger.

        Args:
            config: Configuration object containing the data source
            logger: Logger instance from the main application
            client: httpx client to reuse instead of a per-call one
        """
        self.config = config
        self.logger = logger.getChild("DataWrangler")
        self.client = client
        self.logger.info("DataWrangler initialized")

    @property
    def csv_url(self) -> str:
        """CSV URL from configuration, explicit URL first."""
        explicit = self.config.get("data_source.csv_url", None)
        if explicit:
            return explicit
        return build_csv_url(
            self.config.get("data_source.sheet_id"),
            self.config.get("data_source.sheet_name"),
        )

    def fetch_csv_text(self) -> str:
        """
        Download the CSV export once, without retries.

        Returns:
            str: The CSV payload

        Raises:
            DataSourceError: On any transport, status or decoding failure
        """
        url = self.csv_url
        timeout = float(self.config.get("data_source.timeout_seconds", 30))
        headers = {"Cache-Control": "no-cache"}
        self.logger.info(f"Fetching CSV from {url}")

        try:
            if self.client is not None:
                response = self.client.get(
                    url, headers=headers, timeout=timeout, follow_redirects=True
                )
            else:
                response = httpx.get(
                    url, headers=headers, timeout=timeout, follow_redirects=True
                )
            response.raise_for_status()
            encoding = response.encoding or "utf-8"
            if encoding.lower().replace("_", "-") in ("utf-8", "utf8"):
                # drop a leading BOM so it does not stick to the first header
                encoding = "utf-8-sig"
            text = response.content.decode(encoding)
        except httpx.HTTPError as e:
            self.logger.error(f"Error downloading CSV from {url}: {e}")
            raise DataSourceError(f"Could not download CSV from {url}: {e}") from e
        except (UnicodeDecodeError, LookupError) as e:
            self.logger.error(f"CSV payload from {url} is not text: {e}")
            raise DataSourceError(f"CSV payload from {url} is not text: {e}") from e

        self.logger.info(f"Downloaded {len(response.content)} bytes")
        return text

    def build_records(
        self, header: Sequence[str], rows: Sequence[Sequence[str]]
    ) -> LoadResult:
        """
        Map body rows to records, discarding rows without date or pharmacy.

        Args:
            header: Normalized header names
            rows: Body rows as returned by the tokenizer

        Returns:
            LoadResult: Retained records in input order plus skipped rows
        """
        records: List[Record] = []
        skipped: List[SkippedRow] = []

        for offset, row in enumerate(rows):
            record = record_from_mapping(row_to_mapping(header, row))
            if record.is_retained():
                records.append(record)
                continue

            reason = (
                REASON_INVALID_DATE
                if record.surgery_date_key is None
                else REASON_MISSING_PHARMACY
            )
            # +2: 1-based numbering and the header row
            skipped.append(SkippedRow(offset + 2, list(row), reason))

        if skipped:
            self.logger.warning(
                f"Skipped {len(skipped)} of {len(rows)} rows without a valid date or pharmacy"
            )
        self.logger.info(f"Built {len(records)} records")

        return LoadResult(
            records=tuple(records), skipped_rows=skipped, source_rows=len(rows)
        )

    def records_from_text(self, text: str) -> LoadResult:
        """
        Tokenize CSV text and build records from it.

        An empty payload is logged and yields an empty result.
        """
        rows = parse_csv(text)
        if not rows:
            self.logger.error("CSV empty or not accessible")
            return LoadResult()

        header = [normalize_string(cell) for cell in rows[0]]
        return self.build_records(header, rows[1:])

    def load_records(self) -> LoadResult:
        """
        Fetch the published sheet and build the full record set.

        Raises:
            DataSourceError: If the download fails
        """
        return self.records_from_text(self.fetch_csv_text())
