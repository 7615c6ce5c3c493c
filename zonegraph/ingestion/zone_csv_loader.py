# -*- coding: utf-8 -*-
"""
ZONE CSV LOADER
Reads the urban planning CSV export (UTF-8, optional BOM, first row = header)
INPUT: Path to the CSV file
OUTPUT: Header plus (line number, cells) pairs for the row parser
"""
import csv
from pathlib import Path
from typing import Iterator, List, Tuple, Union

from zonegraph.utils.exceptions import SourceFileError
from zonegraph.utils.logger import get_logger

logger = get_logger(__name__)


class ZoneCSVLoader:
    """
    Opens the zone CSV and hands rows to the parser without interpreting them.

    Blank lines are skipped; line numbers refer to the physical record so
    parse errors can point at the right place in the file.
    """

    def __init__(self, csv_path: Union[str, Path]):
        self.csv_path = Path(csv_path)

    def read(self) -> Tuple[List[str], List[Tuple[int, List[str]]]]:
        """
        Read header and all data rows.

        Returns:
            (header, [(row_number, cells), ...])

        Raises:
            SourceFileError: File missing, unreadable, or without a header
        """
        if not self.csv_path.exists():
            raise SourceFileError(self.csv_path, "file not found")

        logger.info(f"Loading zones from: {self.csv_path}")
        try:
            with open(self.csv_path, 'r', encoding='utf-8-sig', newline='') as f:
                reader = csv.reader(f)
                header = next(reader, None)
                if header is None:
                    raise SourceFileError(self.csv_path, "empty file (no header row)")
                rows = list(self._data_rows(reader))
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise SourceFileError(self.csv_path, str(e)) from e

        logger.info(f"Read {len(rows)} rows ({len(header)} columns)")
        return header, rows

    @staticmethod
    def _data_rows(reader) -> Iterator[Tuple[int, List[str]]]:
        for cells in reader:
            if not cells or all(not c.strip() for c in cells):
                continue
            yield reader.line_num, cells
