import csv
from pathlib import Path
from typing import Iterable

from quote_scraper.domain.models import QuoteRecord
from quote_scraper.errors import OutputWriteError

HEADER = ["Company", "Price", "Change"]


class CsvWriter:
    @staticmethod
    def write(output_path: str, records: Iterable[QuoteRecord]) -> Path:
        path = Path(output_path)
        try:
            if path.parent and not path.parent.exists():
                path.parent.mkdir(parents=True, exist_ok=True)
            csvfile = path.open("w", encoding="utf-8", newline="")
        except OSError as exc:
            raise OutputWriteError(str(path), exc) from exc

        with csvfile:
            writer = csv.writer(csvfile)
            writer.writerow(HEADER)
            for record in records:
                writer.writerow(record.as_row())

        return path
