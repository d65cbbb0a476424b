import csv
from pathlib import Path
from typing import Iterable

from quote_feed.domain.models import Quote

FIELDNAMES = ["company", "value", "change", "time"]


class CsvWriter:
    @staticmethod
    def write(output_path: str, records: Iterable[Quote]) -> Path:
        path = Path(output_path)
        if path.parent and not path.parent.exists():
            path.parent.mkdir(parents=True, exist_ok=True)

        with path.open("w", encoding="utf-8", newline="") as csvfile:
            writer = csv.DictWriter(
                csvfile,
                fieldnames=FIELDNAMES,
                quoting=csv.QUOTE_ALL,
            )
            writer.writeheader()
            for record in records:
                writer.writerow(
                    {
                        "company": _cell(record.company),
                        "value": _cell(record.value),
                        "change": _cell(record.change),
                        "time": _cell(record.time),
                    }
                )

        return path


def _cell(value) -> str:
    # absent -> empty cell
    return "" if value is None else str(value)
