from pathlib import Path

from quote_feed.domain.models import Quote
from quote_feed.output.csv_writer import CsvWriter


def test_csv_writer_generates_expected_file(tmp_path: Path) -> None:
    output_file = tmp_path / "nested" / "quotes.csv"
    records = [
        Quote("ACME", 101.5, -0.25, "2024-01-01T10:00:00Z"),
        Quote("OTHER"),
    ]

    CsvWriter.write(str(output_file), records)

    content = output_file.read_text(encoding="utf-8")
    lines = [line.strip() for line in content.splitlines()]

    assert lines[0] == '"company","value","change","time"'
    assert lines[1] == '"ACME","101.5","-0.25","2024-01-01T10:00:00Z"'
    assert lines[2] == '"OTHER","","",""'
