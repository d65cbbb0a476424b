import json
from datetime import datetime, timedelta, timezone
from pathlib import Path

from quote_feed.cache.quote_cache import QuoteCache, normalize_board
from quote_feed.domain.models import Quote


def test_quote_cache_save_and_load(tmp_path: Path) -> None:
    cache = QuoteCache(str(tmp_path))
    records = [
        Quote("ACME", 101.5, -0.25, "2024-01-01T10:00:00Z"),
        Quote("OTHER"),
    ]

    cache_file = cache.save("Main Board", records)
    cached = cache.load("Main Board", ttl_minutes=30)

    assert cache_file.name == "main_board.json"
    assert cached == records
    assert cached[1].value is None


def test_quote_cache_respects_ttl(tmp_path: Path) -> None:
    cache = QuoteCache(str(tmp_path))
    cache_file = cache.save("default", [Quote("ACME", 1.0)])

    payload = json.loads(cache_file.read_text(encoding="utf-8"))
    payload["created_at"] = (datetime.now(timezone.utc) - timedelta(minutes=120)).isoformat()
    cache_file.write_text(json.dumps(payload), encoding="utf-8")

    assert cache.load("default", ttl_minutes=30) is None


def test_quote_cache_ignores_other_versions(tmp_path: Path) -> None:
    cache = QuoteCache(str(tmp_path))
    cache_file = cache.save("default", [Quote("ACME", 1.0)])

    payload = json.loads(cache_file.read_text(encoding="utf-8"))
    payload["version"] = 99
    cache_file.write_text(json.dumps(payload), encoding="utf-8")

    assert cache.load("default", ttl_minutes=30) is None


def test_quote_cache_returns_none_for_missing_or_corrupt_file(tmp_path: Path) -> None:
    cache = QuoteCache(str(tmp_path))

    assert cache.load("default", ttl_minutes=30) is None

    (tmp_path / "default.json").write_text("{not json", encoding="utf-8")
    assert cache.load("default", ttl_minutes=30) is None


def test_quote_cache_skips_undecodable_records(tmp_path: Path) -> None:
    cache = QuoteCache(str(tmp_path))
    cache_file = cache.save("default", [Quote("ACME", 1.0)])

    payload = json.loads(cache_file.read_text(encoding="utf-8"))
    payload["records"].append({"company": "BAD", "value": "abc"})
    cache_file.write_text(json.dumps(payload), encoding="utf-8")

    assert cache.load("default", ttl_minutes=30) == [Quote("ACME", 1.0)]


def test_normalize_board_falls_back_for_blank_names() -> None:
    assert normalize_board("  NASDAQ / Tech ") == "nasdaq_tech"
    assert normalize_board("***") == "unknown_board"


def test_quote_cache_treats_non_list_records_as_miss(tmp_path: Path) -> None:
    cache = QuoteCache(str(tmp_path))
    cache_file = cache.save("default", [Quote("ACME", 1.0)])

    payload = json.loads(cache_file.read_text(encoding="utf-8"))
    payload["records"] = None
    cache_file.write_text(json.dumps(payload), encoding="utf-8")

    assert cache.load("default", ttl_minutes=30) is None
