"""Clock helpers for timestamps and export file names."""

from datetime import datetime, timezone

from app.packages.catalog.core.timezone import export_filename, format_datetime, to_local


def test_naive_datetimes_are_taken_as_local():
    naive = datetime(2026, 10, 19, 8, 30, 0)
    localized = to_local(naive)
    assert localized.tzinfo is not None
    assert localized.replace(tzinfo=None) == naive
    assert format_datetime(naive) == "2026-10-19 08:30:00"
    assert format_datetime(None) is None


def test_export_filename_is_stamped_in_the_configured_zone():
    at = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    expected_stamp = to_local(at).strftime("%Y%m%d%H%M%S")
    assert export_filename("path-mappings", at=at) == f"path-mappings-{expected_stamp}.xlsx"
    assert export_filename("attributes", extension="csv").startswith("attributes-")
    assert export_filename("attributes", extension="csv").endswith(".csv")
