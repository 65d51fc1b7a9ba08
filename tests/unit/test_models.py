import dataclasses
from datetime import datetime, timedelta, timezone

import pytest

from ledger_quotes.core.models import QuoteLine, ScrapeTarget, format_timestamp


class TestFormatTimestamp:
    """Tests for the ledger timestamp format"""

    def test_utc_datetime(self):
        moment = datetime(2024, 1, 1, 0, 0, 0, tzinfo=timezone.utc)
        assert format_timestamp(moment) == "2024/01/01 00:00:00"

    def test_other_timezone_is_converted_to_utc(self):
        """Aware datetimes in other zones are shifted to UTC"""
        cet = timezone(timedelta(hours=1))
        moment = datetime(2024, 1, 1, 1, 30, 5, tzinfo=cet)
        assert format_timestamp(moment) == "2024/01/01 00:30:05"

    def test_naive_datetime_is_taken_as_utc(self):
        assert format_timestamp(datetime(2023, 12, 31, 23, 59, 59)) == "2023/12/31 23:59:59"

    def test_microseconds_are_dropped(self):
        moment = datetime(2024, 6, 7, 8, 9, 10, 999999, tzinfo=timezone.utc)
        assert format_timestamp(moment) == "2024/06/07 08:09:10"


class TestQuoteLine:
    """Tests for price directive rendering"""

    def test_render_matches_ledger_price_syntax(self):
        quote = QuoteLine(
            timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc),
            from_="EUR",
            value="1.0921",
            to="USD",
            url="http://x/eur",
        )
        assert quote.render() == "P 2024/01/01 00:00:00 EUR 1.0921 USD"
        assert str(quote) == quote.render()

    def test_value_is_rendered_verbatim(self):
        """No trimming or numeric normalization of the scraped value"""
        quote = QuoteLine(
            timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc),
            from_="BTC",
            value=" 42,000.50 $",
            to="USD",
        )
        assert quote.render() == "P 2024/01/01 00:00:00 BTC  42,000.50 $ USD"

    def test_url_is_not_rendered(self):
        quote = QuoteLine(
            timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc),
            from_="EUR",
            value="1",
            to="USD",
            url="http://example.com/rate",
        )
        assert "example.com" not in quote.render()


class TestScrapeTarget:
    def test_is_immutable(self):
        target = ScrapeTarget(url="http://x", select="#r", from_="EUR", to="USD")
        with pytest.raises(dataclasses.FrozenInstanceError):
            target.url = "http://y"  # type: ignore[misc]

    def test_duplicates_compare_equal(self):
        a = ScrapeTarget(url="http://x", select="#r", from_="EUR", to="USD")
        b = ScrapeTarget(url="http://x", select="#r", from_="EUR", to="USD")
        assert a == b
