"""
Unit tests for raw data quality profiling.
"""

from datetime import datetime

import pytest

from retail_pipeline.core.exceptions import MalformedDateError
from retail_pipeline.core.profiler import check_date_conversion, profile_raw


class TestProfileRaw:

    def test_sample_dataset(self, sample_raw_records):
        profile = profile_raw(sample_raw_records)

        assert profile.total_records == 9
        assert profile.missing_counts == {
            "invoice_number": 0,
            "stock_code": 0,
            "description": 2,
            "invoice_date": 0,
            "customer_id": 1,
            "country": 0,
        }
        assert profile.non_positive_quantity == 2
        assert profile.non_positive_unit_price == 1
        assert profile.cancelled_invoices == 1

    def test_blank_counts_as_missing(self, raw_record_factory):
        profile = profile_raw([raw_record_factory(customer_id="  ", description="")])

        assert profile.missing_counts["customer_id"] == 1
        assert profile.missing_counts["description"] == 1

    def test_empty(self):
        profile = profile_raw([])
        assert profile.total_records == 0
        assert profile.cancelled_invoices == 0


class TestCheckDateConversion:

    def test_preview(self, sample_raw_records):
        preview = check_date_conversion(sample_raw_records, sample_size=3)

        assert preview == [
            ("12/1/2010 8:26", datetime(2010, 12, 1, 8, 26)),
            ("12/1/2010 8:26", datetime(2010, 12, 1, 8, 26)),
            ("12/1/2010 9:41", datetime(2010, 12, 1, 9, 41)),
        ]

    def test_preview_checks_every_sampled_row(self, raw_record_factory):
        """Unlike cleaning, dropped-looking rows are checked too"""
        records = [raw_record_factory(), raw_record_factory(quantity=-1, invoice_date="bad")]

        with pytest.raises(MalformedDateError):
            check_date_conversion(records)

    def test_preview_limited_to_sample(self, raw_record_factory):
        records = [raw_record_factory(), raw_record_factory(invoice_date="bad")]
        assert len(check_date_conversion(records, sample_size=1)) == 1

    @pytest.mark.parametrize("sample_size", [0, -1])
    def test_sample_size_must_be_positive(self, raw_record_factory, sample_size):
        with pytest.raises(ValueError):
            check_date_conversion([raw_record_factory()], sample_size=sample_size)
