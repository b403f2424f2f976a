"""
TaskHub Backend — Id Coercion and UTC Column Tests
"""

import pytest
from datetime import datetime, timedelta, timezone

from taskhub.models.mixins import UTCDateTime
from taskhub.services.scoping import MAX_ROW_ID, coerce_id, find_owned_project


class TestCoerceId:

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("1", 1),
            (42, 42),
            (str(MAX_ROW_ID), MAX_ROW_ID),
            (str(MAX_ROW_ID + 1), None),
            (10**20, None),
            ("0", None),
            ("-3", None),
            ("abc", None),
            ("1.5", None),
            ("", None),
            ("١٢", None),
            (True, None),
        ],
    )
    def test_coerce_id(self, raw, expected):
        assert coerce_id(raw) == expected

    @pytest.mark.asyncio
    async def test_impossible_id_skips_the_query(self, mock_db_session):
        assert await find_owned_project(mock_db_session, "99999999999999999999", 7) is None
        mock_db_session.execute.assert_not_awaited()


class TestUTCDateTime:

    def setup_method(self):
        self.column_type = UTCDateTime()

    def test_bind_converts_to_utc(self):
        plus_five = timezone(timedelta(hours=5))
        value = datetime(2026, 1, 1, 0, 0, tzinfo=plus_five)

        bound = self.column_type.process_bind_param(value, None)

        assert bound == datetime(2025, 12, 31, 19, 0, tzinfo=timezone.utc)
        assert bound.utcoffset() == timedelta(0)

    def test_naive_values_are_taken_as_utc(self):
        naive = datetime(2026, 1, 1, 12, 0)

        assert self.column_type.process_bind_param(naive, None).tzinfo is timezone.utc
        assert self.column_type.process_result_value(naive, None) == naive.replace(
            tzinfo=timezone.utc
        )

    def test_none_passes_through(self):
        assert self.column_type.process_bind_param(None, None) is None
        assert self.column_type.process_result_value(None, None) is None
