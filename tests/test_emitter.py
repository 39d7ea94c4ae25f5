"""Tests for the cron emitter."""

import pytest

from nlcron.scheduling import emitter
from nlcron.scheduling.emitter import emit, format_clock
from nlcron.scheduling.patterns import (
    SCHEDULE_PATTERN_TYPES,
    Daily,
    DaysOfWeek,
    EveryNHours,
    EveryNMinutes,
    HourlyAt,
    Monthly,
    OnDates,
    RawCron,
    SchedulePattern,
    Weekday,
    Weekdays,
    Weekends,
    Weekly,
)


class TestFieldMapping:
    """Tests for the variant to cron field mapping."""

    @pytest.mark.parametrize(
        "pattern,expected",
        [
            (Daily(5, 30), "30 5 * * *"),
            (Weekdays(7, 15), "15 7 * * 1-5"),
            (Weekends(19, 5), "5 19 * * 6,0"),
            (Weekly(Weekday.SUNDAY, 3, 30), "30 3 * * 0"),
            (Weekly(Weekday.FRIDAY, 2, 45), "45 2 * * 5"),
            (DaysOfWeek((3, 1), 3, 0), "0 3 * * 1,3"),
            (Monthly((15, 1), 4, 0), "0 4 1,15 * *"),
            (OnDates((20, 10), 22, 30), "30 22 10,20 * *"),
            (EveryNMinutes(15), "*/15 * * * *"),
            (EveryNMinutes(59), "*/59 * * * *"),
            (EveryNHours(2), "0 */2 * * *"),
            (EveryNHours(6, 30), "30 */6 * * *"),
            (HourlyAt(10), "10 * * * *"),
            (RawCron("30 3 * * 1"), "30 3 * * 1"),
            (RawCron("0 9 * * mon-fri"), "0 9 * * mon-fri"),
        ],
    )
    def test_emit_cron(self, pattern, expected):
        """Test each variant emits the expected fields."""
        cron, _ = emit(pattern)
        assert str(cron) == expected

    def test_no_leading_zeros(self):
        """Test numbers render without padding."""
        cron, _ = emit(OnDates((1, 5), 4, 5))
        assert cron.minute == "5"
        assert cron.hour == "4"
        assert cron.day_of_month == "1,5"

    def test_raw_cron_split(self):
        """Test raw cron emits the field split of its expression."""
        cron, _ = emit(RawCron("5/10 9-17/2 1,15 JAN *"))
        assert cron == ("5/10", "9-17/2", "1,15", "JAN", "*")


class TestDescriptions:
    """Tests for canonical descriptions."""

    @pytest.mark.parametrize(
        "pattern,expected",
        [
            (Daily(5, 30), "Daily at 05:30"),
            (Weekdays(7, 15), "Weekdays at 07:15"),
            (Weekends(19, 5), "Weekends at 19:05"),
            (Weekly(Weekday.SUNDAY, 3, 30), "Weekly on Sunday at 03:30"),
            (DaysOfWeek((1, 3), 3, 0), "Mondays, Wednesdays at 03:00"),
            (Monthly((1, 15), 4, 0), "Monthly on 1, 15 at 04:00"),
            (Monthly((1,), 4, 0, default_day=True), "Monthly on day 1 at 04:00 (default day)"),
            (OnDates((10, 20), 22, 30), "On 10, 20 at 22:30"),
            (EveryNMinutes(15), "Every 15 minute(s)"),
            (EveryNHours(2), "Every 2 hour(s)"),
            (EveryNHours(2, 5), "Every 2 hour(s) at :05"),
            (HourlyAt(0), "Every hour on the hour"),
            (HourlyAt(10), "Every hour at :10"),
            (RawCron("30 3 * * 1"), "custom schedule: 30 3 * * 1"),
        ],
    )
    def test_description(self, pattern, expected):
        """Test description wording per variant."""
        _, description = emit(pattern)
        assert description == expected

    def test_format_clock(self):
        """Test zero padded clock."""
        assert format_clock(7, 5) == "07:05"


class TestTotality:
    """Tests for emitter coverage."""

    def test_every_variant_registered(self):
        """Test every pattern variant has an emitter."""
        assert set(SCHEDULE_PATTERN_TYPES) == set(emitter._EMITTERS)

    def test_emitted_fields_are_well_formed(self):
        """Test emitted expressions pass the raw cron checker."""
        from nlcron.scheduling.cron import is_valid_expression

        patterns = [
            Daily(0, 0),
            Weekdays(23, 59),
            Weekends(12, 0),
            Weekly(Weekday.SATURDAY, 1, 1),
            DaysOfWeek((0, 6), 1, 1),
            Monthly((31,), 0, 0),
            OnDates((1, 2, 3), 0, 0),
            EveryNMinutes(1),
            EveryNHours(23, 59),
            HourlyAt(59),
            RawCron("* * * * *"),
        ]
        for pattern in patterns:
            cron, description = emit(pattern)
            assert is_valid_expression(str(cron))
            assert description

    def test_unknown_type(self):
        """Test a non-variant is rejected."""
        with pytest.raises(TypeError):
            emit(SchedulePattern())
