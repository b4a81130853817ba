import datetime as dt
import unittest
from zoneinfo import ZoneInfo

from quiniela.catalog import DEFAULT_DEADLINES
from quiniela.clock import (
    format_date,
    format_queried_at,
    is_past_deadline,
    minutes_since_midnight,
    now_in,
    previous_day,
    to_local,
)
from quiniela.types import TimeSlot

BUENOS_AIRES = ZoneInfo("America/Argentina/Buenos_Aires")


def at(hour: int, minute: int) -> dt.datetime:
    return dt.datetime(2026, 1, 12, hour, minute, tzinfo=BUENOS_AIRES)


def utc_at(hour: int, minute: int) -> dt.datetime:
    return dt.datetime(2026, 1, 12, hour, minute, tzinfo=dt.timezone.utc)


class DeadlineTests(unittest.TestCase):
    def test_previa_deadline_includes_grace(self) -> None:
        self.assertFalse(is_past_deadline(TimeSlot.PREVIA, at(10, 24), DEFAULT_DEADLINES))
        self.assertTrue(is_past_deadline(TimeSlot.PREVIA, at(10, 25), DEFAULT_DEADLINES))

    def test_afternoon_slots(self) -> None:
        self.assertFalse(is_past_deadline(TimeSlot.PRIMERA, at(12, 16), DEFAULT_DEADLINES))
        self.assertTrue(is_past_deadline(TimeSlot.PRIMERA, at(12, 17), DEFAULT_DEADLINES))
        self.assertFalse(is_past_deadline(TimeSlot.MATUTINA, at(15, 16), DEFAULT_DEADLINES))
        self.assertTrue(is_past_deadline(TimeSlot.VESPERTINA, at(18, 30), DEFAULT_DEADLINES))

    def test_late_night_never_past_deadline(self) -> None:
        for hour in (0, 12, 21, 23):
            self.assertFalse(is_past_deadline(TimeSlot.NOCTURNA, at(hour, 59), DEFAULT_DEADLINES))

    def test_every_deadline_slot_before_cutoff(self) -> None:
        for slot, deadline in DEFAULT_DEADLINES.items():
            cutoff = deadline.cutoff_minutes - 1
            instant = at(cutoff // 60, cutoff % 60)
            self.assertFalse(is_past_deadline(slot, instant, DEFAULT_DEADLINES), slot)

    def test_instants_in_other_zones_are_read_as_local_time(self) -> None:
        # 13:30 UTC is 10:30 in Buenos Aires.
        self.assertTrue(is_past_deadline(TimeSlot.PREVIA, utc_at(13, 30), DEFAULT_DEADLINES))
        self.assertFalse(is_past_deadline(TimeSlot.PREVIA, utc_at(13, 20), DEFAULT_DEADLINES))
        self.assertFalse(is_past_deadline(TimeSlot.PRIMERA, utc_at(13, 30), DEFAULT_DEADLINES))

    def test_deadline_zone_is_configurable(self) -> None:
        self.assertTrue(is_past_deadline(TimeSlot.PREVIA, utc_at(10, 30), DEFAULT_DEADLINES, "UTC"))
        self.assertFalse(is_past_deadline(TimeSlot.PREVIA, utc_at(10, 30), DEFAULT_DEADLINES))

    def test_to_local(self) -> None:
        local = to_local(utc_at(2, 30))
        self.assertEqual((local.day, local.hour, local.minute), (11, 23, 30))
        naive = dt.datetime(2026, 1, 12, 9, 0)
        self.assertIs(to_local(naive), naive)

    def test_minutes_since_midnight(self) -> None:
        self.assertEqual(minutes_since_midnight(at(0, 0)), 0)
        self.assertEqual(minutes_since_midnight(at(14, 5)), 845)


class FormattingTests(unittest.TestCase):
    def test_format_date_in_spanish(self) -> None:
        self.assertEqual(format_date(at(9, 0)), "Lunes 12 de Enero")
        self.assertEqual(format_date(dt.datetime(2026, 10, 17, 9, 0)), "Sábado 17 de Octubre")

    def test_previous_day_crosses_month(self) -> None:
        instant = dt.datetime(2026, 3, 1, 8, 0, tzinfo=BUENOS_AIRES)
        self.assertEqual(format_date(previous_day(instant)), "Sábado 28 de Febrero")

    def test_format_queried_at(self) -> None:
        self.assertEqual(format_queried_at(at(14, 5)), "14:05 hs")
        self.assertEqual(format_queried_at(at(9, 0)), "09:00 hs")

    def test_now_in_uses_argentina_offset(self) -> None:
        current = now_in("America/Argentina/Buenos_Aires")
        self.assertEqual(current.utcoffset(), dt.timedelta(hours=-3))


if __name__ == "__main__":
    unittest.main()
