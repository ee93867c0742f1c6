import pytest

from crewsched.task import (
    NIGHT_FACTOR,
    Task,
    gap,
    gap_day_night,
    len_transformation,
)
from crewsched.timing import DateTime


def make_task(key, start, end, duration, line="A", origin="T", destination="T"):
    return Task(
        bus_line=line,
        origin=origin,
        destination=destination,
        duration=duration,
        start_time=DateTime(hour=start // 60, minute=start % 60, hours2minutes=start),
        end_time=DateTime(hour=end // 60, minute=end % 60, hours2minutes=end),
        key=key,
    )


def test_default_task():
    t = Task()
    assert t.key == -1
    assert t.journey_key == -1
    assert (t.bus_line, t.origin, t.destination) == ("N", "N", "N")


def test_copy_is_deep():
    t = make_task(1, 360, 400, 40)
    c = t.copy()
    assert c == t
    c.start_time.hours2minutes = 0
    c.end_time.minute = 59
    assert t.start_time.hours2minutes == 360
    assert t.end_time.minute == 40


def test_same_as_uses_key():
    a = make_task(3, 360, 400, 40)
    b = make_task(3, 1320, 1350, 30, line="B")
    c = make_task(4, 360, 400, 40)
    assert a.same_as(b)
    assert not a.same_as(c)


def test_describe_format():
    t = make_task(1, 360, 400, 40)
    assert t.describe(2, 0) == "1 A T T 0d:6h:0m (360) 0d:0h:40m 0d:6h:40m (400) 0 2"


def test_report_line_format():
    t = make_task(1, 360, 400, 40, line="ABC")
    assert t.report_line(2, 0) == "1 A T T 0:6:0 0d:0040 0:6:40 0 2"


def test_len_transformation_daytime():
    day, night = len_transformation(360, 400, 40)
    assert day == 40
    assert night == 0


def test_len_transformation_late_night():
    day, night = len_transformation(1350, 1380, 30)
    assert day == 0
    assert night / 30 == pytest.approx(NIGHT_FACTOR)


def test_len_transformation_early_morning():
    day, night = len_transformation(60, 120, 60)
    assert day == 0
    assert night / 60 == pytest.approx(60 / 52.5)


def test_len_transformation_crossing_into_night():
    day, night = len_transformation(1300, 1340, 40)
    assert day + night / NIGHT_FACTOR == pytest.approx(40)
    assert day > 0 and night > 0


def test_len_transformation_crossing_into_morning():
    day, night = len_transformation(280, 320, 40)
    assert day + night / NIGHT_FACTOR == pytest.approx(40)
    assert day > 0 and night > 0


def test_len_transformation_wraps_full_day():
    assert len_transformation(360 + 1440, 400 + 1440, 40) == len_transformation(360, 400, 40)


def test_gap_real_same_day():
    current = make_task(1, 360, 400, 40)
    following = make_task(2, 1320, 1350, 30)
    assert gap(current, following, True) == 1320 - 400


def test_gap_across_day_boundary():
    current = make_task(1, 1380, 1400, 20)
    following = make_task(2, 30, 60, 30)
    following.start_time.day = 1
    assert gap(current, following, True) == 30 + 1440 - 1400


def test_gap_weighted_matches_day_night_split():
    current = make_task(1, 1250, 1300, 50)
    following = make_task(2, 1380, 1400, 20)
    day, night = gap_day_night(current, following)
    assert gap(current, following, False) == int(day + night)
    assert gap(current, following, False) > gap(current, following, True)


def test_gap_day_night_daytime_gap():
    current = make_task(1, 360, 400, 40)
    following = make_task(2, 450, 500, 50)
    day, night = gap_day_night(current, following)
    assert night == 0
    assert day == 450 - 400