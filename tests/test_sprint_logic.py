from datetime import date, timedelta
import pytest

from sprintcal.models import CadenceConfig
from sprintcal.sprint_logic import (
    Direction, build_sprint_ranges, calculate_sprint_period, expand_backward,
    expand_forward, nearest_weekday, next_sprint_after, required_sprint_count,
)
from sprintcal.date_utils import weekday_of


TUESDAY = date(2025, 2, 25)


@pytest.mark.parametrize("target,direction,expected", [
    (2, Direction.BACKWARD, date(2025, 2, 25)),   # today counts backwards
    (2, Direction.FORWARD, date(2025, 3, 4)),     # never today forwards
    (0, Direction.BACKWARD, date(2025, 2, 23)),
    (0, Direction.FORWARD, date(2025, 3, 2)),
    (5, Direction.BACKWARD, date(2025, 2, 21)),
    (5, Direction.FORWARD, date(2025, 2, 28)),
])
def test_nearest_weekday(target, direction, expected):
    result = nearest_weekday(target, TUESDAY, direction)
    assert result == expected
    assert weekday_of(result) == target


def test_nearest_weekday_rejects_invalid_weekday():
    with pytest.raises(ValueError):
        nearest_weekday(7, TUESDAY, Direction.FORWARD)


def test_tuesday_seven_seven_example():
    sprint = calculate_sprint_period(date(2025, 2, 25), 7, 7)
    assert sprint.development_start == date(2025, 2, 25)
    assert sprint.development_end == date(2025, 3, 3)
    assert sprint.qa_start == date(2025, 3, 4)
    assert sprint.qa_end == date(2025, 3, 10)
    assert sprint.release_date == date(2025, 3, 11)
    assert sprint.sprint_id == 'Sprint-2025/03/11'

    nxt = calculate_sprint_period(next_sprint_after(sprint), 7, 7)
    assert nxt.development_start == date(2025, 3, 4)
    assert nxt.release_date == date(2025, 3, 18)


@pytest.mark.parametrize("start", [date(2025, 2, 25), date(2024, 12, 29), date(2024, 2, 22), date(2025, 6, 7)])
@pytest.mark.parametrize("dev,qa", [(1, 1), (3, 4), (4, 4), (7, 7), (10, 2), (14, 5)])
def test_range_invariants(start, dev, qa):
    s = calculate_sprint_period(start, dev, qa)
    assert s.development_start <= s.development_end < s.qa_start <= s.qa_end < s.release_date
    assert (s.development_end - s.development_start).days + 1 == dev
    assert (s.qa_end - s.qa_start).days + 1 == qa
    assert s.qa_start == s.development_end + timedelta(days=1)
    assert weekday_of(s.release_date) == weekday_of(s.development_start)
    # release is the first matching weekday after QA ends
    assert 1 <= (s.release_date - s.qa_end).days <= 7


def test_release_follows_qa_end_directly_when_aligned():
    s = calculate_sprint_period(TUESDAY, 3, 4)
    assert s.qa_end == date(2025, 3, 3)
    assert s.release_date == date(2025, 3, 4)


def test_release_when_qa_end_is_on_start_weekday():
    # 4+4 days: QA itself ends on a Tuesday
    s = calculate_sprint_period(TUESDAY, 4, 4)
    assert s.qa_end == date(2025, 3, 4)
    assert s.release_date == date(2025, 3, 11)


@pytest.mark.parametrize("dev,qa", [(0, 7), (7, 0), (-1, 3)])
def test_calculate_rejects_non_positive_days(dev, qa):
    with pytest.raises(ValueError):
        calculate_sprint_period(TUESDAY, dev, qa)


def test_expand_forward_chains_on_qa_start():
    sprints = expand_forward(TUESDAY, 7, 7, 5)
    assert len(sprints) == 5
    assert sprints[0] == calculate_sprint_period(TUESDAY, 7, 7)
    for prev, cur in zip(sprints, sprints[1:]):
        assert cur.development_start == prev.qa_start
    assert [s.release_date for s in sprints] == [
        date(2025, 3, 11), date(2025, 3, 18), date(2025, 3, 25), date(2025, 4, 1), date(2025, 4, 8),
    ]


def test_expand_backward_is_weekly_and_ascending():
    sprints = expand_backward(TUESDAY, 7, 7, 3)
    assert [s.development_start for s in sprints] == [date(2025, 2, 11), date(2025, 2, 18), date(2025, 2, 25)]
    assert sprints[-1] == calculate_sprint_period(TUESDAY, 7, 7)


def test_expand_with_zero_count():
    assert expand_forward(TUESDAY, 7, 7, 0) == []
    assert expand_backward(TUESDAY, 7, 7, 0) == []
    with pytest.raises(ValueError):
        expand_forward(TUESDAY, 7, 7, -1)


def test_build_sprint_ranges_merges_both_directions():
    cadence = CadenceConfig(anchor_weekday=2, development_days=7, qa_days=7)
    sprints = build_sprint_ranges(cadence, date(2025, 2, 27), 3)
    assert [s.release_date for s in sprints] == [
        date(2025, 2, 25), date(2025, 3, 4), date(2025, 3, 11), date(2025, 3, 18), date(2025, 3, 25),
    ]
    assert len({s.sprint_id for s in sprints}) == len(sprints)


def test_required_sprint_count():
    assert required_sprint_count(CadenceConfig(2, 7, 7), 3) == 14
    assert required_sprint_count(CadenceConfig(1, 10, 3), 1) == 6


@pytest.mark.parametrize("wd,dev,qa", [(7, 7, 7), (-1, 7, 7), (2, 0, 7), (2, 7, 0)])
def test_cadence_config_validation(wd, dev, qa):
    with pytest.raises(ValueError):
        CadenceConfig(wd, dev, qa)


@pytest.mark.parametrize("direction", ['forward', None, 1])
def test_nearest_weekday_rejects_unknown_direction(direction):
    with pytest.raises(ValueError):
        nearest_weekday(2, TUESDAY, direction)
