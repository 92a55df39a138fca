"""Round-robin fixture generation."""

import random
from datetime import date, timedelta

from league_backend.fixtures.services.fixture_generator import (
    DEFAULT_TIME_SLOTS,
    generate_fixtures,
    next_weekday_dates,
)

# 2026-10-18 is a Sunday
SUNDAY = date(2026, 10, 18)


def test_four_teams_five_weeks():
    fixtures = generate_fixtures(["T1", "T2", "T3", "T4"], today=SUNDAY, rng=random.Random(7))

    assert len(fixtures) == 5 * (4 // 2)
    combos = {(f["match_day"], f["home_team_id"], f["away_team_id"]) for f in fixtures}
    assert len(combos) == len(fixtures)
    assert all(f["home_team_id"] != f["away_team_id"] for f in fixtures)


def test_every_team_plays_once_per_week():
    teams = ["T1", "T2", "T3", "T4", "T5", "T6"]
    fixtures = generate_fixtures(teams, weeks=5, today=SUNDAY, rng=random.Random(1))

    for week in range(1, 6):
        week_fixtures = [f for f in fixtures if f["match_day"] == week]
        playing = [f["home_team_id"] for f in week_fixtures] + [f["away_team_id"] for f in week_fixtures]
        assert sorted(playing) == sorted(teams)


def test_first_weeks_pairings_and_home_swap():
    fixtures = generate_fixtures(["A", "B", "C", "D"], weeks=2, today=SUNDAY, rng=random.Random(3))
    week1 = {(f["home_team_id"], f["away_team_id"]) for f in fixtures if f["match_day"] == 1}
    week2 = {(f["home_team_id"], f["away_team_id"]) for f in fixtures if f["match_day"] == 2}

    assert week1 == {("A", "D"), ("B", "C")}
    # rotation gives [A, D, B, C]; odd week swaps home and away
    assert week2 == {("C", "A"), ("B", "D")}


def test_odd_team_count_uses_a_bye():
    fixtures = generate_fixtures(["T1", "T2", "T3"], weeks=3, today=SUNDAY, rng=random.Random(0))

    assert len(fixtures) == 3
    assert all(f["home_team_id"] is not None and f["away_team_id"] is not None for f in fixtures)
    for week in range(1, 4):
        assert len([f for f in fixtures if f["match_day"] == week]) == 1


def test_dates_fall_on_consecutive_tuesdays():
    fixtures = generate_fixtures(["T1", "T2"], weeks=3, today=SUNDAY, rng=random.Random(0))
    dates = [f["scheduled_date"] for f in fixtures]

    assert dates == [date(2026, 10, 20), date(2026, 10, 27), date(2026, 11, 3)]
    assert all(d.weekday() == 1 for d in dates)


def test_next_weekday_includes_today():
    tuesday = date(2026, 10, 20)
    assert next_weekday_dates(2, weekday=1, today=tuesday) == [tuesday, tuesday + timedelta(days=7)]


def test_time_slots_are_distinct_within_a_week():
    teams = [f"T{i}" for i in range(1, 9)]
    fixtures = generate_fixtures(teams, weeks=4, today=SUNDAY, rng=random.Random(11))

    for week in range(1, 5):
        times = [f["time"] for f in fixtures if f["match_day"] == week]
        assert sorted(times) == sorted(DEFAULT_TIME_SLOTS)


def test_time_slots_cycle_when_fixtures_outnumber_slots():
    teams = [f"T{i}" for i in range(1, 11)]
    fixtures = generate_fixtures(teams, weeks=1, time_slots=("9:00", "11:00"), today=SUNDAY, rng=random.Random(5))

    times = [f["time"] for f in fixtures]
    assert len(times) == 5
    assert times[0] == times[2] == times[4]
    assert times[1] == times[3]
    assert times[0] != times[1]


def test_fixtures_are_upcoming_with_zeroed_fields():
    fixture = generate_fixtures(["T1", "T2"], weeks=1, league="Cup", today=SUNDAY, rng=random.Random(0))[0]

    assert fixture["status"] == "upcoming"
    assert fixture["league"] == "Cup"
    for field in ("home_score", "away_score", "home_yellows", "away_yellows", "home_reds", "away_reds", "home_points", "away_points"):
        assert fixture[field] == 0


def test_repeated_generation_is_not_deduplicated():
    first = generate_fixtures(["T1", "T2", "T3", "T4"], today=SUNDAY, rng=random.Random(2))
    second = generate_fixtures(["T1", "T2", "T3", "T4"], today=SUNDAY, rng=random.Random(2))
    assert len(first + second) == 20
