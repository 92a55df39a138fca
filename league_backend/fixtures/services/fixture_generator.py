import random
from datetime import date, timedelta
from typing import List, Optional, Sequence

TUESDAY = 1
DEFAULT_WEEKS = 5
DEFAULT_TIME_SLOTS = ("8:00", "10:00", "12:00", "14:00")
DEFAULT_LEAGUE = "Seasonal League"

# Stands in for the missing opponent when the team count is odd
BYE = None


def next_weekday_dates(count: int, weekday: int = TUESDAY, today: Optional[date] = None) -> List[date]:
    """The first ``weekday`` on or after ``today``, then every 7 days after it."""
    today = today or date.today()
    first = today + timedelta(days=(weekday - today.weekday()) % 7)
    return [first + timedelta(weeks=week) for week in range(count)]


def shuffled(items: Sequence, rng: random.Random) -> list:
    copy = list(items)
    rng.shuffle(copy)
    return copy


def generate_fixtures(
    team_ids: Sequence[str],
    weeks: int = DEFAULT_WEEKS,
    weekday: int = TUESDAY,
    time_slots: Sequence[str] = DEFAULT_TIME_SLOTS,
    league: str = DEFAULT_LEAGUE,
    today: Optional[date] = None,
    rng: Optional[random.Random] = None,
) -> List[dict]:
    """
    Round-robin schedule using the circle method.

    Each week pairs team i with team n-1-i, swaps home and away on odd weeks,
    drops pairings with the bye, then rotates the last team into slot 1.
    Kick-off times come from a per-week shuffle of ``time_slots``.

    The caller checks there are at least two teams. Nothing here looks at
    fixtures that already exist, so two calls give two schedules.
    """
    rng = rng or random.Random()
    team_list = list(team_ids)
    if len(team_list) % 2 != 0:
        team_list.append(BYE)

    num_teams = len(team_list)
    match_dates = next_weekday_dates(weeks, weekday, today)
    fixtures = []

    for week_index in range(weeks):
        week_times = shuffled(time_slots, rng)
        match_in_week = 0

        for i in range(num_teams // 2):
            home, away = team_list[i], team_list[num_teams - 1 - i]
            if week_index % 2 == 1:
                home, away = away, home

            if home is BYE or away is BYE:
                continue

            fixtures.append({
                "home_team_id": home,
                "away_team_id": away,
                "home_score": 0,
                "away_score": 0,
                "home_yellows": 0,
                "away_yellows": 0,
                "home_reds": 0,
                "away_reds": 0,
                "home_points": 0,
                "away_points": 0,
                "minutes_played": 90,
                "match_day": week_index + 1,
                "scheduled_date": match_dates[week_index],
                "time": week_times[match_in_week % len(week_times)],
                "league": league,
                "status": "upcoming",
            })
            match_in_week += 1

        team_list.insert(1, team_list.pop())

    return fixtures
