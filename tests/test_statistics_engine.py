"""League statistics: standings, leaderboards, player stats and match histories."""

from datetime import date, datetime

import pytest

from league_backend.teams.models.team_model import Team
from league_backend.players.models.player_model import Player
from league_backend.matches.models.match_model import Match
from league_backend.match_events.models.player_event_model import Goal, Assist, YellowCard, RedCard
from league_backend.statistics.services.snapshot_service import LeagueSnapshot
from league_backend.statistics.services.statistics_engine import LeagueStatistics, match_points


def make_team(team_id, name=None):
    return Team(team_id=team_id, name=name or f"Team {team_id}", primary_color="#fff",
                founded="1900", stadium="Ground", logo=None)


def make_player(player_id, team_id, name=None, is_manager=False):
    return Player(player_id=player_id, name=name or f"Player {player_id}", position="FW",
                  number=9, team_id=team_id, is_manager=is_manager, photo=None)


def make_match(match_id, home, away, home_score=0, away_score=0, status="played",
               match_day=1, minutes_played=None, scheduled_date=None):
    return Match(
        match_id=match_id, match_day=match_day,
        home_team_id=home, away_team_id=away,
        home_score=home_score, away_score=away_score,
        home_yellows=0, away_yellows=0, home_reds=0, away_reds=0,
        home_points=0, away_points=0, minutes_played=minutes_played,
        league="Seasonal League", status=status,
        scheduled_date=scheduled_date, time=None, created_at=None,
    )


def make_event(model, event_id, player_id, match_id, team_id=None, timestamp=None):
    return model(event_id=event_id, player_id=player_id, match_id=match_id,
                 match_day=1, team_id=team_id, timestamp=timestamp)


def test_match_points_scoring():
    assert match_points(2, 1) == (3, 0)
    assert match_points(0, 3) == (0, 3)
    assert match_points(1, 1) == (1, 1)


def test_standings_counts_only_played_matches():
    snapshot = LeagueSnapshot(
        teams=[make_team("T1"), make_team("T2")],
        matches=[
            make_match("M1", "T1", "T2", 2, 1, status="played"),
            make_match("M2", "T1", "T2", 0, 0, status="upcoming"),
        ],
    )
    table = {row.team_id: row for row in LeagueStatistics(snapshot).standings()}

    assert table["T1"].played == 1
    assert table["T2"].played == 1
    assert (table["T1"].won, table["T1"].points) == (1, 3)
    assert (table["T2"].lost, table["T2"].points) == (1, 0)
    assert table["T1"].goal_difference == 1
    assert table["T2"].goal_difference == -1


def test_standings_each_played_match_awards_two_results():
    snapshot = LeagueSnapshot(
        teams=[make_team("T1"), make_team("T2"), make_team("T3")],
        matches=[
            make_match("M1", "T1", "T2", 3, 0),
            make_match("M2", "T2", "T3", 1, 1),
            make_match("M3", "T3", "T1", 2, 4),
        ],
    )
    rows = LeagueStatistics(snapshot).standings()

    results = sum(row.won + row.drawn + row.lost for row in rows)
    points = sum(row.points for row in rows)
    assert results == 2 * 3
    # two decisive matches (3 each) and one draw (2)
    assert points == 3 + 3 + 2


def test_standings_tie_break_on_goals_for():
    # A and B both end on 10 points with +3; A scored more
    teams = [make_team("B"), make_team("A"), make_team("X")]
    matches = [
        # B: 3 wins, 1 draw, gf 9 ga 6
        make_match("b1", "B", "X", 3, 2), make_match("b2", "B", "X", 2, 1),
        make_match("b3", "B", "X", 3, 2), make_match("b4", "B", "X", 1, 1),
        # A: 3 wins, 1 draw, gf 12 ga 9
        make_match("a1", "A", "X", 4, 3), make_match("a2", "A", "X", 3, 2),
        make_match("a3", "A", "X", 3, 2), make_match("a4", "A", "X", 2, 2),
    ]
    rows = LeagueStatistics(LeagueSnapshot(teams=teams, matches=matches)).standings()
    by_id = {row.team_id: row for row in rows}

    assert (by_id["A"].points, by_id["A"].goal_difference, by_id["A"].goals_for) == (10, 3, 12)
    assert (by_id["B"].points, by_id["B"].goal_difference, by_id["B"].goals_for) == (10, 3, 9)
    assert [row.team_id for row in rows][:2] == ["A", "B"]


def test_standings_sort_by_points_then_goal_difference():
    teams = [make_team("T1"), make_team("T2"), make_team("T3"), make_team("T4")]
    matches = [
        make_match("M1", "T1", "T2", 1, 0),
        make_match("M2", "T3", "T4", 5, 0),
    ]
    rows = LeagueStatistics(LeagueSnapshot(teams=teams, matches=matches)).standings()
    assert [row.team_id for row in rows] == ["T3", "T1", "T2", "T4"]


def test_standings_full_tie_keeps_team_order():
    teams = [make_team("T2"), make_team("T1"), make_team("T3")]
    rows = LeagueStatistics(LeagueSnapshot(teams=teams)).standings()
    assert [row.team_id for row in rows] == ["T2", "T1", "T3"]


def test_standings_skip_match_with_unknown_team():
    gaps = []
    snapshot = LeagueSnapshot(
        teams=[make_team("T1")],
        matches=[make_match("M1", "T1", "GONE", 2, 0)],
    )
    rows = LeagueStatistics(snapshot, on_referential_gap=lambda kind, ref: gaps.append((kind, ref))).standings()

    assert rows[0].played == 0
    assert rows[0].points == 0
    assert gaps == [("team", "GONE")]


def test_player_stats_matches_is_union_of_match_ids():
    snapshot = LeagueSnapshot(
        players=[make_player("P1", "T1")],
        goals=[make_event(Goal, "G1", "P1", "M1"), make_event(Goal, "G2", "P1", "M1")],
        yellow_cards=[make_event(YellowCard, "YC1", "P1", "M2")],
    )
    stats = LeagueStatistics(snapshot).player_stats("P1")

    assert stats.goals == 2
    assert stats.yellow_cards == 1
    assert stats.assists == 0
    assert stats.red_cards == 0
    assert stats.matches == 2


def test_player_stats_ignores_other_players():
    snapshot = LeagueSnapshot(
        goals=[make_event(Goal, "G1", "P2", "M1")],
        red_cards=[make_event(RedCard, "RC1", "P2", "M1")],
    )
    stats = LeagueStatistics(snapshot).player_stats("P1")
    assert stats.goals == 0
    assert stats.matches == 0


def test_top_scorers_sorted_and_capped():
    players = [make_player(f"P{i}", "T1") for i in range(1, 13)]
    goals = []
    for i in range(1, 13):
        for n in range(i % 4):
            goals.append(make_event(Goal, f"G{i}-{n}", f"P{i}", "M1"))
    entries = LeagueStatistics(LeagueSnapshot(players=players, goals=goals)).top_scorers()

    assert len(entries) == 10
    counts = [entry.stats.goals for entry in entries]
    assert counts == sorted(counts, reverse=True)
    # equal goal counts keep player order: P3, P7 and P11 all have 3
    assert [entry.player.player_id for entry in entries[:3]] == ["P3", "P7", "P11"]


def test_leaderboard_cards_and_zero_filter():
    players = [make_player("P1", "T1", "Alex Stone"), make_player("P2", "T1", "Ben Hale")]
    snapshot = LeagueSnapshot(
        players=players,
        yellow_cards=[make_event(YellowCard, "YC1", "P2", "M1")],
        red_cards=[make_event(RedCard, "RC1", "P2", "M1")],
    )
    engine = LeagueStatistics(snapshot)

    cards = engine.leaderboard("cards")
    assert [entry.player.player_id for entry in cards] == ["P2"]
    assert cards[0].stats.total_cards == 2

    # searching keeps players with nothing in the category
    searched = engine.leaderboard("goals", search="stone")
    assert [entry.player.player_id for entry in searched] == ["P1"]


def test_leaderboard_rejects_unknown_category():
    with pytest.raises(ValueError):
        LeagueStatistics(LeagueSnapshot()).leaderboard("saves")


def test_player_records_per_match():
    snapshot = LeagueSnapshot(
        teams=[make_team("T1", "Home FC"), make_team("T2", "Away FC")],
        players=[make_player("P1", "T1")],
        matches=[
            make_match("M1", "T1", "T2", 2, 0, minutes_played=None, scheduled_date=date(2026, 3, 3)),
            make_match("M2", "T2", "T1", 1, 1, minutes_played=70),
        ],
        goals=[make_event(Goal, "G1", "P1", "M1"), make_event(Goal, "G2", "P1", "M1")],
        assists=[make_event(Assist, "A1", "P1", "M2")],
        red_cards=[make_event(RedCard, "RC1", "P1", "M2")],
    )
    records = {r.match_id: r for r in LeagueStatistics(snapshot).player_records("P1")}

    assert set(records) == {"M1", "M2"}
    assert records["M1"].opponent == "Away FC"
    assert records["M1"].goals == 2
    assert records["M1"].minutes_played == 90
    assert records["M1"].match_date == date(2026, 3, 3)
    assert records["M1"].id == "P1_M1"
    assert records["M2"].opponent == "Away FC"
    assert (records["M2"].assists, records["M2"].red_cards) == (1, 1)
    assert records["M2"].minutes_played == 70


def test_player_records_drop_missing_match_and_default_opponent():
    gaps = []
    snapshot = LeagueSnapshot(
        teams=[make_team("T1")],
        players=[make_player("P1", "T1")],
        matches=[make_match("M1", "T1", "T9")],
        goals=[make_event(Goal, "G1", "P1", "M1"), make_event(Goal, "G2", "P1", "M404")],
    )
    records = LeagueStatistics(snapshot, on_referential_gap=lambda k, r: gaps.append((k, r))).player_records("P1")

    assert len(records) == 1
    assert records[0].opponent == "Unknown Opponent"
    assert ("match", "M404") in gaps


def test_team_overview_form_and_leaders():
    snapshot = LeagueSnapshot(
        teams=[make_team("T1"), make_team("T2")],
        players=[make_player("P1", "T1", is_manager=True), make_player("P2", "T1"), make_player("P3", "T2")],
        matches=[
            make_match("M3", "T2", "T1", 0, 0, match_day=3),
            make_match("M2", "T1", "T2", 0, 1, match_day=2),
            make_match("M1", "T1", "T2", 3, 1, match_day=1),
            make_match("M4", "T1", "T2", status="upcoming", match_day=4),
        ],
        goals=[make_event(Goal, "G1", "P2", "M1"), make_event(Goal, "G2", "P2", "M1"),
               make_event(Goal, "G3", "P1", "M1"), make_event(Goal, "G4", "P3", "M2")],
        assists=[make_event(Assist, "A1", "P1", "M1")],
    )
    overview = LeagueStatistics(snapshot).team_overview("T1")

    assert overview.form == ["W", "L", "D"]
    assert overview.manager.player_id == "P1"
    assert overview.total_goals == 3
    assert overview.total_assists == 1
    assert overview.top_scorer.player.player_id == "P2"
    assert overview.top_scorer.count == 2
    assert overview.top_assister.player.player_id == "P1"
    assert len(overview.matches) == 4


def test_team_overview_unknown_team():
    assert LeagueStatistics(LeagueSnapshot()).team_overview("T404") is None


def test_dashboard_summary():
    snapshot = LeagueSnapshot(
        teams=[make_team("T1"), make_team("T2")],
        players=[make_player("P1", "T1")],
        matches=[make_match("M1", "T1", "T2", 2, 1), make_match("M2", "T1", "T2", 1, 0),
                 make_match("M3", "T2", "T1", status="upcoming")],
        goals=[make_event(Goal, f"G{i}", "P1", "M1", timestamp=datetime(2026, 1, i)) for i in range(1, 4)],
        yellow_cards=[make_event(YellowCard, "YC1", "P1", "M2", timestamp=datetime(2026, 2, 1))],
        assists=[make_event(Assist, "A1", "P1", "M2")],
    )
    summary = LeagueStatistics(snapshot).dashboard()

    assert summary.played_matches == 2
    assert summary.upcoming_matches == 1
    assert summary.total_goals == 3
    assert summary.average_goals == 1.5
    assert summary.recent_activity[0].type == "yellow"
    assert summary.recent_activity[-1].type == "assist"
    assert len(summary.recent_activity) == 5


def test_dashboard_average_without_played_matches():
    assert LeagueStatistics(LeagueSnapshot()).dashboard().average_goals == 0
