from datetime import datetime
from typing import Callable, Dict, List, Optional, Tuple
from rapidfuzz import fuzz
from league_backend.matches.models.match_model import MATCH_STATUS_PLAYED
from league_backend.statistics.services.snapshot_service import LeagueSnapshot
from league_backend.teams.schemas.team_schema import TeamOut
from league_backend.players.schemas.player_schema import PlayerOut
from league_backend.matches.schemas.match_schema import MatchOut
from league_backend.statistics.schemas.statistics_schema import (
    PlayerStats,
    LeaderboardEntry,
    PlayerMatchRecord,
    StandingsRow,
    PlayerTally,
    TeamOverview,
    RecentEvent,
    DashboardSummary,
)

WIN_POINTS = 3
DRAW_POINTS = 1
LOSS_POINTS = 0

DEFAULT_MINUTES_PLAYED = 90
UNKNOWN_OPPONENT = "Unknown Opponent"
LEADERBOARD_CATEGORIES = ("goals", "assists", "cards")
SEARCH_THRESHOLD = 85
FORM_LENGTH = 5
RECENT_ACTIVITY_LENGTH = 5


def match_points(home_score: int, away_score: int) -> Tuple[int, int]:
    """Points earned by (home, away) under 3/1/0 scoring."""
    if home_score > away_score:
        return WIN_POINTS, LOSS_POINTS
    if home_score < away_score:
        return LOSS_POINTS, WIN_POINTS
    return DRAW_POINTS, DRAW_POINTS


class LeagueStatistics:
    """
    Derives standings, leaderboards and player histories from a LeagueSnapshot.

    Nothing is stored: every call recomputes from the snapshot it was built on.
    Lookups that miss (a match id with no match, a team id with no team) are
    skipped. Pass ``on_referential_gap(kind, ref_id)`` to be told about them.
    """

    def __init__(self, snapshot: LeagueSnapshot,
                 on_referential_gap: Optional[Callable[[str, str], None]] = None):
        self.snapshot = snapshot
        self.on_referential_gap = on_referential_gap

        self.teams_by_id = {team.team_id: team for team in snapshot.teams}
        self.players_by_id = {player.player_id: player for player in snapshot.players}
        self.matches_by_id = {match.match_id: match for match in snapshot.matches}

    # Event collections, named the way callers ask for them
    @property
    def event_collections(self):
        return {
            "goals": self.snapshot.goals,
            "assists": self.snapshot.assists,
            "yellow_cards": self.snapshot.yellow_cards,
            "red_cards": self.snapshot.red_cards,
        }

    def _report_gap(self, kind: str, ref_id: str):
        if self.on_referential_gap is not None:
            self.on_referential_gap(kind, ref_id)

    def _count(self, events, player_id: str, match_id: Optional[str] = None) -> int:
        return sum(
            1 for event in events
            if event.player_id == player_id and (match_id is None or event.match_id == match_id)
        )

    def _player_match_ids(self, player_id: str) -> List[str]:
        """Distinct match ids across the four event logs, in first-seen order."""
        seen = {}
        for events in self.event_collections.values():
            for event in events:
                if event.player_id == player_id:
                    seen.setdefault(event.match_id, None)
        return list(seen)

    # ------------------------------------------------------------------ players

    def player_stats(self, player_id: str) -> PlayerStats:
        return PlayerStats(
            goals=self._count(self.snapshot.goals, player_id),
            assists=self._count(self.snapshot.assists, player_id),
            yellow_cards=self._count(self.snapshot.yellow_cards, player_id),
            red_cards=self._count(self.snapshot.red_cards, player_id),
            matches=len(self._player_match_ids(player_id)),
        )

    def _all_entries(self) -> List[LeaderboardEntry]:
        return [
            LeaderboardEntry(player=PlayerOut.model_validate(player), stats=self.player_stats(player.player_id))
            for player in self.snapshot.players
        ]

    def top_scorers(self, limit: int = 10) -> List[LeaderboardEntry]:
        """Players by goals, highest first. Equal goal counts keep snapshot order."""
        ranked = sorted(self._all_entries(), key=lambda entry: entry.stats.goals, reverse=True)
        return ranked[:limit]

    def leaderboard(self, category: str = "goals", search: Optional[str] = None) -> List[LeaderboardEntry]:
        """
        Rank players by goals, assists or cards (yellow + red).

        Without a search term, players with nothing in the category are left out.
        With one, every player whose name fuzzily contains the term is kept.
        """
        if category not in LEADERBOARD_CATEGORIES:
            raise ValueError(f"Unknown leaderboard category '{category}'. Expected one of {LEADERBOARD_CATEGORIES}")

        def value(entry: LeaderboardEntry) -> int:
            if category == "goals":
                return entry.stats.goals
            if category == "assists":
                return entry.stats.assists
            return entry.stats.total_cards

        entries = self._all_entries()
        query = (search or "").strip().lower()
        if query:
            entries = [
                entry for entry in entries
                if fuzz.partial_ratio(query, entry.player.name.lower()) > SEARCH_THRESHOLD
            ]

        entries.sort(key=value, reverse=True)

        if not query:
            entries = [entry for entry in entries if value(entry) > 0]
        return entries

    def player_records(self, player_id: str) -> List[PlayerMatchRecord]:
        """One synthetic record per match the player has an event in. Unordered."""
        player = self.players_by_id.get(player_id)
        player_team_id = player.team_id if player else None

        records = []
        for match_id in self._player_match_ids(player_id):
            match = self.matches_by_id.get(match_id)
            if match is None:
                self._report_gap("match", match_id)
                continue

            opponent_id = match.away_team_id if match.home_team_id == player_team_id else match.home_team_id
            opponent = self.teams_by_id.get(opponent_id)
            if opponent is None:
                self._report_gap("team", opponent_id)

            match_date = match.scheduled_date
            if match_date is None and match.created_at is not None:
                match_date = match.created_at.date()

            records.append(PlayerMatchRecord(
                id=f"{player_id}_{match_id}",
                player_id=player_id,
                match_id=match_id,
                match_date=match_date,
                opponent=opponent.name if opponent else UNKNOWN_OPPONENT,
                goals=self._count(self.snapshot.goals, player_id, match_id),
                assists=self._count(self.snapshot.assists, player_id, match_id),
                yellow_cards=self._count(self.snapshot.yellow_cards, player_id, match_id),
                red_cards=self._count(self.snapshot.red_cards, player_id, match_id),
                minutes_played=match.minutes_played or DEFAULT_MINUTES_PLAYED,
            ))
        return records

    # -------------------------------------------------------------------- teams

    def standings(self) -> List[StandingsRow]:
        """League table from played matches: points, then goal difference, then goals for."""
        table: Dict[str, StandingsRow] = {
            team.team_id: StandingsRow(
                team_id=team.team_id,
                name=team.name,
                logo=team.logo,
                color=team.primary_color or "",
            )
            for team in self.snapshot.teams
        }

        for match in self.snapshot.matches:
            if match.status != MATCH_STATUS_PLAYED:
                continue

            home = table.get(match.home_team_id)
            away = table.get(match.away_team_id)
            if home is None or away is None:
                self._report_gap("team", match.home_team_id if home is None else match.away_team_id)
                continue

            home.played += 1
            away.played += 1
            home.goals_for += match.home_score
            home.goals_against += match.away_score
            away.goals_for += match.away_score
            away.goals_against += match.home_score

            if match.home_score > match.away_score:
                home.won += 1
                away.lost += 1
            elif match.home_score < match.away_score:
                away.won += 1
                home.lost += 1
            else:
                home.drawn += 1
                away.drawn += 1

            home_points, away_points = match_points(match.home_score, match.away_score)
            home.points += home_points
            away.points += away_points

        rows = list(table.values())
        for row in rows:
            row.goal_difference = row.goals_for - row.goals_against

        # sorted() is stable under reverse=True, so full ties keep team order
        return sorted(rows, key=lambda row: (row.points, row.goal_difference, row.goals_for), reverse=True)

    def match_result(self, match, team_id: str) -> str:
        """'W', 'D' or 'L' from the given team's side of the match."""
        is_home = match.home_team_id == team_id
        team_score = match.home_score if is_home else match.away_score
        opponent_score = match.away_score if is_home else match.home_score
        if team_score > opponent_score:
            return "W"
        if team_score < opponent_score:
            return "L"
        return "D"

    def team_overview(self, team_id: str) -> Optional[TeamOverview]:
        team = self.teams_by_id.get(team_id)
        if team is None:
            return None

        team_players = [player for player in self.snapshot.players if player.team_id == team_id]
        player_ids = {player.player_id for player in team_players}
        manager = next((player for player in team_players if player.is_manager), None)

        team_matches = [
            match for match in self.snapshot.matches
            if match.home_team_id == team_id or match.away_team_id == team_id
        ]
        played = sorted(
            (match for match in team_matches if match.status == MATCH_STATUS_PLAYED),
            key=lambda match: match.match_day,
        )

        def leader(events) -> Optional[PlayerTally]:
            best = None
            for player in team_players:
                count = self._count(events, player.player_id)
                if count > 0 and (best is None or count > best.count):
                    best = PlayerTally(player=PlayerOut.model_validate(player), count=count)
            return best

        return TeamOverview(
            team=TeamOut.model_validate(team),
            players=[PlayerOut.model_validate(player) for player in team_players],
            manager=PlayerOut.model_validate(manager) if manager else None,
            matches=[MatchOut.model_validate(match) for match in team_matches],
            total_goals=sum(1 for goal in self.snapshot.goals if goal.player_id in player_ids),
            total_assists=sum(1 for assist in self.snapshot.assists if assist.player_id in player_ids),
            top_scorer=leader(self.snapshot.goals),
            top_assister=leader(self.snapshot.assists),
            form=[self.match_result(match, team_id) for match in played[-FORM_LENGTH:]],
        )

    # ---------------------------------------------------------------- dashboard

    def recent_activity(self, limit: int = RECENT_ACTIVITY_LENGTH) -> List[RecentEvent]:
        kinds = (
            ("goal", self.snapshot.goals),
            ("yellow", self.snapshot.yellow_cards),
            ("red", self.snapshot.red_cards),
            ("assist", self.snapshot.assists),
        )
        events = [
            RecentEvent(
                type=kind,
                event_id=event.event_id,
                player_id=event.player_id,
                match_id=event.match_id,
                team_id=event.team_id,
                timestamp=event.timestamp,
            )
            for kind, collection in kinds
            for event in collection
        ]
        # Events without a timestamp sort as the oldest
        events.sort(key=lambda event: event.timestamp or datetime.min, reverse=True)
        return events[:limit]

    def dashboard(self) -> DashboardSummary:
        played = [match for match in self.snapshot.matches if match.status == MATCH_STATUS_PLAYED]
        upcoming = [match for match in self.snapshot.matches if match.status != MATCH_STATUS_PLAYED]
        total_goals = len(self.snapshot.goals)

        return DashboardSummary(
            teams=len(self.snapshot.teams),
            players=len(self.snapshot.players),
            played_matches=len(played),
            upcoming_matches=len(upcoming),
            total_goals=total_goals,
            total_assists=len(self.snapshot.assists),
            average_goals=round(total_goals / len(played), 1) if played else 0,
            top_scorers=self.top_scorers(limit=5),
            recent_activity=self.recent_activity(),
        )
