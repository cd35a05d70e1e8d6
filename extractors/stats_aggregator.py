# extractors/stats_aggregator.py
"""
Folds per-player partial statistics into team totals and the canonical
match statistics record.
"""

from typing import Dict, Optional

from .records import FootballMatchStats, MatchReport, PartialPlayerStats, TeamStats

# TeamStats field -> PartialPlayerStats field summed over the squad
SUMMED_FIELDS = {
    "goals": "goals",
    "assists": "assists",
    "shots": "shots",
    "shots_on_target": "shots_on_target",
    "sca": "sca",
    "gca": "gca",
    "passes_completed": "passes_completed",
    "progressive_passes": "progressive_passes",
    "passes_final_third": "passes_final_third",
    "key_passes": "key_passes",
    "corners": "corners",
    "tackles_won": "tackles_won",
    "interceptions": "interceptions",
    "blocks": "blocks",
    "clearances": "clearances",
    "aerials_won": "aerials_won",
    "aerials_lost": "aerials_lost",
    "fouls": "fouls_committed",
    "yellow_cards": "yellow_cards",
    "red_cards": "red_cards",
}


def aggregate_team(
    name: str,
    players: Dict[str, PartialPlayerStats],
    opponent_xg: float = 0.0,
    url: Optional[str] = None,
) -> TeamStats:
    """
    Sum one side's players into a TeamStats record.

    Args:
        name: Team display name
        players: Player name -> partial stats for this side
        opponent_xg: The other side's expected goals, stored as ``xga``
        url: Team profile URL when known

    Returns:
        TeamStats with possession, saves and psxg left at zero
    """
    squad = list(players.values())
    totals = {
        team_field: sum(getattr(player, player_field) for player in squad)
        for team_field, player_field in SUMMED_FIELDS.items()
    }

    return TeamStats(
        name=name,
        xg=sum(player.xg for player in squad),
        xga=opponent_xg,
        url=url,
        players=[player.to_player_stats() for player in squad],
        **totals,
    )


def build_match_stats(report: MatchReport) -> FootballMatchStats:
    """
    Build both sides' totals; expected goals against is cross-assigned.
    """
    home_xg = sum(player.xg for player in report.home_players.values())
    away_xg = sum(player.xg for player in report.away_players.values())

    return FootballMatchStats(
        context=report.context,
        home=aggregate_team(
            report.home_team, report.home_players, away_xg, report.home_url
        ),
        away=aggregate_team(
            report.away_team, report.away_players, home_xg, report.away_url
        ),
    )
