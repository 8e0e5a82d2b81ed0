"""
Command-line report for a stored tournament: fixtures and points table.
"""

import argparse
import os
import sys

from league import storage
from league.models import SCHEDULED
from league.standings import compute_table, league_table


def format_fixture(match, team_names):
    team_a = team_names.get(match.team_a_id, match.team_a_id)
    team_b = team_names.get(match.team_b_id, match.team_b_id)
    line = f"{match.number:>3}. [{match.round}] {team_a} vs {team_b}"
    if match.status == SCHEDULED:
        return f"{line} ({match.status})"
    line = f"{line}  {match.score_a}-{match.score_b}"
    if match.penalty_score_a is not None and match.penalty_score_b is not None:
        line += f" ({match.penalty_score_a}-{match.penalty_score_b} pens)"
    return f"{line} ({match.status})"


def format_table(rows, team_names):
    lines = [f"{'#':>2}  {'Team':<24}{'P':>3}{'W':>3}{'D':>3}{'L':>3}{'GF':>4}{'GA':>4}{'GD':>5}{'Pts':>5}"]
    for position, row in enumerate(rows, start=1):
        name = team_names.get(row['team_id'], row['team_id'])
        lines.append(
            f"{position:>2}  {name[:24]:<24}{row['played']:>3}{row['won']:>3}{row['drawn']:>3}{row['lost']:>3}"
            f"{row['goals_for']:>4}{row['goals_against']:>4}{row['goal_difference']:>+5}{row['points']:>5}"
        )
    return lines


def main(argv=None):
    script_dir = os.path.dirname(__file__)
    base_dir = os.path.dirname(script_dir)

    parser = argparse.ArgumentParser(description='Print fixtures and standings for a tournament.')
    parser.add_argument('tournament_id', help='Id of the tournament to report on')
    parser.add_argument('--data-dir', default=os.environ.get('LEAGUE_DATA_DIR', os.path.join(base_dir, 'data')),
                        help='League data directory (default: $LEAGUE_DATA_DIR or ./data)')
    parser.add_argument('--all-rounds', action='store_true',
                        help='Count knockout rounds in the table as well as the league stage')
    args = parser.parse_args(argv)

    tournament = storage.load_tournament(args.data_dir, args.tournament_id)
    if tournament is None:
        print(f"Tournament {args.tournament_id} not found in {args.data_dir}", file=sys.stderr)
        return 1

    team_names = {t.id: t.name for t in storage.load_teams(args.data_dir)}
    matches = storage.load_matches(args.data_dir, tournament.id)

    print(f"# {tournament.name}")
    print()
    print("## Fixtures")
    if matches:
        for match in matches:
            print(format_fixture(match, team_names))
    else:
        print("No matches scheduled.")

    print()
    print("## Standings (all rounds)" if args.all_rounds else "## Standings (league stage)")
    if args.all_rounds:
        rows = compute_table(matches, tournament.team_ids)
    else:
        rows = league_table(matches, tournament.team_ids)
    for line in format_table(rows, team_names):
        print(line)
    return 0


if __name__ == '__main__':
    sys.exit(main())
