#!/usr/bin/env python3
"""Club Elo commands: rate one match, classify a trend, replay a match log."""

from __future__ import annotations

import csv
import json
import sys
from datetime import datetime
from pathlib import Path
from typing import Annotated

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from domain.ratings.common import MatchResult
from domain.ratings.elo.calculator import PlayerEloCalculator, compute_updated_ratings
from domain.ratings.elo.config import EloSystemConfig, load_elo_system_config
from domain.ratings.elo.match_format import infer_format_from_score, parse_match_format
from domain.ratings.errors import InvalidInputError
from domain.ratings.tiers import get_rank_tier
from domain.ratings.trend import DEFAULT_TREND_THRESHOLD, calculate_trend

DEFAULT_CONFIG_PATH = ROOT_DIR / "configs" / "ratings" / "elo" / "club_default.toml"
REQUIRED_COLUMNS = ("match_id", "event_time", "winner_id", "loser_id")

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Club Elo rating commands.",
)


def _load_config(config_path: Path) -> EloSystemConfig:
    try:
        return load_elo_system_config(config_path)
    except (FileNotFoundError, ValueError) as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc


def _read_match_results(matches_csv: Path) -> list[MatchResult]:
    if not matches_csv.is_file():
        raise typer.BadParameter(f"File not found: {matches_csv}", param_hint="--matches-csv")

    results: list[MatchResult] = []
    with matches_csv.open(newline="", encoding="utf-8") as file:
        reader = csv.DictReader(file)
        missing = [column for column in REQUIRED_COLUMNS if column not in (reader.fieldnames or [])]
        if missing:
            raise typer.BadParameter(
                f"{matches_csv} is missing columns: {', '.join(missing)}",
                param_hint="--matches-csv",
            )

        for line_number, row in enumerate(reader, start=2):
            blank = [
                column for column in REQUIRED_COLUMNS if not (row.get(column) or "").strip()
            ]
            if blank:
                raise typer.BadParameter(
                    f"{matches_csv}:{line_number}: missing values for {', '.join(blank)}",
                    param_hint="--matches-csv",
                )
            score = (row.get("score") or "").strip() or None
            raw_format = (row.get("match_format") or "").strip()
            try:
                if raw_format:
                    match_format = parse_match_format(raw_format)
                elif score is not None:
                    match_format = infer_format_from_score(score)
                else:
                    match_format = None
                results.append(
                    MatchResult(
                        match_id=int(row["match_id"]),
                        event_time=datetime.fromisoformat(row["event_time"].strip()),
                        winner_id=int(row["winner_id"]),
                        loser_id=int(row["loser_id"]),
                        match_format=match_format,
                        score=score,
                    )
                )
            except (TypeError, ValueError) as exc:
                raise typer.BadParameter(
                    f"{matches_csv}:{line_number}: {exc}",
                    param_hint="--matches-csv",
                ) from exc

    if len({result.event_time.tzinfo is None for result in results}) > 1:
        raise typer.BadParameter(
            f"{matches_csv} mixes timezone-aware and naive event_time values",
            param_hint="--matches-csv",
        )
    results.sort(key=lambda result: (result.event_time, result.match_id))
    return results


@app.command("update")
def update(
    rating_winner: Annotated[float, typer.Option("--rating-winner")],
    rating_loser: Annotated[float, typer.Option("--rating-loser")],
    k_winner: Annotated[float, typer.Option("--k-winner")] = 32.0,
    k_loser: Annotated[float, typer.Option("--k-loser")] = 32.0,
    winner_id: Annotated[int | None, typer.Option("--winner-id")] = None,
    loser_id: Annotated[int | None, typer.Option("--loser-id")] = None,
    scale_factor: Annotated[float, typer.Option("--scale-factor")] = 400.0,
) -> None:
    """Rate a single decided match from explicit ratings and K-factors."""
    try:
        result = compute_updated_ratings(
            rating_winner,
            rating_loser,
            k_winner,
            k_loser,
            winner_id=winner_id,
            loser_id=loser_id,
            scale_factor=scale_factor,
        )
    except InvalidInputError as exc:
        raise typer.BadParameter(str(exc)) from exc

    typer.echo(
        f"new_rating_winner={result.new_rating_winner:.2f} "
        f"new_rating_loser={result.new_rating_loser:.2f} "
        f"winner_delta={result.new_rating_winner - rating_winner:+.2f} "
        f"loser_delta={result.new_rating_loser - rating_loser:+.2f}"
    )


@app.command("trend")
def trend(
    deltas: Annotated[
        list[float] | None,
        typer.Argument(help="Rating deltas, most recent first. Use -- before negative values."),
    ] = None,
    threshold: Annotated[float, typer.Option("--threshold")] = DEFAULT_TREND_THRESHOLD,
    window: Annotated[int | None, typer.Option("--window")] = None,
) -> None:
    """Classify recent rating deltas as rising, falling or stable."""
    if window is not None and window <= 0:
        raise typer.BadParameter("--window must be greater than 0")

    result = calculate_trend(deltas or [], threshold=threshold, window=window)
    typer.echo(f"direction={result.direction.value} magnitude={result.magnitude:.2f}")


@app.command("replay")
def replay(
    matches_csv: Annotated[
        Path,
        typer.Option(
            "--matches-csv",
            help="CSV with match_id,event_time,winner_id,loser_id and optional score,match_format.",
        ),
    ],
    config_path: Annotated[
        Path,
        typer.Option("--config", help="Elo system TOML config."),
    ] = DEFAULT_CONFIG_PATH,
    top_n: Annotated[
        int,
        typer.Option("--top-n", help="Number of players to print."),
    ] = 20,
) -> None:
    """Replay a match log in chronological order and print the leaderboard."""
    if top_n <= 0:
        raise typer.BadParameter("--top-n must be greater than 0")

    config = _load_config(config_path)
    match_results = _read_match_results(matches_csv)
    total_matches = len(match_results)
    calculator = PlayerEloCalculator(params=config.parameters)

    for index, match_result in enumerate(match_results, start=1):
        try:
            calculator.process_match(match_result)
        except InvalidInputError as exc:
            raise typer.BadParameter(str(exc), param_hint="--matches-csv") from exc
        if index % 10_000 == 0:
            typer.echo(f"processed_matches={index}/{total_matches}")

    typer.echo(
        f"completed system={config.name} "
        f"processed_matches={total_matches} "
        f"tracked_players={calculator.tracked_player_count()}"
    )
    for rank, record in enumerate(calculator.leaderboard(top_n), start=1):
        player_trend = calculator.trend_for(
            record.player_id,
            window=config.trend_window,
            threshold=config.trend_threshold,
        )
        typer.echo(
            f"rank={rank} "
            f"player_id={record.player_id} "
            f"rating={record.rating:.1f} "
            f"tier={get_rank_tier(record.rating).title!r} "
            f"matches={record.matches_played} "
            f"wins={record.wins} "
            f"losses={record.losses} "
            f"best_streak={record.best_win_streak} "
            f"opponents={record.unique_opponents} "
            f"trend={player_trend.direction.value}"
        )


@app.command("show-config")
def show_config(
    config_path: Annotated[
        Path,
        typer.Option("--config", help="Elo system TOML config."),
    ] = DEFAULT_CONFIG_PATH,
) -> None:
    """Print the effective parameters of an Elo system config as JSON."""
    config = _load_config(config_path)
    typer.echo(
        json.dumps(
            {"name": config.name, "description": config.description, **config.as_config_json()},
            indent=2,
            sort_keys=True,
        )
    )


if __name__ == "__main__":
    app()
