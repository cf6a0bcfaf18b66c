from __future__ import annotations

import time
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from trivia.data_models import GameResult
from trivia.errors import InvalidInputError, TriviaError
from trivia.game import AnswerJudgement, GameSession, QuestionPrompt, SessionEvent
from trivia.system import TriviaSystem

app = typer.Typer(help="Single-player trivia quiz with a local leaderboard.")
console = Console()

ANSWER_LABELS = "ABCD"


def _load_system(config: Optional[Path]) -> TriviaSystem:
    """Instantiate `TriviaSystem` from an optional config file."""
    return TriviaSystem.from_config(config)


def _render_leaderboard(scores: List[GameResult], title: str) -> None:
    if not scores:
        console.print("[dim]No high scores yet. Be the first to play![/dim]")
        return
    table = Table(title=title)
    table.add_column("#", justify="right")
    table.add_column("Player")
    table.add_column("Correct", justify="center")
    table.add_column("Date")
    table.add_column("Score", justify="right", style="bold")
    for rank, entry in enumerate(scores, start=1):
        table.add_row(
            str(rank),
            entry.player_name,
            f"{entry.correct_count}/{entry.total_questions}",
            entry.timestamp.strftime("%Y-%m-%d"),
            str(entry.score),
        )
    console.print(table)


def _show_question(prompt: QuestionPrompt) -> None:
    question = prompt.question
    console.print()
    console.print(
        f"[bold]Question {prompt.number} of {prompt.total}[/bold]  [cyan]{question.category}[/cyan]"
    )
    console.print(question.prompt)
    for idx, answer in enumerate(question.answers):
        console.print(f"  {idx + 1}. {ANSWER_LABELS[idx]}) {answer}")


def _start_with_name(session: GameSession, system: TriviaSystem, name: Optional[str]) -> None:
    """Ask for a player name until the session accepts one."""
    while True:
        if name is None:
            name = typer.prompt("Player name")
        try:
            session.start(name, system.draw_questions())
            return
        except InvalidInputError as exc:
            console.print(f"[red]{exc}[/red]")
            name = None


def _report_failure(exc: Exception) -> None:
    console.print(f"[red]{exc}[/red]")
    raise typer.Exit(code=1) from exc


def _run_game(system: TriviaSystem, name: Optional[str]) -> None:
    _render_leaderboard(system.leaderboard_preview(), "Top Scores")

    pause = system.settings.game.answer_pause_seconds
    session = system.new_session()

    def show_judgement(judgement: AnswerJudgement) -> None:
        question = session.current_question()
        if judgement.is_correct:
            console.print(f"[green]Correct! +{judgement.points_awarded}[/green]")
        else:
            console.print(f"[red]Wrong.[/red] The answer was {question.correct_answer}.")
        console.print(f"Score: {session.score}")

    session.subscribe(SessionEvent.QUESTION_CHANGED, _show_question)
    session.subscribe(SessionEvent.ANSWER_JUDGED, show_judgement)
    _start_with_name(session, system, name)

    while not session.is_complete:
        choice = typer.prompt("Your answer (1-4)", type=int)
        try:
            session.submit_answer(choice - 1)
        except InvalidInputError:
            console.print("[red]Please choose an answer from 1 to 4.[/red]")
            continue
        if pause:
            time.sleep(pause)
        session.advance()

    summary = system.last_summary
    console.print()
    console.print(f"[bold]{summary.score} points[/bold]")
    console.print(
        f"Correct: {summary.correct_count}/{summary.total_questions}  Accuracy: {summary.accuracy}%"
    )
    console.print(summary.message)
    if system.last_save_error is not None:
        console.print(
            f"[yellow]Your score could not be saved: {system.last_save_error}[/yellow]"
        )
    console.print(f"High Score: {system.score_store.best_score()}")


@app.command()
def play(
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Player name."),
    config: Optional[Path] = typer.Option(None, help="Path to configuration YAML."),
):
    """
    Play one game and record the result on the leaderboard.

    Draws a random set of questions, asks for one answer per question, pauses briefly after
    each verdict, and finishes with the score, accuracy, and rating message.
    """
    system = _load_system(config)
    try:
        _run_game(system, name)
    except (TriviaError, OSError) as exc:
        _report_failure(exc)


@app.command()
def scores(
    limit: Optional[int] = typer.Option(None, help="Show at most this many entries."),
    config: Optional[Path] = typer.Option(None, help="Path to configuration YAML."),
):
    """Show the leaderboard."""
    system = _load_system(config)
    try:
        entries = system.top_scores(limit)
    except (TriviaError, OSError) as exc:
        _report_failure(exc)
    _render_leaderboard(entries, "High Scores")


@app.command("clear-scores")
def clear_scores(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt."),
    config: Optional[Path] = typer.Option(None, help="Path to configuration YAML."),
):
    """Delete every leaderboard entry after confirmation."""
    system = _load_system(config)
    if not yes and not typer.confirm(
        "Are you sure you want to clear all high scores? This action cannot be undone."
    ):
        console.print("Leaderboard left unchanged.")
        raise typer.Exit()
    try:
        system.clear_scores()
    except (TriviaError, OSError) as exc:
        _report_failure(exc)
    console.print("High scores cleared!")


@app.command()
def questions(
    config: Optional[Path] = typer.Option(None, help="Path to configuration YAML."),
):
    """Summarize the question bank by category."""
    system = _load_system(config)
    table = Table(title=f"{len(system.bank)} questions")
    table.add_column("Category")
    table.add_column("Questions", justify="right")
    for category in system.bank.categories():
        count = sum(1 for q in system.bank if q.category == category)
        table.add_row(category, str(count))
    console.print(table)


if __name__ == "__main__":  # pragma: no cover - CLI entry
    app()
