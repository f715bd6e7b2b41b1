"""
Enrollment - CLI Entry Point.

Usage:
    enroll start             Run the enrollment questionnaire
    enroll questions         List the initial questions
    enroll health            Check configuration
    enroll --help            Show help
"""

import asyncio
import logging
import sys
from collections.abc import Callable

import typer
from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table
from rich.text import Text

from enrollment.controller import PhaseController, StepResult
from enrollment.questions import answer_key, choices_for, is_dynamic
from enrollment.recommendations import RecommendationRenderer
from enrollment.state import SessionState, View

app = typer.Typer(
    name="enroll",
    help="Course Enrollment - AI-powered course recommendations based on your preferences.",
    add_completion=False,
)
console = Console()

BACK_COMMANDS = ("/back", "/b")
QUIT_COMMANDS = ("/quit", "/q")


def setup_logging(verbose: bool = False, log_level: str = "WARNING") -> None:
    """Log to stderr so output doesn't interleave with the questionnaire."""
    level = logging.DEBUG if verbose else getattr(logging, log_level)

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    # Quiet down noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


# =============================================================================
# Rendering
# =============================================================================


def render_progress(state: SessionState) -> Table:
    progress = state.progress()
    grid = Table.grid(expand=True)
    grid.add_column()
    grid.add_column(justify="right")
    grid.add_row(state.progress_label(), f"{round(progress)}% Complete")
    grid.add_row(ProgressBar(total=100, completed=progress), "")
    return grid


def render_question(state: SessionState) -> Panel:
    question = state.current_question
    if question is None:
        return Panel(
            Text("No more questions. Press Enter to get your recommendations."),
            border_style="blue",
        )

    if is_dynamic(question):
        badge = Text("🤖 AI-Powered Question", style="bold blue")
    else:
        badge = Text("🎓 Initial Question", style="bold green")

    current = state.answers.get(question)
    parts: list = [badge, Text(f"\n{question.question}\n", style="bold")]

    options = choices_for(question)
    if options:
        for number, option in enumerate(options, start=1):
            marker = "●" if current == option else "○"
            style = "bold" if current == option else ""
            parts.append(Text(f"  {marker} {number}. {option}", style=style))
    elif current:
        parts.append(Text(f"Current answer: {current}", style="dim"))

    return Panel(Group(*parts), border_style="blue" if is_dynamic(question) else "green")


# =============================================================================
# Interactive session
# =============================================================================


def _parse_answer(state: SessionState, raw: str) -> str | None:
    """Map raw input to an answer for the current question, or None if invalid."""
    question = state.current_question
    options = choices_for(question) if question is not None else ()
    if not options:
        return raw
    if raw.isdigit() and 1 <= int(raw) <= len(options):
        return options[int(raw) - 1]
    # Accept the option text itself
    for option in options:
        if raw.lower() == option.lower():
            return option
    return None


async def run_questionnaire(
    controller: PhaseController,
    out: Console,
    read: Callable[[str], str] | None = None,
) -> bool:
    """
    Drive a session from the terminal until recommendations or quit.

    Returns True when recommendations were shown.
    """
    read = read or out.input
    state = controller.state
    renderer = RecommendationRenderer()

    with out.status("Loading enrollment questions..."):
        await controller.load_questions()

    while True:
        view = state.view

        if view == View.ERROR:
            out.print(f"\n[red]{state.error.message}[/red]")
            choice = read("Try again? [Y/n] ").strip().lower()
            if choice in ("n", "no", *QUIT_COMMANDS):
                return False
            with out.status("Retrying..."):
                await controller.retry()
            continue

        if view == View.RECOMMENDATIONS:
            out.print(renderer.render(state.recommendations))
            return True

        out.print()
        out.print(render_progress(state))
        out.print(render_question(state))

        hint = f"[dim]{state.next_label()} - Enter to continue, /back, /quit[/dim]"
        raw = read(f"{hint}\n> ").strip()

        if raw.lower() in QUIT_COMMANDS:
            return False
        if raw.lower() in BACK_COMMANDS:
            if controller.back() == StepResult.BLOCKED:
                out.print("[yellow]Already at the first question.[/yellow]")
            continue

        question = state.current_question
        if raw and question is not None:
            answer = _parse_answer(state, raw)
            if answer is None:
                out.print("[yellow]Pick one of the listed options.[/yellow]")
                continue
            controller.answer_question(question, answer)

        if not state.can_go_next:
            out.print("[yellow]Please answer the question to continue.[/yellow]")
            continue

        if state.is_last_step:
            with out.status("Processing..."):
                await controller.next()
        else:
            await controller.next()


# =============================================================================
# Commands
# =============================================================================


def _make_client(base_url: str | None):
    from enrollment.client import EnrollmentClient
    from enrollment.config import settings

    return EnrollmentClient(
        base_url or settings.enrollment_api_base_url,
        timeout=settings.enrollment_request_timeout,
    )


@app.command()
def start(
    base_url: str = typer.Option(None, "--base-url", "-u", help="Recommendation service URL"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging to stderr"),
) -> None:
    """Run the enrollment questionnaire."""
    from enrollment.config import settings

    setup_logging(verbose, settings.log_level)

    console.print(
        Panel.fit(
            "[bold green]Course Enrollment[/bold green]\n"
            "AI-powered course recommendations based on your preferences.\n\n"
            "[dim]Type /back to revisit a question, /quit to leave.[/dim]",
            title="Welcome",
            border_style="green",
        )
    )

    async def _run() -> bool:
        async with _make_client(base_url) as client:
            return await run_questionnaire(PhaseController(client), console)

    try:
        completed = asyncio.run(_run())
    except KeyboardInterrupt:
        console.print("\n\n[dim]Session interrupted. Goodbye! 👋[/dim]")
        raise typer.Exit(1)

    if not completed:
        console.print("\n[dim]Questionnaire not completed. Your answers were not kept.[/dim]")


@app.command()
def questions(
    base_url: str = typer.Option(None, "--base-url", "-u", help="Recommendation service URL"),
) -> None:
    """List the initial questions."""
    from enrollment.errors import BackendError

    async def _load():
        async with _make_client(base_url) as client:
            return await client.load_initial_questions()

    try:
        loaded = asyncio.run(_load())
    except BackendError as e:
        console.print(f"\n[red]❌ {escape(str(e))}[/red]")
        raise typer.Exit(1)

    table = Table(title="Initial Questions")
    table.add_column("ID", style="cyan")
    table.add_column("Type")
    table.add_column("Question")
    table.add_column("Options", style="dim")
    for q in loaded:
        table.add_row(Text(answer_key(q)), q.type, Text(q.question), Text(", ".join(choices_for(q))))
    console.print(table)


@app.command()
def health() -> None:
    """Check configuration."""
    from enrollment.config import get_settings

    console.print("\n[bold]Enrollment Health Check[/bold]\n")

    try:
        settings = get_settings()
    except Exception as e:
        console.print(f"\n[red]❌ Configuration error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    console.print("✅ Configuration loaded")
    console.print(f"   Environment: {settings.enrollment_env}")
    console.print(f"   Log level: {settings.log_level}")

    if settings.enrollment_api_base_url.startswith(("http://", "https://")):
        console.print(f"✅ Service URL: {settings.enrollment_api_base_url}")
    else:
        console.print("❌ ENROLLMENT_API_BASE_URL missing or invalid")
        raise typer.Exit(1)

    timeout = settings.enrollment_request_timeout
    console.print(f"ℹ️  Request timeout: {'none' if timeout is None else f'{timeout:g}s'}")


@app.command()
def version() -> None:
    """Show version information."""
    from enrollment import __version__

    console.print(f"Enrollment version {__version__}")


if __name__ == "__main__":
    app()
