"""Run one review: changes -> analysis -> delivery -> commit decision.

``run_review`` returns the hook's exit status: 0 lets the commit proceed,
1 blocks it. It never raises for review or delivery failures; those end in
the skip-or-abort prompt instead.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from rich.console import Console

from . import __version__
from .config import ReviewConfig
from .delivery import DeliveryDispatcher
from .exceptions import ReviewerInitError
from .formatters import NO_ISSUES_MESSAGE
from .gate import ask_yes_no
from .logging_config import get_logger
from .review import AnalysisPipeline, ReviewClient
from .shutdown import ExitController
from .vcs import VcsBackend, select_backend

logger = get_logger(__name__)

EXIT_PROCEED = 0
EXIT_BLOCKED = 1

SKIP_PROMPT = "AI review unavailable, skip review and continue commit? (y/N):"
COMMIT_PROMPT = "Code review complete. Continue with the commit? (y/N):"
COMMIT_PROMPT_WITH_ISSUES = "The review raised some points. Continue with the commit? (y/N):"

AskFn = Callable[..., bool]


def run_review(
    config: ReviewConfig,
    console: Optional[Console] = None,
    backend: Optional[VcsBackend] = None,
    reviewer_factory: Callable[[ReviewConfig], Any] = ReviewClient,
    dispatcher: Optional[DeliveryDispatcher] = None,
    ask: AskFn = ask_yes_no,
    exit_controller: Optional[ExitController] = None,
) -> int:
    """Review the pending changes and return the commit exit status.

    Args:
        config: Resolved configuration
        console: Where progress and findings are printed
        backend: VCS backend (default: selected from config / working copy)
        reviewer_factory: Builds the reviewer; may raise ReviewerInitError
        dispatcher: Delivery dispatcher (default: built from config.delivery)
        ask: Yes/no prompt on the controlling terminal
        exit_controller: Receives closers for resources that outlive this call
    """
    console = console or Console()
    try:
        return _run(config, console, backend, reviewer_factory, dispatcher, ask, exit_controller)
    except KeyboardInterrupt:
        raise
    except Exception as e:
        logger.error("Code review failed: %s", e, exc_info=config.debug)
        return handle_error(e, console, ask)


def _run(
    config: ReviewConfig,
    console: Console,
    backend: Optional[VcsBackend],
    reviewer_factory: Callable[[ReviewConfig], Any],
    dispatcher: Optional[DeliveryDispatcher],
    ask: AskFn,
    exit_controller: Optional[ExitController],
) -> int:
    if backend is None:
        backend = select_backend(config.vcs_type)

    console.print("[bold]Analyzing code changes...[/bold]")
    changed = backend.list_changed_files()
    if not changed:
        console.print("[dim]No code changes detected[/dim]")
        console.print(f"[green]✓ {NO_ISSUES_MESSAGE}[/green]")
        return EXIT_PROCEED

    files = backend.filter_relevant(changed)
    if not files:
        console.print("[dim]No reviewable code files among the changes[/dim]")
        console.print(f"[green]✓ {NO_ISSUES_MESSAGE}[/green]")
        return EXIT_PROCEED

    console.print(f"Files to review: {', '.join(files)}")

    try:
        reviewer = reviewer_factory(config)
    except ReviewerInitError as e:
        logger.error("%s", e)
        return handle_error(e, console, ask)

    pipeline = AnalysisPipeline(
        backend, reviewer, on_file=lambda name: console.print(f"[dim]  reviewing {name}[/dim]")
    )
    results = pipeline.analyze(files)

    if dispatcher is None:
        dispatcher = DeliveryDispatcher(config.delivery, console)
    outcome = dispatcher.deliver(results, run_meta=_run_meta(config, backend))

    if outcome.serving:
        if exit_controller is not None:
            exit_controller.register(outcome.server.stop, "dashboard server")
        proceed = outcome.server.wait_for_decision()
        return _conclude(proceed, console)

    question = COMMIT_PROMPT_WITH_ISSUES if outcome.has_issues else COMMIT_PROMPT
    return _conclude(ask(question, default_when_unavailable=True), console)


def handle_error(error: BaseException, console: Console, ask: AskFn = ask_yes_no) -> int:
    """Offer to skip the review after a failure; 0 to skip, 1 to abort."""
    console.print(f"[red]AI code review failed:[/red] {error}")
    if ask(SKIP_PROMPT, default_when_unavailable=True):
        console.print("[yellow]Skipping AI review, the commit continues[/yellow]")
        return EXIT_PROCEED
    console.print("[red]Commit aborted[/red]")
    return EXIT_BLOCKED


def _conclude(proceed: bool, console: Console) -> int:
    if proceed:
        console.print("[green]Commit continues[/green]")
        return EXIT_PROCEED
    console.print("[red]Commit cancelled[/red]")
    return EXIT_BLOCKED


def _run_meta(config: ReviewConfig, backend: VcsBackend) -> dict[str, Any]:
    return {
        "version": __version__,
        "vcs": backend.name,
        "outputMode": config.delivery.output_mode,
        "model": config.model,
    }
