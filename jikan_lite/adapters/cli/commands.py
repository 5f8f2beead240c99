"""
Commandes Typer de synchronisation.

Ce module fournit la commande CLI:
- sync-anime: Synchronisation en masse des animes depuis Jikan
"""

import asyncio
from typing import Annotated, Optional

import typer
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeRemainingColumn,
)

from jikan_lite.adapters.cli.helpers import console, suppress_loguru, with_container
from jikan_lite.core.exceptions import UpstreamError
from jikan_lite.services.anime_sync import SyncOutcome, SyncProgressInfo


def sync_anime(
    limit: Annotated[
        Optional[int],
        typer.Option(
            "--limit", "-l",
            min=0,
            help="Nombre maximum d'animes a traiter",
        ),
    ] = None,
    from_index: Annotated[
        int,
        typer.Option(
            "--from-index",
            min=0,
            help="Index de depart dans la liste des identifiants",
        ),
    ] = 0,
    force_update: Annotated[
        bool,
        typer.Option(
            "--force-update",
            help="Re-telecharger les animes deja presents en base",
        ),
    ] = False,
    resume: Annotated[
        bool,
        typer.Option(
            "--resume",
            help="Reprendre apres le dernier point de reprise enregistre",
        ),
    ] = False,
    ids_url: Annotated[
        Optional[str],
        typer.Option(
            "--ids-url",
            help="URL de la liste des identifiants (defaut: configuration)",
        ),
    ] = None,
) -> None:
    """Synchronise les animes depuis l'API Jikan vers la base locale."""
    asyncio.run(_sync_anime_async(limit, from_index, force_update, resume, ids_url))


@with_container()
async def _sync_anime_async(
    container,
    limit: Optional[int],
    from_index: int,
    force_update: bool,
    resume: bool,
    ids_url: Optional[str],
) -> None:
    """Implementation async de la commande sync-anime."""
    session = container.session()
    try:
        await _run_sync(container, session, limit, from_index, force_update, resume, ids_url)
    finally:
        session.close()


async def _run_sync(
    container,
    session,
    limit: Optional[int],
    from_index: int,
    force_update: bool,
    resume: bool,
    ids_url: Optional[str],
) -> None:
    """Charge la liste des identifiants et execute le pipeline de synchronisation."""
    config = container.config()
    client = container.jikan_client()
    repository = container.anime_repository(session=session)
    service = container.anime_sync_service(
        anime_service=container.anime_service(repository=repository)
    )

    url = ids_url or config.ids_url
    try:
        ids = await client.fetch_id_list(url)
    except UpstreamError as e:
        console.print(f"[red]Impossible de charger la liste des identifiants:[/red] {e}")
        raise typer.Exit(code=1)

    start = service.resolve_start_index(from_index, resume)
    remaining = max(len(ids) - start, 0)
    total = remaining if limit is None else min(remaining, limit)

    if total == 0:
        console.print("[yellow]Aucun anime a synchroniser.[/yellow]")
        console.print(f"[dim]{len(ids)} identifiant(s), index de depart {start}.[/dim]")
        return

    console.print(
        f"[bold cyan]Synchronisation des animes[/bold cyan]: {total} element(s) "
        f"a partir de l'index {start}\n"
    )

    with suppress_loguru():
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TimeRemainingColumn(),
            console=console,
            transient=False,
        ) as progress:
            task = progress.add_task("[cyan]Synchronisation...", total=total)

            def on_progress(info: SyncProgressInfo) -> None:
                """Callback de progression."""
                progress.advance(task)
                label = f"#{info.index} [dim](mal_id {info.mal_id})[/dim] {info.title or ''}"
                if info.outcome == SyncOutcome.CREATED:
                    progress.console.print(f"  [green]+[/green] {label}")
                elif info.outcome == SyncOutcome.UPDATED:
                    progress.console.print(f"  [cyan]~[/cyan] {label}")
                elif info.outcome == SyncOutcome.FAILED:
                    progress.console.print(f"  [red]✗[/red] {label} - {info.error}")

            stats = await service.run(
                ids,
                from_index=from_index,
                limit=limit,
                force_update=force_update,
                resume=resume,
                on_progress=on_progress,
            )

        # Afficher le resume
        console.print(f"\n[bold]Resume:[/bold]")
        console.print(f"  {stats.processed} traite(s)")
        console.print(f"  [green]{stats.created}[/green] cree(s)")
        console.print(f"  [cyan]{stats.updated}[/cyan] mis a jour")
        if stats.skipped > 0:
            console.print(f"  [dim]{stats.skipped}[/dim] ignore(s) (deja en base)")
        if stats.failed > 0:
            console.print(f"  [red]{stats.failed}[/red] echec(s)")
