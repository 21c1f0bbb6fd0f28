"""CLI for multichain assets."""

import asyncio
import json
import logging
from enum import StrEnum

import httpx
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table
from rich.traceback import install

from multichain_assets.core.errors import AssetGatewayError
from multichain_assets.core.models import AggregationResult
from multichain_assets.core.registry import AdapterRegistry
from multichain_assets.data.loader import Settings, load_settings
from multichain_assets.gateway.service import AssetGateway

# Install rich traceback handler
install(show_locals=False)

app = typer.Typer(
    name="multichain-assets",
    help="Query normalized token balances and NFTs across Sui, Aptos, Sei and EVM chains",
    add_completion=False,
)

console = Console()


class OutputFormat(StrEnum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


def _load_settings_or_exit() -> Settings:
    try:
        return load_settings()
    except ValueError as e:
        console.print(f"[bold red]Invalid configuration:[/bold red] {e}")
        raise typer.Exit(1) from e


async def _fetch_assets(settings: Settings, address: str, chain: str, include_nfts: bool) -> AggregationResult:
    """Run one asset query with a short-lived HTTP client."""
    async with httpx.AsyncClient() as client:
        gateway = AssetGateway(settings, client)
        return await gateway.handle(address, chain, include_nfts=include_nfts)


@app.command()
def assets(
    address: str = typer.Argument(..., help="Wallet address to query"),
    chain: str = typer.Option(..., "--chain", "-c", help="Chain to query (e.g., sui, aptos, sei, ethereum)"),
    nfts: bool = typer.Option(False, "--nfts", help="Include non-fungible objects"),
    format: OutputFormat = typer.Option(
        OutputFormat.TABLE,
        "--format",
        "-f",
        help="Output format",
    ),
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug output"),
) -> None:
    """
    Get the normalized balances held by an address on one chain.

    Examples:

        # Balances on Sui
        multichain-assets assets 0xABC... --chain sui

        # Include NFTs, output as JSON
        multichain-assets assets 0xABC... --chain sui --nfts --format json
    """
    _configure_logging(debug)
    settings = _load_settings_or_exit()

    try:
        if format == OutputFormat.JSON:
            result = asyncio.run(_fetch_assets(settings, address, chain, nfts))
        else:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                console=console,
                transient=True,
            ) as progress:
                progress.add_task(f"Fetching {chain} assets...", total=None)
                result = asyncio.run(_fetch_assets(settings, address, chain, nfts))
    except AssetGatewayError as e:
        console.print(f"[bold red]Error:[/bold red] {e.message}")
        if debug:
            raise
        raise typer.Exit(2 if e.status_code == 400 else 1) from e

    if format == OutputFormat.JSON:
        _output_json(result)
    else:
        _output_table(result, address, chain)


@app.command()
def list_chains() -> None:
    """List all configured chains."""
    settings = _load_settings_or_exit()
    wired = set(AdapterRegistry.wired_chains())

    table = Table(title="Supported Chains", show_header=True, header_style="bold magenta")
    table.add_column("Chain", style="cyan")
    table.add_column("Native", style="green")
    table.add_column("RPC Style", style="yellow")
    table.add_column("Assets", style="green")
    table.add_column("RPC URL", style="dim")

    for config in settings.registry:
        status = "✓ Active" if config.chain_id in wired else "proxy only"
        table.add_row(config.chain_id, config.native.symbol, config.rpc_style.value, status, config.rpc_url)

    console.print(table)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", help="Bind port"),
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug output"),
) -> None:
    """Run the HTTP gateway."""
    import uvicorn

    from multichain_assets.gateway.api import create_app

    _configure_logging(debug)
    settings = _load_settings_or_exit()
    uvicorn.run(create_app(settings), host=host, port=port, log_level="debug" if debug else "info")


def _output_table(result: AggregationResult, address: str, chain: str) -> None:
    """Output balances as rich table."""
    if not result.balances:
        console.print("\n[yellow]No balances found[/yellow]")
    else:
        short = f"{address[:10]}...{address[-8:]}" if len(address) > 20 else address
        table = Table(
            title=f"{chain} balances for {short}",
            show_header=True,
            header_style="bold magenta",
        )

        table.add_column("Token", style="cyan")
        table.add_column("Name", style="blue")
        table.add_column("Balance", style="white", justify="right")
        table.add_column("Raw", style="dim", justify="right")
        table.add_column("Verified", style="green")

        for balance in result.balances:
            decimals = f"{balance.decimals}?" if balance.decimals_assumed else str(balance.decimals)
            table.add_row(
                balance.symbol,
                balance.name,
                f"{balance.ui_amount:,.4f}",
                f"{balance.raw_balance} ({decimals})",
                "✓" if balance.verified else "",
            )

        console.print("\n")
        console.print(table)

    if result.nfts is not None:
        console.print(f"\n[bold]NFTs:[/bold] {len(result.nfts)}")
        for nft in result.nfts:
            console.print(f"  [cyan]{nft.id}[/cyan] [dim]{nft.type}[/dim]")
    console.print("\n")


def _output_json(result: AggregationResult) -> None:
    """Output balances in the HTTP response format."""
    typer.echo(json.dumps(result.to_response().to_wire(), indent=2))


if __name__ == "__main__":
    app()
