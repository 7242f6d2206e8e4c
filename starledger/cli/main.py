# starledger/cli/main.py
"""
CLI for trying out the ownership-proof flow and checking exported chains.
"""

import os
import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from starledger.core.types import Block
from starledger.core.errors import DecodeError, LedgerError
from starledger.crypto.keys import AgentKeyPair
from starledger.chain.blockchain import Blockchain, unix_now
from starledger.chain.ownership import format_challenge
from starledger.verify.verifier import ChainValidator

app = typer.Typer(
    name="starledger",
    help="Hash-linked ledger with signed ownership proofs",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()


def get_signing_key(key_flag: Optional[str] = None) -> AgentKeyPair:
    """Resolve the signing key in this order:
    1. --key flag
    2. STARLEDGER_KEY environment variable
    """
    priv_b64 = key_flag or os.environ.get("STARLEDGER_KEY")
    if not priv_b64:
        console.print("[red]No private key given.[/]")
        console.print("  • Pass --key <base64url private key>")
        console.print("  • Or set env var: export STARLEDGER_KEY=<base64url private key>")
        console.print("  • Create one with: starledger keygen")
        raise typer.Exit(1)
    try:
        return AgentKeyPair.from_private_b64url(priv_b64)
    except Exception as e:
        console.print(f"[red]Invalid private key: {str(e)}[/]")
        raise typer.Exit(1)


def load_chain(path: Path) -> List[Block]:
    """Read a JSONL export (one block per line, genesis first)."""
    chain = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line:
                chain.append(Block.from_dict(json.loads(line)))
    return chain


def write_chain(blocks: List[dict], path: Path) -> None:
    with open(path, "w", encoding="utf-8") as f:
        for d in blocks:
            json.dump(d, f, separators=(",", ":"))
            f.write("\n")


def print_chain(chain: List[Block]) -> None:
    table = Table(title="Chain")
    table.add_column("Height")
    table.add_column("Time")
    table.add_column("Hash")
    table.add_column("Previous")
    table.add_column("Data")

    for block in chain:
        try:
            data = json.dumps(block.get_data())
        except DecodeError as e:
            data = f"<{e}>"
        table.add_row(
            str(block.height),
            str(block.time),
            (block.hash or "—")[:16],
            (block.previous_hash or "—")[:16],
            data[:60],
        )

    console.print(table)


@app.command()
def keygen():
    """Generate an Ed25519 identity and its private key."""
    keys = AgentKeyPair.generate()
    console.print(f"[bold]identity:[/] {keys.public_key_b64url()}")
    console.print(f"[bold]private key:[/] {keys.private_key_b64url()}")
    console.print("[yellow]Keep the private key secret; export it as STARLEDGER_KEY to sign.[/]")


@app.command()
def challenge(
    identity: str = typer.Argument(..., help="Identity (base64url public key) to prove ownership of"),
):
    """Print an ownership challenge to be signed."""
    typer.echo(format_challenge(identity, unix_now()))


@app.command()
def sign(
    message: str = typer.Argument(..., help="Challenge to sign"),
    key: Optional[str] = typer.Option(None, "--key", "-k", help="Private key (overrides STARLEDGER_KEY env var)"),
):
    """Sign an ownership challenge."""
    keys = get_signing_key(key)
    typer.echo(keys.sign(message))


@app.command()
def demo(
    entries: int = typer.Option(3, "--entries", "-n", help="Number of signed submissions"),
    tamper: Optional[int] = typer.Option(None, "--tamper", help="Height of a block to tamper with afterwards"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the chain as JSONL"),
):
    """Build an in-memory chain from signed submissions and validate it."""
    ledger = Blockchain()
    owners = [AgentKeyPair.generate() for _ in range(2)]

    for i in range(entries):
        keys = owners[i % 2]
        identity = keys.public_key_b64url()
        message = ledger.request_ownership_challenge(identity)
        try:
            ledger.submit_proof(identity, message, keys.sign(message), {"entry": i})
        except LedgerError as e:
            console.print(f"[red]Submission {i} rejected: {str(e)}[/]")
            raise typer.Exit(1)

    if tamper is not None:
        block = ledger.get_block_by_height(tamper)
        if block is None:
            console.print(f"[red]No block at height {tamper}[/]")
            raise typer.Exit(1)
        block.body = Block({"tampered": True}).body
        console.print(f"[yellow]Tampered with block {tamper}[/]")

    print_chain(ledger.get_chain())

    if output:
        write_chain(ledger.to_dicts(), output)
        console.print(f"[green]Exported {len(ledger.get_chain())} blocks to {output}[/]")

    errors = ledger.validate_chain()
    if errors:
        console.print("[red]✗ Chain is invalid[/]")
        for error in errors:
            console.print(f"  • {error}")
        raise typer.Exit(1)
    console.print(f"[green]✓ Chain of {ledger.get_chain_height()} blocks is valid[/]")


@app.command()
def verify(
    path: Path = typer.Argument(..., help="JSONL chain export"),
):
    """Verify the integrity of an exported chain (block hashes + links)."""
    if not path.exists():
        console.print(f"[red]File not found: {path}[/]")
        raise typer.Exit(1)

    try:
        chain = load_chain(path)
    except (ValueError, KeyError, TypeError) as e:
        console.print(f"[red]Failed to load chain from {path}: {str(e)}[/]")
        raise typer.Exit(1)

    result = ChainValidator().verify(chain)
    if result.is_valid:
        console.print(f"[green]✓ Chain is valid:[/] {path}")
        console.print(f"  {result.message} ({len(chain)} blocks)")
    else:
        console.print(f"[red]✗ Verification failed for '{path}'[/]")
        for failure in result.failures:
            console.print(f"  • [{failure.index}] {failure.category}: {failure.message}")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
