"""`claimtrees` command-line client."""
from __future__ import annotations

import argparse
import os
import sys
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from claimtrees.cli.client import ClaimTreesClient, ClientError
from claimtrees.config.constants import APP_VERSION, DEFAULT_SERVER_URL, ENV_SERVER_URL


console = Console(highlight=False)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="claimtrees",
        description="Record claims about code and the evidence behind them.",
        epilog=f"Environment:\n  {ENV_SERVER_URL}    Server URL (default: {DEFAULT_SERVER_URL})",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--url", default=None, help="Server URL (overrides $%s)." % ENV_SERVER_URL)
    parser.add_argument("--version", action="version", version=APP_VERSION)
    sub = parser.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    # post-evidence
    post_p = sub.add_parser(
        "post-evidence",
        help="Post a file reference as evidence (path is resolved to absolute).",
    )
    post_p.add_argument("--file", required=True, help="File the evidence points at.")
    post_p.add_argument("--lines", required=True, help="Line reference, e.g. 1-3,7,13-70.")
    post_p.add_argument("--commit", required=True, help="Commit the evidence was verified at.")
    post_p.add_argument("--claim", default=None, help="Optionally link to this claim.")

    # claims
    create_p = sub.add_parser("create-claim", help="Create a new claim.")
    create_p.add_argument("content", nargs="+", help="Claim text.")

    update_p = sub.add_parser("update-claim", help="Replace a claim's content.")
    update_p.add_argument("claim_id")
    update_p.add_argument("content", nargs="+", help="New claim text.")

    delete_claim_p = sub.add_parser("delete-claim", help="Delete a claim and its links.")
    delete_claim_p.add_argument("claim_id")

    link_p = sub.add_parser("link-evidence", help="Link existing evidence to a claim.")
    link_p.add_argument("--claim", required=True, help="Claim ID.")
    link_p.add_argument("--evidence", required=True, help="Evidence ID.")

    list_claims_p = sub.add_parser("list-claims", help="List claims.")
    list_claims_p.add_argument("--query", "-q", default=None, help="Case-insensitive substring filter.")

    show_claim_p = sub.add_parser("show-claim", help="Show a claim and its evidence.")
    show_claim_p.add_argument("claim_id")

    # evidence
    sub.add_parser("list-evidence", help="List evidence.")

    show_ev_p = sub.add_parser("show-evidence", help="Show an evidence node and its validity.")
    show_ev_p.add_argument("evidence_id")

    delete_ev_p = sub.add_parser("delete-evidence", help="Delete evidence and its links.")
    delete_ev_p.add_argument("evidence_id")

    sub.add_parser("stale-evidence", help="List evidence whose file changed since its commit.")

    return parser


def _print_error(msg: str) -> None:
    print(f"error: {msg}", file=sys.stderr)


def _status_label(ev: dict[str, Any]) -> str:
    return "[green]VALID[/green]" if ev.get("valid") else "[red]INVALID[/red]"


def _cmd_post_evidence(client: ClaimTreesClient, args: argparse.Namespace) -> int:
    file_path = os.path.abspath(args.file)
    ev = client.create_evidence(file_path, args.lines, args.commit)
    console.print(f"Created evidence {ev['id']}")
    console.print(f"  file: {escape(ev['file_path'])}")
    console.print(f"  lines: {escape(ev['line_ref'])}")
    console.print(f"  commit: {escape(ev['git_commit'])}")

    if args.claim:
        try:
            client.link_evidence(args.claim, ev["id"])
        except ClientError as exc:
            raise ClientError(f"linking to claim: {exc}", status_code=exc.status_code) from exc
        console.print(f"  linked to claim: {escape(args.claim)}")
    return 0


def _cmd_create_claim(client: ClaimTreesClient, args: argparse.Namespace) -> int:
    claim = client.create_claim(" ".join(args.content))
    console.print(f"Created claim {claim['id']}")
    console.print(f"  content: {escape(claim['content'])}")
    return 0


def _cmd_update_claim(client: ClaimTreesClient, args: argparse.Namespace) -> int:
    claim = client.update_claim(args.claim_id, " ".join(args.content))
    console.print(f"Updated claim {claim['id']}")
    console.print(f"  content: {escape(claim['content'])}")
    return 0


def _cmd_delete_claim(client: ClaimTreesClient, args: argparse.Namespace) -> int:
    client.delete_claim(args.claim_id)
    console.print(f"Deleted claim {escape(args.claim_id)}")
    return 0


def _cmd_link_evidence(client: ClaimTreesClient, args: argparse.Namespace) -> int:
    client.link_evidence(args.claim, args.evidence)
    console.print(f"Linked evidence {escape(args.evidence)} to claim {escape(args.claim)}")
    return 0


def _cmd_list_claims(client: ClaimTreesClient, args: argparse.Namespace) -> int:
    claims = client.list_claims(args.query)
    if not claims:
        console.print("No claims.")
        return 0

    table = Table(show_header=True, header_style="bold")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Content")
    for c in claims:
        table.add_row(c["id"], escape(c["content"]))
    console.print(table)
    return 0


def _cmd_show_claim(client: ClaimTreesClient, args: argparse.Namespace) -> int:
    claim = client.get_claim(args.claim_id)
    console.print(f"Claim: {claim['id']}")
    console.print(f"  content: {escape(claim['content'])}")
    console.print(f"  created: {claim['created_at']}")

    evidence = claim.get("evidence") or []
    if not evidence:
        console.print("  evidence: (none)")
        return 0

    console.print(f"  evidence ({len(evidence)}):")
    for ev in evidence:
        console.print(
            f"    [{_status_label(ev)}] {ev['id']}  {escape(ev['file_path'])}  {escape(ev['line_ref'])}  @{escape(ev['git_commit'])}"
        )
        if ev.get("validity_error"):
            console.print(f"      [dim]{escape(ev['validity_error'])}[/dim]")
    return 0


def _cmd_list_evidence(client: ClaimTreesClient, args: argparse.Namespace) -> int:
    evidence = client.list_evidence()
    if not evidence:
        console.print("No evidence.")
        return 0

    table = Table(show_header=True, header_style="bold")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("File")
    table.add_column("Lines")
    table.add_column("Commit", no_wrap=True)
    for ev in evidence:
        table.add_row(ev["id"], escape(ev["file_path"]), escape(ev["line_ref"]), escape(ev["git_commit"]))
    console.print(table)
    return 0


def _cmd_show_evidence(client: ClaimTreesClient, args: argparse.Namespace) -> int:
    ev = client.get_evidence(args.evidence_id)
    console.print(f"Evidence: {ev['id']}")
    console.print(f"  file: {escape(ev['file_path'])}")
    console.print(f"  lines: {escape(ev['line_ref'])}")
    console.print(f"  commit: {escape(ev['git_commit'])}")
    if ev.get("valid"):
        console.print("  status: [green]VALID[/green]")
    elif ev.get("validity_error"):
        console.print(f"  status: [red]INVALID[/red] (check failed: {escape(ev['validity_error'])})")
    else:
        console.print("  status: [red]INVALID[/red] (file changed since commit)")
    console.print(f"  created: {ev['created_at']}")
    return 0


def _cmd_delete_evidence(client: ClaimTreesClient, args: argparse.Namespace) -> int:
    client.delete_evidence(args.evidence_id)
    console.print(f"Deleted evidence {escape(args.evidence_id)}")
    return 0


def _cmd_stale_evidence(client: ClaimTreesClient, args: argparse.Namespace) -> int:
    report = client.stale_evidence()
    results = report.get("results") or []
    if not results:
        console.print(f"No stale evidence ({report.get('checked', 0)} checked).")
        return 0

    console.print(f"Stale evidence: {report['total']} of {report['checked']}")
    for ev in results:
        reason = ev.get("validity_error") or "file changed since commit"
        console.print(f"  {ev['id']}  {escape(ev['file_path'])}  @{escape(ev['git_commit'])}  ({escape(reason)})")
    return 0


_COMMANDS = {
    "post-evidence": _cmd_post_evidence,
    "create-claim": _cmd_create_claim,
    "update-claim": _cmd_update_claim,
    "delete-claim": _cmd_delete_claim,
    "link-evidence": _cmd_link_evidence,
    "list-claims": _cmd_list_claims,
    "show-claim": _cmd_show_claim,
    "list-evidence": _cmd_list_evidence,
    "show-evidence": _cmd_show_evidence,
    "delete-evidence": _cmd_delete_evidence,
    "stale-evidence": _cmd_stale_evidence,
}


def run(argv: list[str], client: ClaimTreesClient | None = None) -> int:
    """Parse ``argv`` and run one command. Returns the process exit code."""
    parser = _build_parser()
    # Let argparse handle --help and errors (raises SystemExit)
    args = parser.parse_args(argv)

    owns_client = client is None
    if client is None:
        base_url = args.url or os.getenv(ENV_SERVER_URL) or DEFAULT_SERVER_URL
        client = ClaimTreesClient(base_url)

    try:
        return _COMMANDS[args.command](client, args)
    except ClientError as exc:
        _print_error(str(exc))
        return 1
    finally:
        if owns_client:
            client.close()


def main() -> None:
    """Entry point"""
    sys.exit(run(sys.argv[1:]))


if __name__ == "__main__":
    main()
