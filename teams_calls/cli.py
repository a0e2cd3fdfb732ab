import sys

from typing import Iterable

import click

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

from teams_calls.auth import (
    CredentialProvider,
    SecretsManagerCredentialProvider,
    get_access_token,
    validate_tenant_id,
)
from teams_calls.calls import CallType, get_call_records
from teams_calls.config import settings
from teams_calls.exceptions import TeamsCallsError
from teams_calls.export import write_csv, write_json
from teams_calls.models import CallRecord, Credential

# Columns shown by the table output, when present in the records
TABLE_COLUMNS = [
    "startDateTime",
    "userPrincipalName",
    "callType",
    "callerNumber",
    "calleeNumber",
    "duration",
    "charge",
    "currency",
    "licenseCapability",
]

custom_theme = Theme(
    {
        "info": "cyan",
        "success": "green",
        "warning": "yellow",
        "error": "bold red",
        "highlight": "bold blue",
    }
)

# Status messages go to stderr so stdout only carries records
console = Console(theme=custom_theme, stderr=True)
output_console = Console(theme=custom_theme)


class PromptCredentialProvider:
    """Ask interactively for whatever part of the credential is missing."""

    def __init__(
        self,
        client_id: str | None = None,
        client_secret: str | None = None,
    ) -> None:
        self.client_id = client_id
        self.client_secret = client_secret

    def get(self) -> Credential | None:
        client_id = self.client_id
        client_secret = self.client_secret
        if not client_id or not client_secret:
            console.print(
                "[warning]Client credential not found in environment or "
                "command line arguments.[/warning]"
            )
        if not client_id:
            client_id = click.prompt(
                "Please enter the client ID", default="", show_default=False
            ).strip()
        if not client_secret:
            client_secret = click.prompt(
                "Please enter the client secret",
                default="",
                show_default=False,
                hide_input=True,
            ).strip()
        if not client_id or not client_secret:
            console.print(
                "[warning]Client ID and client secret are required, "
                "no access token requested.[/warning]"
            )
            return None
        return Credential(client_id=client_id, client_secret=client_secret)


def get_credential_provider(
    client_id: str | None,
    client_secret: str | None,
) -> CredentialProvider:
    """Pick where the credential comes from: arguments, settings, AWS, or a prompt."""
    if (
        client_id is None
        and client_secret is None
        and settings.CREDENTIALS_SECRET_NAME is not None
    ):
        return SecretsManagerCredentialProvider()
    # Each missing value falls back to its setting on its own
    if not client_id:
        client_id = settings.CLIENT_ID
    if not client_secret and settings.CLIENT_SECRET is not None:
        client_secret = settings.CLIENT_SECRET.get_secret_value()
    return PromptCredentialProvider(client_id, client_secret)


def print_table(records: list[CallRecord]) -> None:
    columns = [
        column
        for column in TABLE_COLUMNS
        if any(column in record for record in records)
    ]
    if not columns:
        columns = list(dict.fromkeys(key for record in records for key in record))
    table = Table(show_lines=False)
    for column in columns:
        table.add_column(column)
    for record in records:
        table.add_row(
            *[
                "" if record.get(column) is None else escape(str(record[column]))
                for column in columns
            ]
        )
    output_console.print(table)


def write_records(
    records: Iterable[CallRecord],
    output_format: str,
    output: str | None,
) -> int:
    # Every page is fetched before the output file is touched
    collected = list(records)
    if output_format == "json":
        with click.open_file(output or "-", "wb") as fp:
            return write_json(collected, fp)
    if output_format == "csv":
        if output is None:
            return write_csv(collected, click.get_text_stream("stdout"))
        with open(output, "w", newline="", encoding="utf-8") as fp:
            return write_csv(collected, fp)
    print_table(collected)
    return len(collected)


def tenant_option(function):
    return click.option(
        "--tenant-id",
        default=lambda: settings.TENANT_ID,
        help="Directory (tenant) ID (can also be set via TENANT_ID env var)",
    )(function)


def credential_options(function):
    function = click.option(
        "--client-secret",
        default=None,
        help="Client secret (can also be set via CLIENT_SECRET env var)",
    )(function)
    function = click.option(
        "--client-id",
        default=None,
        help="Application (client) ID (can also be set via CLIENT_ID env var)",
    )(function)
    return tenant_option(function)


def query_options(function):
    function = click.option(
        "--output",
        type=click.Path(dir_okay=False, writable=True),
        default=None,
        help="Write records to this file instead of stdout",
    )(function)
    function = click.option(
        "--format",
        "output_format",
        type=click.Choice(["table", "json", "csv"]),
        default="table",
        show_default=True,
        help="Output format",
    )(function)
    function = click.option(
        "--days",
        type=int,
        default=None,
        help="Number of days to query, today included (1-90)",
    )(function)
    function = click.option(
        "--end-date",
        default=None,
        help="Day after the last one to query (YYYY-MM-DD)",
    )(function)
    function = click.option(
        "--start-date",
        default=None,
        help="First day to query (YYYY-MM-DD)",
    )(function)
    function = click.option(
        "--token",
        envvar="TEAMS_ACCESS_TOKEN",
        default=None,
        help=(
            "Access token (can also be set via TEAMS_ACCESS_TOKEN env var), "
            "requested with the client credential when omitted"
        ),
    )(function)
    return credential_options(function)


@click.group()
def cli():
    """Microsoft Teams PSTN and direct routing call records."""
    pass


@cli.command()
@credential_options
def get_token(tenant_id, client_id, client_secret):
    """
    Request an access token with the client credentials grant.

    Example:
        teams-calls get-token --tenant-id 00000000-0000-0000-0000-000000000000
    """
    try:
        tenant_id = validate_tenant_id(tenant_id)
        access_token = get_access_token(
            tenant_id, get_credential_provider(client_id, client_secret)
        )
    except TeamsCallsError as e:
        console.print(f"[error]Error: {escape(str(e))}[/error]")
        sys.exit(1)
    click.echo(access_token)


def run_query(
    call_type: CallType,
    token: str | None,
    tenant_id: str | None,
    client_id: str | None,
    client_secret: str | None,
    start_date: str | None,
    end_date: str | None,
    days: int | None,
    output_format: str,
    output: str | None,
) -> None:
    try:
        if not token:
            tenant_id = validate_tenant_id(tenant_id)
            token = get_access_token(
                tenant_id, get_credential_provider(client_id, client_secret)
            )
        records = get_call_records(
            call_type,
            token,
            start_date=start_date,
            end_date=end_date,
            days=days,
        )
        count = write_records(records, output_format, output)
    except TeamsCallsError as e:
        console.print(f"[error]Error: {escape(str(e))}[/error]")
        sys.exit(1)
    console.print(f"[success]✓ Retrieved {count:,d} call records[/success]")


@cli.command()
@query_options
def pstn_calls(**kwargs):
    """
    Get calling plan (PSTN) call records.

    Example:
        teams-calls pstn-calls --days 7 --format csv --output pstn.csv
    """
    run_query(CallType.PSTN, **kwargs)


@cli.command()
@query_options
def direct_routing_calls(**kwargs):
    """
    Get direct routing call records.

    Example:
        teams-calls direct-routing-calls --start-date 2020-04-01 --end-date 2020-04-09
    """
    run_query(CallType.DIRECT_ROUTING, **kwargs)


if __name__ == "__main__":
    cli()
