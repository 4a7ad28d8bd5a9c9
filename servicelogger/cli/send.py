"""`servicelogger send`: deliver a service log template to clusters.

Example:
    servicelogger send -u https://api.openshift.com -t "$(ocm token)" -c "$CLUSTER_ID" < template.json
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Awaitable, Callable
from typing import TextIO

from rich.console import Console
from rich.live import Live
from rich.spinner import Spinner

from servicelogger.cli.prompt import confirm
from servicelogger.cli.render import render_template
from servicelogger.config import DEFAULT_OCM_URL, SendConfig, resolve_send_config, split_cluster_ids
from servicelogger.delivery import BatchResult, ProgressIndicator, deliver
from servicelogger.logging_config import get_logger
from servicelogger.ocm import send_service_log
from servicelogger.templates import Template

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_PARTIAL_FAILURE = 2

CANCELED_MESSAGE = "Service log canceled"
SPINNER_TITLE = "Sending service log"

PostFn = Callable[[Template, str], Awaitable[None]]


def add_send_parser(subparsers: "argparse._SubParsersAction[argparse.ArgumentParser]") -> None:
    parser = subparsers.add_parser(
        "send",
        help="Send a service log",
        description="Send a service log to the customer from a JSON template passed via stdin.",
    )
    parser.add_argument(
        "-u",
        "--ocm-url",
        help=f"OCM URL (falls back to $OCM_URL and then '{DEFAULT_OCM_URL}')",
    )
    parser.add_argument("-t", "--ocm-token", help="OCM token (falls back to $OCM_TOKEN)")
    targets = parser.add_mutually_exclusive_group()
    targets.add_argument("-c", "--cluster-id", help="internal cluster ID (defaults to $CLUSTER_ID)")
    targets.add_argument(
        "--cluster-ids",
        action="extend",
        type=split_cluster_ids,
        help="internal cluster IDs, comma separated (defaults to $CLUSTER_IDS, space separated)",
    )
    parser.add_argument("--timeout", type=float, help="per-request timeout in seconds (default 30)")
    parser.set_defaults(handler=run_send)


def _post_for(config: SendConfig) -> PostFn:
    async def post(template: Template, cluster_id: str) -> None:
        await send_service_log(
            config.base_url,
            config.auth_token,
            cluster_id,
            template,
            timeout=config.timeout,
        )

    return post


async def send_async(
    config: SendConfig,
    raw: bytes | str,
    *,
    confirm_fn: Callable[[str], bool] | None = None,
    post: PostFn | None = None,
    indicator: ProgressIndicator | None = None,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> BatchResult | None:
    """Render, confirm and deliver one template.

    Returns:
        The batch result, or None when the operator declined.

    Raises:
        TemplateError: the input is not a valid template.
    """
    template = Template.from_json(raw)
    print(render_template(template), file=out)

    prompt = f"Send this service log to {len(config.target_ids)} cluster(s)?"
    if not (confirm_fn or confirm)(prompt):
        logger.info("Operator declined delivery")
        print(CANCELED_MESSAGE, file=err if err is not None else sys.stderr)
        return None

    if indicator is None:
        indicator = spinner_indicator()
    return await deliver(
        template,
        config.target_ids,
        post or _post_for(config),
        indicator=indicator,
        out=out,
    )


def spinner_indicator() -> Live:
    """Transient stderr spinner that leaves stdout to the result lines."""
    return Live(
        Spinner("dots", SPINNER_TITLE),
        console=Console(stderr=True),
        transient=True,
        redirect_stdout=False,
        redirect_stderr=False,
    )


def exit_code_for(result: BatchResult | None) -> int:
    if result is None or result.all_succeeded:
        return EXIT_OK
    return EXIT_PARTIAL_FAILURE


def run_send(args: argparse.Namespace) -> int:
    """Entry point for the send subcommand."""
    config = resolve_send_config(
        ocm_url=args.ocm_url,
        ocm_token=args.ocm_token,
        cluster_id=args.cluster_id,
        cluster_ids=args.cluster_ids,
        timeout=args.timeout,
        file_config=getattr(args, "file_config", None),
    )
    raw = sys.stdin.buffer.read()
    result = asyncio.run(send_async(config, raw))
    return exit_code_for(result)
