# *******************************************************************************
# Copyright (c) 2025 Contributors to the Eclipse Foundation
#
# See the NOTICE file(s) distributed with this work for additional
# information regarding copyright ownership.
#
# This program and the accompanying materials are made available under the
# terms of the Apache License Version 2.0 which is available at
# https://www.apache.org/licenses/LICENSE-2.0
#
# SPDX-License-Identifier: Apache-2.0
# *******************************************************************************

import argparse
import dataclasses
import sys

from . import OIDC_AUDIENCE, TOKEN_EXCHANGE_URL, ActionConfig
from .gh_logging import Logger
from .resolvers import resolve_github_token

log = Logger(__name__)

REMEDIATION = (
    "Make sure either:\n"
    "1. Rehearsal App is installed on this repository with REHEARSAL_APP_ID "
    "and REHEARSAL_APP_PRIVATE_KEY secrets set\n"
    "2. Or the Claude App integration is working with proper OIDC permissions"
)


def parse_args(args: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Resolve a GitHub token for this workflow run and publish it "
            "as the GITHUB_TOKEN step output."
        )
    )
    parser.add_argument(
        "--audience",
        type=str,
        default=None,
        help=f"Audience of the requested OIDC token; defaults to {OIDC_AUDIENCE}.",
    )
    parser.add_argument(
        "--exchange-url",
        type=str,
        default=None,
        help=f"Endpoint exchanging OIDC tokens for App tokens; defaults to {TOKEN_EXCHANGE_URL}.",
    )
    parser.add_argument(
        "--max-attempts",
        type=int,
        default=None,
        help="Attempts per OIDC network call before giving up (default: 3).",
    )
    return parser.parse_args(args)


def build_config(args: argparse.Namespace) -> ActionConfig:
    """Read the environment once and apply command-line overrides."""
    config = ActionConfig.from_env()
    overrides: dict[str, object] = {}
    if args.audience:
        overrides["audience"] = args.audience
    if args.exchange_url:
        overrides["exchange_url"] = args.exchange_url
    if args.max_attempts is not None:
        if args.max_attempts < 1:
            log.fatal("--max-attempts must be at least 1")
        overrides["retry"] = dataclasses.replace(
            config.retry, max_attempts=args.max_attempts
        )
    return dataclasses.replace(config, **overrides)


def setup_github_token(config: ActionConfig) -> str:
    """Resolve the token, exiting with status 1 and remediation hints on failure."""
    try:
        return resolve_github_token(config)
    except Exception as e:
        log.fatal(f"Failed to setup GitHub token: {e}.\n\n{REMEDIATION}")


def main(args: list[str]) -> None:
    p = parse_args(args)
    setup_github_token(build_config(p))


def run() -> None:
    main(args=sys.argv[1:])


if __name__ == "__main__":
    run()
