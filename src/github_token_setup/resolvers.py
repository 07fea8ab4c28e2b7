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

from . import ActionConfig, NoCredentialError
from .gh_logging import Logger
from .github_app import generate_rehearsal_app_token
from .oidc import exchange_for_app_token, get_oidc_token

log = Logger(__name__)


class TokenResolver:
    """One way of obtaining a GitHub token.

    resolve() returns the token, "" to let the next resolver try, or
    raises when the whole chain has to fail.
    """

    name = "resolver"

    def __init__(self, config: ActionConfig):
        self.config = config

    def resolve(self) -> str:
        raise NotImplementedError


class OverrideTokenResolver(TokenResolver):
    name = "provided GITHUB_TOKEN"

    def resolve(self) -> str:
        return self.config.override_token or ""


class RehearsalAppResolver(TokenResolver):
    name = "Rehearsal App token"

    def resolve(self) -> str:
        return generate_rehearsal_app_token(self.config)


class OidcExchangeResolver(TokenResolver):
    name = "GITHUB_TOKEN from Claude App (fallback)"

    def resolve(self) -> str:
        retry = self.config.retry

        log.info("Requesting OIDC token for Claude App fallback...")
        oidc_token = retry.run(lambda: get_oidc_token(self.config))
        log.info("OIDC token successfully obtained")

        log.info("Exchanging OIDC token for Claude App token...")
        app_token = retry.run(lambda: exchange_for_app_token(self.config, oidc_token))
        log.ok("App token successfully obtained (Claude App)")
        return app_token


def default_resolvers(config: ActionConfig) -> list[TokenResolver]:
    return [
        OverrideTokenResolver(config),
        RehearsalAppResolver(config),
        OidcExchangeResolver(config),
    ]


def resolve_github_token(
    config: ActionConfig, resolvers: list[TokenResolver] | None = None
) -> str:
    """Run the resolvers in order and publish the first token obtained.

    The token is masked and written to the GITHUB_TOKEN step output.
    """
    if resolvers is None:
        resolvers = default_resolvers(config)

    for resolver in resolvers:
        token = resolver.resolve()
        if token:
            log.info(f"Using {resolver.name} for authentication")
            log.mask(token)
            log.set_output("GITHUB_TOKEN", token, config.output_path)
            return token
        log.debug(f"{resolver.name} not available")

    raise NoCredentialError("No authentication method produced a GitHub token")
