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

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from .retry import RetryPolicy

OIDC_AUDIENCE = "claude-code-github-action"
TOKEN_EXCHANGE_URL = "https://api.anthropic.com/api/github/github-app-token-exchange"
GITHUB_API_URL = "https://api.github.com"


class TokenSetupError(Exception):
    """Base class for errors raised while resolving a GitHub token."""


class ConfigurationError(TokenSetupError):
    """Required invocation context is missing; never falls back."""


class OidcTokenError(TokenSetupError):
    pass


class TokenExchangeError(TokenSetupError):
    pass


class NoCredentialError(TokenSetupError):
    pass


@dataclass(frozen=True)
class ActionConfig:
    """Everything the resolvers need, read once from the environment."""

    override_token: str | None = None
    app_id: str | None = None
    app_private_key: str | None = None
    # "owner/name"
    repository: str | None = None
    id_token_request_url: str | None = None
    id_token_request_token: str | None = None
    output_path: str | None = None
    audience: str = OIDC_AUDIENCE
    exchange_url: str = TOKEN_EXCHANGE_URL
    github_api_url: str = GITHUB_API_URL
    retry: RetryPolicy = field(default_factory=RetryPolicy)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ActionConfig":
        env = os.environ if environ is None else environ
        return cls(
            override_token=env.get("OVERRIDE_GITHUB_TOKEN") or None,
            app_id=env.get("REHEARSAL_APP_ID") or None,
            app_private_key=env.get("REHEARSAL_APP_PRIVATE_KEY") or None,
            repository=env.get("GITHUB_REPOSITORY") or None,
            id_token_request_url=env.get("ACTIONS_ID_TOKEN_REQUEST_URL") or None,
            id_token_request_token=env.get("ACTIONS_ID_TOKEN_REQUEST_TOKEN") or None,
            output_path=env.get("GITHUB_OUTPUT") or None,
        )

    @property
    def has_app_credentials(self) -> bool:
        return bool(self.app_id and self.app_private_key)

    @property
    def owner_and_repo(self) -> tuple[str, str]:
        """Split GITHUB_REPOSITORY into (owner, name).

        Raises ConfigurationError when the repository context is missing,
        which is not something a later strategy can recover from.
        """
        if not self.repository:
            raise ConfigurationError(
                "GITHUB_REPOSITORY environment variable not found"
            )
        owner, _, name = self.repository.partition("/")
        if not owner or not name or "/" in name:
            raise ConfigurationError(
                f"GITHUB_REPOSITORY must look like 'owner/name', got {self.repository!r}"
            )
        return owner, name

    def __repr__(self) -> str:
        # Secrets must never end up in logs or tracebacks.
        return (
            f"ActionConfig(repository={self.repository!r}, "
            f"override_token={'***' if self.override_token else None}, "
            f"app_id={self.app_id!r}, "
            f"app_private_key={'***' if self.app_private_key else None}, "
            f"audience={self.audience!r}, exchange_url={self.exchange_url!r})"
        )
