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

import requests

from . import ActionConfig, OidcTokenError, TokenExchangeError
from .gh_logging import Logger

log = Logger(__name__)

REQUEST_TIMEOUT = 30

MISSING_ID_TOKEN_PERMISSION = (
    "Could not fetch an OIDC token. Did you remember to add "
    "`id-token: write` to your workflow permissions?"
)


def get_oidc_token(config: ActionConfig) -> str:
    """Request an OIDC identity token for `config.audience` from the Actions runtime.

    The runner only exposes the request URL and token when the workflow
    grants `id-token: write`, so every failure here points at that
    permission.
    """
    if not config.id_token_request_url or not config.id_token_request_token:
        log.info(
            "ACTIONS_ID_TOKEN_REQUEST_URL or ACTIONS_ID_TOKEN_REQUEST_TOKEN is not set"
        )
        raise OidcTokenError(MISSING_ID_TOKEN_PERMISSION)

    try:
        response = requests.get(
            config.id_token_request_url,
            params={"audience": config.audience},
            headers={
                "Authorization": f"Bearer {config.id_token_request_token}",
                "Accept": "application/json",
            },
            timeout=REQUEST_TIMEOUT,
        )
        response.raise_for_status()
        id_token = response.json().get("value")
    except (requests.RequestException, ValueError, AttributeError) as e:
        log.info(f"Failed to get OIDC token: {e}")
        raise OidcTokenError(MISSING_ID_TOKEN_PERMISSION) from e

    if not id_token:
        log.info("OIDC token response did not contain a value")
        raise OidcTokenError(MISSING_ID_TOKEN_PERMISSION)

    log.mask(id_token)
    return id_token


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
        message = body["error"]["message"]
    except (ValueError, KeyError, TypeError):
        return "Unknown error"
    return message if isinstance(message, str) and message else "Unknown error"


def exchange_for_app_token(config: ActionConfig, oidc_token: str) -> str:
    """Trade an OIDC token for a GitHub App token at `config.exchange_url`."""
    response = requests.post(
        config.exchange_url,
        headers={"Authorization": f"Bearer {oidc_token}"},
        timeout=REQUEST_TIMEOUT,
    )

    if not response.ok:
        message = _error_message(response)
        log.info(
            f"App token exchange failed: {response.status_code} "
            f"{response.reason} - {message}"
        )
        raise TokenExchangeError(message)

    try:
        data = response.json()
    except ValueError as e:
        raise TokenExchangeError("App token not found in response") from e

    # Older deployments of the exchange endpoint answer with "app_token".
    app_token = None
    if isinstance(data, dict):
        app_token = data.get("token") or data.get("app_token")

    if not app_token:
        raise TokenExchangeError("App token not found in response")

    return app_token
