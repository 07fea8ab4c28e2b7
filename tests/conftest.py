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
from unittest.mock import MagicMock

import pytest
import requests

from src.github_token_setup import ActionConfig
from src.github_token_setup.gh_logging import Logger
from src.github_token_setup.retry import RetryPolicy


class MockLogger(Logger):
    """Logger that captures messages for testing."""

    def __init__(self):
        super().__init__("test")
        self.debug_messages: list[str] = []
        self.info_messages: list[str] = []
        self.warning_messages: list[str] = []
        self.error_messages: list[str] = []
        self.masked: list[str] = []
        self.outputs: dict[str, str] = {}

    def _print(self, prefix: str, msg: str) -> None:
        if prefix == "debug":
            self.debug_messages.append(msg)
        elif prefix in ("info", "success"):
            self.info_messages.append(msg)
        elif prefix == "warning":
            self.warning_messages.append(msg)
        elif prefix == "error":
            self.error_messages.append(msg)

    def mask(self, value: str) -> None:
        self.masked.append(value)

    def set_output(self, name: str, value: str, output_path: str | None) -> None:
        self.outputs[name] = value


@pytest.fixture
def mock_logger() -> MockLogger:
    """Create a mock logger for testing."""
    return MockLogger()


# No sleeping between attempts in tests
FAST_RETRY = RetryPolicy(max_attempts=3, initial_delay=0, max_delay=0)


def make_config(
    override_token: str | None = None,
    app_id: str | None = None,
    app_private_key: str | None = None,
    repository: str | None = "org/repo",
    id_token_request_url: str | None = "https://runtime.example/token?api-version=2.0",
    id_token_request_token: str | None = "runtime-request-token",
    output_path: str | None = None,
    retry: RetryPolicy = FAST_RETRY,
) -> ActionConfig:
    return ActionConfig(
        override_token=override_token,
        app_id=app_id,
        app_private_key=app_private_key,
        repository=repository,
        id_token_request_url=id_token_request_url,
        id_token_request_token=id_token_request_token,
        output_path=output_path,
        retry=retry,
    )


def make_response(status_code: int = 200, body: object = None, reason: str = "OK"):
    """Fake requests.Response; body=None makes .json() fail like a non-JSON body."""
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.reason = reason
    if body is None:
        response.json.side_effect = ValueError("Expecting value")
    else:
        response.json.return_value = body
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(
            f"{status_code} {reason}"
        )
    return response
