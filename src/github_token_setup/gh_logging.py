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
import uuid
from typing import NoReturn


def is_running_in_github_actions() -> bool:
    return "GITHUB_ACTIONS" in os.environ


def escape_data(value: str) -> str:
    """Escape a workflow command payload so multi-line messages survive."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class Logger:
    """Minimal logger that prints locally and emits workflow commands on GitHub Actions."""

    def __init__(self, name: str):
        self.name = name
        self.warnings: list[str] = []

    def _print(self, prefix: str, msg: str) -> None:
        if is_running_in_github_actions():
            github_prefix = {
                "debug": "debug",
                "info": "notice",
                "warning": "warning",
                "error": "error",
                "success": "notice",
            }
            print(
                f"::{github_prefix.get(prefix, prefix)}::"
                f"{escape_data(f'{self.name} {msg}')}"
            )
            return

        pretty_prefix = {
            "debug": "DEBUG",
            "info": "INFO",
            "warning": "WARNING",
            "error": "ERROR",
            "success": "SUCCESS",
        }
        print(f"{pretty_prefix.get(prefix, prefix)}: {self.name} {msg}")

    def debug(self, msg: str) -> None:
        self._print("debug", msg)

    def info(self, msg: str) -> None:
        self._print("info", msg)

    def ok(self, msg: str) -> None:
        self._print("success", msg)

    def warning(self, msg: str) -> None:
        self.warnings.append(msg)
        self._print("warning", msg)

    def fatal(self, msg: str) -> NoReturn:
        self._print("error", msg)
        raise SystemExit(1)

    def mask(self, value: str) -> None:
        """Ask the runner to redact `value` from all further log output."""
        if value and is_running_in_github_actions():
            print(f"::add-mask::{escape_data(value)}")

    def set_output(self, name: str, value: str, output_path: str | None) -> None:
        """Publish a step output.

        Appends a heredoc record to the $GITHUB_OUTPUT file; without one,
        falls back to the legacy set-output workflow command.
        """
        if not output_path:
            print(f"::set-output name={name}::{escape_data(value)}")
            return

        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        if delimiter in name or delimiter in value:
            raise ValueError(f"Unexpected delimiter collision in output {name}")
        with open(output_path, "a", encoding="utf-8") as f:
            f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
