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

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

from .gh_logging import Logger

log = Logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """Exponential backoff for flaky network calls.

    Delays are in seconds: initial_delay before the second attempt, then
    multiplied by backoff_factor, never exceeding max_delay.
    """

    max_attempts: int = 3
    initial_delay: float = 5.0
    max_delay: float = 20.0
    backoff_factor: float = 2.0

    def delays(self) -> list[float]:
        """Sleep durations between consecutive attempts."""
        result: list[float] = []
        delay = self.initial_delay
        for _ in range(self.max_attempts - 1):
            result.append(min(delay, self.max_delay))
            delay *= self.backoff_factor
        return result

    def run(self, operation: Callable[[], T]) -> T:
        """Call `operation` until it succeeds or attempts run out.

        The exception of the final attempt is re-raised unchanged.
        """
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        delays = self.delays()
        for attempt in range(1, self.max_attempts + 1):
            try:
                log.debug(f"Attempt {attempt} of {self.max_attempts}...")
                return operation()
            except Exception as e:
                log.info(f"Attempt {attempt} failed: {e}")
                if attempt == self.max_attempts:
                    log.info(f"Operation failed after {attempt} attempts")
                    raise
                delay = delays[attempt - 1]
                log.info(f"Retrying in {delay:g} seconds...")
                time.sleep(delay)

        # Unreachable: the loop either returns or raises.
        raise AssertionError("retry loop exited without a result")


def retry_with_backoff(
    operation: Callable[[], T], policy: RetryPolicy | None = None
) -> T:
    return (policy or RetryPolicy()).run(operation)
