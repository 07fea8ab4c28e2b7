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

import github
from github import Auth, GithubIntegration

from . import ActionConfig
from .gh_logging import Logger

log = Logger(__name__)


class RehearsalAppWrapper:
    """Wrapper around the GitHub App API for minting installation tokens."""

    def __init__(self, config: ActionConfig):
        assert config.app_id and config.app_private_key
        self.config = config
        self.integration = GithubIntegration(
            auth=Auth.AppAuth(config.app_id, config.app_private_key),
            base_url=config.github_api_url,
        )

    def get_installation_id(self, owner: str, repo: str) -> int:
        """Look up the installation of this App bound to owner/repo.

        Authenticates with the App JWT against
        GET /repos/{owner}/{repo}/installation.
        Raises github.GithubException on any non-success response.
        """
        installation = self.integration.get_repo_installation(owner, repo)
        return installation.id

    def create_installation_token(self, installation_id: int) -> str:
        return self.integration.get_access_token(installation_id).token


def generate_rehearsal_app_token(config: ActionConfig) -> str:
    """Mint a Rehearsal App installation token for the current repository.

    Returns "" when the App is not configured or anything goes wrong, so
    that the OIDC exchange can take over. A missing repository context is
    the exception: ConfigurationError propagates.
    """
    if not config.has_app_credentials:
        log.info("Rehearsal App credentials not provided, falling back to Claude App")
        return ""

    owner, repo = config.owner_and_repo

    try:
        app = RehearsalAppWrapper(config)

        log.info("Getting installation ID for Rehearsal App...")
        installation_id = app.get_installation_id(owner, repo)
        log.info(f"Found installation ID: {installation_id}")

        log.info("Generating token from Rehearsal GitHub App...")
        token = app.create_installation_token(installation_id)
    except github.GithubException as e:
        log.warning(
            f"GitHub API returned {e.status} while generating Rehearsal App "
            f"token for {owner}/{repo}: {e}"
        )
        log.info("Falling back to Claude App authentication")
        return ""
    except Exception as e:
        log.warning(f"Failed to generate Rehearsal App token: {e}")
        log.info("Falling back to Claude App authentication")
        return ""

    if not token:
        log.warning("Rehearsal App returned an empty installation token")
        return ""

    log.ok("Successfully generated Rehearsal App token")
    return token
