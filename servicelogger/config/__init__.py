"""Configuration resolution for servicelogger commands.

Every setting is resolved with the same precedence:
command-line flag, then environment variable, then the YAML config file,
then the built-in default.
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping, Sequence

from pydantic import ValidationError

from servicelogger.config.loader import load_file_config
from servicelogger.config.schema import FileConfig, SendConfig
from servicelogger.errors import ConfigError

DEFAULT_OCM_URL = "https://api.openshift.com"
DEFAULT_TIMEOUT_S = 30.0

OCM_URL_ENV = "OCM_URL"
OCM_TOKEN_ENV = "OCM_TOKEN"
CLUSTER_ID_ENV = "CLUSTER_ID"
CLUSTER_IDS_ENV = "CLUSTER_IDS"


def split_cluster_ids(raw: str) -> list[str]:
    """Split a whitespace- or comma-separated cluster ID list."""
    return [part for part in re.split(r"[\s,]+", raw) if part]


def _first(*values: str | None) -> str | None:
    for value in values:
        if value:
            return value
    return None


def _resolve_targets(
    cluster_id: str | None,
    cluster_ids: Sequence[str] | None,
    env: Mapping[str, str],
    file_config: FileConfig,
) -> list[str]:
    if cluster_id and cluster_ids:
        raise ConfigError("--cluster-id and --cluster-ids are mutually exclusive")
    if cluster_ids:
        return list(cluster_ids)
    if cluster_id:
        return [cluster_id]
    env_ids = env.get(CLUSTER_IDS_ENV, "")
    if env_ids.strip():
        return split_cluster_ids(env_ids)
    env_id = env.get(CLUSTER_ID_ENV, "").strip()
    if env_id:
        return [env_id]
    return list(file_config.cluster_ids)


def resolve_send_config(
    *,
    ocm_url: str | None = None,
    ocm_token: str | None = None,
    cluster_id: str | None = None,
    cluster_ids: Sequence[str] | None = None,
    timeout: float | None = None,
    env: Mapping[str, str] | None = None,
    file_config: FileConfig | None = None,
) -> SendConfig:
    """Build the `send` configuration from flags, environment and config file.

    Raises:
        ConfigError: a required value is missing or invalid.
    """
    env = os.environ if env is None else env
    file_config = load_file_config() if file_config is None else file_config

    base_url = _first(ocm_url, env.get(OCM_URL_ENV), file_config.ocm_url) or DEFAULT_OCM_URL
    auth_token = _first(ocm_token, env.get(OCM_TOKEN_ENV), file_config.ocm_token)
    if not auth_token:
        raise ConfigError(f"OCM token is required (--ocm-token or ${OCM_TOKEN_ENV})")

    target_ids = _resolve_targets(cluster_id, cluster_ids, env, file_config)
    if not target_ids:
        raise ConfigError(
            f"At least one cluster ID is required (--cluster-id, --cluster-ids, ${CLUSTER_ID_ENV} or ${CLUSTER_IDS_ENV})"
        )

    resolved_timeout = timeout if timeout is not None else file_config.timeout
    try:
        return SendConfig(
            base_url=base_url,
            auth_token=auth_token,
            target_ids=target_ids,
            timeout=resolved_timeout if resolved_timeout is not None else DEFAULT_TIMEOUT_S,
        )
    except ValidationError as e:
        messages = "; ".join(str(err["msg"]) for err in e.errors())
        raise ConfigError(messages) from e


__all__ = ["FileConfig", "SendConfig", "resolve_send_config", "split_cluster_ids", "DEFAULT_OCM_URL"]
