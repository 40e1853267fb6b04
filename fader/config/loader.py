"""Loaders for the config subsystem.

Two kinds of documents are read here:

* the host file (``config/fader.yml``), validated into :class:`HostConfig`;
* the rotation config source named by ``HostConfig.config_source``, either a
  local JSON/YAML file or an http(s) URL. Its decoded value is handed to
  :func:`fader.config.normalize.normalize_config` untouched.

Failures while fetching or decoding the rotation source are recovered here:
they are logged and reported as ``None`` ("no configuration"), which
normalization turns into an idle pool with default timing.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping

import httpx
import yaml
from pydantic import ValidationError

from fader.core.errors import ConfigurationError

from .models import HostConfig

LOGGER = logging.getLogger(__name__)

_DEFAULT_CONFIG_DIR = Path("config")
_YAML_SUFFIXES = frozenset({".yml", ".yaml"})


def _read_yaml(path: Path) -> Mapping:
    """Read a YAML file and return a mapping (empty dict if file is blank)."""

    try:
        with path.open("r", encoding="utf-8") as fp:
            data = yaml.safe_load(fp) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, Mapping):
        raise ConfigurationError(f"YAML root must be a mapping in {path}")
    return data


def load_host_config(path: Path | str = _DEFAULT_CONFIG_DIR / "fader.yml") -> HostConfig:
    """Load fader.yml (config source, default timing, slot count, telemetry).

    A missing file is not an error: the host then runs with built-in
    defaults, reading ``images.json`` from the working directory. A relative
    local ``config_source`` is taken relative to the directory holding the
    host file, so the host finds its images from any working directory.
    """

    path = Path(path)
    if not path.exists():
        LOGGER.info("Host config not found, using defaults", extra={"path": str(path)})
        return HostConfig()
    data = _read_yaml(path)
    try:
        host = HostConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid host config in {path}: {exc}") from exc
    source = resolve_config_source(host.config_source, path.parent)
    if source != host.config_source:
        host = host.model_copy(update={"config_source": source})
    return host


def resolve_config_source(source: str, base_dir: Path) -> str:
    """Anchor a relative local ``source`` at ``base_dir``; URLs pass through."""

    if is_remote_source(source) or Path(source).is_absolute():
        return source
    return str(base_dir / source)


def is_remote_source(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def load_config_source(
    source: str,
    *,
    client: httpx.Client | None = None,
    timeout: float = 5.0,
) -> Any | None:
    """Fetch and decode the rotation config named by ``source``.

    Returns the decoded value (any shape) or ``None`` when the source cannot
    be read or decoded. No retries are attempted; the host simply tries again
    on its next reload.
    """

    try:
        if is_remote_source(source):
            text = _fetch_remote(source, client=client, timeout=timeout)
        else:
            text = Path(source).read_text(encoding="utf-8")
        return _decode(source, text)
    except (
        httpx.HTTPError,
        httpx.InvalidURL,
        OSError,
        UnicodeDecodeError,
        ValueError,
        RecursionError,
        yaml.YAMLError,
    ) as exc:
        LOGGER.warning("Failed to load config source %s: %s", source, exc, extra={"source": source})
        return None


def _fetch_remote(url: str, *, client: httpx.Client | None, timeout: float) -> str:
    if client is not None:
        response = client.get(url)
        response.raise_for_status()
        return response.text
    with httpx.Client(timeout=timeout, follow_redirects=True) as own_client:
        response = own_client.get(url)
        response.raise_for_status()
        return response.text


def _decode(source: str, text: str) -> Any:
    """Decode ``text`` as YAML for .yml/.yaml sources, JSON otherwise."""

    suffix = Path(httpx.URL(source).path if is_remote_source(source) else source).suffix.lower()
    if suffix in _YAML_SUFFIXES:
        return yaml.safe_load(text)
    return json.loads(text)


__all__ = ["is_remote_source", "load_config_source", "load_host_config", "resolve_config_source"]
