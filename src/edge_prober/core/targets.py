"""Built-in Cloudflare target list and target file loaders."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from edge_prober.core.exceptions import TargetFileError
from edge_prober.core.logging import get_logger
from edge_prober.core.models import ProbeTarget

logger = get_logger(__name__)


def _target(hostname: str, port: int, protocol: str, description: str) -> ProbeTarget:
    return ProbeTarget(
        hostname=hostname,
        port=port,
        protocol=protocol,
        description=description,
    )


DEFAULT_TARGETS: tuple[ProbeTarget, ...] = (
    # Cloudflare Global Region 1
    _target("region1.v2.argotunnel.com", 7844, "TCP", "Cloudflared Global Region 1 (http2)"),
    _target("region1.v2.argotunnel.com", 7844, "UDP", "Cloudflared Global Region 1 (quic)"),
    # Cloudflare Global Region 2
    _target("region2.v2.argotunnel.com", 7844, "TCP", "Cloudflared Global Region 2 (http2)"),
    _target("region2.v2.argotunnel.com", 7844, "UDP", "Cloudflared Global Region 2 (quic)"),
    # Cloudflare US Region 1
    _target("us-region1.v2.argotunnel.com", 7844, "TCP", "Cloudflared US Region 1 (http2)"),
    _target("us-region1.v2.argotunnel.com", 7844, "UDP", "Cloudflared US Region 1 (quic)"),
    # Cloudflare US Region 2
    _target("us-region2.v2.argotunnel.com", 7844, "TCP", "Cloudflared US Region 2 (http2)"),
    _target("us-region2.v2.argotunnel.com", 7844, "UDP", "Cloudflared US Region 2 (quic)"),
    # Software update check
    _target("api.cloudflare.com", 443, "TCP", "Cloudflared Update Server (HTTPS)"),
    _target("update.argotunnel.com", 443, "TCP", "Cloudflared Update Server (HTTPS)"),
    # DNS check
    _target("1.1.1.1", 53, "UDP", "Cloudflare DNS Query (UDP)"),
    _target("1.0.0.1", 53, "UDP", "Cloudflare DNS Query (UDP)"),
)


YAML_SUFFIXES = {".yaml", ".yml"}


def load_targets(path: Path) -> list[ProbeTarget]:
    """Load targets from a YAML or line-format file.

    YAML files hold either a list of target mappings or a mapping with a
    ``targets`` key. Any other file is read as one
    ``hostname,port,protocol,description`` record per line, with blank
    lines and ``#`` comments ignored.

    Raises:
        TargetFileError: If the file is missing or any record is invalid
    """
    if not path.exists():
        raise TargetFileError(f"Target file '{path}' does not exist")

    if path.suffix.lower() in YAML_SUFFIXES:
        targets = _load_yaml(path)
    else:
        targets = _load_lines(path)

    logger.debug("targets_loaded", path=str(path), count=len(targets))
    return targets


def _load_yaml(path: Path) -> list[ProbeTarget]:
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise TargetFileError(f"Could not parse target file '{path}': {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise TargetFileError(f"Could not read target file '{path}': {e}") from e

    if isinstance(data, dict):
        data = data.get("targets")
    if data is None:
        return []
    if not isinstance(data, list):
        raise TargetFileError(f"Target file '{path}' must contain a list of targets")

    targets: list[ProbeTarget] = []
    for index, entry in enumerate(data, start=1):
        targets.append(_validate_entry(path, index, entry))
    return targets


def _validate_entry(path: Path, index: int, entry: Any) -> ProbeTarget:
    if not isinstance(entry, dict):
        raise TargetFileError(f"{path}: entry {index} is not a mapping")
    try:
        return ProbeTarget(**entry)
    except ValidationError as e:
        raise TargetFileError(f"{path}: entry {index} is invalid: {e}") from e


def _load_lines(path: Path) -> list[ProbeTarget]:
    try:
        with open(path, encoding="utf-8") as f:
            lines = f.readlines()
    except (OSError, UnicodeDecodeError) as e:
        raise TargetFileError(f"Could not read target file '{path}': {e}") from e

    targets: list[ProbeTarget] = []
    for lineno, line in enumerate(lines, start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        try:
            targets.append(ProbeTarget.parse_line(line))
        except (ValueError, ValidationError) as e:
            raise TargetFileError(f"{path}:{lineno}: {e}") from e
    return targets


def resolve_targets(
    configured: list[ProbeTarget],
    targets_file: Path | None = None,
) -> list[ProbeTarget]:
    """Pick the effective target list.

    A target file wins over targets from settings; with neither, the
    built-in Cloudflare list is used.
    """
    if targets_file is not None:
        return load_targets(targets_file)
    if configured:
        return list(configured)
    return list(DEFAULT_TARGETS)
