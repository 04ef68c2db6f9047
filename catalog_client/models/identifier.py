"""
Catalog URN codec.

Parses composite identifiers such as
``urn:li:dataset:(urn:li:dataPlatform:hive,db.table,PROD)`` into their
components and builds identifiers back from components.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import quote, unquote

from catalog_client.errors import InvalidIdentifier

URN_PREFIX = "urn:li:"
PLATFORM_PREFIX = "urn:li:dataPlatform:"
DEFAULT_ENV = "PROD"

DATASET_KIND = "dataset"
TUPLE_KINDS = frozenset({"dashboard", "chart"})

# Characters Go's url.PathEscape leaves alone besides the unreserved set.
_PATH_SAFE = "$&+:=@"
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


@dataclass(frozen=True)
class Identifier:
    """Parsed catalog URN."""

    raw: str
    kind: str
    name: str
    platform: str = ""
    env: str = ""


def parse_urn(raw: str) -> Identifier:
    """Parse ``raw`` into an :class:`Identifier`.

    Raises:
        InvalidIdentifier: when the namespace prefix is missing, the kind is
            empty, or a dataset/tuple URN is malformed.
    """
    if not raw.startswith(URN_PREFIX):
        raise InvalidIdentifier(
            f"invalid URN {raw!r}: must start with {URN_PREFIX!r}"
        )

    rest = raw[len(URN_PREFIX):]
    colon_idx = rest.find(":")
    paren_idx = rest.find("(")

    if colon_idx == -1 and paren_idx == -1:
        kind, remainder = rest, ""
    elif paren_idx != -1 and (colon_idx == -1 or paren_idx < colon_idx):
        kind, remainder = rest[:paren_idx], rest[paren_idx:]
    else:
        kind, remainder = rest[:colon_idx], rest[colon_idx + 1:]

    if not kind:
        raise InvalidIdentifier(f"invalid URN {raw!r}: empty entity kind")

    if kind == DATASET_KIND:
        platform, name, env = _parse_dataset(raw, remainder)
        return Identifier(
            raw=raw, kind=kind, name=name, platform=platform, env=env
        )
    if kind in TUPLE_KINDS:
        platform, name = _parse_tuple(raw, remainder)
        return Identifier(raw=raw, kind=kind, name=name, platform=platform)
    return Identifier(raw=raw, kind=kind, name=remainder)


def _unwrap_parens(raw: str, remainder: str, label: str) -> str:
    if not (remainder.startswith("(") and remainder.endswith(")")):
        raise InvalidIdentifier(
            f"invalid URN {raw!r}: {label} URN must have parentheses"
        )
    return remainder[1:-1]


def _parse_dataset(raw: str, remainder: str) -> tuple[str, str, str]:
    inner = _unwrap_parens(raw, remainder, "dataset")
    parts = inner.split(",", 2)
    if len(parts) != 3:
        raise InvalidIdentifier(
            f"invalid URN {raw!r}: dataset URN must have 3 parts"
        )

    platform_ref, encoded_name, env = parts
    if not platform_ref.startswith(PLATFORM_PREFIX):
        raise InvalidIdentifier(f"invalid URN {raw!r}: invalid platform URN")

    return (
        platform_ref[len(PLATFORM_PREFIX):],
        _decode_name(encoded_name),
        env,
    )


def _parse_tuple(raw: str, remainder: str) -> tuple[str, str]:
    inner = _unwrap_parens(raw, remainder, "tuple")
    parts = inner.split(",", 1)
    if len(parts) != 2:
        raise InvalidIdentifier(
            f"invalid URN {raw!r}: tuple URN must have 2 parts"
        )
    return parts[0], parts[1]


def _decode_name(segment: str) -> str:
    """Percent-decode ``segment``, returning it untouched when malformed."""
    if _BAD_ESCAPE.search(segment):
        return segment
    try:
        return unquote(segment, errors="strict")
    except UnicodeDecodeError:
        return segment


def _encode_name(name: str) -> str:
    return quote(name, safe=_PATH_SAFE)


# Builders ------------------------------------------------------------------

def build_dataset_urn(platform: str, name: str, env: str = "") -> str:
    """Build a dataset URN; an empty ``env`` falls back to ``PROD``."""
    return (
        f"{URN_PREFIX}{DATASET_KIND}:({PLATFORM_PREFIX}{platform},"
        f"{_encode_name(name)},{env or DEFAULT_ENV})"
    )


def build_dashboard_urn(platform: str, dashboard_id: str) -> str:
    return f"{URN_PREFIX}dashboard:({platform},{dashboard_id})"


def build_chart_urn(platform: str, chart_id: str) -> str:
    return f"{URN_PREFIX}chart:({platform},{chart_id})"


def build_data_flow_urn(orchestrator: str, flow_id: str, cluster: str) -> str:
    return f"{URN_PREFIX}dataFlow:({orchestrator},{flow_id},{cluster})"


def build_data_job_urn(data_flow_urn: str, job_id: str) -> str:
    return f"{URN_PREFIX}dataJob:({data_flow_urn},{job_id})"


def build_glossary_term_urn(term_path: str) -> str:
    return f"{URN_PREFIX}glossaryTerm:{term_path}"


def build_tag_urn(tag_name: str) -> str:
    return f"{URN_PREFIX}tag:{tag_name}"


def build_domain_urn(domain_id: str) -> str:
    return f"{URN_PREFIX}domain:{domain_id}"


def build_urn(
    kind: str,
    name: str,
    *,
    platform: str = "",
    env: str = "",
) -> str:
    """Build a URN for any supported ``kind``.

    Dataset names are percent-encoded; tuple and simple kinds embed their
    components verbatim.
    """
    if not kind:
        raise InvalidIdentifier("entity kind cannot be empty")
    if kind == DATASET_KIND:
        return build_dataset_urn(platform, name, env)
    if kind in TUPLE_KINDS:
        return f"{URN_PREFIX}{kind}:({platform},{name})"
    return f"{URN_PREFIX}{kind}:{name}"
