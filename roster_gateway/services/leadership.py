# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Decide whether a member holds leadership privilege.

Two independent signals, either one is enough:
  1. a leadership marker in the member's role title or status;
  2. some *other* member names them as leader in the ``Lider`` column.

The group check compares names with a two-way prefix test, so short
names ("Ana") can match longer ones. Kept as-is for compatibility with
how the sheet is filled in.
"""

from typing import Sequence

from roster_gateway.models.domain import Member
from roster_gateway.services.normalizer import normalize, normalize_strict

LEADERSHIP_MARKERS: tuple[str, ...] = ("lider", "leader")


def has_leadership_role(member: Member) -> bool:
    role = normalize(member.role_title)
    status = normalize(member.status)
    return any(marker in role or marker in status for marker in LEADERSHIP_MARKERS)


def extract_leader_name(member: Member) -> str:
    """Leader name from ``leader_field`` without the ``"<group_id> | "`` prefix."""
    raw = member.leader_field.strip()
    group = member.group_id.strip()
    if group:
        prefix = f"{group} | "
        if raw.lower().startswith(prefix.lower()):
            raw = raw[len(prefix):]
    return raw.strip()


def names_overlap(a: str, b: str) -> bool:
    """Either string is a prefix of the other. Blank never matches."""
    if not a or not b:
        return False
    return a.startswith(b) or b.startswith(a)


def leads_a_group(member: Member, roster: Sequence[Member]) -> bool:
    candidate = normalize_strict(member.name)
    if not candidate:
        return False
    for other in roster:
        if other is member:
            continue
        if names_overlap(candidate, normalize_strict(extract_leader_name(other))):
            return True
    return False


def is_leader(member: Member, roster: Sequence[Member]) -> bool:
    if has_leadership_role(member):
        return True
    return leads_a_group(member, roster)
