"""
Resolution engine: picks the upgrade target for a pinned version
"""

import logging
from typing import Iterable, List, Optional, Tuple

from .models import NoUpdate, Precision, Resolution, UpdateTo, VersionSpec

logger = logging.getLogger(__name__)


def ranking_key(version: VersionSpec) -> Tuple[int, int, int]:
    """Sort key where a missing component ranks below any present value.

    ``4`` sorts below ``4.0`` and ``4.2`` but above ``3.9``, so a bare
    major tag never looks newer than the releases on its own line.
    """
    return (
        version.major,
        version.minor if version.minor is not None else -1,
        version.patch if version.patch is not None else -1,
    )


def is_newer(current: VersionSpec, candidate: VersionSpec) -> bool:
    """Check whether ``candidate`` is newer than ``current`` at current's precision.

    Missing candidate components count as 0 here, unlike ``ranking_key``.
    """
    width = current.precision.value
    current_parts = (current.major, current.minor, current.patch)[:width]
    candidate_parts = tuple(
        part if part is not None else 0
        for part in (candidate.major, candidate.minor, candidate.patch)[:width]
    )
    return candidate_parts > current_parts


def _first(versions: List[VersionSpec], major: int, precision: Precision) -> Optional[VersionSpec]:
    for version in versions:
        if version.major == major and version.precision is precision:
            return version
    return None


def resolve(current: VersionSpec, candidates: Iterable[VersionSpec]) -> Resolution:
    """Select the best upgrade for ``current`` among ``candidates``.

    Only a higher major version counts as an upgrade. The replacement keeps
    the precision of ``current`` where a candidate of that shape exists:
    ``v3`` moves to ``v4`` rather than ``v4.1.2``.
    """
    ranked = sorted(set(candidates), key=lambda v: (ranking_key(v), v.raw), reverse=True)
    if not ranked:
        logger.debug(f"No candidates to compare against {current}")
        return NoUpdate()

    best = ranked[0]
    if best.major <= current.major:
        logger.debug(f"Highest candidate {best} does not raise major version of {current}")
        return NoUpdate()

    if current.precision is Precision.MAJOR:
        major_only = _first(ranked, best.major, Precision.MAJOR)
        if major_only is not None:
            return UpdateTo(major_only, Precision.MAJOR)
        major_minor = _first(ranked, best.major, Precision.MINOR)
        if major_minor is not None:
            return UpdateTo(major_minor, Precision.MINOR)
        return UpdateTo(best, Precision.FULL)

    if current.precision is Precision.MINOR:
        major_minor = _first(ranked, best.major, Precision.MINOR)
        if major_minor is not None:
            return UpdateTo(major_minor, Precision.MINOR)
        return UpdateTo(best, Precision.MINOR)

    return UpdateTo(best, Precision.FULL)
