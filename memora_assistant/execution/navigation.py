"""
Navigation target resolution shared by the executor and the /aller command.
"""

from typing import List, NamedTuple, Optional

from ..config import settings
from ..data.intent_catalogue import NAVIGATION_TARGETS, NavigationTarget
from ..intent.detector import normalize_input
from ..schemas.attachments import NavLink
from ..schemas.context import AssistantContext


class ResolvedRoute(NamedTuple):
    path: str
    label: str


def _build_path(nav: NavigationTarget, context: AssistantContext) -> str:
    if not nav.needs_group:
        return nav.path
    return nav.path.format(group_id=context.current_group_id or settings.DEFAULT_GROUP_ID)


def resolve_navigation_target(target: Optional[str], context: AssistantContext) -> Optional[ResolvedRoute]:
    """
    Exact key match first, then the first key contained in (or containing)
    the target.
    """
    if not target:
        return None
    key = normalize_input(target)
    if not key:
        return None

    nav = NAVIGATION_TARGETS.get(key)
    if nav is None:
        nav = next(
            (n for k, n in NAVIGATION_TARGETS.items() if k in key or key in k),
            None,
        )
    if nav is None:
        return None
    return ResolvedRoute(path=_build_path(nav, context), label=nav.label)


def available_links(context: AssistantContext, limit: int = 8) -> List[NavLink]:
    """Distinct destinations, in catalogue order."""
    links: List[NavLink] = []
    seen = set()
    for key, nav in NAVIGATION_TARGETS.items():
        path = _build_path(nav, context)
        if path in seen:
            continue
        seen.add(path)
        links.append(NavLink(label=nav.label, href=path, description=key))
        if len(links) >= limit:
            break
    return links
