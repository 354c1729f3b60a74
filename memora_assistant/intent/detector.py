"""
Intent Detector - Rule-Based Message Classification

Maps a raw user message to a DetectedIntent by matching a fixed keyword
catalogue against the normalised text, refining the action with detected
verbs, and extracting entities opportunistically. The detector is pure:
the same text always yields the same intent.
"""

import logging
import re
import unicodedata
from typing import Dict, List, NamedTuple, Set

from ..data.intent_catalogue import (
    ABSENCE_TYPE_KEYWORDS,
    ACTION_VERBS,
    EXPORT_FORMATS,
    FLOW_ACTIONS,
    INTENT_KEYWORDS,
    MEETING_TYPE_KEYWORDS,
    PRIORITY_KEYWORDS,
    STATUS_KEYWORDS,
    VERB_REFINEMENTS,
)
from ..schemas.intent import DetectedIntent, IntentAction, IntentCategory

logger = logging.getLogger(__name__)

_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")
_TIME_RE = re.compile(r"\b(\d{1,2})[h:](\d{2})\b")
# Single quotes only count when they wrap a phrase, not French elisions (l'offre)
_QUOTED_RE = re.compile(r"\"([^\"]+)\"|«\s*([^»]+?)\s*»|(?:^|\s)'([^']+)'(?=$|[\s.,!?])")

_SEARCH_PATTERNS = [
    re.compile(r"(?:rechercher|chercher|trouver|ou est|ou se trouve)\s+(.+)"),
    re.compile(r"(?:search|find)\s+(.+)"),
]
_NAVIGATION_PATTERNS = [
    re.compile(
        r"(?:aller (?:a|vers|sur)|emmene[- ]moi (?:vers|a|sur)|naviguer vers|ouvrir(?: la page)?"
        r"|va sur|montre[- ]moi)\s+(?:la page |le |la |les |l')?(.+)"
    ),
    re.compile(r"(?:go to|navigate to|open)\s+(.+)"),
]
_ASSIGNEE_PATTERNS = [
    re.compile(r"(?:assigner? (?:a|à|pour))\s+(.+)", re.IGNORECASE),
    re.compile(r"\b(?:pour|a|à)\s+([A-Z][a-zé]+(?:\s+[A-Z][a-zé]+)?)"),
]


class KeywordMatch(NamedTuple):
    category: str
    action: str
    weight: float
    match_length: int


def normalize_input(text: str) -> str:
    """Lower-case, strip accents and punctuation (except ' and -), collapse spaces."""
    text = unicodedata.normalize("NFD", text.lower())
    text = "".join(ch for ch in text if not unicodedata.combining(ch))
    text = text.replace("’", "'").replace("‘", "'")
    text = re.sub(r"[^\w\s'-]", " ", text)
    return re.sub(r"\s+", " ", text).strip()


def requires_flow(action: str) -> bool:
    return action in FLOW_ACTIONS


class IntentDetector:
    def __init__(self, keywords=None):
        catalogue = keywords or INTENT_KEYWORDS
        # Keywords are normalised once so matching is a plain substring test
        self._keywords = {normalize_input(k): v for k, v in catalogue.items()}

    def detect(self, raw_input: str) -> DetectedIntent:
        normalized = normalize_input(raw_input)

        if len(normalized) < 2:
            return self._unknown(raw_input, confidence=0.0)

        matches = self._find_keyword_matches(normalized)
        if not matches:
            return self._unknown(raw_input, confidence=0.1)

        top = matches[0]
        category = top.category
        verbs = self._detect_action_verbs(normalized)
        action = self._refine_action(top.action, verbs, category)

        confidence = top.weight
        if sum(1 for m in matches if m.category == category) > 1:
            confidence = min(confidence + 0.1, 1.0)
        if verbs:
            confidence = min(confidence + 0.05, 1.0)

        entities = self._extract_entities(raw_input, normalized, category, action)

        logger.debug(
            f"Detected intent {action} ({category}) confidence={confidence:.2f} entities={entities}"
        )
        return DetectedIntent(
            action=IntentAction(action),
            category=IntentCategory(category),
            entities=entities,
            confidence=round(confidence, 4),
            raw_query=raw_input,
        )

    # ==========================================================================
    # Matching
    # ==========================================================================

    def _find_keyword_matches(self, normalized: str) -> List[KeywordMatch]:
        matches = [
            KeywordMatch(intent.category, intent.action, intent.weight, len(keyword))
            for keyword, intents in self._keywords.items()
            if keyword in normalized
            for intent in intents
        ]
        # Highest weight first, then longest keyword
        return sorted(matches, key=lambda m: (-m.weight, -m.match_length))

    def _detect_action_verbs(self, normalized: str) -> Set[str]:
        return {
            verb
            for verb, keywords in ACTION_VERBS.items()
            if any(keyword in normalized for keyword in keywords)
        }

    def _refine_action(self, action: str, verbs: Set[str], category: str) -> str:
        for verb, refined in VERB_REFINEMENTS.get(category, []):
            if verb in verbs:
                return refined
        return action

    # ==========================================================================
    # Entity extraction
    # ==========================================================================

    def _extract_entities(
        self, raw: str, normalized: str, category: str, action: str
    ) -> Dict[str, str]:
        entities: Dict[str, str] = {}

        dates = _DATE_RE.findall(raw)
        if dates:
            entities["date"] = dates[0]
            if len(dates) > 1:
                entities["end_date"] = dates[1]

        time_match = _TIME_RE.search(raw)
        if time_match:
            entities["time"] = f"{int(time_match.group(1)):02d}:{time_match.group(2)}"

        quoted = _QUOTED_RE.search(raw)
        if quoted:
            entities["name"] = next(g for g in quoted.groups() if g)

        if category == "search":
            self._first_group(_SEARCH_PATTERNS, normalized, entities, "query")

        if category == "navigation" or action == "navigate_to":
            self._first_group(_NAVIGATION_PATTERNS, normalized, entities, "target")

        if action in ("assign_task", "create_task"):
            self._first_group(_ASSIGNEE_PATTERNS, raw, entities, "assignee")

        self._first_keyword(PRIORITY_KEYWORDS, normalized, entities, "priority")
        self._first_keyword(STATUS_KEYWORDS, normalized, entities, "status")

        if category == "absence":
            self._first_keyword(ABSENCE_TYPE_KEYWORDS, normalized, entities, "absence_type")

        if category == "meeting":
            self._first_keyword(MEETING_TYPE_KEYWORDS, normalized, entities, "meeting_type")

        if category == "export":
            fmt = next((f for f in EXPORT_FORMATS if f in normalized), None)
            if fmt:
                entities["format"] = fmt

        if action == "change_theme":
            if "sombre" in normalized or "dark" in normalized:
                entities["theme"] = "dark"
            elif "clair" in normalized or "light" in normalized:
                entities["theme"] = "light"
            elif "systeme" in normalized or "system" in normalized:
                entities["theme"] = "system"

        return entities

    @staticmethod
    def _first_group(patterns, text: str, entities: Dict[str, str], key: str):
        for pattern in patterns:
            match = pattern.search(text)
            if match:
                entities[key] = match.group(1).strip()
                return

    @staticmethod
    def _first_keyword(mapping: Dict[str, str], text: str, entities: Dict[str, str], key: str):
        for keyword, value in mapping.items():
            if keyword in text:
                entities[key] = value
                return

    @staticmethod
    def _unknown(raw_input: str, confidence: float) -> DetectedIntent:
        return DetectedIntent(
            action=IntentAction.UNKNOWN,
            category=IntentCategory.UNKNOWN,
            entities={},
            confidence=confidence,
            raw_query=raw_input,
        )
