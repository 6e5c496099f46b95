"""
Fuzzy command suggestions ("did you mean").

Scores every primary name and alias against mistyped input with a prefix
bonus or normalized Levenshtein similarity. No semantic matching.
"""

from __future__ import annotations

from src.engine.registry import CommandRegistry


def levenshtein_distance(s1: str, s2: str) -> int:
    """Edit distance between two strings (insert, delete, substitute)."""
    if len(s1) < len(s2):
        return levenshtein_distance(s2, s1)
    if not s2:
        return len(s1)

    previous_row = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1):
        current_row = [i + 1]
        for j, c2 in enumerate(s2):
            insertions = previous_row[j + 1] + 1
            deletions = current_row[j] + 1
            substitutions = previous_row[j] + (c1 != c2)
            current_row.append(min(insertions, deletions, substitutions))
        previous_row = current_row

    return previous_row[-1]


def similarity(text: str, candidate: str, prefix_score: float = 0.9) -> float:
    """
    Score how closely `candidate` matches `text`, from 0.0 to 1.0.

    A candidate that starts with `text` scores `prefix_score` regardless of
    length difference. Otherwise the score is 1 - distance / longer length.
    """
    if not text:
        return 1.0 if not candidate else 0.0
    if not candidate:
        return 0.0

    if candidate.startswith(text):
        return prefix_score

    distance = levenshtein_distance(text, candidate)
    return 1 - distance / max(len(text), len(candidate))


class SuggestionEngine:
    """Suggests registered commands close to unmatched input."""

    def __init__(
        self,
        registry: CommandRegistry,
        *,
        limit: int = 3,
        threshold: float = 0.5,
        prefix_score: float = 0.9,
    ) -> None:
        self._registry = registry
        self._limit = limit
        self._threshold = threshold
        self._prefix_score = prefix_score

    def score(self, text: str) -> dict[str, float]:
        """
        Best score per command name, above the threshold.

        Alias scores count toward the command they resolve to. Dict order is
        first-seen order: primary names in registration order, then aliases.
        """
        lowered = text.lower()
        scores: dict[str, float] = {}

        candidates = [(cmd.name, cmd.name) for cmd in self._registry.commands()]
        candidates.extend(self._registry.aliases().items())

        for form, name in candidates:
            value = similarity(lowered, form, self._prefix_score)
            if value <= self._threshold:
                continue
            if value > scores.get(name, -1.0):
                scores[name] = value

        return scores

    def suggest(self, text: str) -> list[str]:
        """Get up to `limit` command names, best first."""
        scores = self.score(text)
        # sorted() is stable, so ties keep first-seen order
        ranked = sorted(scores, key=lambda name: scores[name], reverse=True)
        return ranked[: self._limit]

    def message(self, text: str) -> str:
        """One-line hint for a mistyped command."""
        suggestions = self.suggest(text)
        if suggestions:
            return f"Did you mean: {', '.join(suggestions)}?"
        return 'Type "help" to see available commands'
