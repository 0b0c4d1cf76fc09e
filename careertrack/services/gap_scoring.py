"""
Gap Scoring Engine

Compares a job target's required skills with the caller's own skill
levels. Pure: no I/O, no mutation of its inputs, output in the same order
as `required_skills`.

Names match under str.casefold(); when several observed skills share a
name the first one wins. An unmatched requirement scores level 0.
"""

from typing import Iterable, List, Mapping, Sequence

from careertrack.schemas.schemas import GapClassification, GapResult

LABELS = {
    GapClassification.meets: "Meets requirement",
    GapClassification.slight_gap: "Slight gap – focus soon",
    GapClassification.big_gap: "Big gap – high priority",
}


def classify(gap: int) -> GapClassification:
    if gap <= 0:
        return GapClassification.meets
    if gap <= 2:
        return GapClassification.slight_gap
    return GapClassification.big_gap


def _level_index(observed_skills: Iterable[Mapping]) -> dict:
    levels = {}
    for skill in observed_skills:
        levels.setdefault(skill["name"].casefold(), skill["level"])
    return levels


def score(required_skills: Sequence[Mapping], observed_skills: Sequence[Mapping]) -> List[GapResult]:
    levels = _level_index(observed_skills)
    results = []
    for required in required_skills:
        observed_level = levels.get(required["name"].casefold(), 0)
        gap = required["importance"] - observed_level
        classification = classify(gap)
        results.append(GapResult(
            required_skill_id=required.get("id") or "",
            name=required["name"],
            importance=required["importance"],
            observed_level=observed_level,
            gap=gap,
            classification=classification,
            label=LABELS[classification],
        ))
    return results
