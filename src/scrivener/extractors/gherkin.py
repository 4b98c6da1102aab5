# src/scrivener/extractors/gherkin.py
"""Line-driven Gherkin extractor.

The scan keeps an explicit :class:`ScanState` plus two side buffers: the tags
of the latest tag line, waiting for the next scenario, and the kind of the
last step seen, which is where ``And`` / ``But`` lines attach. Features and
scenarios are accumulated in mutable drafts and frozen into models when a
later line closes them.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Literal

from scrivener.core.logging import get_logger
from scrivener.core.text import is_blank, span_for_range, to_lines
from scrivener.models import GherkinExtractionResult, GherkinFeature, GherkinScenario

logger = get_logger(__name__)

StepKind = Literal["given", "when", "then"]

IMPLICIT_FEATURE_NAME = "Implicit Feature"
NO_FEATURES_FINDING = "No Gherkin Feature/Scenario blocks found."

FEATURE_RE = re.compile(r"^feature\s*:\s*(?P<name>.+)$", re.IGNORECASE)
SCENARIO_RE = re.compile(r"^(?:scenario|scenario outline)\s*:\s*(?P<name>.+)$", re.IGNORECASE)
BACKGROUND_RE = re.compile(r"^background\s*:", re.IGNORECASE)
STEP_RE = re.compile(r"^(?P<kind>given|when|then)\s+(?P<text>.*)$", re.IGNORECASE)
CONTINUATION_RE = re.compile(r"^(?:and|but)\s+(?P<text>.*)$", re.IGNORECASE)


class ScanState(str, Enum):
    OUTSIDE = "outside"
    IN_FEATURE = "in_feature"
    IN_SCENARIO = "in_scenario"


@dataclass
class _ScenarioDraft:
    name: str
    start_line: int
    tags: list[str]
    steps: dict[str, list[str]] = field(
        default_factory=lambda: {"given": [], "when": [], "then": []}
    )

    def freeze(self, end_line: int) -> GherkinScenario:
        return GherkinScenario(
            name=self.name,
            tags=self.tags,
            given=self.steps["given"],
            when=self.steps["when"],
            then=self.steps["then"],
            spans=[span_for_range(self.start_line, max(self.start_line, end_line))],
        )


@dataclass
class _FeatureDraft:
    name: str
    start_line: int
    description_lines: list[str] = field(default_factory=list)
    scenarios: list[GherkinScenario] = field(default_factory=list)

    def freeze(self, end_line: int) -> GherkinFeature:
        return GherkinFeature(
            name=self.name,
            description="\n".join(self.description_lines) or None,
            scenarios=self.scenarios,
            spans=[span_for_range(self.start_line, max(self.start_line, end_line))],
        )


def parse_tags(line: str) -> list[str]:
    """Return the ``@``-prefixed tokens of a tag line."""
    return [token for token in line.split() if token.startswith("@")]


@dataclass
class _Scanner:
    features: list[GherkinFeature] = field(default_factory=list)
    findings: list[str] = field(default_factory=list)
    feature: _FeatureDraft | None = None
    scenario: _ScenarioDraft | None = None
    pending_tags: list[str] = field(default_factory=list)
    last_step: StepKind | None = None

    @property
    def state(self) -> ScanState:
        if self.scenario is not None:
            return ScanState.IN_SCENARIO
        if self.feature is not None:
            return ScanState.IN_FEATURE
        return ScanState.OUTSIDE

    def close_scenario(self, end_line: int) -> None:
        if self.feature is None or self.scenario is None:
            return
        self.feature.scenarios.append(self.scenario.freeze(end_line))
        self.scenario = None
        self.last_step = None

    def close_feature(self, end_line: int) -> None:
        if self.feature is None:
            return
        self.close_scenario(end_line)
        self.features.append(self.feature.freeze(end_line))
        self.feature = None

    def open_feature(self, name: str, line_no: int) -> None:
        self.close_feature(line_no - 1)
        self.feature = _FeatureDraft(name=name, start_line=line_no)

    def open_scenario(self, name: str, line_no: int) -> None:
        if self.feature is None:
            self.feature = _FeatureDraft(name=IMPLICIT_FEATURE_NAME, start_line=line_no)
        self.close_scenario(line_no - 1)
        self.scenario = _ScenarioDraft(name=name, start_line=line_no, tags=self.pending_tags)
        self.pending_tags = []
        self.last_step = None

    def take_step(self, scenario: _ScenarioDraft, trimmed: str) -> bool:
        """Record a step line on ``scenario``; False if it is not one."""
        step = STEP_RE.match(trimmed)
        if step:
            kind: StepKind = step.group("kind").lower()  # type: ignore[assignment]
            scenario.steps[kind].append(step.group("text"))
            self.last_step = kind
            return True
        continuation = CONTINUATION_RE.match(trimmed)
        if continuation and self.last_step is not None:
            scenario.steps[self.last_step].append(continuation.group("text"))
            return True
        return False

    def feed(self, line: str, line_no: int) -> None:
        if is_blank(line):
            return
        trimmed = line.strip()

        if trimmed.startswith("@"):
            self.pending_tags = parse_tags(trimmed)
            return

        feature = FEATURE_RE.match(trimmed)
        if feature:
            self.open_feature(feature.group("name").strip(), line_no)
            return

        scenario = SCENARIO_RE.match(trimmed)
        if scenario:
            self.open_scenario(scenario.group("name").strip(), line_no)
            return

        state = self.state
        if state is ScanState.IN_SCENARIO and self.scenario is not None:
            if not self.take_step(self.scenario, trimmed):
                self.findings.append(f"Line {line_no}: Unrecognized scenario line: {trimmed}")
            return

        if (
            state is ScanState.IN_FEATURE
            and self.feature is not None
            and not BACKGROUND_RE.match(trimmed)
        ):
            self.feature.description_lines.append(trimmed)
            return

        self.findings.append(f"Line {line_no}: Unrecognized line: {trimmed}")


def extract_gherkin(text: str, tenant_id: str | None = None) -> GherkinExtractionResult:
    """Extract Feature/Scenario blocks with their Given/When/Then steps."""
    lines = to_lines(text)
    scanner = _Scanner()

    for index, line in enumerate(lines):
        scanner.feed(line, index + 1)

    scanner.close_feature(len(lines))

    findings = scanner.findings
    if not scanner.features:
        findings.append(NO_FEATURES_FINDING)

    logger.debug(
        "Extracted gherkin | tenant=%s features=%d scenarios=%d findings=%d",
        tenant_id,
        len(scanner.features),
        sum(len(f.scenarios) for f in scanner.features),
        len(findings),
    )
    return GherkinExtractionResult(
        tenant_id=tenant_id,
        features=scanner.features,
        non_gherkin_findings=findings,
    )


__all__ = ["extract_gherkin", "parse_tags", "ScanState"]
