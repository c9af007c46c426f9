"""Data models shared by the action cache, the resolver and the orchestrator."""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional


@dataclass
class ElementSnapshot:
    """One visible interactive element on the current page."""
    id: int
    tag: str
    role: Optional[str]
    label: str
    xpath: str
    input_type: Optional[str]
    disabled: bool
    bbox: Optional[Dict]  # {x, y, width, height}
    context: Optional[str]  # nearest legend / form / parent text


@dataclass
class PlannerCandidate:
    """One candidate the LLM proposes for an instruction, keyed by element id."""
    element_id: Optional[int]
    method: str
    arguments: List[str] = field(default_factory=list)
    description: str = ""


@dataclass
class CachedAction:
    """A replayable UI action: locator + operation + parameters.

    ``selector`` is an ``xpath=...`` Playwright selector, or None for
    page-level actions such as keyboard presses.
    """
    selector: Optional[str]
    method: str
    arguments: List[str] = field(default_factory=list)
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CachedAction":
        return cls(
            selector=data.get("selector"),
            method=data["method"],
            arguments=[str(a) for a in data.get("arguments") or []],
            description=data.get("description", ""),
        )


@dataclass
class SessionOutcome:
    """Result of one target's run: either ``result`` or ``error`` is set."""
    target: str
    result: Optional[Dict[str, Any]] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None
