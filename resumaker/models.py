from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class AnalysisState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    REQUESTING = "requesting"
    PARSING = "parsing"
    COMPLETE = "complete"
    FAILED = "failed"


# States from which a new analysis may start
RESTING_STATES = frozenset({AnalysisState.IDLE, AnalysisState.COMPLETE, AnalysisState.FAILED})


@dataclass
class AnalysisRequest:
    """What the user submitted with one "Analyze" action."""
    job_text: str = ""
    job_url: str = ""
    resume_text: str = ""


@dataclass
class AnalysisOutcome:
    """Result of a successful analysis. Held in memory only."""
    resume_content: str
    cover_letter: str
    missing_skills: list[str] = field(default_factory=list)


@dataclass
class Notification:
    """The single user-visible message a failed analysis produces."""
    title: str
    description: str
    kind: str


@dataclass
class Transition:
    """Record of one state change of the orchestrator."""
    source: AnalysisState
    target: AnalysisState
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())
