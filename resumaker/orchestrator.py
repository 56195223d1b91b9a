import logging
import threading
from typing import Callable

import requests

from .client import CompletionClient
from .config import DEFAULT_PROVIDER, REQUEST_TIMEOUT
from .documents import fetch_job_posting
from .errors import MissingCredentialError, MissingInputError, TailorError, TransportError
from .matching import extract_keywords, find_missing_skills
from .models import (
    RESTING_STATES,
    AnalysisOutcome,
    AnalysisRequest,
    AnalysisState,
    Notification,
    Transition,
)
from .prompts import build_prompt
from .splitter import split_response

logger = logging.getLogger(__name__)


def log_notification(notification: Notification) -> None:
    logger.warning("%s: %s", notification.title, notification.description)


class Orchestrator:
    """Runs one "Analyze" action end to end as an explicit state machine.

        IDLE -> VALIDATING -> REQUESTING -> PARSING -> COMPLETE
                    |             |            |
                    +-------------+------------+--> FAILED

    Only one analysis is in flight at a time. Calling ``analyze`` while
    VALIDATING, REQUESTING or PARSING is ignored and returns None.
    COMPLETE and FAILED are resting states: a new analysis may start
    from them, and ``reset`` brings the machine back to IDLE.

    Every ``TailorError`` is recovered here and surfaced through
    ``notify`` as a single Notification.
    """

    def __init__(
        self,
        key_source: Callable[[], str | None],
        provider: str = DEFAULT_PROVIDER,
        client: CompletionClient | None = None,
        notify: Callable[[Notification], None] = log_notification,
        fetch_job_urls: bool = False,
        timeout: float = REQUEST_TIMEOUT,
    ):
        self.key_source = key_source
        self.provider = provider
        self.notify = notify
        self.fetch_job_urls = fetch_job_urls
        self.timeout = timeout
        self._client = client
        self._lock = threading.Lock()
        self._state = AnalysisState.IDLE
        self.history: list[Transition] = []
        self.outcome: AnalysisOutcome | None = None
        self.error: TailorError | None = None
        self.notification: Notification | None = None

    @property
    def state(self) -> AnalysisState:
        return self._state

    @property
    def busy(self) -> bool:
        return self._state not in RESTING_STATES

    def _transition(self, expected, target: AnalysisState) -> bool:
        """Move to ``target`` only if the current state is one of ``expected``."""
        with self._lock:
            if self._state not in expected:
                return False
            self.history.append(Transition(source=self._state, target=target))
            self._state = target
        logger.debug("Analysis state -> %s", target.value)
        return True

    def reset(self) -> bool:
        """Return to IDLE and drop the last outcome. Refused while busy."""
        if not self._transition(RESTING_STATES, AnalysisState.IDLE):
            return False
        self.outcome = None
        self.error = None
        self.notification = None
        return True

    def analyze(self, request: AnalysisRequest) -> AnalysisOutcome | None:
        if not self._transition(RESTING_STATES, AnalysisState.VALIDATING):
            logger.warning("Analysis already in progress (%s); ignoring request", self._state.value)
            return None

        self.outcome = None
        self.error = None
        self.notification = None

        # Form fields may arrive as None
        request = AnalysisRequest(
            job_text=request.job_text or "",
            job_url=request.job_url or "",
            resume_text=request.resume_text or "",
        )

        try:
            job_text, api_key = self._validate(request)

            self._transition({AnalysisState.VALIDATING}, AnalysisState.REQUESTING)
            if self.fetch_job_urls and not request.job_text.strip():
                job_text = self._fetch(job_text)

            missing_skills = find_missing_skills(
                extract_keywords(job_text), extract_keywords(request.resume_text)
            )
            prompt = build_prompt(job_text, request.resume_text, missing_skills)
            raw = self._complete(prompt, api_key)

            self._transition({AnalysisState.REQUESTING}, AnalysisState.PARSING)
            resume_content, cover_letter = split_response(raw)
        except TailorError as e:
            self._fail(e)
            return None
        except Exception:
            # Unexpected failures still release the machine before propagating
            self._transition({self._state}, AnalysisState.FAILED)
            raise

        outcome = AnalysisOutcome(
            resume_content=resume_content,
            cover_letter=cover_letter,
            missing_skills=missing_skills,
        )
        self.outcome = outcome
        self._transition({AnalysisState.PARSING}, AnalysisState.COMPLETE)
        logger.info("Analysis complete: %d missing skills", len(missing_skills))
        return outcome

    def _validate(self, request: AnalysisRequest) -> tuple[str, str]:
        if not request.job_text.strip() and not request.job_url.strip():
            raise MissingInputError("Please provide a job description or a job posting URL.")

        api_key = self.key_source()
        if not api_key:
            raise MissingCredentialError("Please provide an API key before analyzing.")

        # A URL is forwarded verbatim unless fetch_job_urls is enabled
        job_text = request.job_text if request.job_text.strip() else request.job_url
        return job_text, api_key

    def _fetch(self, url: str) -> str:
        try:
            return fetch_job_posting(url.strip(), timeout=self.timeout)
        except requests.HTTPError as e:
            raise TransportError(e.response.status_code, e.response.reason or "") from e
        except requests.RequestException as e:
            raise TransportError(None, f"Failed to fetch URL: {e}") from e

    def _complete(self, prompt: str, api_key: str) -> str:
        client = self._client or CompletionClient(
            api_key=api_key, provider=self.provider, timeout=self.timeout
        )
        return client.complete(prompt)

    def _fail(self, error: TailorError) -> None:
        self.error = error
        self.outcome = None
        self._transition({self._state}, AnalysisState.FAILED)
        self.notification = Notification(
            title=error.title, description=error.description, kind=error.kind
        )
        self.notify(self.notification)
