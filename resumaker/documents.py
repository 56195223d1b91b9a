import logging
import os

import requests
from bs4 import BeautifulSoup

from .errors import MissingInputError, ResumeFileError

logger = logging.getLogger(__name__)

ACCEPTED_EXTENSIONS = (".pdf", ".doc", ".docx", ".txt")

RESUME_FILENAME = "tailored-resume.txt"
COVER_LETTER_FILENAME = "cover-letter.txt"

USER_AGENT = "resumaker/0.1"
PAGE_CHROME_TAGS = ["script", "style", "noscript", "nav", "footer", "header", "form"]
# Keeps the prompt within a typical context window
MAX_POSTING_CHARS = 8000


def read_resume(path: str) -> str:
    """Read an uploaded resume as text.

    Only plain text decodes meaningfully. PDF and Word files are accepted
    but read byte-for-byte, so their content usually comes out garbled.
    """
    extension = os.path.splitext(path)[1].lower()
    if extension not in ACCEPTED_EXTENSIONS:
        raise ResumeFileError(
            f"Unsupported file type '{extension or path}'. "
            f"Accepted: {', '.join(ACCEPTED_EXTENSIONS)}"
        )

    if not os.path.exists(path):
        raise ResumeFileError(f"Resume file not found: {path}")

    try:
        with open(path, "rb") as f:
            raw = f.read()
    except OSError as e:
        raise ResumeFileError(f"Failed to read resume: {e}") from e

    if extension != ".txt":
        logger.warning("%s is not plain text; its content is passed through undecoded", path)

    return raw.decode("utf-8", errors="replace")


def save_document(content: str, filename: str, out_dir: str = ".") -> str:
    """Write a generated document to ``out_dir`` and return its path."""
    os.makedirs(out_dir, exist_ok=True)
    path = os.path.join(out_dir, filename)
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)
    logger.info("Saved %s (%d chars)", path, len(content))
    return path


def posting_text(html: str, max_chars: int = MAX_POSTING_CHARS) -> str:
    """Visible text of a posting page, one block per line."""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(PAGE_CHROME_TAGS):
        tag.decompose()

    lines = [line for line in soup.get_text(separator="\n", strip=True).splitlines() if line]
    return "\n".join(lines)[:max_chars]


def fetch_job_posting(url: str, timeout: float = 15) -> str:
    """Download a job posting and return its visible text.

    HTTP failures propagate as ``requests`` exceptions. A page that
    renders no text (for example one built entirely by JavaScript)
    raises MissingInputError so the caller can ask for pasted text.
    """
    if not url.startswith(("http://", "https://")):
        url = "https://" + url

    response = requests.get(url, headers={"User-Agent": USER_AGENT}, timeout=timeout)
    response.raise_for_status()

    text = posting_text(response.text)
    if not text:
        raise MissingInputError(
            f"No readable text found at {url}. Paste the job description instead."
        )
    logger.info("Fetched %d chars of posting text from %s", len(text), url)
    return text
