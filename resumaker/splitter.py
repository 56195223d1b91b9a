from .errors import ResponseFormatError
from .prompts import COVER_LETTER_MARKER, RESUME_MARKER


def split_response(text: str | None) -> tuple[str, str]:
    """Recover the (resume, cover letter) pair from a completion.

    Splits at the first cover-letter marker only; any later markers stay
    inside the cover letter rather than being dropped.
    """
    if not isinstance(text, str):
        raise ResponseFormatError("completion is not text")

    head, delimiter, tail = text.partition(COVER_LETTER_MARKER)
    if not delimiter:
        raise ResponseFormatError(f"delimiter not found: {COVER_LETTER_MARKER}")

    resume = head.replace(RESUME_MARKER, "", 1).strip()
    cover_letter = tail.strip()

    if not resume:
        raise ResponseFormatError("resume section is empty")
    if not cover_letter:
        raise ResponseFormatError("cover letter section is empty")

    return resume, cover_letter
