from typing import Iterable

from .errors import MissingInputError

RESUME_MARKER = "---RESUME---"
COVER_LETTER_MARKER = "---COVER_LETTER---"

TAILOR_PROMPT = """Job Description:
{job_text}

Current Resume:
{resume_text}

Missing Skills: {missing_skills}

Based on the job description and current resume above, please create:
1. A professional resume tailored to this job. Highlight the experience that is
   most relevant to the role and address the missing skills where the candidate's
   background supports them. Do not invent employers, dates or degrees.
2. A matching cover letter for the same position, written in a professional tone.

Format your response exactly as follows, with each marker on its own line:
{resume_marker}
[tailored resume content]
{cover_letter_marker}
[cover letter content]"""


def build_prompt(
    job_text: str, resume_text: str = "", missing_skills: Iterable[str] = ()
) -> str:
    """Render the single user message sent to the completion endpoint.

    The two markers in the output-format section are what
    ``split_response`` looks for, so they must not be reworded.
    """
    if not job_text or not job_text.strip():
        raise MissingInputError("A job description is required to build a prompt.")

    return TAILOR_PROMPT.format(
        job_text=job_text,
        resume_text=resume_text or "",
        missing_skills=", ".join(missing_skills),
        resume_marker=RESUME_MARKER,
        cover_letter_marker=COVER_LETTER_MARKER,
    )
