"""Resume Maker: tailor a résumé and cover letter to a job description."""

__version__ = "0.1.0"
