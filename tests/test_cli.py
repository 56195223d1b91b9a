from unittest.mock import MagicMock, patch

from click.testing import CliRunner

from resumaker.cli import cli
from resumaker.credentials import CredentialStore
from resumaker.prompts import COVER_LETTER_MARKER, RESUME_MARKER


def fake_openai(content: str) -> MagicMock:
    """An OpenAI class stand-in whose client returns ``content``."""
    message = MagicMock()
    message.content = content
    mock_client = MagicMock()
    mock_client.chat.completions.create.return_value = MagicMock(
        choices=[MagicMock(message=message)]
    )
    return MagicMock(return_value=mock_client)


class TestAnalyzeCommand:
    def test_writes_both_documents(self, tmp_path, monkeypatch):
        monkeypatch.setenv("DEEPSEEK_API_KEY", "sk-test")
        resume = tmp_path / "resume.txt"
        resume.write_text("Python developer", encoding="utf-8")
        out_dir = tmp_path / "out"
        completion = f"{RESUME_MARKER}\nTailored resume\n{COVER_LETTER_MARKER}\nDear team,"

        with patch("resumaker.client.OpenAI", fake_openai(completion)):
            result = CliRunner().invoke(cli, [
                "analyze",
                "--job-text", "Python developer with Terraform",
                "--resume", str(resume),
                "--out-dir", str(out_dir),
            ])

        assert result.exit_code == 0, result.output
        assert "Missing skills: terraform" in result.output
        assert (out_dir / "tailored-resume.txt").read_text(encoding="utf-8") == "Tailored resume"
        assert (out_dir / "cover-letter.txt").read_text(encoding="utf-8") == "Dear team,"

    def test_missing_input_exits_nonzero(self, tmp_path, monkeypatch):
        monkeypatch.setenv("DEEPSEEK_API_KEY", "sk-test")
        mock_openai = fake_openai("unused")

        with patch("resumaker.client.OpenAI", mock_openai):
            result = CliRunner().invoke(cli, ["analyze", "--out-dir", str(tmp_path)])

        assert result.exit_code == 1
        assert "Missing job description" in result.output
        mock_openai.assert_not_called()

    def test_missing_key_exits_nonzero(self, tmp_path, monkeypatch):
        monkeypatch.delenv("DEEPSEEK_API_KEY", raising=False)
        monkeypatch.setattr("resumaker.credentials.RESUMAKER_HOME", str(tmp_path))

        result = CliRunner().invoke(cli, ["analyze", "--job-text", "Python developer"])

        assert result.exit_code == 1
        assert "Missing API key" in result.output

    def test_bad_response_is_reported(self, tmp_path, monkeypatch):
        monkeypatch.setenv("DEEPSEEK_API_KEY", "sk-test")

        with patch("resumaker.client.OpenAI", fake_openai("no markers here")):
            result = CliRunner().invoke(cli, [
                "analyze", "--job-text", "Python developer", "--out-dir", str(tmp_path),
            ])

        assert result.exit_code == 1
        assert "delimiter not found" in result.output
        assert not (tmp_path / "tailored-resume.txt").exists()

    def test_job_file_not_found(self):
        result = CliRunner().invoke(cli, ["analyze", "--job-file", "/nonexistent/job.txt"])

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_job_file_not_utf8(self, tmp_path):
        job = tmp_path / "job.txt"
        job.write_bytes(b"Python developer \xff\xfe")

        result = CliRunner().invoke(cli, ["analyze", "--job-file", str(job)])

        assert result.exit_code == 1
        assert "not UTF-8 text" in result.output
        assert not isinstance(result.exception, UnicodeDecodeError)

    def test_unsupported_resume(self, tmp_path):
        resume = tmp_path / "resume.png"
        resume.write_bytes(b"\x89PNG")

        result = CliRunner().invoke(cli, [
            "analyze", "--job-text", "Python developer", "--resume", str(resume),
        ])

        assert result.exit_code == 1
        assert "Unsupported file type" in result.output


class TestGapCommand:
    def test_reports_missing_skills(self, tmp_path):
        job = tmp_path / "job.txt"
        job.write_text("Python Docker Kubernetes", encoding="utf-8")
        resume = tmp_path / "resume.txt"
        resume.write_text("Python and Docker", encoding="utf-8")

        result = CliRunner().invoke(cli, ["gap", "--job-file", str(job), "--resume", str(resume)])

        assert result.exit_code == 0, result.output
        assert "Missing skills:  kubernetes" in result.output
        assert "66.7%" in result.output

    def test_job_file_not_utf8(self, tmp_path):
        job = tmp_path / "job.txt"
        job.write_bytes(b"\xff\xfe Python")
        resume = tmp_path / "resume.txt"
        resume.write_text("Python", encoding="utf-8")

        result = CliRunner().invoke(cli, ["gap", "--job-file", str(job), "--resume", str(resume)])

        assert result.exit_code == 1
        assert "not UTF-8 text" in result.output


class TestSetKeyCommand:
    def test_stores_key(self, tmp_path, monkeypatch):
        monkeypatch.setattr("resumaker.credentials.RESUMAKER_HOME", str(tmp_path))

        result = CliRunner().invoke(cli, ["set-key", "sk-stored"])

        assert result.exit_code == 0
        assert CredentialStore(str(tmp_path / "credentials.json")).get() == "sk-stored"
