"""Unit tests for the src.cli.insights command-line tool."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import httpx
import pytest

from src.cli import insights as cli
from src.config.settings import Settings
from src.models.document import RemoteContent
from tests.helpers import make_docx_bytes


@pytest.fixture(autouse=True)
def _quiet_cli(settings: Settings):
    """Keep the CLI on test settings and leave global logging config alone."""
    with (
        patch.object(cli, "Settings", return_value=settings),
        patch.object(cli, "_configure_cli_logging"),
    ):
        yield


# ======================================================================
# Argument parsing
# ======================================================================


class TestParser:
    def test_requires_subcommand(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            cli.main([])
        assert exc_info.value.code == 2

    def test_ask_requires_files(self) -> None:
        with pytest.raises(SystemExit):
            cli.main(["ask", "question only"])

    def test_ask_options(self) -> None:
        args = cli._build_parser().parse_args(
            ["--json", "ask", "What?", "a.txt", "b.pdf", "--provider", "openai"]
        )
        assert args.json_output is True
        assert args.files == ["a.txt", "b.pdf"]
        assert args.provider == "openai"


# ======================================================================
# extract
# ======================================================================


class TestExtract:
    def test_prints_normalized_text(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        path = tmp_path / "notes.txt"
        path.write_bytes(b"Hello   there\r\n\r\n\r\nGeneral")

        assert cli.main(["extract", str(path)]) == 0
        assert capsys.readouterr().out == "Hello there\n\nGeneral\n"

    def test_json_output_includes_metadata(
        self, tmp_path: Path, capsys: pytest.CaptureFixture
    ) -> None:
        path = tmp_path / "plan.docx"
        path.write_bytes(make_docx_bytes(["Roadmap"]))

        assert cli.main(["--json", "extract", str(path)]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["content"] == "Roadmap"
        assert payload["metadata"]["extension"] == ".docx"
        assert payload["metadata"]["type"] == "Microsoft Word Document (DOCX)"

    def test_unsupported_file_exits_1(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        path = tmp_path / "sheet.xlsx"
        path.write_bytes(b"data")

        assert cli.main(["extract", str(path)]) == 1
        assert "Unsupported file type" in capsys.readouterr().err

    def test_missing_file_exits_1(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        assert cli.main(["extract", str(tmp_path / "absent.txt")]) == 1
        assert capsys.readouterr().err.startswith("Error:")


# ======================================================================
# fetch
# ======================================================================


class TestFetch:
    def test_prints_title_and_content(self, capsys: pytest.CaptureFixture) -> None:
        page = RemoteContent(title="Runbook", content="Restart the service.")
        with patch(
            "src.providers.content.confluence_provider.ConfluenceContentProvider.fetch",
            return_value=page,
        ) as fetch:
            code = cli.main(
                ["fetch", "https://acme.atlassian.net/wiki/pages/1", "--email", "e", "--token", "t"]
            )

        assert code == 0
        fetch.assert_awaited_once_with(
            "https://acme.atlassian.net/wiki/pages/1", token="t", email="e"
        )
        assert capsys.readouterr().out == "Runbook\n=======\nRestart the service.\n"

    def test_bad_url_exits_1(self, capsys: pytest.CaptureFixture) -> None:
        assert cli.main(["fetch", "https://acme.atlassian.net/wiki/home"]) == 1
        assert "Unable to extract page ID" in capsys.readouterr().err

    def test_remote_failure_exits_1(self, capsys: pytest.CaptureFixture) -> None:
        request = httpx.Request("GET", "https://acme.atlassian.net")
        with patch(
            "src.providers.content.confluence_provider.httpx.AsyncClient.request",
            side_effect=httpx.ConnectError("refused", request=request),
        ):
            assert cli.main(["fetch", "https://acme.atlassian.net/wiki/pages/1"]) == 1
        assert "confluence" in capsys.readouterr().err


# ======================================================================
# ask / providers
# ======================================================================


class TestAsk:
    def test_demo_answer_names_files(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        first = tmp_path / "a.txt"
        second = tmp_path / "b.txt"
        first.write_text("alpha", encoding="utf-8")
        second.write_text("beta", encoding="utf-8")

        code = cli.main(
            ["--config", str(tmp_path / "absent.yaml"), "ask", "What?", str(first), str(second)]
        )

        assert code == 0
        out = capsys.readouterr().out
        assert "**Demo Mode Response**" in out
        assert "• a.txt (upload)" in out
        assert "• b.txt (upload)" in out

    def test_json_output(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        path = tmp_path / "a.txt"
        path.write_text("alpha", encoding="utf-8")

        assert cli.main(["--json", "ask", "What?", str(path), "--provider", "demo"]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["provider"] == "demo"
        assert payload["documents_analyzed"] == 1
        assert payload["query"] == "What?"

    def test_unconfigured_provider_exits_1(
        self, tmp_path: Path, capsys: pytest.CaptureFixture
    ) -> None:
        path = tmp_path / "a.txt"
        path.write_text("alpha", encoding="utf-8")

        assert cli.main(["ask", "What?", str(path), "--provider", "openai"]) == 1
        assert "OpenAI API key not configured" in capsys.readouterr().err

    def test_unknown_provider_exits_1(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        path = tmp_path / "a.txt"
        path.write_text("alpha", encoding="utf-8")

        assert cli.main(["ask", "What?", str(path), "--provider", "eliza"]) == 1
        assert "Unsupported AI provider" in capsys.readouterr().err

    def test_blank_query_exits_1(self, tmp_path: Path) -> None:
        path = tmp_path / "a.txt"
        path.write_text("alpha", encoding="utf-8")
        assert cli.main(["ask", "   ", str(path)]) == 1


class TestProviders:
    def test_lists_available(self, capsys: pytest.CaptureFixture) -> None:
        assert cli.main(["--json", "providers"]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload == {"provider": "demo", "available_providers": ["ollama", "demo"]}
