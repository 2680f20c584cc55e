"""Tests for the pagemark command-line entry point."""

from __future__ import annotations

import json
from unittest.mock import patch

from pagemark.__main__ import main
from pagemark.items import ExtractionResult, Metadata
from pagemark.query import FetchError

URL = "https://example.com/post"


def _result(**kwargs) -> ExtractionResult:
    defaults = {"content": "Body text", "title": "Title"}
    defaults.update(kwargs)
    return ExtractionResult(**defaults)


class TestMain:
    def test_markdown_to_stdout(self, capsys):
        with patch("pagemark.__main__.extract", return_value=_result()) as mock_extract:
            code = main([URL])
        assert code == 0
        assert capsys.readouterr().out == "Body text\n"
        assert mock_extract.call_args.args == (URL,)
        assert mock_extract.call_args.kwargs["include_metadata"] is False

    def test_seo_front_matter(self, capsys):
        result = _result(metadata=Metadata(title="Page", description="Desc"))
        with patch("pagemark.__main__.extract", return_value=result) as mock_extract:
            code = main([URL, "--seo"])
        out = capsys.readouterr().out
        assert code == 0
        assert mock_extract.call_args.kwargs["include_metadata"] is True
        assert out.startswith('---\ntitle: "Title"\ndescription: "Desc"\n---\n\nBody text')

    def test_json(self, capsys):
        with patch("pagemark.__main__.extract", return_value=_result()):
            code = main([URL, "-j"])
        assert code == 0
        assert json.loads(capsys.readouterr().out) == {"content": "Body text", "title": "Title"}

    def test_output_file(self, tmp_path):
        target = tmp_path / "page.md"
        with patch("pagemark.__main__.extract", return_value=_result()):
            code = main([URL, "-o", str(target)])
        assert code == 0
        assert target.read_text(encoding="utf-8") == "Body text"

    def test_provider_options(self):
        with patch("pagemark.__main__.extract", return_value=_result()) as mock_extract:
            main([URL, "--timeout", "5", "--retries", "0", "--user-agent", "UA", "--proxy", "http://p:8080"])
        provider = mock_extract.call_args.kwargs["provider"]
        assert (provider.timeout, provider.max_retries, provider.user_agent, provider.proxy) == (
            5, 0, "UA", "http://p:8080",
        )

    def test_fetch_error_exits_non_zero(self, capsys):
        err = FetchError(f"Failed to fetch {URL}: HTTP 404 Not Found", url=URL, status=404)
        with patch("pagemark.__main__.extract", side_effect=err):
            code = main([URL])
        captured = capsys.readouterr()
        assert code == 1
        assert captured.out == ""
        assert "Error: Failed to fetch" in captured.err

    def test_empty_content_still_succeeds(self, capsys):
        with patch("pagemark.__main__.extract", return_value=_result(content="", title=None)):
            code = main([URL])
        assert code == 0
        assert capsys.readouterr().out == "\n"

    def test_write_failure_exits_non_zero(self, tmp_path, capsys):
        target = tmp_path / "missing" / "page.md"
        with patch("pagemark.__main__.extract", return_value=_result()):
            code = main([URL, "-o", str(target)])
        assert code == 1
        assert "Failed to write" in capsys.readouterr().err

    def test_malformed_url_reports_error(self, capsys):
        code = main(["http://[::1/page", "--retries", "0"])
        captured = capsys.readouterr()
        assert code == 1
        assert captured.err.startswith("Error: Failed to fetch http://[::1/page")
