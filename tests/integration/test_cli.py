"""
Integration tests for the CLI commands.
"""

import logging

import pytest
from typer.testing import CliRunner

from recorder_search.config import reset_settings
from recorder_search.main import app


PAGE_HTML = """
<html><body>
  <button>Save</button>
  <button>Cancel</button>
  <button>Delete</button>
  <p>Saved drafts</p>
</body></html>
"""


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo the handlers the CLI installs on the root logger."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def runner():
    """Create a CLI runner."""
    return CliRunner()


@pytest.fixture
def page_file(tmp_path, monkeypatch):
    """A saved page in an empty working directory."""
    monkeypatch.chdir(tmp_path)
    reset_settings()
    path = tmp_path / "page.html"
    path.write_text(PAGE_HTML)
    yield path
    reset_settings()


class TestCLIDetect:
    """Test the 'detect' CLI command."""
    
    def test_detect_locator(self, runner):
        """Test a locator call is recognized."""
        result = runner.invoke(app, ["detect", "getByRole('button')"])
        assert result.exit_code == 0
        assert "locator" in result.stdout
    
    def test_detect_quoted_text(self, runner):
        """Test quotes select text mode and are stripped."""
        result = runner.invoke(app, ["detect", '"Save"'])
        assert result.exit_code == 0
        assert "text" in result.stdout
        assert "Save" in result.stdout
        assert '"Save"' not in result.stdout
    
    def test_detect_plain(self, runner):
        """Test plain text falls back to auto."""
        result = runner.invoke(app, ["detect", "Save"])
        assert "auto" in result.stdout
    
    def test_detect_empty(self, runner):
        """Test a blank query."""
        result = runner.invoke(app, ["detect", "   "])
        assert result.exit_code == 0
        assert "clears" in result.stdout


class TestCLISearch:
    """Test the 'search' CLI command."""
    
    def test_search_locator(self, runner, page_file):
        """Test a locator finds all buttons."""
        result = runner.invoke(app, ["search", str(page_file), "getByRole('button')"])
        assert result.exit_code == 0
        assert "1/3" in result.stdout
        assert "Cancel" in result.stdout
    
    def test_search_text(self, runner, page_file):
        """Test a plain word matches by substring."""
        result = runner.invoke(app, ["search", str(page_file), "save"])
        assert result.exit_code == 0
        assert "1/2" in result.stdout
    
    def test_search_no_match(self, runner, page_file):
        """Test a query that finds nothing."""
        result = runner.invoke(app, ["search", str(page_file), "nothing-like-this"])
        assert result.exit_code == 0
        assert "No match" in result.stdout
    
    def test_search_python_language(self, runner, page_file):
        """Test the python locator flavor."""
        result = runner.invoke(
            app, ["search", str(page_file), "get_by_role('button', name='Delete')", "--language", "python"]
        )
        assert result.exit_code == 0
        assert "1/1" in result.stdout
    
    def test_search_unknown_language(self, runner, page_file):
        """Test an unknown language is rejected."""
        result = runner.invoke(app, ["search", str(page_file), "Save", "--language", "ruby"])
        assert result.exit_code == 1
    
    def test_search_bad_config(self, runner, page_file, monkeypatch):
        """Test a configuration error is reported instead of raised."""
        monkeypatch.setenv("RECORDER_SEARCH_CONFIG", str(page_file.parent / "missing.yaml"))
        result = runner.invoke(app, ["search", str(page_file), "Save"])
        assert result.exit_code == 1
        assert "Config file not found" in result.stdout
    
    def test_search_missing_file(self, runner, tmp_path):
        """Test a missing file exits with an error."""
        result = runner.invoke(app, ["search", str(tmp_path / "missing.html"), "Save"])
        assert result.exit_code == 1
        assert "File not found" in result.stdout


class TestCLIPage:
    """Test the 'page' CLI command."""
    
    def test_page_help(self, runner):
        """Test help lists the browser options."""
        result = runner.invoke(app, ["page", "--help"])
        assert result.exit_code == 0
        assert "--visible" in result.stdout
        assert "--language" in result.stdout


class TestCLIVersion:
    """Test the 'version' CLI command."""
    
    def test_version(self, runner):
        """Test version command."""
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "Recorder Search" in result.stdout
        assert "0.1.0" in result.stdout
