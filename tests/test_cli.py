from typer.testing import CliRunner

from pagevault.cli import app
from tests.helpers.page_factory import read_pdf_pages, write_page_files


class TestCLIBasicFunctionality:
    def test_help_command_works(self):
        """Test that --help shows usage information."""
        runner = CliRunner()
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "export" in result.stdout
        assert "inspect" in result.stdout

    def test_export_help_lists_options(self):
        runner = CliRunner()
        result = runner.invoke(app, ["export", "--help"])

        assert result.exit_code == 0
        assert "--out" in result.stdout
        assert "--name" in result.stdout
        assert "--prefix" in result.stdout

    def test_successful_export(self, tmp_path):
        snapshots = tmp_path / "snapshots"
        write_page_files(snapshots, {2: (80, 120), 1: (80, 120)})
        out = tmp_path / "out"

        runner = CliRunner()
        result = runner.invoke(app, ["export", str(snapshots), "--out", str(out), "--name", "book.pdf"])

        assert result.exit_code == 0
        assert "Exported 2 pages" in result.stdout
        assert "portrait" in result.stdout
        assert read_pdf_pages(out / "book.pdf") == [(60, 90), (60, 90)]

    def test_custom_prefix(self, tmp_path):
        write_page_files(tmp_path, {1: (40, 40)}, prefix="page")

        runner = CliRunner()
        result = runner.invoke(app, ["export", str(tmp_path), "--out", str(tmp_path / "out"), "--prefix", "page"])

        assert result.exit_code == 0
        assert (tmp_path / "out" / "ebook.pdf").exists()

    def test_empty_directory_exits_with_warning(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(app, ["export", str(tmp_path), "--out", str(tmp_path / "out")])

        assert result.exit_code == 1
        assert not (tmp_path / "out" / "ebook.pdf").exists()

    def test_missing_directory(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(app, ["export", str(tmp_path / "missing")])

        assert result.exit_code == 2

    def test_inspect_exported_pdf(self, tmp_path):
        write_page_files(tmp_path, {1: (80, 120), 2: (80, 120), 3: (80, 120)})
        runner = CliRunner()
        runner.invoke(app, ["export", str(tmp_path), "--out", str(tmp_path / "out")])

        result = runner.invoke(app, ["inspect", str(tmp_path / "out" / "ebook.pdf")])

        assert result.exit_code == 0
        assert "Pages: 3" in result.stdout
        assert "60x90pt" in result.stdout

    def test_inspect_nonexistent_file(self):
        runner = CliRunner()
        result = runner.invoke(app, ["inspect", "nonexistent.pdf"])

        assert result.exit_code == 2
