"""
Tests for the command line entry point.
"""

import main


class TestCli:

    def test_stats(self, data_dir, capsys):
        assert main.main(["--data-dir", str(data_dir), "stats"]) == 0
        out = capsys.readouterr().out
        assert "East & Southeast Asia" in out
        assert "Countries & territories: 11" in out

    def test_search(self, data_dir, capsys):
        assert main.main(["--data-dir", str(data_dir), "search", "Tokyo"]) == 0
        assert "1. Japan" in capsys.readouterr().out

    def test_search_without_results(self, data_dir, capsys):
        assert main.main(["--data-dir", str(data_dir), "search", "qwxzv"]) == 0
        assert "No countries found" in capsys.readouterr().out

    def test_build(self, data_dir, tmp_path):
        output = tmp_path / "site"
        assert main.main(["--data-dir", str(data_dir), "build", "--output", str(output)]) == 0
        assert (output / "country" / "japan" / "index.html").is_file()

    def test_missing_dataset(self, tmp_path):
        assert main.main(["--data-dir", str(tmp_path / "missing"), "stats"]) == 1
