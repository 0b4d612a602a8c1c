"""
Tests for the defi-composer command line.
"""
import pytest

from defi_composer.cli.main import main


class TestKindsCommand:
    """Tests for `defi-composer kinds`."""

    def test_lists_all_kinds(self, capsys):
        """Test every kind is printed with its ports."""
        assert main(["kinds"]) == 0
        out = capsys.readouterr().out
        for kind in ("lendingPool", "ammPool", "staking", "vault"):
            assert kind in out
        assert "Loan:asset" in out

    def test_category_filter(self, capsys):
        """Test category restricts the listing."""
        assert main(["kinds", "--category", "Exchange"]) == 0
        out = capsys.readouterr().out
        assert "ammPool" in out
        assert "lendingPool" not in out

    def test_no_match(self, capsys):
        """Test exit status when nothing matches."""
        assert main(["kinds", "--search", "options"]) == 1


class TestDemoCommand:
    """Tests for `defi-composer demo`."""

    def test_demo_prints_report_and_code(self, capsys):
        """Test the connected demo fails the strict check but still exports."""
        status = main(["demo", "--name", "Demo Protocol"])
        out = capsys.readouterr().out

        assert status == 2
        assert "Validation: invalid" in out
        assert "Resource type mismatch" in out
        assert "module demo_protocol {" in out

    def test_demo_without_connection(self, capsys):
        """Test the unconnected demo is valid with orphan warnings."""
        assert main(["demo", "--no-connect"]) == 0
        out = capsys.readouterr().out
        assert "2 warning(s)" in out

    def test_demo_writes_file(self, tmp_path, capsys):
        """Test --output writes the module."""
        target = tmp_path / "demo.move"
        main(["demo", "--no-connect", "--output", str(target)])
        assert target.read_text(encoding="utf-8").startswith("// Generated Move code for composition: Leveraged LP")
        assert "Wrote" in capsys.readouterr().out

    def test_invalid_environment(self, monkeypatch, capsys):
        """Test bad environment settings exit early."""
        monkeypatch.setenv("DEFI_COMPOSER_INDENT", "wide")
        assert main(["kinds"]) == 1
        assert "INDENT" in capsys.readouterr().err

    def test_missing_command(self):
        """Test argparse rejects a bare invocation."""
        with pytest.raises(SystemExit):
            main([])
