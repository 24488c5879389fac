"""Tests for the command-line entry point."""

import pytest

from armik.cli import main


class TestCli:
    """Run the CLI in-process."""

    def test_solve(self, capsys):
        assert main(["solve", "0", "4", "20"]) == 0
        out = capsys.readouterr().out
        assert "base=0.000000" in out
        assert "status=within" in out
        assert "at_limit=False" in out

    def test_solve_check_round_trips(self, capsys):
        assert main(["solve", "--check", "3", "8", "10"]) == 0
        out = capsys.readouterr().out
        assert "x=3.000000 y=8.000000 z=10.000000" in out

    def test_solve_at_limit(self, capsys):
        main(["solve", "0", "4", "22"])
        out = capsys.readouterr().out
        assert "reach=21.9780" in out
        assert "status=clamped_far" in out

    def test_forward(self, capsys):
        assert main(["forward", "0", "0", "0"]) == 0
        assert "x=0.000000 y=26.000000 z=0.000000" in capsys.readouterr().out

    def test_reach_exit_codes(self, capsys):
        assert main(["reach", "0", "4", "20"]) == 0
        assert main(["reach", "0", "4", "30"]) == 1
        out = capsys.readouterr().out.split()
        assert out == ["reachable", "unreachable"]

    def test_landmark(self, capsys):
        assert main(["landmark", "--scale", "1", "0.5", "0.5", "0"]) == 0
        out = capsys.readouterr().out
        assert "x=0.000000 y=10.000000 z=10.000000" in out

    def test_config_file(self, tmp_path, capsys):
        path = tmp_path / "arm.yaml"
        path.write_text("arm:\n  base_height: 0\n")
        assert main(["--config", str(path), "forward", "0", "0", "0"]) == 0
        assert "y=22.000000" in capsys.readouterr().out

    def test_invalid_config_exits_2(self, tmp_path):
        path = tmp_path / "arm.yaml"
        path.write_text("arm:\n  lower_arm_length: 0\n")
        assert main(["--config", str(path), "forward", "0", "0", "0"]) == 2

    def test_requires_command(self):
        with pytest.raises(SystemExit):
            main([])

    @pytest.mark.parametrize("bad", [".nan", "-2"])
    def test_invalid_config_scale_exits_2(self, tmp_path, capsys, bad):
        path = tmp_path / "arm.yaml"
        path.write_text(f"tracking:\n  scale: {bad}\n")
        assert main(["--config", str(path), "landmark", "0.5", "0.5", "0"]) == 2
        assert capsys.readouterr().out == ""

    @pytest.mark.parametrize("bad", ["nan", "0", "-1.5"])
    def test_invalid_scale_override_exits_2(self, bad):
        assert main(["landmark", f"--scale={bad}", "0.5", "0.5", "0"]) == 2
