"""Tests for the command line interface."""

import pytest
from taskperm import cli, sequential
from taskperm.cli import main


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("TASKPERM_EXECUTOR", "TASKPERM_MAX_WORKERS", "TASKPERM_TASK_WARNING"):
        monkeypatch.delenv(name, raising=False)


class TestMain:
    def test_sequential_run(self, capsys):
        main(["abc", "0"])
        out = capsys.readouterr().out
        assert out.startswith("Permuting abc\n\n")
        assert "tasks created" not in out
        assert "6 permutations generated in" in out
        assert out.rstrip().endswith("milliseconds")

    def test_concurrent_run(self, capsys):
        main(["abcd", "2"])
        out = capsys.readouterr().out
        assert "16 tasks created." in out
        assert "24 permutations generated in" in out

    def test_show(self, capsys):
        main(["abc", "1", "--show"])
        lines = capsys.readouterr().out.splitlines()
        shown = lines[2:8]
        assert sorted(shown) == sorted(["abc", "acb", "bac", "bca", "cab", "cba"])
        assert "3 tasks created." in lines

    def test_trailing_show_argument(self, capsys):
        main(["ab", "0", "show"])
        lines = capsys.readouterr().out.splitlines()
        assert sorted(lines[2:4]) == ["ab", "ba"]
        assert "2 permutations generated in" in lines[-1]

    def test_without_show_omits_permutations(self, capsys):
        main(["ab", "1"])
        lines = capsys.readouterr().out.splitlines()
        assert "ab" not in lines
        assert "ba" not in lines

    def test_process_executor(self, capsys):
        main(["abcd", "1", "--executor", "process", "--max-workers", "2"])
        out = capsys.readouterr().out
        assert "4 tasks created." in out
        assert "24 permutations generated in" in out

    @pytest.mark.parametrize("depth", ["-1", "x", "1.5"])
    def test_invalid_depth(self, depth, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["abc", depth])
        assert excinfo.value.code == 2
        assert "depth" in capsys.readouterr().err

    def test_missing_arguments(self):
        with pytest.raises(SystemExit) as excinfo:
            main(["abc"])
        assert excinfo.value.code == 2

    def test_too_many_arguments(self):
        with pytest.raises(SystemExit) as excinfo:
            main(["abc", "1", "extra"])
        assert excinfo.value.code == 2

    def test_bad_env_config(self, monkeypatch):
        monkeypatch.setenv("TASKPERM_EXECUTOR", "fiber")
        with pytest.raises(SystemExit) as excinfo:
            main(["abc", "1"])
        assert excinfo.value.code == 2

    def test_subtask_failure(self, monkeypatch, capsys):
        def failing(tail):
            raise RuntimeError("boom")

        monkeypatch.setattr(sequential, "permute", failing)
        with pytest.raises(SystemExit) as excinfo:
            main(["abc", "1"])
        assert excinfo.value.code == 1
        captured = capsys.readouterr()
        assert "error: subtask failed" in captured.err
        assert "permutations generated" not in captured.out
        assert "tasks created" not in captured.out

    def test_sequential_failure(self, monkeypatch, capsys):
        def exhausted(text):
            raise MemoryError("out of memory")

        monkeypatch.setattr(cli, "permute", exhausted)
        with pytest.raises(SystemExit) as excinfo:
            main(["abc", "0"])
        assert excinfo.value.code == 1
        captured = capsys.readouterr()
        assert "error: MemoryError: out of memory" in captured.err
        assert "permutations generated" not in captured.out
