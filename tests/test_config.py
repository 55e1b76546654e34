"""Tests for run configuration."""

from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor

import pytest
from taskperm.config import RunConfig


class TestRunConfig:
    def test_defaults(self):
        config = RunConfig()
        assert config.executor == "thread"
        assert config.max_workers is None
        assert config.task_warning_threshold == 10_000

    def test_rejects_unknown_executor(self):
        with pytest.raises(ValueError, match="executor"):
            RunConfig(executor="fiber")

    def test_rejects_non_positive_workers(self):
        with pytest.raises(ValueError, match="max_workers"):
            RunConfig(max_workers=0)

    def test_rejects_negative_threshold(self):
        with pytest.raises(ValueError, match="task_warning_threshold"):
            RunConfig(task_warning_threshold=-1)

    def test_from_env_empty(self):
        assert RunConfig.from_env({}) == RunConfig()

    def test_from_env(self):
        config = RunConfig.from_env({
            "TASKPERM_EXECUTOR": " Process ",
            "TASKPERM_MAX_WORKERS": "4",
            "TASKPERM_TASK_WARNING": "500",
        })
        assert config == RunConfig(executor="process", max_workers=4, task_warning_threshold=500)

    def test_from_env_ignores_blank(self):
        assert RunConfig.from_env({"TASKPERM_MAX_WORKERS": ""}) == RunConfig()

    def test_from_env_bad_int(self):
        with pytest.raises(ValueError, match="TASKPERM_MAX_WORKERS"):
            RunConfig.from_env({"TASKPERM_MAX_WORKERS": "many"})

    def test_from_process_environment(self, monkeypatch):
        monkeypatch.setenv("TASKPERM_EXECUTOR", "process")
        monkeypatch.delenv("TASKPERM_MAX_WORKERS", raising=False)
        monkeypatch.delenv("TASKPERM_TASK_WARNING", raising=False)
        assert RunConfig.from_env().executor == "process"

    def test_create_thread_executor(self):
        with RunConfig(max_workers=2).create_executor() as executor:
            assert isinstance(executor, ThreadPoolExecutor)
            assert executor.submit(sum, [1, 2]).result() == 3

    def test_create_process_executor(self):
        with RunConfig(executor="process", max_workers=1).create_executor() as executor:
            assert isinstance(executor, ProcessPoolExecutor)
