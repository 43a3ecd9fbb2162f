"""Tests for the learner data reset script."""

from __future__ import annotations

import json

import pytest

from mentor_api.config import Settings
from mentor_api.storage import ProgressStore
from reset_database import reset_learner_data


def test_reset_refuses_without_persistent_storage(capsys):
    with pytest.raises(SystemExit) as excinfo:
        reset_learner_data(Settings())

    assert excinfo.value.code == 1
    output = capsys.readouterr().out
    assert "No persistent storage configured" in output
    assert "reset complete" not in output


def test_reset_clears_json_file_store(tmp_path, capsys):
    path = tmp_path / "learner.json"
    settings = Settings(storage_path=str(path))
    ProgressStore.from_settings(settings).update_progress("soc-analyst", 45)

    reset_learner_data(settings)

    assert json.loads(path.read_text()) == {}
    assert "1 roles with progress" in capsys.readouterr().out
