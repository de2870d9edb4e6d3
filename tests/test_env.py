import os

import pytest
from high5.env import ENV_HIGH5_ENV, ENV_HIGH5_PORT, ENV_HIGH5_TABLE, env


def test_defaults():
	assert env.high5_env == "dev"
	assert env.host == "localhost"
	assert env.port == 8000
	assert env.table == "high5"
	assert env.messages_table == "high5-messages"
	assert env.ui_components_table == "high5-ui-components"
	assert env.history_limit == 10
	assert env.log_level == "INFO"
	assert env.api_base_url == "http://localhost:8000"


def test_reads_environment(monkeypatch: pytest.MonkeyPatch):
	monkeypatch.setenv(ENV_HIGH5_PORT, "9001")
	monkeypatch.setenv(ENV_HIGH5_TABLE, "prod-high5")
	assert env.port == 9001
	assert env.ui_components_table == "prod-high5-ui-components"


def test_invalid_values_raise(monkeypatch: pytest.MonkeyPatch):
	monkeypatch.setenv(ENV_HIGH5_PORT, "eighty")
	with pytest.raises(ValueError, match=ENV_HIGH5_PORT):
		_ = env.port
	monkeypatch.setenv(ENV_HIGH5_ENV, "staging")
	with pytest.raises(ValueError, match=ENV_HIGH5_ENV):
		_ = env.high5_env


def test_setters_write_through(monkeypatch: pytest.MonkeyPatch):
	# Registered with monkeypatch so the writes below are undone
	monkeypatch.setenv(ENV_HIGH5_ENV, "dev")
	monkeypatch.setenv(ENV_HIGH5_TABLE, "high5")
	env.high5_env = "prod"
	assert os.environ[ENV_HIGH5_ENV] == "prod"
	env.update({ENV_HIGH5_TABLE: "other"})
	assert env.table == "other"
