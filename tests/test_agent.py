import pytest
from high5.agent import GREETING, respond


def test_greeting():
	response = respond("Hello there")
	assert response.content == GREETING
	assert response.metadata == {}


def test_keywords_match_whole_words():
	# "this" contains "hi" but is not a greeting
	response = respond("What is this?")
	assert response.content.startswith('I\'ve processed your message: "What is this?"')
	assert response.metadata == {}


def test_first_rule_wins():
	assert respond("hi, I need help with a table").content == GREETING


@pytest.mark.parametrize(
	("message", "parameters"),
	[
		("Show me the UI", {"type": "form", "fields": ["name", "email", "message"]}),
		("Build an interface", {"type": "form", "fields": ["name", "email", "message"]}),
		("I want a FORM", {"type": "form", "fields": ["name", "email", "message"]}),
		("dashboard please", {"type": "dashboard"}),
		("draw a chart", {"type": "chart", "chartType": "bar"}),
		("a table of users", {"type": "table"}),
	],
)
def test_ui_requests(message: str, parameters: dict):
	response = respond(message)
	assert response.metadata == {"suggestedAction": "generateUI", "parameters": parameters}


def test_suggested_parameters_are_copies():
	first = respond("form")
	first.metadata["parameters"]["type"] = "changed"
	assert respond("form").metadata["parameters"]["type"] == "form"
