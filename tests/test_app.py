# tests/test_app.py
"""Streamlit app state: selections survive reruns and page switches."""
from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

APP_PATH = str(Path(__file__).resolve().parent.parent / "app.py")


@pytest.fixture
def calculator():
    at = AppTest.from_file(APP_PATH, default_timeout=30)
    at.session_state["step"] = 2
    at.run()
    return at


def test_practice_kept_across_page_switch(calculator):
    at = calculator
    at.checkbox(key="practice_recycle").check().run()
    assert at.session_state["household"]["practices"] == ["recycle"]

    at.switch_page("pages/2_What_If.py").run()
    at.switch_page("app.py").run()

    assert at.checkbox(key="practice_recycle").value
    assert at.session_state["household"]["practices"] == ["recycle"]


def test_clear_practices(calculator):
    at = calculator
    at.checkbox(key="practice_unplug").check().run()
    at.button[0].click().run()
    assert at.session_state["household"]["practices"] == []


def test_survey_answers_update_bonus():
    at = AppTest.from_file(APP_PATH, default_timeout=30)
    at.run()
    at.radio(key="survey_walked").set_value("Yes").run()
    at.multiselect(key="survey_reasons").select("Event").run()

    survey = at.session_state["survey"]
    assert survey["has_walked_trail"] is True
    assert survey["knows_trail"] is False
    assert survey["reasons"] == ["Event"]
    assert any("+3 points" in md.value for md in at.markdown)


def test_survey_answers_survive_page_switch():
    at = AppTest.from_file(APP_PATH, default_timeout=30)
    at.run()
    at.radio(key="survey_knows").set_value("Yes").run()

    at.switch_page("pages/2_What_If.py").run()
    at.switch_page("app.py").run()

    assert at.radio(key="survey_knows").value == "Yes"
    assert at.session_state["survey"]["knows_trail"] is True
