"""Smoke tests for the Typer CLI against an in-memory database."""
import pytest
from typer.testing import CliRunner

import cli

runner = CliRunner()


@pytest.fixture(autouse=True)
def cli_session(monkeypatch, session_factory):
    monkeypatch.setattr(cli, "SessionLocal", session_factory)


def _create_profile(email="ada@example.com"):
    return runner.invoke(cli.app, ["create-profile", "--email", email, "--first-name", "Ada", "--last-name", "Lovelace"])


def _generate(subject="maths", difficulty="beginner"):
    return runner.invoke(
        cli.app,
        ["generate-plan", "--user-id", "1", "--subject", subject, "--difficulty", difficulty, "--seed", "3"],
    )


def test_create_profile_and_duplicate_email() -> None:
    result = _create_profile()
    assert result.exit_code == 0
    assert "User ID: 1" in result.output

    duplicate = _create_profile()
    assert duplicate.exit_code == 1
    assert "already exists" in duplicate.output


def test_generate_plan_prints_topics() -> None:
    _create_profile()

    result = _generate()

    assert result.exit_code == 0
    assert "Introduction to Maths" in result.output
    assert "Khan Academy Math" in result.output


def test_generate_plan_for_unknown_user() -> None:
    result = _generate()

    assert result.exit_code == 1
    assert "User ID 1 not found" in result.output


def test_toggle_topic_reports_completion() -> None:
    _create_profile()
    _generate()

    result = runner.invoke(cli.app, ["toggle-topic", "--user-id", "1", "--plan-id", "1", "--topic-id", "1"])

    assert result.exit_code == 0
    assert "20.0% complete" in result.output


def test_toggle_topic_on_missing_plan() -> None:
    _create_profile()

    result = runner.invoke(cli.app, ["toggle-topic", "--user-id", "1", "--plan-id", "7", "--topic-id", "1"])

    assert result.exit_code == 1
    assert "Learning plan not found" in result.output


def test_list_plans_rejects_malformed_user_id() -> None:
    result = runner.invoke(cli.app, ["list-plans", "--user-id", "abc"])

    assert result.exit_code == 1
    assert "Invalid user id" in result.output


def test_follow_then_delete_by_other_user_is_refused() -> None:
    _create_profile()
    _create_profile("grace@example.com")
    _generate()

    follow = runner.invoke(cli.app, ["follow", "--user-id", "2", "--plan-id", "1"])
    assert follow.exit_code == 0
    assert "1 followers" in follow.output

    delete = runner.invoke(cli.app, ["delete-plan", "--user-id", "2", "--plan-id", "1"])
    assert delete.exit_code == 1
    assert "do not own" in delete.output


def test_post_like_flow() -> None:
    _create_profile()
    _create_profile("grace@example.com")

    created = runner.invoke(cli.app, ["create-post", "--user-id", "1", "--description", "Started calculus"])
    assert created.exit_code == 0
    assert "Post ID: 1" in created.output

    liked = runner.invoke(cli.app, ["like", "--user-id", "2", "--post-id", "1"])
    assert liked.exit_code == 0
    assert "(1 likes)" in liked.output

    again = runner.invoke(cli.app, ["like", "--user-id", "2", "--post-id", "1"])
    assert again.exit_code == 1
    assert "already liked" in again.output

    listed = runner.invoke(cli.app, ["list-posts"])
    assert "Started calculus" in listed.output

    unliked = runner.invoke(cli.app, ["unlike", "--user-id", "2", "--post-id", "1"])
    assert unliked.exit_code == 0
    assert "(0 likes)" in unliked.output


def test_post_edits_by_other_user_are_refused() -> None:
    _create_profile()
    _create_profile("grace@example.com")
    runner.invoke(cli.app, ["create-post", "--user-id", "1", "--description", "Mine"])

    edit = runner.invoke(cli.app, ["update-post", "--user-id", "2", "--post-id", "1", "--description", "Theirs"])
    assert edit.exit_code == 1
    assert "do not own this post" in edit.output

    delete = runner.invoke(cli.app, ["delete-post", "--user-id", "1", "--post-id", "1"])
    assert delete.exit_code == 0
    assert "Post 1 deleted" in delete.output
