"""Tests for the command line entry point."""

from __future__ import annotations

import logging

import pytest

from remove_instance_protection import cli
from remove_instance_protection.advisories import DRYRUN, LOGGER
from remove_instance_protection.errors import AutoScalingGroupNotFound, RemoteCallError


class _FakeClients:
    @classmethod
    def from_session(cls, session):
        return cls()


def test_parse_args_defaults() -> None:
    args = cli.parse_args(["--asg", "web-asg"])
    options = cli.options_from_args(args)

    assert args.log_level == "INFO"
    assert options.asg_name == "web-asg"
    assert not options.dry_run
    assert not options.force
    assert options.batch_size == 50


def test_parse_args_flags() -> None:
    args = cli.parse_args(
        [
            "--asg",
            "web-asg",
            "--dry-run",
            "--force",
            "--output-latest-instances",
            "--output-invalid-instances",
            "--deregister-from-target-groups",
            "--log-level",
            "dryrun",
        ]
    )
    options = cli.options_from_args(args)

    assert args.log_level == "DRYRUN"
    assert options.dry_run and options.force
    assert options.output_latest_instances and options.output_invalid_instances
    assert options.deregister_from_target_groups


def test_parse_args_requires_asg() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.parse_args([])
    assert excinfo.value.code == 2


def test_configure_logging_sets_level() -> None:
    cli.configure_logging("DRYRUN")

    assert LOGGER.level == DRYRUN
    assert not LOGGER.isEnabledFor(logging.ERROR)
    assert LOGGER.isEnabledFor(DRYRUN)


def test_main_returns_zero_on_success(monkeypatch) -> None:
    calls = []
    monkeypatch.setattr(cli, "AwsClients", _FakeClients)
    monkeypatch.setattr(cli, "run_update", lambda clients, options, stream: calls.append(options))

    assert cli.main(["--asg", "web-asg", "--region", "us-east-1", "--dry-run"]) == 0
    assert calls[0].asg_name == "web-asg"
    assert calls[0].dry_run


@pytest.mark.parametrize(
    "error",
    [
        AutoScalingGroupNotFound("web-asg"),
        RemoteCallError("SetInstanceProtection", "web-asg", RuntimeError("boom")),
    ],
)
def test_main_reports_fatal_errors(monkeypatch, capsys, error) -> None:
    def failing_run(clients, options, stream):
        raise error

    monkeypatch.setattr(cli, "AwsClients", _FakeClients)
    monkeypatch.setattr(cli, "run_update", failing_run)

    assert cli.main(["--asg", "web-asg", "--region", "us-east-1"]) == 1
    err = capsys.readouterr().err
    assert err.startswith("Error: error updating:")
    assert str(error) in err
