import json

import pytest

from bolt_inventory.core.errors import FetchError
from bolt_inventory.services.orbstack_provider import OrbstackInventory


EXPECTED_SSH = {
    "native-ssh": True,
    "load-config": True,
    "login-shell": "bash",
    "tty": False,
    "host-key-check": False,
    "run-as": "root",
    "user": "root",
    "port": 32222,
}


def test_generate_builds_targets_without_groups(mock_orbs, test_settings):
    inventory = OrbstackInventory(config=test_settings, fetcher=lambda: mock_orbs)

    result = inventory.generate()

    assert len(result["targets"]) == 4
    assert [t["name"] for t in result["targets"]] == [
        "agent01",
        "agent02",
        "compiler01",
        "webserver01",
    ]
    assert all(t["uri"] == f"{t['name']}@orb" for t in result["targets"])
    assert result["groups"] == []
    assert result["config"]["ssh"]["port"] == 32222


def test_generate_includes_ssh_configuration(mock_orbs, test_settings):
    inventory = OrbstackInventory(config=test_settings, fetcher=lambda: mock_orbs)

    assert inventory.generate()["config"] == {"ssh": EXPECTED_SSH}


def test_group_patterns_add_role_groups(mock_orbs, test_settings):
    inventory = OrbstackInventory(
        {
            "group_patterns": [
                {"group": "agent", "pattern": "^agent"},
                {"group": "compiler", "pattern": "^compiler"},
            ]
        },
        config=test_settings,
        fetcher=lambda: mock_orbs,
    )

    result = inventory.generate()

    assert [g["name"] for g in result["groups"]] == ["agent", "compiler"]
    agent_group, compiler_group = result["groups"]
    assert agent_group == {
        "name": "agent",
        "targets": ["agent01", "agent02"],
        "facts": {"role": "agent"},
    }
    assert compiler_group["targets"] == ["compiler01"]
    assert compiler_group["facts"] == {"role": "compiler"}


def test_only_running_machines_become_targets(test_settings):
    machines = [
        {"name": "agent01", "status": "running"},
        {"name": "agent02", "status": "stopped"},
        {"name": "db01", "status": "starting"},
        {"name": "web01", "status": "running"},
    ]
    inventory = OrbstackInventory(config=test_settings, fetcher=lambda: machines)

    result = inventory.generate()

    assert [t["name"] for t in result["targets"]] == ["agent01", "web01"]


def test_config_is_identical_with_no_machines(mock_orbs, test_settings):
    empty = OrbstackInventory(config=test_settings, fetcher=lambda: []).generate()
    full = OrbstackInventory(config=test_settings, fetcher=lambda: mock_orbs).generate()

    assert empty == {"targets": [], "groups": [], "config": {"ssh": EXPECTED_SSH}}
    assert empty["config"] == full["config"]


def test_records_without_name_are_skipped(test_settings):
    machines = [{"status": "running"}, {"name": "", "status": "running"}, {"name": "ok", "status": "running"}]
    inventory = OrbstackInventory(config=test_settings, fetcher=lambda: machines)

    assert [t["name"] for t in inventory.generate()["targets"]] == ["ok"]


def test_duplicate_names_keep_first_target(test_settings):
    machines = [
        {"name": "agent01", "status": "running"},
        {"name": "agent01", "status": "running"},
    ]
    inventory = OrbstackInventory(
        {"group_patterns": [{"group": "agent", "pattern": "agent"}]},
        config=test_settings,
        fetcher=lambda: machines,
    )

    result = inventory.generate()

    assert result["targets"] == [{"name": "agent01", "uri": "agent01@orb"}]
    assert result["groups"][0]["targets"] == ["agent01"]


def test_fetcher_errors_propagate_unmodified(test_settings):
    class Boom(Exception):
        pass

    def failing_fetcher():
        raise Boom("orbctl exploded")

    inventory = OrbstackInventory(config=test_settings, fetcher=failing_fetcher)

    with pytest.raises(Boom, match="orbctl exploded"):
        inventory.generate()


def test_generate_is_repeatable(mock_orbs, test_settings):
    calls = []

    def fetcher():
        calls.append(1)
        return mock_orbs

    inventory = OrbstackInventory(
        {"group_patterns": [{"group": "agent", "pattern": "^agent"}]},
        config=test_settings,
        fetcher=fetcher,
    )

    assert inventory.generate() == inventory.generate()
    assert len(calls) == 2


def test_default_fetch_runs_orbctl(fake_runner, mock_orbs, test_settings):
    runner = fake_runner(stdout=json.dumps(mock_orbs))
    inventory = OrbstackInventory(config=test_settings, runner=runner)

    result = inventory.generate()

    assert runner.calls == [["orbctl", "list", "--format", "json"]]
    assert len(result["targets"]) == 4


def test_default_fetch_accepts_state_key(fake_runner, test_settings):
    runner = fake_runner(stdout=json.dumps([{"name": "vm1", "state": "running"}]))
    inventory = OrbstackInventory(config=test_settings, runner=runner)

    assert inventory.generate()["targets"] == [{"name": "vm1", "uri": "vm1@orb"}]


def test_default_fetch_empty_output_means_no_machines(fake_runner, test_settings):
    inventory = OrbstackInventory(config=test_settings, runner=fake_runner(stdout="\n"))

    assert inventory.generate()["targets"] == []


def test_default_fetch_raises_on_failed_command(fake_runner, test_settings):
    runner = fake_runner(returncode=1, stderr="orbstack is not running")
    inventory = OrbstackInventory(config=test_settings, runner=runner)

    with pytest.raises(FetchError) as exc:
        inventory.generate()

    assert "orbstack is not running" in str(exc.value)
    assert exc.value.command == ["orbctl", "list", "--format", "json"]


def test_default_fetch_rejects_non_list_payload(fake_runner, test_settings):
    runner = fake_runner(stdout=json.dumps({"name": "vm1"}))
    inventory = OrbstackInventory(config=test_settings, runner=runner)

    with pytest.raises(FetchError, match="Unexpected orbctl payload"):
        inventory.generate()


def test_custom_ssh_port_and_suffix(mock_orbs, test_settings):
    custom = test_settings.model_copy(
        update={"orbstack_ssh_port": 2222, "orbstack_uri_suffix": "orb.local"}
    )
    inventory = OrbstackInventory(config=custom, fetcher=lambda: mock_orbs)

    result = inventory.generate()

    assert result["targets"][0]["uri"] == "agent01@orb.local"
    assert result["config"]["ssh"]["port"] == 2222
