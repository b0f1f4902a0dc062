"""
Tests for the button registry, its data file and the plugin config.
"""
import json
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from button_commands.config import (
    PluginConfig,
    button_commands_config,
    compare_versions,
    float_field,
    migrate,
)
from button_commands.models.button import (
    ButtonBehavior,
    CommandTemplate,
    CommandType,
    default_behavior,
)
from button_commands.evaluator import PressEvaluator, PressOutcome
from button_commands.models.entities import BasePlayer, PressButton
from button_commands.registry import ButtonRegistry, RegisterResult
from button_commands.storage import DataFile, DataFileError, StorageError, list_data_files
from button_commands.testing import FakeClock, LocalHost
from button_commands.utils import CooldownTracker


@pytest.fixture
def data_file(tmp_path):
    return DataFile("ButtonCommands", str(tmp_path))


@pytest.fixture
def registry(data_file):
    registry = ButtonRegistry(data_file)
    registry.load()
    return registry


def write_json(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")


class TestButtonBehavior:
    """Persisted layout of behavior records."""

    def test_default_record(self):
        behavior = default_behavior()
        assert behavior.require_button_powered
        assert behavior.disable_power_output_on_press
        assert not behavior.run_random_command
        assert behavior.cooldown_seconds == 60.0
        assert [c.type for c in behavior.commands] == [
            CommandType.CHAT, CommandType.SERVER, CommandType.CLIENT,
        ]

    def test_round_trip_uses_property_names(self):
        data = default_behavior(0).to_dict()
        assert set(data) == {
            "Require Button Powered",
            "Disable Power Output On Press",
            "Run Random Command",
            "Cooldown Seconds",
            "Commands",
        }
        assert data["Commands"][0] == {"Type": "Chat", "Command": "Hello, {PlayerName}!"}
        assert ButtonBehavior.from_dict(data) == default_behavior(0)

    def test_missing_fields_take_defaults(self):
        behavior = ButtonBehavior.from_dict({"Commands": [{"Command": "hi"}]})
        assert not behavior.require_button_powered
        assert behavior.cooldown_seconds == 0.0
        assert behavior.commands == [CommandTemplate(CommandType.CHAT, "hi")]

    def test_type_by_index_and_case(self):
        assert CommandType.parse(1) is CommandType.SERVER
        assert CommandType.parse("client") is CommandType.CLIENT

    def test_unknown_type(self):
        with pytest.raises(DataFileError):
            CommandTemplate.from_dict({"Type": "Radio", "Command": "x"})

    def test_negative_cooldown_is_clamped(self):
        assert ButtonBehavior(cooldown_seconds=-5).cooldown_seconds == 0.0

    @pytest.mark.parametrize("key", [
        "Require Button Powered", "Disable Power Output On Press", "Run Random Command",
    ])
    def test_flags_must_be_booleans(self, key):
        with pytest.raises(DataFileError):
            ButtonBehavior.from_dict({key: "false"})

    def test_missing_flags_are_false(self):
        behavior = ButtonBehavior.from_dict({"Run Random Command": True})
        assert behavior.run_random_command
        assert not behavior.require_button_powered
        assert not behavior.disable_power_output_on_press


class TestButtonRegistry:
    """Registration and persistence."""

    def test_missing_file_gives_empty_registry(self, data_file):
        registry = ButtonRegistry(data_file)
        assert registry.load() is False
        assert len(registry) == 0
        assert registry.get(1) is None

    def test_register_new_button(self, registry, data_file):
        assert registry.register(42) == RegisterResult.REGISTERED
        assert registry.get(42) == default_behavior()

        saved = json.loads(Path(data_file.path).read_text(encoding="utf-8"))
        assert list(saved["Press Buttons"]) == ["42"]

    def test_register_existing_button(self, registry):
        custom = ButtonBehavior(commands=[CommandTemplate(CommandType.SERVER, "x")])
        registry.set(42, custom)

        assert registry.register(42) == RegisterResult.ALREADY_REGISTERED
        assert registry.get(42) == custom

    def test_custom_default_factory(self, data_file):
        registry = ButtonRegistry(data_file, default_factory=lambda: default_behavior(5))
        registry.register(1)
        assert registry.get(1).cooldown_seconds == 5

    def test_reload(self, registry, data_file):
        registry.register(42)
        registry.register(18446744073709551615)

        reloaded = ButtonRegistry(data_file)
        assert reloaded.load() is True
        assert sorted(reloaded.ids()) == [42, 18446744073709551615]

    def test_failed_save_rolls_back(self, registry, data_file, monkeypatch):
        def fail(data):
            raise StorageError("read-only")

        monkeypatch.setattr(data_file, "save", fail)

        with pytest.raises(StorageError):
            registry.register(42)
        assert 42 not in registry

    def test_malformed_json(self, data_file, tmp_path):
        (tmp_path / "ButtonCommands.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(DataFileError):
            ButtonRegistry(data_file).load()

    def test_invalid_button_id(self, data_file, tmp_path):
        write_json(tmp_path / "ButtonCommands.json", {"Press Buttons": {"abc": {}}})
        with pytest.raises(DataFileError):
            ButtonRegistry(data_file).load()

    def test_import_legacy_only_fills_empty_registry(self, registry):
        legacy = {"Press Buttons": {"7": default_behavior().to_dict()}}
        assert registry.import_legacy(legacy) == 1
        assert 7 in registry

        assert registry.import_legacy({"Press Buttons": {"8": {}}}) == 0
        assert 8 not in registry

    def test_registry_without_file(self):
        registry = ButtonRegistry()
        assert registry.register(1) == RegisterResult.REGISTERED
        assert registry.load() is False


class TestDataFile:
    def test_save_is_atomic_and_readable(self, data_file, tmp_path):
        data_file.save({"a": 1})
        assert data_file.load() == {"a": 1}
        assert [p.name for p in tmp_path.iterdir()] == ["ButtonCommands.json"]

    def test_root_must_be_object(self, data_file, tmp_path):
        write_json(tmp_path / "ButtonCommands.json", [1, 2])
        with pytest.raises(DataFileError):
            data_file.load()

    def test_unserializable_data(self, data_file, tmp_path):
        with pytest.raises(StorageError):
            data_file.save({"a": object()})
        assert list(tmp_path.iterdir()) == []

    def test_list_and_delete(self, data_file, tmp_path):
        data_file.save({})
        DataFile("Other", str(tmp_path)).save({})
        assert list_data_files(str(tmp_path)) == ["ButtonCommands", "Other"]
        assert data_file.delete() is True
        assert data_file.delete() is False


class TestMigration:
    """Config version upgrades."""

    defaults = {"Version": "2.2.0", "Register Range": 10.0}

    @pytest.mark.parametrize("a, b, expected", [
        ("2.0.0", "2.0", 0),
        ("1.9.9", "2.0.0", -1),
        ("2.10.0", "2.9.0", 1),
        (None, "2.0.0", -1),
    ])
    def test_compare_versions(self, a, b, expected):
        assert compare_versions(a, b) == expected

    def test_older_than_baseline_is_replaced(self):
        record = {"Version": "1.9.9", "Register Range": 50.0, "Press Buttons": {}}
        assert migrate("1.9.9", record, self.defaults, current_version="2.2.0") == {
            "Version": "2.2.0", "Register Range": 10.0,
        }

    def test_missing_version_is_replaced(self):
        assert migrate(None, {"Register Range": 50.0}, self.defaults)["Register Range"] == 10.0

    def test_baseline_keeps_values(self):
        record = {"Version": "2.0.0", "Register Range": 50.0}
        upgraded = migrate("2.0.0", record, self.defaults, current_version="2.2.0")
        assert upgraded == {"Version": "2.2.0", "Register Range": 50.0}
        assert record["Version"] == "2.0.0"


class TestPluginConfig:
    def test_creates_default_file(self, tmp_path):
        config = button_commands_config()
        config._bind("Button Commands", str(tmp_path), current_version="2.2.0")

        saved = json.loads((tmp_path / "ButtonCommands.json").read_text(encoding="utf-8"))
        assert saved == {
            "Version": "2.2.0",
            "Register Range": 10.0,
            "Default Cooldown Seconds": 60.0,
        }

    def test_invalid_value_on_load_is_ignored(self, tmp_path):
        write_json(tmp_path / "ButtonCommands.json", {"Version": "2.2.0", "Register Range": 500})
        config = button_commands_config()
        config._bind("ButtonCommands", str(tmp_path))
        assert config.register_range == 10.0

    def test_assignment_validates_and_saves(self, tmp_path):
        config = PluginConfig(register_range=float_field(10.0, alias="Register Range", min_value=1.0))
        config._bind("ButtonCommands", str(tmp_path))

        config.register_range = 5
        assert config.register_range == 5.0
        saved = json.loads((tmp_path / "ButtonCommands.json").read_text(encoding="utf-8"))
        assert saved["Register Range"] == 5.0

        with pytest.raises(ValueError):
            config.register_range = 0.5


class TestPressEvaluator:
    """Outcome of evaluating presses directly."""

    def setup_method(self):
        self.clock = FakeClock()
        self.host = LocalHost()
        self.registry = ButtonRegistry()
        self.replies = []
        self.evaluator = PressEvaluator(
            self.registry,
            self.host,
            reply=lambda player, key, *args: self.replies.append((key, args)),
            cooldowns=CooldownTracker(self.clock),
        )
        self.player = BasePlayer(76561198000000001, "Ava")
        self.registry.set(42, ButtonBehavior(
            require_button_powered=True,
            disable_power_output_on_press=True,
            cooldown_seconds=90,
            commands=[
                CommandTemplate(CommandType.SERVER, "say {PlayerName}"),
                CommandTemplate(CommandType.CLIENT, "heli.calltome"),
            ],
        ))

    def test_ignored(self):
        assert self.evaluator.evaluate(PressButton(7, powered=True), self.player).outcome is PressOutcome.IGNORED
        assert self.evaluator.evaluate(PressButton(42, powered=False), self.player).outcome is PressOutcome.IGNORED
        assert self.evaluator.evaluate(None, self.player).outcome is PressOutcome.IGNORED
        assert self.host.server_commands == []
        assert self.replies == []

    def test_dispatched_then_gated(self):
        result = self.evaluator.evaluate(PressButton(42, powered=True), self.player)
        assert result.outcome is PressOutcome.DISPATCHED
        assert [(c.type, c.command) for c in result.commands] == [
            (CommandType.SERVER, "say Ava"),
            (CommandType.CLIENT, "heli.calltome"),
        ]
        assert result.suppress_power_output
        assert result.remaining_seconds == 0

        self.clock.advance(29.5)
        gated = self.evaluator.evaluate(PressButton(42, powered=True), self.player)
        assert gated.outcome is PressOutcome.GATED
        assert gated.remaining_seconds == 61
        assert gated.commands == []
        assert not gated.suppress_power_output
        assert self.replies == [("Error.CooldownActive", ("1m 1s",))]
        assert self.host.server_commands == ["say Ava"]
