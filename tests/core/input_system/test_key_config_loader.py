"""
Tests for YAML key bindings and input contexts.
"""

import pytest

from parry_duel.core.engine.game_state import EncounterState
from parry_duel.core.input import Key
from parry_duel.core.input_system import InputContext, InputContextManager, KeyConfigLoader


@pytest.fixture
def shipped_config():
    """Loader reading the bindings shipped in assets/config."""
    loader = KeyConfigLoader()
    assert loader.load_config()
    return loader


class TestKeyConfigLoader:
    """Test KeyConfigLoader functionality."""

    def test_default_bindings(self, shipped_config):
        assert shipped_config.get_action_for_key(Key.A, InputContext.ENCOUNTER) == "attack"
        assert shipped_config.get_action_for_key(Key.SPACE, InputContext.ENCOUNTER) == "parry"
        assert shipped_config.get_action_for_key(Key.Q, InputContext.ENCOUNTER) == "quit_game"
        assert shipped_config.get_action_for_key(Key.L, InputContext.ENCOUNTER) == "save_log"

    def test_game_over_context_has_no_combat_actions(self, shipped_config):
        actions = set(shipped_config.get_key_mappings(InputContext.GAME_OVER).values())

        assert actions == {"quit_game"}

    def test_unbound_key(self, shipped_config):
        assert shipped_config.get_action_for_key(Key.Z, InputContext.ENCOUNTER) is None

    def test_shipped_config_is_valid(self, shipped_config):
        result = shipped_config.validate_config()

        assert result['valid']
        assert result['errors'] == []
        assert result['contexts'] == 2

    def test_active_scheme_overrides_bindings(self, tmp_path):
        config_file = tmp_path / "keys.yaml"
        config_file.write_text(
            "config:\n"
            "  active_scheme: home_row\n"
            "contexts:\n"
            "  encounter:\n"
            "    mappings:\n"
            "      a: attack\n"
            "      space: parry\n"
            "schemes:\n"
            "  home_row:\n"
            "    overrides:\n"
            "      encounter:\n"
            "        f: attack\n"
            "        j: parry\n",
            encoding="utf-8",
        )
        loader = KeyConfigLoader(str(config_file))

        assert loader.load_config()

        assert loader.get_action_for_key(Key.F, InputContext.ENCOUNTER) == "attack"
        assert loader.get_action_for_key(Key.J, InputContext.ENCOUNTER) == "parry"
        assert loader.get_action_for_key(Key.A, InputContext.ENCOUNTER) == "attack"
        assert loader.validate_config()['active_scheme'] == "home_row"

    def test_unknown_active_scheme_keeps_base_bindings(self, tmp_path):
        config_file = tmp_path / "keys.yaml"
        config_file.write_text(
            "config:\n"
            "  active_scheme: nonexistent\n"
            "contexts:\n"
            "  encounter:\n"
            "    mappings:\n"
            "      a: attack\n",
            encoding="utf-8",
        )
        loader = KeyConfigLoader(str(config_file))

        assert loader.load_config()
        assert loader.get_key_mappings(InputContext.ENCOUNTER) == {Key.A: "attack"}

    def test_missing_file_falls_back(self, tmp_path):
        loader = KeyConfigLoader(str(tmp_path / "missing.yaml"))

        assert not loader.load_config()

        assert loader.get_action_for_key(Key.A, InputContext.ENCOUNTER) == "attack"
        assert loader.get_action_for_key(Key.SPACE, InputContext.ENCOUNTER) == "parry"

    def test_malformed_yaml_falls_back(self, tmp_path):
        config_file = tmp_path / "broken.yaml"
        config_file.write_text("contexts: [unclosed\n", encoding="utf-8")
        loader = KeyConfigLoader(str(config_file))

        assert not loader.load_config()
        assert loader.get_action_for_key(Key.A, InputContext.ENCOUNTER) == "attack"

    @pytest.mark.parametrize("content", [
        "- a\n- b\n",
        "just a string\n",
        "42\n",
    ])
    def test_non_mapping_file_falls_back(self, tmp_path, capsys, content):
        config_file = tmp_path / "keys.yaml"
        config_file.write_text(content, encoding="utf-8")
        loader = KeyConfigLoader(str(config_file))

        assert not loader.load_config()

        assert loader.get_action_for_key(Key.A, InputContext.ENCOUNTER) == "attack"
        assert loader.get_action_for_key(Key.SPACE, InputContext.ENCOUNTER) == "parry"
        assert "must be a mapping" in capsys.readouterr().out
        assert loader.validate_config()['valid']

    def test_wrongly_shaped_sections_are_ignored(self, tmp_path):
        config_file = tmp_path / "keys.yaml"
        config_file.write_text(
            "config: default\n"
            "contexts:\n"
            "  encounter:\n"
            "    mappings:\n"
            "      a: attack\n"
            "      space: parry\n"
            "  game_over:\n"
            "schemes: [home_row]\n",
            encoding="utf-8",
        )
        loader = KeyConfigLoader(str(config_file))

        assert loader.load_config()

        assert loader.get_key_mappings(InputContext.ENCOUNTER) == {Key.A: "attack", Key.SPACE: "parry"}
        assert loader.get_key_mappings(InputContext.GAME_OVER) == {}
        assert loader.validate_config()['valid']

    def test_contexts_list_yields_invalid_config(self, tmp_path):
        config_file = tmp_path / "keys.yaml"
        config_file.write_text("contexts:\n  - encounter\n", encoding="utf-8")
        loader = KeyConfigLoader(str(config_file))

        assert loader.load_config()

        result = loader.validate_config()
        assert not result['valid']
        assert "No valid key mappings found" in result['errors']

    def test_custom_file_and_key_parsing(self, tmp_path):
        config_file = tmp_path / "keys.yaml"
        config_file.write_text(
            "contexts:\n"
            "  encounter:\n"
            "    mappings:\n"
            "      '1': attack\n"
            "      enter: parry\n"
            "      esc: quit_game\n"
            "      notakey: attack\n",
            encoding="utf-8",
        )
        loader = KeyConfigLoader(str(config_file))

        assert loader.load_config()

        mappings = loader.get_key_mappings(InputContext.ENCOUNTER)
        assert mappings == {Key.NUM_1: "attack", Key.ENTER: "parry", Key.ESCAPE: "quit_game"}

    def test_validation_requires_attack_and_parry(self, tmp_path):
        config_file = tmp_path / "keys.yaml"
        config_file.write_text(
            "contexts:\n"
            "  encounter:\n"
            "    mappings:\n"
            "      a: attack\n",
            encoding="utf-8",
        )
        loader = KeyConfigLoader(str(config_file))
        loader.load_config()

        result = loader.validate_config()

        assert not result['valid']
        assert "No key bound to required action: parry" in result['errors']
        assert "Missing context: game_over" in result['warnings']


class TestInputContextManager:
    """Test context selection from encounter state."""

    def test_encounter_context_while_playing(self, encounter):
        manager = InputContextManager(encounter)

        for state in (EncounterState.PLAYER_TURN, EncounterState.ENEMY_TELEGRAPH, EncounterState.ENEMY_ATTACK):
            encounter.state = state
            assert manager.get_current_context() == InputContext.ENCOUNTER

    def test_game_over_context(self, encounter):
        manager = InputContextManager(encounter)
        encounter.state = EncounterState.GAME_OVER

        assert manager.get_current_context() == InputContext.GAME_OVER
