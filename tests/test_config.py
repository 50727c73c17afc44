"""
Tests for configuration loading.
"""

from photool.config import (
    DEFAULT_CONFIG_PATH, get_config_value, get_default_config, load_config,
)
from photool.editor import PhotoEditor


class TestLoadConfig:
    """Test YAML loading and fallbacks."""

    def test_packaged_config_matches_defaults(self):
        assert DEFAULT_CONFIG_PATH.exists()
        assert load_config() == get_default_config()

    def test_missing_file_uses_defaults(self, tmp_path):
        assert load_config(tmp_path / "missing.yaml") == get_default_config()

    def test_partial_file_is_merged(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("editor:\n  processing_delay_ms: 50\n")
        config = load_config(path)
        assert get_config_value(config, 'editor.processing_delay_ms') == 50
        assert get_config_value(config, 'editor.adjustment_debounce_ms') == 300
        assert get_config_value(config, 'logging.level') == 'INFO'

    def test_env_vars_expanded(self, tmp_path, monkeypatch):
        monkeypatch.setenv('PHOTOOL_LOG_LEVEL', 'DEBUG')
        path = tmp_path / "config.yaml"
        path.write_text("logging:\n  level: ${PHOTOOL_LOG_LEVEL}\n  format: ${PHOTOOL_UNSET_VAR}\n")
        config = load_config(path)
        assert config['logging']['level'] == 'DEBUG'
        assert config['logging']['format'] == '${PHOTOOL_UNSET_VAR}'

    def test_invalid_yaml_uses_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("editor: [unclosed\n")
        assert load_config(path) == get_default_config()

    def test_non_mapping_uses_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n")
        assert load_config(path) == get_default_config()


class TestConfigValues:
    """Test dotted access and editor construction."""

    def test_missing_key_returns_default(self):
        config = get_default_config()
        assert get_config_value(config, 'editor.nope', 7) == 7
        assert get_config_value(config, 'editor.processing_delay_ms.deeper', 'x') == 'x'

    def test_editor_from_config(self):
        config = get_default_config()
        config['editor']['processing_delay_ms'] = 250
        config['editor']['adjustment_debounce_ms'] = 100
        config['editor']['offload_to_thread'] = True

        editor = PhotoEditor.from_config(config)
        assert editor.dispatcher.processing_delay == 0.25
        assert editor.adjustments._task.delay == 0.1
        assert editor.dispatcher.offload_to_thread is True

    def test_editor_from_empty_config(self):
        editor = PhotoEditor.from_config({})
        assert editor.dispatcher.processing_delay == 0.5
        assert editor.adjustments._task.delay == 0.3
